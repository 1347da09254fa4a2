# laundry_service/models.py

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .db import Base

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


def _new_id():
    return str(uuid.uuid4())


class CustomerAccount(Base):
    __tablename__ = "customer_accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    phone = Column(String(20), unique=True, index=True, nullable=False)
    password_hash = Column(Text, nullable=False)

    bookings = relationship("Booking", back_populates="customer")

    def __repr__(self):
        # never include password_hash
        return f"<CustomerAccount(id={self.id}, name='{self.name}', phone='{self.phone}')>"


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    price_inr = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<Service(id={self.id}, title='{self.title}', price_inr={self.price_inr})>"


class BeforeAfterItem(Base):
    __tablename__ = "before_after_items"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(Text, nullable=False)
    before_image_url = Column(Text, nullable=False)
    after_image_url = Column(Text, nullable=False)

    def __repr__(self):
        return f"<BeforeAfterItem(id={self.id}, title='{self.title}')>"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in BOOKING_STATUSES) + ")",
            name="ck_bookings_status",
        ),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    customer_id = Column(
        String(36),
        ForeignKey("customer_accounts.id"),
        nullable=False,
        index=True,
    )
    booking_date = Column(Text, nullable=False)
    booking_time = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    landmark = Column(Text, nullable=True)
    city = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("CustomerAccount", back_populates="bookings")

    def __repr__(self):
        return f"<Booking(id={self.id}, customer_id={self.customer_id}, date='{self.booking_date}', status='{self.status}')>"
