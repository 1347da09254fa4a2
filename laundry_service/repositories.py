# laundry_service/repositories.py

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import PhoneAlreadyRegisteredError
from .models import BeforeAfterItem, Booking, CustomerAccount, Service

logger = logging.getLogger(__name__)


class AccountDirectory:
    """Customer accounts keyed by normalized phone number.

    Callers normalize the phone before calling either method.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, phone: str, password_hash: str) -> CustomerAccount:
        account = CustomerAccount(name=name, phone=phone, password_hash=password_hash)
        try:
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        except IntegrityError:
            # Lost a race with a concurrent signup for the same phone
            self.db.rollback()
            logger.warning(
                f"Laundry Service: Unique constraint rejected account for phone: {phone}"
            )
            raise PhoneAlreadyRegisteredError()
        return account

    def find_by_phone(self, phone: str) -> Optional[CustomerAccount]:
        return (
            self.db.query(CustomerAccount)
            .filter(CustomerAccount.phone == phone)
            .first()
        )


class BookingLedger:
    """Pickup bookings, always scoped to one owning customer."""

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        customer_id: str,
        booking_date: str,
        booking_time: str,
        address: str,
        landmark: Optional[str],
        city: str,
    ) -> Booking:
        booking = Booking(
            customer_id=customer_id,
            booking_date=booking_date,
            booking_time=booking_time,
            address=address,
            landmark=landmark or None,
            city=city,
            status="pending",
        )
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def list_by_customer(self, customer_id: str) -> List[Booking]:
        return (
            self.db.query(Booking)
            .filter(Booking.customer_id == customer_id)
            .order_by(Booking.created_at.desc())
            .all()
        )


class Catalog:
    """Read-mostly service list and before/after gallery."""

    def __init__(self, db: Session):
        self.db = db

    def list_services(self) -> List[Service]:
        return self.db.query(Service).all()

    def create_service(self, title: str, description: str, price_inr: int) -> Service:
        service = Service(title=title, description=description, price_inr=price_inr)
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)
        return service

    def list_before_after_items(self) -> List[BeforeAfterItem]:
        return self.db.query(BeforeAfterItem).all()

    def create_before_after_item(
        self, title: str, before_image_url: str, after_image_url: str
    ) -> BeforeAfterItem:
        item = BeforeAfterItem(
            title=title,
            before_image_url=before_image_url,
            after_image_url=after_image_url,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item


DEFAULT_SERVICES = [
    ("Wash & Fold", "Everyday laundry washed, dried, and neatly folded.", 99),
    ("Ironing", "Crisp ironing for shirts, pants, sarees, and more.", 25),
    ("Dry Cleaning", "Gentle care for delicate and special fabrics.", 199),
    ("Express Service", "Priority processing for urgent orders.", 149),
]

DEFAULT_BEFORE_AFTER_ITEMS = [
    (
        "Stain removal (white shirt)",
        "https://images.unsplash.com/photo-1520975958225-2ee0f2b5a1aa?auto=format&fit=crop&w=1200&q=80",
    ),
    (
        "Fresh bedding finish",
        "https://images.unsplash.com/photo-1582582429416-6a3fcd8ce5d1?auto=format&fit=crop&w=1200&q=80",
    ),
    (
        "Ironed office wear",
        "https://images.unsplash.com/photo-1520975693415-35a533d6fe98?auto=format&fit=crop&w=1200&q=80",
    ),
]


def seed_catalog(db: Session) -> None:
    """Insert the default services and gallery items into empty tables."""
    catalog = Catalog(db)
    if not catalog.list_services():
        for title, description, price_inr in DEFAULT_SERVICES:
            catalog.create_service(title, description, price_inr)
        logger.info(f"Laundry Service: Seeded {len(DEFAULT_SERVICES)} services.")

    if not catalog.list_before_after_items():
        for title, image_url in DEFAULT_BEFORE_AFTER_ITEMS:
            catalog.create_before_after_item(title, image_url, image_url)
        logger.info(
            f"Laundry Service: Seeded {len(DEFAULT_BEFORE_AFTER_ITEMS)} before/after items."
        )
