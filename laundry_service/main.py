# laundry_service/main.py

import logging
import os
import sys
import time
from typing import List

from fastapi import Body, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from starlette.middleware.sessions import SessionMiddleware

from .db import Base, SessionLocal, engine, get_db
from .errors import AuthenticationError, ConflictError, PhoneAlreadyRegisteredError
from .repositories import AccountDirectory, BookingLedger, Catalog, seed_catalog
from .schemas import (
    BeforeAfterItemResponse,
    BookingCreate,
    BookingCreated,
    BookingResponse,
    CustomerIdentity,
    CustomerLogin,
    CustomerSignup,
    MessageResponse,
    ServiceResponse,
    ValidationErrorResponse,
)
from .security import make_password_hash, normalize_phone, verify_password
from .sessions import SessionIdentityStore, get_identity_store

# --- Standard Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me-in-production")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "laundry_session")
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", str(7 * 24 * 60 * 60)))
SESSION_HTTPS_ONLY = os.getenv("SESSION_HTTPS_ONLY", "false").lower() in {"1", "true", "yes"}
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
SEED_CATALOG = os.getenv("SEED_CATALOG", "true").lower() in {"1", "true", "yes"}

INVALID_CREDENTIALS_MESSAGE = "Invalid phone or password"

# --- FastAPI Application Setup ---
app = FastAPI(
    title="Laundry Service API",
    description="Customer accounts, session login and pickup bookings for the laundry site.",
    version="1.0.0",
)

# Cookies need explicit origins; "*" is not allowed together with credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=SESSION_SECRET,
    session_cookie=SESSION_COOKIE_NAME,
    max_age=SESSION_MAX_AGE_SECONDS,
    same_site="lax",
    https_only=SESSION_HTTPS_ONLY,
)


# --- Error Responses ---
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Only the first failure is reported, in schema field order
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [part for part in first.get("loc", ()) if part != "body"]
    # JSON decode errors carry a character offset instead of a field name
    field = loc[0] if loc and isinstance(loc[0], str) else ""
    body = ValidationErrorResponse(
        message=first.get("msg", "Invalid input"), field=field
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
    )


@app.exception_handler(AuthenticationError)
async def authentication_exception_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=MessageResponse(message=exc.message).model_dump(),
    )


@app.exception_handler(ConflictError)
async def conflict_exception_handler(request: Request, exc: ConflictError):
    body = ValidationErrorResponse(message=exc.message, field=exc.field)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
    )


def require_customer(
    identity_store: SessionIdentityStore = Depends(get_identity_store),
) -> CustomerIdentity:
    customer = identity_store.read_identity()
    if customer is None:
        raise AuthenticationError()
    return customer


# --- FastAPI Event Handlers ---
@app.on_event("startup")
async def startup_event():
    max_retries = 10
    retry_delay_seconds = 5
    for i in range(max_retries):
        try:
            logger.info(
                f"Laundry Service: Attempting to connect to the database and create tables (attempt {i+1}/{max_retries})..."
            )
            Base.metadata.create_all(bind=engine)
            logger.info(
                "Laundry Service: Successfully connected to the database and ensured tables exist."
            )
            break  # Exit loop if successful
        except OperationalError as e:
            logger.warning(f"Laundry Service: Failed to connect to the database: {e}")
            if i < max_retries - 1:
                logger.info(
                    f"Laundry Service: Retrying in {retry_delay_seconds} seconds..."
                )
                time.sleep(retry_delay_seconds)
            else:
                logger.critical(
                    f"Laundry Service: Failed to connect to the database after {max_retries} attempts. Exiting application."
                )
                sys.exit(1)  # Critical failure: exit if DB connection is unavailable
        except Exception as e:
            logger.critical(
                f"Laundry Service: An unexpected error occurred during database startup: {e}",
                exc_info=True,
            )
            sys.exit(1)

    if SEED_CATALOG:
        db = SessionLocal()
        try:
            seed_catalog(db)
        finally:
            db.close()


# --- Root Endpoint ---
@app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
async def read_root():
    return {"message": "Welcome to the Laundry Service!"}


# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
async def health_check():
    return {"status": "ok", "service": "laundry-service"}


# --- Customer Authentication Endpoints ---
@app.post(
    "/api/customer/signup",
    response_model=CustomerIdentity,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer account and log it in",
)
def customer_signup(
    signup: CustomerSignup,
    db: Session = Depends(get_db),
    identity_store: SessionIdentityStore = Depends(get_identity_store),
):
    phone = normalize_phone(signup.phone)
    logger.info(f"Laundry Service: Signing up customer with phone: {phone}")
    directory = AccountDirectory(db)

    if directory.find_by_phone(phone):
        logger.warning(
            f"Laundry Service: Attempted signup with already registered phone: {phone}"
        )
        raise PhoneAlreadyRegisteredError()

    account = directory.create(
        name=signup.name, phone=phone, password_hash=make_password_hash(signup.password)
    )
    identity = CustomerIdentity.model_validate(account)
    identity_store.write_identity(identity)
    logger.info(f"Laundry Service: Customer {account.id} signed up and logged in.")
    return identity


@app.post(
    "/api/customer/login",
    response_model=CustomerIdentity,
    responses={401: {"model": MessageResponse}},
    summary="Log in with phone and password",
)
def customer_login(
    login: CustomerLogin,
    db: Session = Depends(get_db),
    identity_store: SessionIdentityStore = Depends(get_identity_store),
):
    phone = normalize_phone(login.phone)
    account = AccountDirectory(db).find_by_phone(phone)

    # Unknown phone and wrong password must be indistinguishable
    if account is None or not verify_password(login.password, account.password_hash):
        logger.warning(f"Laundry Service: Failed login attempt for phone: {phone}")
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    identity = CustomerIdentity.model_validate(account)
    identity_store.write_identity(identity)
    logger.info(f"Laundry Service: Customer {account.id} logged in.")
    return identity


@app.get(
    "/api/customer/me",
    response_model=CustomerIdentity,
    responses={401: {"model": MessageResponse}},
    summary="Return the logged-in customer",
)
async def customer_me(customer: CustomerIdentity = Depends(require_customer)):
    return customer


@app.post(
    "/api/customer/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear the logged-in customer from the session",
)
async def customer_logout(
    identity_store: SessionIdentityStore = Depends(get_identity_store),
):
    customer = identity_store.read_identity()
    identity_store.write_identity(None)
    if customer:
        logger.info(f"Laundry Service: Customer {customer.id} logged out.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Catalog Endpoints ---
@app.get(
    "/api/services",
    response_model=List[ServiceResponse],
    summary="List laundry services",
)
def list_services(db: Session = Depends(get_db)):
    return Catalog(db).list_services()


@app.get(
    "/api/before-after",
    response_model=List[BeforeAfterItemResponse],
    summary="List before/after gallery items",
)
def list_before_after_items(db: Session = Depends(get_db)):
    return Catalog(db).list_before_after_items()


# --- Booking Endpoints ---
@app.post(
    "/api/bookings",
    response_model=BookingCreated,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": MessageResponse}},
    summary="Book a pickup for the logged-in customer",
)
def create_booking(
    booking: BookingCreate = Body(...),
    customer: CustomerIdentity = Depends(require_customer),
    db: Session = Depends(get_db),
):
    # require_customer runs before the body is validated, so anonymous
    # requests get a 401 even when the payload is invalid
    logger.info(
        f"Laundry Service: Creating booking for customer {customer.id} on {booking.booking_date} {booking.booking_time}"
    )
    db_booking = BookingLedger(db).create(
        customer_id=customer.id,
        booking_date=booking.booking_date,
        booking_time=booking.booking_time,
        address=booking.address,
        landmark=booking.landmark,
        city=booking.city,
    )
    logger.info(
        f"Laundry Service: Booking {db_booking.id} created for customer {customer.id}."
    )
    return BookingCreated(id=db_booking.id)


@app.get(
    "/api/bookings",
    response_model=List[BookingResponse],
    responses={401: {"model": MessageResponse}},
    summary="List the logged-in customer's bookings",
)
def list_bookings(
    customer: CustomerIdentity = Depends(require_customer),
    db: Session = Depends(get_db),
):
    bookings = BookingLedger(db).list_by_customer(customer.id)
    logger.info(
        f"Laundry Service: Retrieved {len(bookings)} bookings for customer {customer.id}."
    )
    return bookings
