"""
Pytest fixtures for the tour payments service.

Provides an in-memory database per test, an ASGI test client and a stubbed
tour catalog.
"""

import os

# Settings are read at import time, so the environment must be ready first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["AWS_REGION"] = "eu-west-1"
os.environ["AWS_ACCESS_KEY"] = "test-access-key"
os.environ["AWS_SECRET_KEY"] = "test-secret-key"
os.environ["S3_BUCKET"] = "evidence-bucket"
os.environ["DB_AUTO_CREATE"] = "false"

from datetime import date
from decimal import Decimal

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import tour_payments.api.bookings.models  # noqa: F401
import tour_payments.api.checkout.models  # noqa: F401
import tour_payments.api.payment_terms.models  # noqa: F401
import tour_payments.api.payments.models  # noqa: F401
from tour_payments import app
from tour_payments.api.bookings.schemas import CreateBookingRequest
from tour_payments.api.bookings.service import create_booking
from tour_payments.api.checkout.schemas import CheckoutPaymentRequest
from tour_payments.api.checkout.service import record_checkout_payment
from tour_payments.api.payment_terms.schemas import PaymentTermCreateRequest
from tour_payments.api.payment_terms.service import create_payment_term
from tour_payments.core.common.constants import BookingType, PaymentMethod, PaymentType
from tour_payments.db.main import get_session
from tour_payments.utils.catalog_service import TourPackage, TravelDate


TOUR_PACKAGE_ID = "pkg-iceland"
TOUR_DATE = date(2026, 6, 15)
BOOKED_ON = date(2026, 1, 10)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def tour_package():
    return TourPackage(
        id=TOUR_PACKAGE_ID,
        name="Iceland Northern Lights",
        originalCost=Decimal("1000.00"),
        discountedCost=None,
        travelDates=[TravelDate(startDate=TOUR_DATE, endDate=date(2026, 6, 22))],
    )


@pytest.fixture
def catalog(monkeypatch, tour_package):
    """Replace the catalog HTTP call; returns the list of requested ids."""
    requested: list[str] = []

    async def fake_fetch_tour_package(tour_package_id, **kwargs):
        requested.append(tour_package_id)
        return tour_package

    monkeypatch.setattr(
        "tour_payments.api.bookings.service.fetch_tour_package", fake_fetch_tour_package
    )
    return requested


@pytest.fixture
async def two_instalment_term(session):
    return await create_payment_term(
        session,
        PaymentTermCreateRequest(
            name="P2 - Two Instalments",
            paymentType=PaymentType.MONTHLY_SCHEDULED,
            monthsRequired=2,
            monthlyPercentages=[Decimal("50"), Decimal("50")],
        ),
    )


@pytest.fixture
def make_payment(session):
    async def _make_payment(
        external_reference: str,
        payer_email: str,
        booking_type: BookingType = BookingType.DUO,
        amount_paid: Decimal = Decimal("250.00"),
    ):
        return await record_checkout_payment(
            session,
            CheckoutPaymentRequest(
                externalReference=external_reference,
                payerEmail=payer_email,
                tourPackageId=TOUR_PACKAGE_ID,
                bookingType=booking_type,
                paymentMethod=PaymentMethod.CARD,
                amountPaid=amount_paid,
            ),
        )

    return _make_payment


@pytest.fixture
async def main_booking(session, catalog, two_instalment_term, make_payment):
    """A Duo booking on the two-instalment plan with one invited guest."""
    payment = await make_payment("pi_main_001", "Main.Booker@Example.com")
    booking = await create_booking(
        session,
        CreateBookingRequest(
            paymentId=payment.id,
            paymentTermId=two_instalment_term.id,
            tourDate=TOUR_DATE,
            firstName="Maria",
            lastName="Lopez",
            bookedOn=BOOKED_ON,
            guestEmails=["guest@example.com"],
        ),
    )
    return booking, payment
