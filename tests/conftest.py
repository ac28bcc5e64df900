"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- settings: Settings pointing at a fresh in-memory SQLite database
- mailer: Recording mailer that captures OTP emails instead of sending them
- app / client: Application and TestClient with the lifespan running
- db_session: Session on the application's database
- seeded: Reference states, cities, stores and timings
- issue_and_verify: Helper running the OTP flow for an email
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.mailer import MailDeliveryError, get_mailer
from app.models import State, City, Store, Timings, Rating
from main import create_app


class RecordingMailer:
    """Stands in for the SMTP mailer; keeps every OTP it was asked to send."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send_otp(self, email: str, code: str, expiry_minutes: int) -> None:
        if self.fail:
            raise MailDeliveryError("SMTP server unavailable")
        self.sent.append({"email": email, "code": code, "expiry_minutes": expiry_minutes})

    def last_code(self, email: str) -> str:
        for message in reversed(self.sent):
            if message["email"] == email:
                return message["code"]
        raise AssertionError(f"No OTP was sent to {email}")


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory database."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        DB_CREATE_TABLES=True,
        OTP_EXPIRY_MINUTES=5,
        RATING_GUARD_SCOPE="global",
    )


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def app(settings, mailer):
    application = create_app(settings)
    application.dependency_overrides[get_mailer] = lambda: mailer
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(client, app):
    session = app.state.db.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db_session):
    """
    Reference data, inserted out of alphabetical order:

    - Karnataka (1): Mysuru (10), Bengaluru (11)
    - Delhi (2): New Delhi (20)
    - Goa (3): no cities
    - Bengaluru: Zeta Mart (100), Alpha Stores (101)
    - Mysuru: Mysuru Outlet (102), no timings
    - New Delhi: Delhi Central (200), timings row with no schedule
    """
    db_session.add_all([
        State(state_id=1, state_name="Karnataka", description="Southern state known for Bengaluru."),
        State(state_id=2, state_name="Delhi", description="National capital territory."),
        State(state_id=3, state_name="Goa", description=None),
    ])
    db_session.add_all([
        City(city_id=10, city_name="Mysuru", state_id=1),
        City(city_id=11, city_name="Bengaluru", state_id=1),
        City(city_id=20, city_name="New Delhi", state_id=2),
    ])
    db_session.add_all([
        Store(store_id=100, store_name="Zeta Mart", address="MG Road", city_id=11),
        Store(store_id=101, store_name="Alpha Stores", address="Indiranagar", city_id=11),
        Store(store_id=102, store_name="Mysuru Outlet", address=None, city_id=10),
        Store(store_id=200, store_name="Delhi Central", address="Connaught Place", city_id=20),
    ])
    schedule = "9:00 AM - 9:00 PM"
    db_session.add_all([
        Timings(
            store_id=100,
            monday=schedule, tuesday=schedule, wednesday=schedule, thursday=schedule,
            friday=schedule, saturday=schedule, sunday="10:00 AM - 6:00 PM",
            closed=False,
        ),
        Timings(store_id=200, closed=True),
    ])
    db_session.commit()
    return db_session


@pytest.fixture
def issue_and_verify(client, mailer):
    """Run sendOTP and verifyOTP for an email; return the verified code."""

    def _run(email: str) -> str:
        response = client.post("/api/sendOTP", json={"email": email})
        assert response.status_code == 200, response.json()
        code = mailer.last_code(email)
        response = client.post("/api/verifyOTP", json={"email": email, "otp": code})
        assert response.status_code == 200, response.json()
        return code

    return _run


@pytest.fixture
def add_rating(seeded):
    """Insert a rating row directly, bypassing the OTP gate."""

    def _add(store_id: int, email: str, score: int, submitted_at: datetime, name: str = None) -> Rating:
        rating = Rating(store_id=store_id, email=email, rating=score, submitted_at=submitted_at, name=name)
        seeded.add(rating)
        seeded.commit()
        return rating

    return _add
