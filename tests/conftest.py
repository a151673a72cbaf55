"""
Shared fixtures for the StayLinker test suite.

Every test gets a fresh in-memory SQLite database attached to the app the same
way the lifespan attaches the real one, an httpx client bound to the ASGI app,
and the distance service swapped for the deterministic mock.
"""

import os
from datetime import date, time
from typing import Optional

# Settings are read at import time, so the env has to be ready first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test-client-secret")
os.environ["GOOGLE_MAPS_API_KEY"] = ""
os.environ["COOKIE_SECURE"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app.core.database import Database
from app.core.security import create_session_token
from app.dependencies.distance import get_distance_service
from app.models import Contact, Stay, Trip, TripRole, TripUser, User
from app.services.distance.distance_service import DistanceService


# ---------------------------------------------------------------------------
# Database / app / client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def database():
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.connect()
    await db.create_all()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(database):
    session = database.session_factory()
    yield session
    await session.close()


@pytest.fixture
def test_app(database):
    from app.main import app as _app

    _app.state.database = database
    _app.dependency_overrides[get_distance_service] = lambda: DistanceService(api_key=None)
    yield _app
    _app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_session_token(user.id, user.email)}"}


async def make_user(db, email: str, name: Optional[str] = None) -> User:
    user = User(email=email, name=name or email.split("@")[0])
    db.add(user)
    await db.commit()
    return user


async def make_trip(db, owner: User, name: str = "Road trip") -> Trip:
    trip = Trip(name=name, owner_id=owner.id)
    db.add(trip)
    await db.flush()
    db.add(TripUser(trip_id=trip.id, user_id=owner.id, role=TripRole.MEMBER))
    await db.commit()
    return trip


async def add_member(db, trip: Trip, user: User, role: TripRole = TripRole.MEMBER) -> TripUser:
    member = TripUser(trip_id=trip.id, user_id=user.id, role=role)
    db.add(member)
    await db.commit()
    return member


async def make_stay(
    db,
    trip: Trip,
    location: str,
    arrival: date,
    departure: date,
    address: Optional[str] = None,
    arrival_time: Optional[time] = None,
    departure_time: Optional[time] = None,
    contacts: tuple = (),
) -> Stay:
    stay = Stay(
        trip_id=trip.id,
        location=location,
        address=address or f"1 Main Street, {location}",
        arrival_date=arrival,
        departure_date=departure,
        arrival_time=arrival_time,
        departure_time=departure_time,
        contacts=[Contact(name=n, phone=p) for n, p in contacts],
    )
    db.add(stay)
    await db.commit()
    return stay


@pytest_asyncio.fixture
async def owner(db_session):
    return await make_user(db_session, "owner@example.com", "Olivia Owner")


@pytest_asyncio.fixture
async def member(db_session):
    return await make_user(db_session, "member@example.com", "Max Member")


@pytest_asyncio.fixture
async def guest(db_session):
    return await make_user(db_session, "guest@example.com", "Gina Guest")


@pytest_asyncio.fixture
async def outsider(db_session):
    return await make_user(db_session, "outsider@example.com", "Oscar Outsider")


@pytest_asyncio.fixture
async def shared_trip(db_session, owner, member, guest):
    """A trip owned by ``owner`` with one member and one guest."""
    trip = await make_trip(db_session, owner, "Alps loop")
    await add_member(db_session, trip, member, TripRole.MEMBER)
    await add_member(db_session, trip, guest, TripRole.GUEST)
    return trip
