from datetime import date

import pytest
from fastapi import status
from sqlalchemy import select

from app.models import Contact
from conftest import auth_headers, make_stay, make_trip


def stay_payload(**overrides):
    payload = {
        "location": "Innsbruck",
        "address": "Maria-Theresien-Strasse 1, Innsbruck",
        "arrival_date": "2025-07-10",
        "departure_date": "2025-07-13",
        "arrival_time": "15:00",
        "notes": "Parking behind the building",
        "contacts": [{"name": "Reception", "phone": "+43 512 000000"}],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_stay(client, shared_trip, member):
    response = await client.post(
        f"/trips/{shared_trip.id}/stays",
        json=stay_payload(),
        headers=auth_headers(member),
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["trip_id"] == shared_trip.id
    assert data["location"] == "Innsbruck"
    assert data["arrival_date"] == "2025-07-10"
    assert data["arrival_time"] == "15:00:00"
    assert data["departure_time"] is None
    assert data["arrival_confirmed"] is False
    assert [c["name"] for c in data["contacts"]] == ["Reception"]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["location", "address", "arrival_date", "departure_date"])
async def test_create_stay_requires_fields(client, shared_trip, owner, missing):
    payload = stay_payload()
    del payload[missing]

    response = await client.post(f"/trips/{shared_trip.id}/stays", json=payload, headers=auth_headers(owner))

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_departure_must_follow_arrival(client, shared_trip, owner):
    response = await client.post(
        f"/trips/{shared_trip.id}/stays",
        json=stay_payload(arrival_date="2025-07-10", departure_date="2025-07-09"),
        headers=auth_headers(owner),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_list_stays_ordered_by_arrival(client, db_session, shared_trip, guest):
    await make_stay(db_session, shared_trip, "Verona", date(2025, 7, 20), date(2025, 7, 22))
    await make_stay(db_session, shared_trip, "Bolzano", date(2025, 7, 15), date(2025, 7, 18))
    await make_stay(db_session, shared_trip, "Munich", date(2025, 7, 10), date(2025, 7, 12))

    response = await client.get(f"/trips/{shared_trip.id}/stays", headers=auth_headers(guest))

    assert response.status_code == status.HTTP_200_OK
    assert [s["location"] for s in response.json()] == ["Munich", "Bolzano", "Verona"]


@pytest.mark.asyncio
async def test_stay_from_another_trip_is_not_found(client, db_session, shared_trip, owner):
    other_trip = await make_trip(db_session, owner, "Other trip")
    foreign_stay = await make_stay(db_session, other_trip, "Oslo", date(2025, 8, 1), date(2025, 8, 3))

    response = await client.get(
        f"/trips/{shared_trip.id}/stays/{foreign_stay.id}",
        headers=auth_headers(owner),
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Stay not found"


@pytest.mark.asyncio
async def test_update_stay_replaces_contacts(client, db_session, shared_trip, member):
    stay = await make_stay(
        db_session, shared_trip, "Innsbruck", date(2025, 7, 10), date(2025, 7, 13),
        contacts=(("Old host", "111"), ("Old cleaner", "222")),
    )

    response = await client.put(
        f"/trips/{shared_trip.id}/stays/{stay.id}",
        json=stay_payload(
            location="Innsbruck Old Town",
            departure_confirmed=True,
            contacts=[{"name": "New host", "phone": "333"}],
        ),
        headers=auth_headers(member),
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["location"] == "Innsbruck Old Town"
    assert data["departure_confirmed"] is True
    assert [(c["name"], c["phone"]) for c in data["contacts"]] == [("New host", "333")]

    remaining = (await db_session.execute(select(Contact.name).where(Contact.stay_id == stay.id))).scalars().all()
    assert remaining == ["New host"]


@pytest.mark.asyncio
async def test_update_missing_stay(client, shared_trip, owner):
    response = await client.put(
        f"/trips/{shared_trip.id}/stays/9999",
        json=stay_payload(),
        headers=auth_headers(owner),
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_stay(client, db_session, shared_trip, owner):
    stay = await make_stay(
        db_session, shared_trip, "Graz", date(2025, 7, 1), date(2025, 7, 2),
        contacts=(("Host", "123"),),
    )

    response = await client.delete(f"/trips/{shared_trip.id}/stays/{stay.id}", headers=auth_headers(owner))

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}

    again = await client.get(f"/trips/{shared_trip.id}/stays/{stay.id}", headers=auth_headers(owner))
    assert again.status_code == status.HTTP_404_NOT_FOUND

    assert (await db_session.execute(select(Contact).where(Contact.stay_id == stay.id))).first() is None
