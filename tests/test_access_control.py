from datetime import date

import pytest
from fastapi import status

from app.core.config import settings
from app.core.security import create_session_token
from conftest import auth_headers, make_stay, make_user

STAY_PAYLOAD = {
    "location": "Lyon",
    "address": "Place Bellecour, Lyon",
    "arrival_date": "2025-06-01",
    "departure_date": "2025-06-03",
}


def trip_scoped_requests(trip_id: int, stay_id: int, user_id: int):
    """Every endpoint that takes a trip id, as (method, path, json)."""
    return [
        ("GET", f"/trips/{trip_id}", None),
        ("PUT", f"/trips/{trip_id}", {"name": "Renamed"}),
        ("DELETE", f"/trips/{trip_id}", None),
        ("GET", f"/trips/{trip_id}/stays", None),
        ("POST", f"/trips/{trip_id}/stays", STAY_PAYLOAD),
        ("GET", f"/trips/{trip_id}/stays/{stay_id}", None),
        ("PUT", f"/trips/{trip_id}/stays/{stay_id}", STAY_PAYLOAD),
        ("DELETE", f"/trips/{trip_id}/stays/{stay_id}", None),
        ("GET", f"/trips/{trip_id}/timeline", None),
        ("POST", f"/trips/{trip_id}/invite", {"email": "friend@example.com"}),
        ("GET", f"/trips/{trip_id}/members", None),
        ("PUT", f"/trips/{trip_id}/members/{user_id}", {"role": "guest"}),
        ("DELETE", f"/trips/{trip_id}/members/{user_id}", None),
    ]


@pytest.mark.asyncio
async def test_unauthenticated_requests_get_401(client, db_session, shared_trip, member):
    stay = await make_stay(db_session, shared_trip, "Lyon", date(2025, 6, 1), date(2025, 6, 3))

    for method, path, body in trip_scoped_requests(shared_trip.id, stay.id, member.id):
        response = await client.request(method, path, json=body)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED, (method, path)


@pytest.mark.asyncio
async def test_non_member_gets_403_everywhere(client, db_session, shared_trip, member, outsider):
    stay = await make_stay(db_session, shared_trip, "Lyon", date(2025, 6, 1), date(2025, 6, 3))
    headers = auth_headers(outsider)

    for method, path, body in trip_scoped_requests(shared_trip.id, stay.id, member.id):
        response = await client.request(method, path, json=body, headers=headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN, (method, path)


@pytest.mark.asyncio
async def test_unknown_trip_gets_404(client, owner):
    headers = auth_headers(owner)

    for method, path, body in trip_scoped_requests(9999, 1, owner.id):
        response = await client.request(method, path, json=body, headers=headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND, (method, path)


@pytest.mark.asyncio
async def test_guest_can_read(client, db_session, shared_trip, guest):
    stay = await make_stay(db_session, shared_trip, "Lyon", date(2025, 6, 1), date(2025, 6, 3))
    headers = auth_headers(guest)

    for path in (
        f"/trips/{shared_trip.id}",
        f"/trips/{shared_trip.id}/stays",
        f"/trips/{shared_trip.id}/stays/{stay.id}",
        f"/trips/{shared_trip.id}/timeline",
        f"/trips/{shared_trip.id}/members",
    ):
        response = await client.get(path, headers=headers)
        assert response.status_code == status.HTTP_200_OK, path


@pytest.mark.asyncio
async def test_guest_cannot_edit(client, db_session, shared_trip, guest):
    stay = await make_stay(db_session, shared_trip, "Lyon", date(2025, 6, 1), date(2025, 6, 3))
    headers = auth_headers(guest)

    attempts = [
        ("POST", f"/trips/{shared_trip.id}/stays", STAY_PAYLOAD),
        ("PUT", f"/trips/{shared_trip.id}/stays/{stay.id}", STAY_PAYLOAD),
        ("DELETE", f"/trips/{shared_trip.id}/stays/{stay.id}", None),
        ("PUT", f"/trips/{shared_trip.id}", {"name": "Guest rename"}),
        ("DELETE", f"/trips/{shared_trip.id}", None),
    ]
    for method, path, body in attempts:
        response = await client.request(method, path, json=body, headers=headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN, (method, path)


@pytest.mark.asyncio
async def test_member_can_edit_stays_but_not_the_trip(client, db_session, shared_trip, member):
    headers = auth_headers(member)

    created = await client.post(f"/trips/{shared_trip.id}/stays", json=STAY_PAYLOAD, headers=headers)
    assert created.status_code == status.HTTP_201_CREATED

    for method, path, body in (
        ("PUT", f"/trips/{shared_trip.id}", {"name": "Member rename"}),
        ("DELETE", f"/trips/{shared_trip.id}", None),
        ("POST", f"/trips/{shared_trip.id}/invite", {"email": "friend@example.com"}),
    ):
        response = await client.request(method, path, json=body, headers=headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN, (method, path)


@pytest.mark.asyncio
async def test_session_cookie_is_accepted(client, shared_trip, owner):
    token = create_session_token(owner.id, owner.email)

    response = await client.get(
        f"/trips/{shared_trip.id}",
        headers={"Cookie": f"{settings.SESSION_COOKIE_NAME}={token}"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Alps loop"


@pytest.mark.asyncio
async def test_token_for_deleted_user_gets_401(client, db_session):
    ghost = await make_user(db_session, "ghost@example.com")
    headers = auth_headers(ghost)
    await db_session.delete(ghost)
    await db_session.commit()

    response = await client.get("/trips", headers=headers)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_invalid_bearer_falls_back_to_cookie(client, shared_trip, owner):
    token = create_session_token(owner.id, owner.email)

    response = await client.get(
        f"/trips/{shared_trip.id}",
        headers={
            "Authorization": "Bearer not-a-real-token",
            "Cookie": f"{settings.SESSION_COOKIE_NAME}={token}",
        },
    )

    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_invalid_bearer_without_cookie_gets_401(client, shared_trip):
    response = await client.get(
        f"/trips/{shared_trip.id}",
        headers={"Authorization": "Bearer not-a-real-token"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_non_integer_trip_id_is_bad_request(client, owner):
    response = await client.get("/trips/abc", headers=auth_headers(owner))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
