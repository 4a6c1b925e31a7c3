"""
Tests for reservation endpoints.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from conftest import OTHER_RENTER_ID, RENTER_ID, headers_for


async def post_reservation(client, headers, booth_id, start, end, price="250.00"):
    return await client.post(
        "/api/v1/reservations/",
        json={"booth_id": booth_id, "start_date": start, "end_date": end, "total_price": price},
        headers=headers,
    )


@pytest.mark.asyncio
async def test_create_reservation(client: AsyncClient, auth_headers, test_booth):
    """New reservations start pending and update the booth's availability."""
    booth_id = test_booth.id
    response = await post_reservation(client, auth_headers, booth_id, "2025-10-01", "2025-10-02")

    assert response.status_code == 201
    data = response.json()
    assert data["booth_availability"] == "reserved"
    reservation = data["reservation"]
    assert reservation["booth_id"] == booth_id
    assert reservation["renter_id"] == RENTER_ID
    assert reservation["start_date"] == "2025-10-01"
    assert reservation["end_date"] == "2025-10-02"
    assert reservation["status"] == "pending"
    assert reservation["payment_status"] == "unpaid"
    assert Decimal(reservation["total_price"]) == Decimal("250.00")

    availability = await client.get(f"/api/v1/booths/{booth_id}/availability")
    assert availability.json() == {"booth_id": booth_id, "availability_status": "reserved"}


@pytest.mark.asyncio
async def test_create_reservation_unauthenticated(client: AsyncClient, test_booth):
    response = await post_reservation(client, {}, test_booth.id, "2025-10-01", "2025-10-02")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_reservation_bad_token(client: AsyncClient, test_booth):
    headers = {"Authorization": "Bearer not-a-jwt"}
    response = await post_reservation(client, headers, test_booth.id, "2025-10-01", "2025-10-02")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_overlapping_reservation_returns_conflict(client: AsyncClient, auth_headers, test_booth):
    """Sharing the boundary day with an active reservation is a 409 naming that reservation."""
    booth_id = test_booth.id
    first = await post_reservation(client, auth_headers, booth_id, "2025-10-01", "2025-10-03")
    assert first.status_code == 201
    first_id = first.json()["reservation"]["id"]

    response = await post_reservation(
        client, headers_for(OTHER_RENTER_ID), booth_id, "2025-10-03", "2025-10-05"
    )

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "conflict"
    assert body["conflicting_reservation_id"] == first_id

    # Nothing was written by the rejected request
    listing = await client.get(f"/api/v1/booths/{booth_id}/reservations")
    assert [r["id"] for r in listing.json()] == [first_id]


@pytest.mark.asyncio
async def test_reservation_after_existing_succeeds(client: AsyncClient, auth_headers, test_booth):
    booth_id = test_booth.id
    await post_reservation(client, auth_headers, booth_id, "2025-10-01", "2025-10-02")

    response = await post_reservation(
        client, headers_for(OTHER_RENTER_ID), booth_id, "2025-10-03", "2025-10-05"
    )

    assert response.status_code == 201
    assert response.json()["booth_availability"] == "unavailable"


@pytest.mark.asyncio
async def test_reservation_outside_event(client: AsyncClient, auth_headers, test_booth):
    response = await post_reservation(client, auth_headers, test_booth.id, "2025-09-30", "2025-10-02")

    assert response.status_code == 422
    assert response.json()["error"] == "range_out_of_bounds"


@pytest.mark.asyncio
async def test_reservation_reversed_dates(client: AsyncClient, auth_headers, test_booth):
    response = await post_reservation(client, auth_headers, test_booth.id, "2025-10-04", "2025-10-02")

    assert response.status_code == 422
    assert response.json()["error"] == "invalid_range"


@pytest.mark.asyncio
async def test_reservation_malformed_date(client: AsyncClient, auth_headers, test_booth):
    response = await post_reservation(client, auth_headers, test_booth.id, "2025-10-32", "2025-10-02")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_reservation_negative_price(client: AsyncClient, auth_headers, test_booth):
    response = await post_reservation(
        client, auth_headers, test_booth.id, "2025-10-01", "2025-10-02", price="-1"
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_reservation_nonexistent_booth(client: AsyncClient, auth_headers):
    response = await post_reservation(client, auth_headers, 99999, "2025-10-01", "2025-10-02")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_cancel_reservation(client: AsyncClient, auth_headers, test_booth):
    """Cancelling releases the days; the record stays with status cancelled."""
    booth_id = test_booth.id
    created = await post_reservation(client, auth_headers, booth_id, "2025-10-01", "2025-10-05")
    reservation_id = created.json()["reservation"]["id"]
    assert created.json()["booth_availability"] == "unavailable"

    response = await client.post(f"/api/v1/reservations/{reservation_id}/cancel", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["reservation"]["status"] == "cancelled"
    assert data["booth_availability"] == "available"

    fetched = await client.get(f"/api/v1/reservations/{reservation_id}")
    assert fetched.json()["status"] == "cancelled"


@pytest.mark.asyncio
async def test_cancel_already_cancelled(client: AsyncClient, auth_headers, test_booth):
    created = await post_reservation(client, auth_headers, test_booth.id, "2025-10-01", "2025-10-01")
    reservation_id = created.json()["reservation"]["id"]

    await client.post(f"/api/v1/reservations/{reservation_id}/cancel", headers=auth_headers)
    response = await client.post(f"/api/v1/reservations/{reservation_id}/cancel", headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"] == "invalid_transition"


@pytest.mark.asyncio
async def test_approve_and_decline(client: AsyncClient, auth_headers, owner_headers, test_booth):
    booth_id = test_booth.id
    first = await post_reservation(client, auth_headers, booth_id, "2025-10-01", "2025-10-02")
    second = await post_reservation(client, auth_headers, booth_id, "2025-10-04", "2025-10-05")
    first_id = first.json()["reservation"]["id"]
    second_id = second.json()["reservation"]["id"]

    approved = await client.patch(
        f"/api/v1/reservations/{first_id}/status", json={"status": "approved"}, headers=owner_headers
    )
    assert approved.status_code == 200
    assert approved.json()["reservation"]["status"] == "approved"
    assert approved.json()["booth_availability"] == "reserved"

    declined = await client.patch(
        f"/api/v1/reservations/{second_id}/status", json={"status": "declined"}, headers=owner_headers
    )
    assert declined.status_code == 200
    assert declined.json()["reservation"]["status"] == "declined"

    # Declined days are free again
    again = await post_reservation(client, headers_for(OTHER_RENTER_ID), booth_id, "2025-10-03", "2025-10-05")
    assert again.status_code == 201
    assert again.json()["booth_availability"] == "unavailable"


@pytest.mark.asyncio
async def test_status_update_rejects_non_decisions(client: AsyncClient, auth_headers, owner_headers, test_booth):
    created = await post_reservation(client, auth_headers, test_booth.id, "2025-10-01", "2025-10-01")
    reservation_id = created.json()["reservation"]["id"]

    to_pending = await client.patch(
        f"/api/v1/reservations/{reservation_id}/status", json={"status": "pending"}, headers=owner_headers
    )
    assert to_pending.status_code == 409

    unknown = await client.patch(
        f"/api/v1/reservations/{reservation_id}/status", json={"status": "confirmed"}, headers=owner_headers
    )
    assert unknown.status_code == 422


@pytest.mark.asyncio
async def test_status_update_on_missing_reservation(client: AsyncClient, owner_headers):
    response = await client.patch(
        "/api/v1/reservations/424242/status", json={"status": "approved"}, headers=owner_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_my_reservations(client: AsyncClient, auth_headers, test_booth):
    booth_id = test_booth.id
    await post_reservation(client, auth_headers, booth_id, "2025-10-01", "2025-10-01")
    await post_reservation(client, headers_for(OTHER_RENTER_ID), booth_id, "2025-10-02", "2025-10-02")

    response = await client.get("/api/v1/reservations/", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["renter_id"] == RENTER_ID


@pytest.mark.asyncio
async def test_get_reservation_not_found(client: AsyncClient):
    response = await client.get("/api/v1/reservations/99999")
    assert response.status_code == 404
