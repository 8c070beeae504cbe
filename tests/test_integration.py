"""Integration tests for the reservation HTTP flow"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

EVENING = "2030-11-15T19:00:00-05:00"


@pytest.fixture
def ids(test_tables, test_customer, test_manager):
    return {
        **{number: str(table.id) for number, table in test_tables.items()},
        "customer": str(test_customer.id),
        "manager": str(test_manager.id),
    }


async def _book(client: AsyncClient, **fields):
    payload = {"party_size": 2, "reservation_datetime": EVENING}
    payload.update(fields)
    return await client.post("/reservations", json=payload)


@pytest.mark.asyncio
async def test_full_reservation_flow(client: AsyncClient, ids):
    """
    Guest books, manager approves:
    1. Check availability
    2. Create a guest reservation on T2
    3. Approve it
    4. A second approval conflicts
    """
    # Step 1: T2 and T3 seat four at 19:00
    availability = await client.get(
        "/reservations/availability",
        params={"date": "2030-11-15", "time": "19:00", "party_size": 4},
    )
    assert availability.status_code == 200
    assert [t["table_number"] for t in availability.json()] == ["T2", "T3"]

    # Step 2: Book as a guest
    response = await _book(
        client,
        guest_name="John Smith",
        guest_email="john@example.com",
        guest_phone="+15550001111",
        table_id=ids["T2"],
        party_size=4,
    )
    assert response.status_code == 201
    reservation = response.json()
    assert reservation["status"] == "PENDING"
    assert reservation["customer_name"] == "John Smith"
    assert reservation["customer_email"] == "john@example.com"
    assert reservation["table_number"] == "T2"
    assert reservation["table_location"] == "Main dining area"
    assert reservation["reservation_datetime"].startswith("2030-11-16T00:00:00")

    # Step 3: Approve
    approve = await client.post(
        f"/reservations/{reservation['id']}/approve",
        json={"approver_id": ids["manager"]},
    )
    assert approve.status_code == 200
    assert approve.json()["status"] == "CONFIRMED"
    assert approve.json()["approved_by_id"] == ids["manager"]

    # Step 4: Approving again is a conflict
    again = await client.post(
        f"/reservations/{reservation['id']}/approve",
        json={"approver_id": ids["manager"]},
    )
    assert again.status_code == 409
    assert "Only PENDING reservations can be approved" in again.json()["detail"]

    # The slot is gone for T2
    slots = await client.get(
        "/reservations/timeslots", params={"date": "2030-11-15", "party_size": 4}
    )
    assert slots.status_code == 200
    by_time = {slot["time"]: slot for slot in slots.json()}
    assert len(by_time) == 10
    assert [t["table_number"] for t in by_time["19:00"]["available_tables"]] == ["T3"]
    assert by_time["19:00"]["is_available"] is True


@pytest.mark.asyncio
async def test_double_booking_returns_409(client: AsyncClient, ids):
    first = await _book(client, customer_id=ids["customer"], table_id=ids["T2"])
    assert first.status_code == 201

    second = await _book(client, customer_id=ids["manager"], table_id=ids["T2"])
    assert second.status_code == 409
    assert second.json()["detail"] == "Table is already reserved for this time"


@pytest.mark.asyncio
async def test_capacity_returns_400(client: AsyncClient, ids):
    response = await _book(client, customer_id=ids["customer"], table_id=ids["T1"], party_size=6)

    assert response.status_code == 400
    assert response.json()["detail"] == "Number of guests (6) exceeds table capacity (2)"

    listing = await client.get("/reservations")
    assert listing.json()["total"] == 0


@pytest.mark.asyncio
async def test_missing_guest_details_returns_400(client: AsyncClient, ids):
    response = await _book(client, guest_name="John Smith")

    assert response.status_code == 400
    assert "Guest email and name are required" in response.json()["detail"]


@pytest.mark.asyncio
async def test_naive_datetime_is_rejected(client: AsyncClient, ids):
    response = await _book(
        client, customer_id=ids["customer"], reservation_datetime="2030-11-15T19:00:00"
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_ids_return_404(client: AsyncClient, ids):
    missing = str(uuid4())

    assert (await client.get(f"/reservations/{missing}")).status_code == 404
    assert (await client.get(f"/tables/{missing}")).status_code == 404
    assert (await _book(client, customer_id=missing)).status_code == 404
    assert (await _book(client, customer_id=ids["customer"], table_id=missing)).status_code == 404

    response = await client.put(f"/reservations/{missing}/cancel")
    assert response.status_code == 404
    assert response.json()["detail"] == f"Reservation not found with ID: {missing}"


@pytest.mark.asyncio
async def test_deny_and_cancel(client: AsyncClient, ids):
    denied = (await _book(client, customer_id=ids["customer"], table_id=ids["T2"])).json()
    response = await client.post(
        f"/reservations/{denied['id']}/deny",
        json={"decider_id": ids["manager"], "reason": "Kitchen closed"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "DENIED"
    assert response.json()["rejection_reason"] == "Kitchen closed"

    # The denied slot can be booked again and then cancelled
    rebooked = await _book(client, customer_id=ids["customer"], table_id=ids["T2"])
    assert rebooked.status_code == 201

    cancelled = await client.put(f"/reservations/{rebooked.json()['id']}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "CANCELLED"

    again = await client.put(f"/reservations/{rebooked.json()['id']}/cancel")
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_floor_flow(client: AsyncClient, ids):
    created = (await _book(client, customer_id=ids["customer"], party_size=4)).json()
    reservation_id = created["id"]

    assigned = await client.put(f"/reservations/{reservation_id}/table", json={"table_id": ids["T3"]})
    assert assigned.status_code == 200
    assert assigned.json()["table_number"] == "T3"

    early_seat = await client.put(f"/reservations/{reservation_id}/seat")
    assert early_seat.status_code == 409

    await client.post(f"/reservations/{reservation_id}/approve", json={"approver_id": ids["manager"]})
    assert (await client.put(f"/reservations/{reservation_id}/seat")).json()["status"] == "SEATED"
    assert (await client.put(f"/reservations/{reservation_id}/complete")).json()["status"] == "COMPLETED"

    cancel = await client.put(f"/reservations/{reservation_id}/cancel")
    assert cancel.status_code == 409
    assert cancel.json()["detail"] == "Cannot cancel completed reservations"


@pytest.mark.asyncio
async def test_no_show_and_delete(client: AsyncClient, ids):
    reservation_id = (await _book(client, customer_id=ids["customer"])).json()["id"]
    await client.post(f"/reservations/{reservation_id}/approve", json={"approver_id": ids["manager"]})

    no_show = await client.put(f"/reservations/{reservation_id}/no-show")
    assert no_show.json()["status"] == "NO_SHOW"

    assert (await client.delete(f"/reservations/{reservation_id}")).status_code == 204
    assert (await client.get(f"/reservations/{reservation_id}")).status_code == 404
    assert (await client.delete(f"/reservations/{reservation_id}")).status_code == 404


@pytest.mark.asyncio
async def test_list_reservations_filters(client: AsyncClient, ids):
    await _book(client, customer_id=ids["customer"])
    await _book(client, customer_id=ids["manager"], reservation_datetime="2030-11-16T18:00:00-05:00")

    everything = (await client.get("/reservations")).json()
    assert everything["total"] == 2
    assert everything["page"] == 1

    on_date = (await client.get("/reservations", params={"date": "2030-11-15"})).json()
    assert on_date["total"] == 1
    assert on_date["items"][0]["customer_name"] == "Alice Walker"

    mine = (await client.get("/reservations", params={"customer_id": ids["manager"]})).json()
    assert mine["total"] == 1

    pending = (await client.get("/reservations", params={"status": "PENDING"})).json()
    assert pending["total"] == 2

    bad_status = await client.get("/reservations", params={"status": "LOST"})
    assert bad_status.status_code == 422


@pytest.mark.asyncio
async def test_timeslots_validation(client: AsyncClient, ids):
    response = await client.get(
        "/reservations/timeslots", params={"date": "2030-11-15", "party_size": 0}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Party size must be at least 1"


@pytest.mark.asyncio
async def test_tables_endpoints(client: AsyncClient, ids):
    response = await client.get("/tables")

    assert response.status_code == 200
    tables = response.json()
    assert [t["table_number"] for t in tables] == ["T1", "T2", "T3", "T4", "T5"]
    assert tables[3]["status"] == "MAINTENANCE"

    single = await client.get(f"/tables/{ids['T3']}")
    assert single.json()["table_type"] == "BOOTH"
    assert single.json()["capacity"] == 6


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_guest_contact_lengths(client: AsyncClient, ids):
    """Extension-style phone numbers fit; oversized fields are refused up front"""
    accepted = await _book(
        client,
        guest_name="John Smith",
        guest_email="john@example.com",
        guest_phone="+1 (555) 123-4567 x89",
    )
    assert accepted.status_code == 201
    assert accepted.json()["customer_phone"] == "+1 (555) 123-4567 x89"

    too_long_phone = await _book(
        client,
        guest_name="Jane Smith",
        guest_email="jane@example.com",
        guest_phone="5" * 256,
    )
    assert too_long_phone.status_code == 422

    too_long_name = await _book(client, guest_name="J" * 256, guest_email="jane@example.com")
    assert too_long_name.status_code == 422

    listing = await client.get("/reservations")
    assert listing.json()["total"] == 1
