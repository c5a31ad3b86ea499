"""Tests for the call log endpoints."""
from fastapi import status

from app.config.service import settings
from app.database.fixtures import create_test_call
from app.models import CallStatus, CallType

BASE = "/api/v1/calls"


def headers(user):
    return {"X-User-Id": str(user.id)}


def initiate(client, caller, recipient):
    return client.post(f"{BASE}/", json={"recipient_id": recipient.id}, headers=headers(caller))


def test_initiate_and_complete_call(client, supplier, retailer):
    """Test the call lifecycle over HTTP."""
    response = initiate(client, supplier, retailer)
    assert response.status_code == status.HTTP_201_CREATED
    call = response.json()
    assert call["status"] == "initiated"
    assert call["call_type"] == "outbound"

    response = client.patch(
        f"{BASE}/{call['id']}",
        json={"status": "completed", "duration": 120, "notes": "Agreed on terms"},
        headers=headers(retailer),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["duration"] == 120
    assert response.json()["end_time"] is not None

    for user in (supplier, retailer):
        logs = client.get(f"{BASE}/", headers=headers(user)).json()
        assert [entry["id"] for entry in logs] == [call["id"]]
        assert logs[0]["status"] == "completed"


def test_initiate_disallowed_pair(client, retailer, other_retailer):
    """Test two retailers cannot call each other."""
    response = initiate(client, retailer, other_retailer)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["error"] == "AUTHORIZATION_ERROR"


def test_log_details_rejects_initiated(client, supplier, retailer):
    """Test INITIATED cannot be reported."""
    call_id = initiate(client, supplier, retailer).json()["id"]

    response = client.patch(
        f"{BASE}/{call_id}", json={"status": "initiated"}, headers=headers(supplier)
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["details"]["field"] == "status"


def test_log_details_unknown_call(client, supplier):
    """Test updating a missing call."""
    response = client.patch(
        f"{BASE}/9999", json={"status": "completed"}, headers=headers(supplier)
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_log_details_non_participant(client, supplier, retailer, sales):
    """Test outsiders cannot update a call."""
    call_id = initiate(client, supplier, retailer).json()["id"]

    response = client.patch(
        f"{BASE}/{call_id}", json={"status": "completed"}, headers=headers(sales)
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_call_logs_status_filter(client, db, supplier, retailer):
    """Test the status query parameter."""
    missed = create_test_call(db, supplier, retailer, status=CallStatus.MISSED)
    create_test_call(db, supplier, retailer, status=CallStatus.COMPLETED)

    response = client.get(f"{BASE}/", params={"status": "missed"}, headers=headers(supplier))

    assert response.status_code == status.HTTP_200_OK
    assert [entry["id"] for entry in response.json()] == [missed.id]
    assert response.json()[0]["caller_name"] == supplier.name


def test_analytics(client, db, supplier, retailer):
    """Test the analytics endpoint."""
    create_test_call(db, supplier, retailer, duration=120)
    create_test_call(db, retailer, supplier, duration=60, call_type=CallType.INBOUND)

    response = client.get(f"{BASE}/analytics", headers=headers(supplier))

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_calls"] == 2
    assert data["completed_calls"] == 2
    assert data["avg_duration"] == 90.0
    assert data["total_duration"] == 180
    assert data["max_duration"] == 120


def test_history(client, db, supplier, retailer, sales):
    """Test history between two users."""
    call = create_test_call(db, retailer, supplier)
    create_test_call(db, sales, supplier)

    response = client.get(f"{BASE}/history/{retailer.id}", headers=headers(supplier))

    assert response.status_code == status.HTTP_200_OK
    assert [entry["id"] for entry in response.json()] == [call.id]


def test_update_notes(client, supplier, retailer):
    """Test replacing call notes."""
    call_id = initiate(client, supplier, retailer).json()["id"]

    response = client.put(
        f"{BASE}/{call_id}/notes", json={"notes": "Send samples"}, headers=headers(retailer)
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["notes"] == "Send samples"
    assert response.json()["status"] == "initiated"


def test_call_logs_page_size_capped(client, supplier):
    """Test limits above the configured maximum are rejected."""
    response = client.get(
        f"{BASE}/", params={"limit": settings.MAX_PAGE_SIZE + 1}, headers=headers(supplier)
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_call_logs_default_page_size(client, db, supplier, retailer):
    """Test call logs page by the configured history size."""
    for _ in range(settings.HISTORY_PAGE_SIZE + 1):
        create_test_call(db, supplier, retailer)

    response = client.get(f"{BASE}/", headers=headers(supplier))

    assert len(response.json()) == settings.HISTORY_PAGE_SIZE
