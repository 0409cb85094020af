from datetime import date, timedelta

from sqlalchemy.orm import Session

from helper import business_today
from models import EventBookingDB

# ---------------------------------------------------------
# Helper
# ---------------------------------------------------------
def booking_payload(**overrides):
    payload = {
        "name": "Sam Smith",
        "email": "sam@example.com",
        "event_type": "wedding",
        "event_date": (business_today() + timedelta(days=60)).isoformat(),
        "location": "Barn near Chipping Norton",
        "guest_count": "75-100",
        "notes": "Evening reception only",
    }
    payload.update(overrides)
    return payload

def create_test_booking(db: Session, name="Sam Smith", status="new"):
    booking = EventBookingDB(
        name=name,
        email="sam@example.com",
        event_type="party",
        event_date=date(2030, 8, 17),
        location="Village hall",
        guest_count="50-75",
        status=status,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking

# =========================================================
# TEST: POST /events
# =========================================================
def test_submit_booking(client, db):
    response = client.post("/events", json=booking_payload())
    assert response.status_code == 201
    assert response.headers["X-RateLimit-Remaining"] == "2"

    data = response.json()
    assert data["success"] is True
    assert "within 24 hours" in data["message"]

    stored = db.query(EventBookingDB).filter(EventBookingDB.id == data["id"]).first()
    assert stored.guest_count == "75-100"
    assert stored.status == "new"

def test_submit_booking_without_notes(client, db):
    payload = booking_payload()
    del payload["notes"]

    response = client.post("/events", json=payload)
    assert response.status_code == 201
    assert db.query(EventBookingDB).first().notes is None

def test_submit_booking_today_rejected(client):
    response = client.post("/events", json=booking_payload(event_date=business_today().isoformat()))
    assert response.status_code == 400
    assert response.json()["errors"]["event_date"] == ["Value error, Event date must be in the future"]

def test_submit_booking_past_date_rejected(client):
    past = (business_today() - timedelta(days=1)).isoformat()

    response = client.post("/events", json=booking_payload(event_date=past))
    assert response.status_code == 400
    assert "event_date" in response.json()["errors"]

def test_submit_booking_unknown_guest_count(client):
    response = client.post("/events", json=booking_payload(guest_count="500"))
    assert response.status_code == 400
    assert "guest_count" in response.json()["errors"]

def test_submit_booking_rate_limited(client):
    for _ in range(3):
        assert client.post("/events", json=booking_payload()).status_code == 201

    response = client.post("/events", json=booking_payload())
    assert response.status_code == 429
    assert "Retry-After" in response.headers

def test_booking_and_contact_limits_are_separate(client):
    for _ in range(3):
        client.post("/events", json=booking_payload())

    response = client.post("/contact", json={
        "name": "Sam Smith",
        "email": "sam@example.com",
        "enquiry_type": "general",
        "message": "Are you at Burford this week?",
    })
    assert response.status_code == 201

# =========================================================
# TEST: admin bookings
# =========================================================
def test_admin_list_bookings(client, db, admin_headers):
    create_test_booking(db, name="Booked one", status="booked")
    create_test_booking(db, name="Fresh one")

    response = client.get("/admin/bookings", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 2

    response = client.get("/admin/bookings", params={"status": "booked"}, headers=admin_headers)
    assert [b["name"] for b in response.json()["bookings"]] == ["Booked one"]

def test_admin_list_bookings_requires_token(client):
    response = client.get("/admin/bookings")
    assert response.status_code == 401

def test_admin_get_booking(client, db, admin_headers):
    booking = create_test_booking(db)

    response = client.get(f"/admin/bookings/{booking.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["booking"]["event_date"] == "2030-08-17"

def test_admin_get_booking_not_found(client, admin_headers):
    response = client.get("/admin/bookings/999", headers=admin_headers)
    assert response.status_code == 404

def test_admin_update_booking_status(client, db, admin_headers):
    booking = create_test_booking(db)

    response = client.patch(f"/admin/bookings/{booking.id}", json={"status": "replied"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["booking"]["status"] == "replied"

    db.expire_all()
    assert db.query(EventBookingDB).filter(EventBookingDB.id == booking.id).first().status == "replied"
