import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from helper import check_rate_limit, paginate, sanitize_html
from models import BookingStatus, BookingStatusUpdate, EventBooking, EventBookingDB, EventBookingResponse
from routes.user_route import require_admin

logger = logging.getLogger(__name__)

event_router = APIRouter(
    tags=["Events"]
)

admin_booking_router = APIRouter(
    prefix="/admin",
    tags=["Admin Bookings"],
    dependencies=[Depends(require_admin)]
)

def events_rate_limit(request: Request) -> int:
    return check_rate_limit(request, "events")

@event_router.post("/events", status_code=201, tags=["Events"])
def submit_booking(
    booking: EventBooking,
    response: Response,
    remaining: int = Depends(events_rate_limit),
    db: Session = Depends(get_db)
):
    """
    Stores a private event booking enquiry.

    Returns:
        dict: A success flag, a message for the visitor and the booking id.
    """
    try:
        db_booking = EventBookingDB(
            name=sanitize_html(booking.name),
            email=booking.email,
            event_type=booking.event_type.value,
            event_date=booking.event_date,
            location=sanitize_html(booking.location),
            guest_count=booking.guest_count,
            notes=sanitize_html(booking.notes) if booking.notes else None,
            status=BookingStatus.NEW.value,
        )
        db.add(db_booking)
        db.commit()
        db.refresh(db_booking)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to store event booking")
        raise HTTPException(status_code=500, detail="Failed to submit booking enquiry. Please try again.")

    response.headers["X-RateLimit-Remaining"] = str(remaining)
    return {
        "success": True,
        "message": "Your booking enquiry has been received. We will be in touch within 24 hours.",
        "id": db_booking.id,
    }

@admin_booking_router.get("/bookings", tags=["Admin Bookings"])
def get_bookings(
    status: Optional[BookingStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db)
):
    try:
        query = db.query(EventBookingDB)
        if status:
            query = query.filter(EventBookingDB.status == status.value)
        query = query.order_by(EventBookingDB.created_at.desc(), EventBookingDB.id.desc())
        rows, pagination = paginate(query, page, limit)
        bookings = [EventBookingResponse.model_validate(row) for row in rows]
        return {"bookings": jsonable_encoder(bookings), "pagination": pagination}
    except SQLAlchemyError:
        logger.exception("Failed to fetch bookings")
        raise HTTPException(status_code=500, detail="Failed to fetch bookings")

@admin_booking_router.get("/bookings/{id}", tags=["Admin Bookings"])
def get_booking(id: int, db: Session = Depends(get_db)):
    booking = db.query(EventBookingDB).filter(EventBookingDB.id == id).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return {"booking": jsonable_encoder(EventBookingResponse.model_validate(booking))}

@admin_booking_router.patch("/bookings/{id}", tags=["Admin Bookings"])
def update_booking_status(id: int, update: BookingStatusUpdate, db: Session = Depends(get_db)):
    booking = db.query(EventBookingDB).filter(EventBookingDB.id == id).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    try:
        booking.status = update.status.value
        db.commit()
        db.refresh(booking)
        return {"success": True, "booking": {"id": booking.id, "status": booking.status}}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update booking %s", id)
        raise HTTPException(status_code=500, detail="Failed to update booking")
