import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from config import SCHEDULE_HORIZON_DAYS, SCHEDULE_MAX_RESULTS, SEED_HORIZON_DAYS
from database import get_db
from helper import business_today, paginate
from models import Location, LocationDB, SeedRequest
from models.Base import utcnow
from routes.user_route import require_admin
from schedule import get_schedule_for_date, get_upcoming_schedule, resolve_state, seed_locations, slot_from_row

logger = logging.getLogger(__name__)

location_router = APIRouter(
    tags=["Location"]
)

admin_location_router = APIRouter(
    prefix="/admin",
    tags=["Admin Location"],
    dependencies=[Depends(require_admin)]
)

ACTIVE_DATE_TAKEN = "Another active location already exists for this date"

def _day_response(day: date, db: Session):
    slot = get_schedule_for_date(db, day)
    return {
        "date": day,
        "state": resolve_state(day, slot, business_today()),
        "location": jsonable_encoder(slot) if slot else None,
    }

def _check_active_date_free(db: Session, location: Location, exclude_id: Optional[int] = None):
    if not location.is_active:
        return
    query = db.query(LocationDB).filter(LocationDB.date == location.date, LocationDB.is_active.is_(True))
    if exclude_id is not None:
        query = query.filter(LocationDB.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=409, detail=ACTIVE_DATE_TAKEN)

@location_router.get("/locations", tags=["Location"])
def get_upcoming_locations(
    horizon: int = Query(SCHEDULE_HORIZON_DAYS, ge=1),
    limit: int = Query(SCHEDULE_MAX_RESULTS, ge=1),
    db: Session = Depends(get_db)
):
    """
    Lists upcoming active trading slots, soonest first.

    Args:
        horizon (int): Days to look ahead from today (clamped server side).
        limit (int): Maximum number of slots (clamped server side).

    Returns:
        dict: The upcoming locations.
    """
    slots = get_upcoming_schedule(db, horizon_days=horizon, max_results=limit)
    return {"locations": jsonable_encoder(slots)}

@location_router.get("/locations/today", tags=["Location"])
def get_today(db: Session = Depends(get_db)):
    return _day_response(business_today(), db)

@location_router.get("/locations/date/{day}", tags=["Location"])
def get_for_date(day: date, db: Session = Depends(get_db)):
    return _day_response(day, db)

@admin_location_router.get("/locations", tags=["Admin Location"])
def get_all_locations(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    db: Session = Depends(get_db)
):
    try:
        query = db.query(LocationDB)
        if from_date:
            query = query.filter(LocationDB.date >= from_date)
        if to_date:
            query = query.filter(LocationDB.date <= to_date)
        query = query.order_by(LocationDB.date.asc(), LocationDB.start_time.asc(), LocationDB.id.asc())
        rows, pagination = paginate(query, page, limit)
        return {"locations": jsonable_encoder([slot_from_row(row) for row in rows]), "pagination": pagination}
    except SQLAlchemyError:
        logger.exception("Failed to fetch locations")
        raise HTTPException(status_code=500, detail="Failed to fetch locations")

@admin_location_router.get("/locations/{id}", tags=["Admin Location"])
def get_location(id: int, db: Session = Depends(get_db)):
    try:
        location = db.query(LocationDB).filter(LocationDB.id == id).first()
    except SQLAlchemyError:
        logger.exception("Failed to fetch location %s", id)
        raise HTTPException(status_code=500, detail="Failed to fetch location")
    if not location:
        raise HTTPException(status_code=404, detail="Location not found")
    return {"location": jsonable_encoder(slot_from_row(location))}

@admin_location_router.post("/locations", status_code=201, tags=["Admin Location"])
def create_location(location: Location, db: Session = Depends(get_db)):
    """
    Creates a trading slot.

    Returns:
        dict: A success flag and the created slot.
    """
    try:
        _check_active_date_free(db, location)
        new_location = LocationDB(**location.as_row())
        db.add(new_location)
        db.commit()
        db.refresh(new_location)
        return {"success": True, "location": jsonable_encoder(slot_from_row(new_location))}
    except HTTPException:
        raise
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=ACTIVE_DATE_TAKEN)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create location")
        raise HTTPException(status_code=500, detail="Failed to create location")

@admin_location_router.put("/locations/{id}", tags=["Admin Location"])
def update_location(id: int, location: Location, db: Session = Depends(get_db)):
    try:
        db_location = db.query(LocationDB).filter(LocationDB.id == id).first()
        if not db_location:
            raise HTTPException(status_code=404, detail="Location not found")
        _check_active_date_free(db, location, exclude_id=id)

        for field, value in location.as_row().items():
            setattr(db_location, field, value)
        db_location.updated_at = utcnow()

        db.commit()
        db.refresh(db_location)
        return {"success": True, "location": jsonable_encoder(slot_from_row(db_location))}
    except HTTPException:
        raise
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=ACTIVE_DATE_TAKEN)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update location %s", id)
        raise HTTPException(status_code=500, detail="Failed to update location")

@admin_location_router.delete("/locations/{id}", tags=["Admin Location"])
def delete_location(id: int, db: Session = Depends(get_db)):
    try:
        db_location = db.query(LocationDB).filter(LocationDB.id == id).first()
        if not db_location:
            raise HTTPException(status_code=404, detail="Location not found")

        db.delete(db_location)
        db.commit()
        return {"success": True, "deleted": id}
    except HTTPException:
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete location %s", id)
        raise HTTPException(status_code=500, detail="Failed to delete location")

@admin_location_router.post("/locations/seed", tags=["Admin Location"])
def seed_from_rotation(seed: Optional[SeedRequest] = None, db: Session = Depends(get_db)):
    """Fills the coming weeks with the default rotation, keeping existing days."""
    seed = seed or SeedRequest()
    try:
        created = seed_locations(db, start=seed.start, days=seed.days or SEED_HORIZON_DAYS)
        return {"success": True, "created": created}
    except SQLAlchemyError:
        logger.exception("Failed to seed locations")
        raise HTTPException(status_code=500, detail="Failed to seed locations")
