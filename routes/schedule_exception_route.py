import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models import ScheduleException, ScheduleExceptionDB
from routes.user_route import require_admin
from schedule import get_schedule_exceptions, is_week_a, resolve_rotation

logger = logging.getLogger(__name__)

schedule_exception_router = APIRouter(
    tags=["Schedule"]
)

admin_schedule_exception_router = APIRouter(
    prefix="/admin",
    tags=["Admin Schedule"],
    dependencies=[Depends(require_admin)]
)

@schedule_exception_router.get("/schedule/exceptions", tags=["Schedule"])
def list_exceptions(from_date: Optional[date] = Query(None, alias="from"), db: Session = Depends(get_db)):
    return {"exceptions": jsonable_encoder(get_schedule_exceptions(db, from_date=from_date))}

@schedule_exception_router.get("/schedule/rotation/{day}", tags=["Schedule"])
def preview_rotation(day: date, db: Session = Depends(get_db)):
    """
    Shows what the default two-week rotation gives for a day.

    Exceptions are applied, persisted locations are not consulted.
    """
    slot = resolve_rotation(day, get_schedule_exceptions(db, from_date=day))
    return {
        "date": day,
        "week": "A" if is_week_a(day) else "B",
        "location": jsonable_encoder(slot) if slot else None,
    }

@admin_schedule_exception_router.post("/schedule/exceptions", status_code=201, tags=["Admin Schedule"])
def upsert_exception(exception: ScheduleException, db: Session = Depends(get_db)):
    try:
        db_exception = db.query(ScheduleExceptionDB).filter(ScheduleExceptionDB.date == exception.date).first()
        if db_exception is None:
            db_exception = ScheduleExceptionDB(date=exception.date)
            db.add(db_exception)
        db_exception.type = exception.type.value
        db_exception.description = exception.description or None

        db.commit()
        db.refresh(db_exception)
        return {"success": True, "exception": jsonable_encoder(ScheduleException.model_validate(db_exception))}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save schedule exception for %s", exception.date)
        raise HTTPException(status_code=500, detail="Failed to save schedule exception")

@admin_schedule_exception_router.delete("/schedule/exceptions/{id}", tags=["Admin Schedule"])
def delete_exception(id: int, db: Session = Depends(get_db)):
    db_exception = db.query(ScheduleExceptionDB).filter(ScheduleExceptionDB.id == id).first()
    if not db_exception:
        raise HTTPException(status_code=404, detail="Schedule exception not found")

    try:
        db.delete(db_exception)
        db.commit()
        return {"success": True, "deleted": id}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete schedule exception %s", id)
        raise HTTPException(status_code=500, detail="Failed to delete schedule exception")
