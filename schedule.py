"""
Schedule resolution for the trailer.

Two sources decide where we trade on a given day:

* Persisted ``locations`` rows. This is the live read path used by the
  public endpoints: a day is open only if an active row exists for it.
* A fixed two-week rotation (Week A / Week B) of default pitches. It is only
  used to backfill ``locations`` ahead of time (see ``seed_locations``) and to
  preview what the rotation would give for a date. Rows in
  ``schedule_exceptions`` suppress the rotation for their date.
"""
import logging
from datetime import date, time, timedelta
from typing import Iterable, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import SCHEDULE_HORIZON_DAYS, SCHEDULE_MAX_HORIZON_DAYS, SCHEDULE_MAX_RESULTS, SEED_HORIZON_DAYS
from errors import StoreUnavailable
from helper import business_today, format_display_date, format_hhmm, format_time_range
from models import LocationDB, LocationSlot, ScheduleException, ScheduleExceptionDB, SlotState

logger = logging.getLogger(__name__)


class RotationEntry(NamedTuple):
    day: str
    location: str
    latitude: float
    longitude: float


# Monday of the first Week A
ROTATION_EPOCH = date(2024, 1, 1)
ROTATION_START_TIME = time(18, 0)
ROTATION_END_TIME = time(21, 0)

WEEK_A = (
    RotationEntry("Monday", "Chipping Campden Village Green", 52.0514, -1.7801),
    RotationEntry("Tuesday", "Bourton-on-the-Water High Street", 51.8852, -1.7590),
    RotationEntry("Wednesday", "Stow-on-the-Wold Market Square", 51.9297, -1.7236),
    RotationEntry("Thursday", "Moreton-in-Marsh Fire Station Car Park", 51.9906, -1.7030),
    RotationEntry("Friday", "Winchcombe Abbey Grounds", 51.9533, -1.9653),
    RotationEntry("Saturday", "Cirencester Market Place", 51.7185, -1.9685),
    RotationEntry("Sunday", "Broadway Village Green", 52.0364, -1.8590),
)

WEEK_B = (
    RotationEntry("Monday", "Tetbury Market House", 51.6380, -2.1595),
    RotationEntry("Tuesday", "Painswick Village Centre", 51.7867, -2.1935),
    RotationEntry("Wednesday", "Chipping Norton Market Square", 51.9416, -1.5454),
    RotationEntry("Thursday", "Burford High Street", 51.8080, -1.6355),
    RotationEntry("Friday", "Woodstock Market Street", 51.8478, -1.3545),
    RotationEntry("Saturday", "Charlbury Station Car Park", 51.8726, -1.4895),
    RotationEntry("Sunday", "Fairford Market Place", 51.7088, -1.7824),
)

# indexed by (week parity, weekday) with Monday = 0 .. Sunday = 6
ROTATION = (WEEK_A, WEEK_B)


def slot_from_row(row: LocationDB) -> LocationSlot:
    return LocationSlot(
        id=row.id,
        name=row.name,
        description=row.description,
        date=row.date,
        start_time=format_hhmm(row.start_time),
        end_time=format_hhmm(row.end_time),
        latitude=row.latitude,
        longitude=row.longitude,
        what3words=row.what3words,
        is_active=row.is_active,
        display_date=format_display_date(row.date),
        display_time=format_time_range(row.start_time, row.end_time),
    )


def _active_locations(db: Session):
    return db.query(LocationDB).filter(LocationDB.is_active.is_(True))


def get_schedule_for_date(db: Session, day: date) -> Optional[LocationSlot]:
    """
    Returns the active slot for a day, or None when we are not trading.

    Should several active rows exist for the same day, the earliest start
    wins, then the lowest id.

    Raises:
        StoreUnavailable: If the database query failed.
    """
    try:
        row = (
            _active_locations(db)
            .filter(LocationDB.date == day)
            .order_by(LocationDB.start_time.asc(), LocationDB.id.asc())
            .first()
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to load schedule for %s", day)
        raise StoreUnavailable() from e
    return slot_from_row(row) if row else None


def get_today_location(db: Session, today: Optional[date] = None) -> Optional[LocationSlot]:
    return get_schedule_for_date(db, today or business_today())


def get_upcoming_schedule(
    db: Session,
    horizon_days: int = SCHEDULE_HORIZON_DAYS,
    max_results: int = SCHEDULE_MAX_RESULTS,
    today: Optional[date] = None,
) -> list[LocationSlot]:
    """
    Lists active slots in [today, today + horizon_days), soonest first.

    Both bounds are clamped to the configured ceilings. A failed query raises
    instead of returning a shorter list.

    Raises:
        StoreUnavailable: If the database query failed.
    """
    horizon_days = min(horizon_days, SCHEDULE_MAX_HORIZON_DAYS)
    max_results = min(max_results, SCHEDULE_MAX_RESULTS)
    if horizon_days <= 0 or max_results <= 0:
        return []

    start = today or business_today()
    end = start + timedelta(days=horizon_days)
    try:
        rows = (
            _active_locations(db)
            .filter(LocationDB.date >= start, LocationDB.date < end)
            .order_by(LocationDB.date.asc(), LocationDB.start_time.asc(), LocationDB.id.asc())
            .limit(max_results)
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to load upcoming schedule from %s", start)
        raise StoreUnavailable() from e
    return [slot_from_row(row) for row in rows]


def get_schedule_exceptions(db: Session, from_date: Optional[date] = None) -> list[ScheduleException]:
    try:
        query = db.query(ScheduleExceptionDB)
        if from_date:
            query = query.filter(ScheduleExceptionDB.date >= from_date)
        rows = query.order_by(ScheduleExceptionDB.date.asc()).all()
    except SQLAlchemyError as e:
        logger.exception("Failed to load schedule exceptions")
        raise StoreUnavailable() from e
    return [ScheduleException.model_validate(row) for row in rows]


def resolve_state(day: date, slot: Optional[LocationSlot], today: date) -> SlotState:
    if slot is None:
        return SlotState.CLOSED
    if day < today:
        return SlotState.PAST
    return SlotState.SCHEDULED_AHEAD


def week_index(day: date) -> int:
    # floor division keeps the parity right for days before the epoch
    return (day - ROTATION_EPOCH).days // 7


def is_week_a(day: date) -> bool:
    return week_index(day) % 2 == 0


def rotation_entry(day: date) -> RotationEntry:
    week = ROTATION[0 if is_week_a(day) else 1]
    return week[day.weekday()]


def resolve_rotation(day: date, exceptions: Iterable[ScheduleException]) -> Optional[LocationSlot]:
    """
    Returns the rotation's default slot for a day.

    Any exception on that day closes it, whatever its type.
    """
    if any(exception.date == day for exception in exceptions):
        return None

    entry = rotation_entry(day)
    return LocationSlot(
        name=entry.location,
        date=day,
        start_time=format_hhmm(ROTATION_START_TIME),
        end_time=format_hhmm(ROTATION_END_TIME),
        latitude=entry.latitude,
        longitude=entry.longitude,
        display_date=format_display_date(day),
        display_time=format_time_range(ROTATION_START_TIME, ROTATION_END_TIME),
    )


def generate_rotation_slots(start: date, days: int, exceptions: Iterable[ScheduleException]) -> list[LocationSlot]:
    exceptions = list(exceptions)
    slots = []
    for offset in range(days):
        slot = resolve_rotation(start + timedelta(days=offset), exceptions)
        if slot:
            slots.append(slot)
    return slots


def seed_locations(db: Session, start: Optional[date] = None, days: int = SEED_HORIZON_DAYS) -> int:
    """
    Backfills ``locations`` from the rotation.

    Days that already have a row (active or not) are left alone so manual
    edits survive a re-run.

    Args:
        db (Session): The database session.
        start (date, optional): First day to fill, defaults to today.
        days (int): Number of days to cover.

    Returns:
        int: The number of rows created.
    """
    start = start or business_today()
    end = start + timedelta(days=days)

    exceptions = get_schedule_exceptions(db, from_date=start)
    created = 0
    try:
        taken = {
            row.date for row in db.query(LocationDB.date).filter(LocationDB.date >= start, LocationDB.date < end)
        }
        for slot in generate_rotation_slots(start, days, exceptions):
            if slot.date in taken:
                continue
            db.add(LocationDB(
                name=slot.name,
                date=slot.date,
                start_time=ROTATION_START_TIME,
                end_time=ROTATION_END_TIME,
                latitude=slot.latitude,
                longitude=slot.longitude,
                is_active=True,
            ))
            created += 1
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Seeded %d locations from %s to %s", created, start, end - timedelta(days=1))
    return created
