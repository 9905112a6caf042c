import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import AliasChoices, ConfigDict, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bible_tracker.api.dependencies import get_current_identity
from bible_tracker.api.schemas import CamelModel, MessageResponse
from bible_tracker.core.database import get_db
from bible_tracker.core.errors import NotFoundOrForbidden, UnexpectedError
from bible_tracker.core.security import TokenPayload
from bible_tracker.models.reading import BibleReading
from bible_tracker.services.calendar_service import calendar_service
from bible_tracker.utils.date_utils import MAX_YEAR, MIN_YEAR

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/readings", tags=["readings"])

# Missing and not-owned look the same to the caller
READING_NOT_FOUND_MESSAGE = "Reading not found or unauthorized"


class ReadingCreate(CamelModel):
    bible_book: str = Field(min_length=1)
    chapters: str = Field(min_length=1)
    verses: Optional[str] = None
    date_read: date
    notes: Optional[str] = None


class ReadingUpdate(CamelModel):
    # The entry form posts book/date; bibleBook/dateRead are accepted too
    bible_book: str = Field(min_length=1, validation_alias=AliasChoices("book", "bibleBook", "bible_book"))
    chapters: str = Field(min_length=1)
    verses: Optional[str] = None
    date_read: date = Field(validation_alias=AliasChoices("date", "dateRead", "date_read"))
    notes: Optional[str] = None


class ReadingResponse(CamelModel):
    id: str
    user_id: str
    bible_book: str
    chapters: str
    verses: Optional[str] = None
    date_read: date
    completed: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Read straight from ORM rows; camelCase aliases come from CamelModel
    model_config = ConfigDict(from_attributes=True)


class ReadingListResponse(CamelModel):
    readings: List[ReadingResponse]


class ReadingEnvelope(CamelModel):
    message: str
    reading: ReadingResponse


class MonthRef(CamelModel):
    year: int
    month: int


class MonthResponse(CamelModel):
    year: int
    month: int
    month_name: str
    days_in_month: int
    first_weekday: int
    # None at the edges of the supported calendar (year 1 .. 9999)
    previous: Optional[MonthRef] = None
    next: Optional[MonthRef] = None
    days: Dict[str, List[ReadingResponse]]


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


@router.get("", response_model=ReadingListResponse)
async def list_readings(
    identity: TokenPayload = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """List all readings for the current user, newest first"""
    try:
        readings = (
            db.query(BibleReading)
            .filter(BibleReading.user_id == identity.user_id)
            .order_by(BibleReading.date_read.desc(), BibleReading.created_at.desc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Listing readings failed")
        raise UnexpectedError()
    return {"readings": readings}


@router.post("", response_model=ReadingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_reading(
    reading: ReadingCreate,
    identity: TokenPayload = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Log a new reading"""
    db_reading = BibleReading(
        # Owner always comes from the verified token, never from the body
        user_id=identity.user_id,
        bible_book=reading.bible_book,
        chapters=reading.chapters,
        verses=_blank_to_none(reading.verses),
        date_read=reading.date_read,
        # Logging a reading means it was read
        completed=True,
        notes=_blank_to_none(reading.notes),
    )
    try:
        db.add(db_reading)
        db.commit()
        db.refresh(db_reading)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Creating reading failed")
        raise UnexpectedError()
    return {"message": "Reading added successfully", "reading": db_reading}


@router.get("/calendar", response_model=MonthResponse)
async def get_month(
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    identity: TokenPayload = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Readings for one month grouped by day (defaults to the current month)"""
    today = date.today()
    try:
        return calendar_service.build_month(
            identity.user_id,
            year if year is not None else today.year,
            month if month is not None else today.month,
            db,
        )
    except SQLAlchemyError:
        logger.exception("Loading month view failed")
        raise UnexpectedError()


@router.put("/{reading_id}", response_model=ReadingEnvelope)
async def update_reading(
    reading_id: str,
    reading_update: ReadingUpdate,
    identity: TokenPayload = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Update a reading owned by the current user"""
    values = {
        "bible_book": reading_update.bible_book,
        "chapters": reading_update.chapters,
        "verses": _blank_to_none(reading_update.verses),
        "date_read": reading_update.date_read,
    }
    if "notes" in reading_update.model_fields_set:
        values["notes"] = _blank_to_none(reading_update.notes)

    try:
        # Single statement scoped by id and owner
        updated = (
            db.query(BibleReading)
            .filter(BibleReading.id == reading_id, BibleReading.user_id == identity.user_id)
            .update(values, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Updating reading {reading_id} failed")
        raise UnexpectedError()

    if updated == 0:
        raise NotFoundOrForbidden(READING_NOT_FOUND_MESSAGE)

    db_reading = db.query(BibleReading).filter(
        BibleReading.id == reading_id,
        BibleReading.user_id == identity.user_id
    ).first()
    if db_reading is None:
        # Deleted between the update and the read back
        raise NotFoundOrForbidden(READING_NOT_FOUND_MESSAGE)

    return {"message": "Reading updated successfully", "reading": db_reading}


@router.delete("/{reading_id}", response_model=MessageResponse)
async def delete_reading(
    reading_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Delete a reading owned by the current user"""
    try:
        deleted = (
            db.query(BibleReading)
            .filter(BibleReading.id == reading_id, BibleReading.user_id == identity.user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Deleting reading {reading_id} failed")
        raise UnexpectedError()

    if deleted == 0:
        raise NotFoundOrForbidden(READING_NOT_FOUND_MESSAGE)

    return {"message": "Reading deleted successfully"}
