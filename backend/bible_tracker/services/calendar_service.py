from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from bible_tracker.models.reading import BibleReading
from bible_tracker.utils.date_utils import (
    MAX_YEAR,
    MIN_YEAR,
    MONTH_NAMES,
    days_in_month,
    first_weekday,
    format_date_key,
    month_bounds,
    shift_month,
)


class CalendarService:
    """Builds the month view of a user's readings"""

    @staticmethod
    def get_month_readings(user_id: str, year: int, month: int, db: Session) -> List[BibleReading]:
        """Readings owned by user_id with a date inside the month, oldest first."""
        first_day, last_day = month_bounds(year, month)
        return (
            db.query(BibleReading)
            .filter(
                BibleReading.user_id == user_id,
                BibleReading.date_read >= first_day,
                BibleReading.date_read <= last_day,
            )
            .order_by(BibleReading.date_read.asc(), BibleReading.created_at.asc())
            .all()
        )

    @staticmethod
    def group_by_day(readings: List[BibleReading]) -> Dict[str, List[BibleReading]]:
        """
        Group readings by YYYY-MM-DD day key.

        Keeps the input order within each day. Days without readings are
        left out.
        """
        days: Dict[str, List[BibleReading]] = {}
        for reading in readings:
            days.setdefault(format_date_key(reading.date_read), []).append(reading)
        return days

    @staticmethod
    def month_ref(year: int, month: int, delta: int) -> Optional[Dict[str, int]]:
        """Neighbouring month for paging, or None past the supported year range"""
        ref_year, ref_month = shift_month(year, month, delta)
        if not MIN_YEAR <= ref_year <= MAX_YEAR:
            return None
        return {"year": ref_year, "month": ref_month}

    def build_month(self, user_id: str, year: int, month: int, db: Session) -> Dict[str, Any]:
        readings = self.get_month_readings(user_id, year, month, db)
        return {
            "year": year,
            "month": month,
            "month_name": MONTH_NAMES[month - 1],
            "days_in_month": days_in_month(year, month),
            "first_weekday": first_weekday(year, month),
            "previous": self.month_ref(year, month, -1),
            "next": self.month_ref(year, month, 1),
            "days": self.group_by_day(readings),
        }


calendar_service = CalendarService()
