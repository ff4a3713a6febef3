import logging
from datetime import date, datetime, time
from supabase import Client
from tutorcenter.core.date_utils import format_with_countdown
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 10


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def upcoming_classes(self, today: Optional[date] = None, limit: int = UPCOMING_LIMIT) -> List[Dict[str, Any]]:
        """Classes from today 00:00 onward, soonest first, with student name and countdown"""
        today = today or date.today()
        since = datetime.combine(today, time.min).isoformat()
        try:
            result = self.supabase.table("zajecia")\
                .select("*, uczniowie(imie, nazwisko)")\
                .gte("start_at", since)\
                .order("start_at", desc=False)\
                .limit(limit)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading upcoming classes: {e}")
            raise HTTPException(status_code=500, detail="Błąd pobierania zajęć")
        classes = []
        for row in result.data or []:
            student = row.get("uczniowie") or {}
            classes.append({
                **row,
                "student_name": " ".join(p for p in (student.get("imie"), student.get("nazwisko")) if p),
                **format_with_countdown(row.get("start_at"), today),
            })
        return classes
