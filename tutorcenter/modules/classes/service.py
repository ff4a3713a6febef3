import asyncio
import logging
from datetime import timedelta
from supabase import Client
from tutorcenter.core.resource import OrderBy, define_resource
from tutorcenter.modules.classes.schemas import (
    ClassCreate, ClassUpdate, ClassResponse, ClassBatchResult
)
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

CLASSES = define_resource(
    "zajecia",
    filter_columns=("student_id",),
    order_by=OrderBy("start_at", ascending=False),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania zajęć",
        "insert": "Błąd dodawania zajęć",
        "update": "Błąd aktualizacji zajęć",
        "delete": "Błąd usuwania zajęć",
    },
)


def _local_timestamp(day, moment) -> str:
    return f"{day.isoformat()}T{moment.strftime('%H:%M')}:00"


def build_class_rows(form: ClassCreate) -> List[Dict[str, Any]]:
    """One row per lesson; recurring forms repeat the lesson weekly from form.date"""
    weeks = form.recurring_weeks if form.is_recurring else 1
    shared = {
        "student_id": form.student_id,
        "subject": form.subject.value,
        "temat": form.temat,
        "zrozumienie": form.zrozumienie,
        "trudnosci": form.trudnosci,
        "praca_domowa": form.praca_domowa,
        "status_pd": form.status_pd.value,
    }
    rows = []
    for week in range(weeks):
        day = form.date + timedelta(weeks=week)
        rows.append({
            **shared,
            "start_at": _local_timestamp(day, form.start_time),
            "end_at": _local_timestamp(day, form.end_time) if form.end_time else None,
        })
    return rows


class ClassService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.classes = CLASSES.bind(supabase)

    def list_classes(self, student_id: Optional[str] = None) -> List[ClassResponse]:
        filters = {"student_id": student_id} if student_id else None
        return [ClassResponse(**row) for row in self.classes.list(filters).unwrap()]

    def get_class(self, class_id: str) -> ClassResponse:
        row = self.classes.get(class_id).unwrap()
        if row is None:
            raise HTTPException(status_code=404, detail="Zajęcia nie zostały znalezione")
        return ClassResponse(**row)

    async def create_classes(self, form: ClassCreate, user_id: str) -> ClassBatchResult:
        """
        Insert every lesson of the form concurrently and wait for all of them.
        Lessons that were created stay created when others fail.
        """
        rows = build_class_rows(form)
        results = await asyncio.gather(*(
            asyncio.to_thread(self.classes.insert, row, user_id) for row in rows
        ))
        created = [ClassResponse(**r.data) for r in results if r.ok]
        errors = [r.error for r in results if not r.ok]
        total = len(rows)
        if errors:
            message = f"Nie udało się dodać {len(errors)} z {total} zajęć"
            logger.warning(f"{message} for student {form.student_id}: {errors}")
        elif form.is_recurring:
            message = f"Dodano {total} cyklicznych zajęć"
        else:
            message = "Zajęcia zostały dodane"
        return ClassBatchResult(
            created=created,
            failed=len(errors),
            total=total,
            errors=errors,
            message=message,
        )

    def update_class(self, class_id: str, class_data: ClassUpdate) -> ClassResponse:
        updates = class_data.model_dump(mode="json", exclude_unset=True)
        if not updates:
            raise HTTPException(status_code=400, detail="No fields to update")
        return ClassResponse(**self.classes.update(class_id, updates).unwrap(status_code=400))

    def delete_class(self, class_id: str) -> None:
        self.classes.remove(class_id).unwrap()
