import logging
from collections import Counter
from supabase import Client
from tutorcenter.config.permissions_config import UserRole, has_capability
from tutorcenter.core.enums import PaymentStatus
from tutorcenter.core.resource import OrderBy, define_resource
from tutorcenter.modules.students.schemas import (
    StudentCreate, StudentUpdate, StudentResponse,
    GuardianLinkResponse, StudentOverview
)
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

UNKNOWN_TUTOR = "Nieznany"

STUDENTS = define_resource(
    "uczniowie",
    filter_columns=("created_by",),
    order_by=OrderBy("nazwisko"),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania uczniów",
        "insert": "Błąd dodawania ucznia",
        "update": "Błąd aktualizacji ucznia",
        "delete": "Błąd usuwania ucznia",
    },
)

GUARDIAN_LINKS = define_resource(
    "student_guardians",
    filter_columns=("student_id", "guardian_user_id"),
    order_by=OrderBy("created_at"),
    error_messages={
        "fetch": "Błąd pobierania opiekunów",
        "insert": "Błąd przypisywania opiekuna",
        "delete": "Błąd usuwania opiekuna",
    },
)


class StudentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.students = STUDENTS.bind(supabase)
        self.guardian_links = GUARDIAN_LINKS.bind(supabase)

    def _tutor_names(self, creator_ids: List[str]) -> Dict[str, str]:
        """user_id -> full_name for the given creators (one query)"""
        ids = sorted({c for c in creator_ids if c})
        if not ids:
            return {}
        try:
            result = self.supabase.table("user_profiles")\
                .select("user_id, full_name")\
                .in_("user_id", ids)\
                .execute()
            return {p["user_id"]: p.get("full_name") for p in (result.data or [])}
        except Exception as e:
            logger.warning(f"Could not load tutor names: {e}")
            return {}

    def _guardian_counts(self, student_ids: List[str]) -> Counter:
        if not student_ids:
            return Counter()
        result = self.supabase.table("student_guardians")\
            .select("student_id")\
            .in_("student_id", student_ids)\
            .execute()
        return Counter(row["student_id"] for row in (result.data or []))

    def list_students_for(self, user_id: str, role: Optional[str]) -> List[StudentResponse]:
        """Students visible to the caller: all for admin/consultant, own for teacher, linked for guardian"""
        try:
            if has_capability(role, "can_view_all_students"):
                rows = self.students.list().unwrap()
                names = self._tutor_names([s.get("created_by") for s in rows])
                counts = self._guardian_counts([s["id"] for s in rows])
                return [
                    StudentResponse(
                        **s,
                        tutor_name=names.get(s.get("created_by")) or UNKNOWN_TUTOR,
                        guardian_count=counts.get(s["id"], 0),
                    )
                    for s in rows
                ]
            if role == UserRole.TEACHER.value:
                rows = self.students.list({"created_by": user_id}).unwrap()
                return [StudentResponse(**s) for s in rows]
            if role == UserRole.GUARDIAN.value:
                result = self.supabase.table("student_guardians")\
                    .select("student_id, uczniowie!inner(*)")\
                    .eq("guardian_user_id", user_id)\
                    .execute()
                rows = [item["uczniowie"] for item in (result.data or []) if item.get("uczniowie")]
                names = self._tutor_names([s.get("created_by") for s in rows])
                students = [
                    StudentResponse(**s, tutor_name=names.get(s.get("created_by")) or UNKNOWN_TUTOR)
                    for s in rows
                ]
                students.sort(key=lambda s: s.nazwisko.casefold())
                return students
            return []
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing students for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=STUDENTS.message("fetch"))

    def get_student(self, student_id: str) -> StudentResponse:
        row = self.students.get(student_id).unwrap()
        if row is None:
            raise HTTPException(status_code=404, detail="Uczeń nie został znaleziony")
        return StudentResponse(**row)

    def create_student(self, student_data: StudentCreate, user_id: str) -> StudentResponse:
        row = self.students.insert(student_data.model_dump(mode="json"), user_id).unwrap(status_code=400)
        logger.info(f"Student {row['id']} created by {user_id}")
        return StudentResponse(**row)

    def update_student(self, student_id: str, student_data: StudentUpdate) -> StudentResponse:
        updates = student_data.model_dump(mode="json", exclude_unset=True)
        # created_by is immutable after creation
        updates.pop("created_by", None)
        if not updates:
            raise HTTPException(status_code=400, detail="No fields to update")
        row = self.students.update(student_id, updates).unwrap(status_code=400)
        return StudentResponse(**row)

    def delete_student(self, student_id: str) -> None:
        self.students.remove(student_id).unwrap()
        logger.info(f"Student {student_id} deleted")

    def get_overview(self, student_id: str) -> StudentOverview:
        """Lesson count plus paid and pending payment totals"""
        try:
            lessons = self.supabase.table("zajecia")\
                .select("id", count="exact")\
                .eq("student_id", student_id)\
                .execute()
            paid = self.supabase.table("platnosci")\
                .select("kwota")\
                .eq("student_id", student_id)\
                .eq("status", PaymentStatus.PAID.value)\
                .execute()
            pending = self.supabase.table("platnosci")\
                .select("kwota")\
                .eq("student_id", student_id)\
                .eq("status", PaymentStatus.PENDING.value)\
                .execute()
            return StudentOverview(
                student_id=student_id,
                total_lessons=lessons.count or 0,
                total_payments=sum(float(p["kwota"]) for p in (paid.data or [])),
                pending_payments=sum(float(p["kwota"]) for p in (pending.data or [])),
            )
        except Exception as e:
            logger.error(f"Error building overview for student {student_id}: {e}")
            raise HTTPException(status_code=500, detail="Błąd pobierania statystyk ucznia")

    def list_guardians(self, student_id: str) -> List[GuardianLinkResponse]:
        links = self.guardian_links.list({"student_id": student_id}).unwrap()
        names = self._tutor_names([link["guardian_user_id"] for link in links])
        return [
            GuardianLinkResponse(**link, full_name=names.get(link["guardian_user_id"]))
            for link in links
        ]

    def link_guardian(
        self,
        student_id: str,
        guardian_user_id: str,
        acting_user_id: str,
        guardian_profile: Optional[Dict[str, Any]]
    ) -> GuardianLinkResponse:
        """Link a guardian-role user to a student (idempotent)"""
        if not guardian_profile or guardian_profile.get("role") != UserRole.GUARDIAN.value:
            raise HTTPException(status_code=400, detail="Użytkownik nie jest opiekunem")
        self.get_student(student_id)
        existing = self.guardian_links.list({
            "student_id": student_id,
            "guardian_user_id": guardian_user_id,
        }).unwrap()
        if existing:
            return GuardianLinkResponse(**existing[0], full_name=guardian_profile.get("full_name"))
        row = self.guardian_links.insert({
            "student_id": student_id,
            "guardian_user_id": guardian_user_id,
        }, acting_user_id).unwrap(status_code=400)
        return GuardianLinkResponse(**row, full_name=guardian_profile.get("full_name"))

    def unlink_guardian(self, student_id: str, guardian_user_id: str) -> None:
        try:
            self.supabase.table("student_guardians")\
                .delete()\
                .eq("student_id", student_id)\
                .eq("guardian_user_id", guardian_user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error unlinking guardian {guardian_user_id} from {student_id}: {e}")
            raise HTTPException(status_code=500, detail=GUARDIAN_LINKS.message("delete"))
