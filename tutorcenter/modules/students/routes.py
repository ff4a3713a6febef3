from fastapi import APIRouter, Depends
from tutorcenter.database.supabase_client import get_user_supabase, get_service_supabase
from tutorcenter.modules.students.schemas import (
    StudentCreate, StudentUpdate, StudentResponse,
    GuardianLinkCreate, GuardianLinkResponse, StudentOverview
)
from tutorcenter.modules.students.service import StudentService
from tutorcenter.core.dependencies import require_capability, get_user_profile
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/students", tags=["students"])


def get_student_service(supabase: Client = Depends(get_user_supabase)) -> StudentService:
    return StudentService(supabase)


@router.get("", response_model=List[StudentResponse])
async def list_students(
    user: Dict = Depends(require_capability("can_view_students_menu")),
    service: StudentService = Depends(get_student_service)
):
    """List students visible to the caller's role"""
    return service.list_students_for(user["id"], user.get("role"))


@router.post("", response_model=StudentResponse, status_code=201)
async def create_student(
    student_data: StudentCreate,
    user: Dict = Depends(require_capability("can_create_students")),
    service: StudentService = Depends(get_student_service)
):
    """Create a student owned by the caller"""
    return service.create_student(student_data, user["id"])


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: str,
    user: Dict = Depends(require_capability("can_view_students_menu")),
    service: StudentService = Depends(get_student_service)
):
    return service.get_student(student_id)


@router.patch("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: str,
    student_data: StudentUpdate,
    user: Dict = Depends(require_capability("can_edit_students")),
    service: StudentService = Depends(get_student_service)
):
    return service.update_student(student_id, student_data)


@router.delete("/{student_id}", status_code=204)
async def delete_student(
    student_id: str,
    user: Dict = Depends(require_capability("can_delete_students")),
    service: StudentService = Depends(get_student_service)
):
    service.delete_student(student_id)
    return None


@router.get("/{student_id}/overview", response_model=StudentOverview)
async def get_student_overview(
    student_id: str,
    user: Dict = Depends(require_capability("can_view_students_menu")),
    service: StudentService = Depends(get_student_service)
):
    """Lesson count and payment totals for the student's overview tab"""
    return service.get_overview(student_id)


@router.get("/{student_id}/guardians", response_model=List[GuardianLinkResponse])
async def list_guardians(
    student_id: str,
    user: Dict = Depends(require_capability("can_view_students_menu")),
    service: StudentService = Depends(get_student_service)
):
    return service.list_guardians(student_id)


@router.post("/{student_id}/guardians", response_model=GuardianLinkResponse, status_code=201)
async def link_guardian(
    student_id: str,
    link_data: GuardianLinkCreate,
    user: Dict = Depends(require_capability("can_link_guardians")),
    service: StudentService = Depends(get_student_service),
    service_client: Client = Depends(get_service_supabase)
):
    """Link a guardian account to the student"""
    guardian_profile = get_user_profile(link_data.guardian_user_id, service_client)
    return service.link_guardian(student_id, link_data.guardian_user_id, user["id"], guardian_profile)


@router.delete("/{student_id}/guardians/{guardian_user_id}", status_code=204)
async def unlink_guardian(
    student_id: str,
    guardian_user_id: str,
    user: Dict = Depends(require_capability("can_link_guardians")),
    service: StudentService = Depends(get_student_service)
):
    service.unlink_guardian(student_id, guardian_user_id)
    return None
