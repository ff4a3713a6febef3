from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from tutorcenter.database.supabase_client import get_user_supabase
from tutorcenter.modules.classes.schemas import (
    ClassCreate, ClassUpdate, ClassResponse, ClassBatchResult
)
from tutorcenter.modules.classes.service import ClassService
from tutorcenter.core.dependencies import require_capability
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/classes", tags=["classes"])


def get_class_service(supabase: Client = Depends(get_user_supabase)) -> ClassService:
    return ClassService(supabase)


@router.get("", response_model=List[ClassResponse])
async def list_classes(
    student_id: Optional[str] = None,
    user: Dict = Depends(require_capability("can_view_students_menu")),
    service: ClassService = Depends(get_class_service)
):
    """List classes, newest first, optionally for one student"""
    return service.list_classes(student_id)


@router.post("", response_model=ClassBatchResult, status_code=201)
async def create_classes(
    form: ClassCreate,
    user: Dict = Depends(require_capability("can_manage_classes")),
    service: ClassService = Depends(get_class_service)
):
    """Create a class, or a weekly series when is_recurring. Partial failures return 207."""
    result = await service.create_classes(form, user["id"])
    if result.failed == result.total:
        raise HTTPException(status_code=400, detail=result.errors[0] if result.total == 1 else result.message)
    if result.failed:
        content = result.model_dump(mode="json")
        content["error"] = result.message
        return JSONResponse(status_code=207, content=content)
    return result


@router.get("/{class_id}", response_model=ClassResponse)
async def get_class(
    class_id: str,
    user: Dict = Depends(require_capability("can_view_students_menu")),
    service: ClassService = Depends(get_class_service)
):
    return service.get_class(class_id)


@router.patch("/{class_id}", response_model=ClassResponse)
async def update_class(
    class_id: str,
    class_data: ClassUpdate,
    user: Dict = Depends(require_capability("can_manage_classes")),
    service: ClassService = Depends(get_class_service)
):
    return service.update_class(class_id, class_data)


@router.delete("/{class_id}", status_code=204)
async def delete_class(
    class_id: str,
    user: Dict = Depends(require_capability("can_manage_classes")),
    service: ClassService = Depends(get_class_service)
):
    service.delete_class(class_id)
    return None
