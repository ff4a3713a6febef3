from fastapi import APIRouter
from tutorcenter.core.resource_router import build_resource_router
from tutorcenter.modules.materials.service import (
    DIAGNOSES, BOOKS, LINKS, BOOK_ASSIGNMENTS, STUDENT_SUBJECTS
)
from tutorcenter.modules.materials.schemas import (
    DiagnosisCreate, DiagnosisUpdate, BookCreate, BookUpdate,
    LinkCreate, LinkUpdate, BookAssignmentCreate, BookAssignmentUpdate,
    StudentSubjectCreate, StudentSubjectUpdate
)

router = APIRouter()

router.include_router(build_resource_router(
    DIAGNOSES,
    prefix="/diagnoses",
    tags=["diagnoses"],
    create_model=DiagnosisCreate,
    update_model=DiagnosisUpdate,
    read_capability="can_view_students_menu",
    write_capability="can_edit_students",
))

router.include_router(build_resource_router(
    BOOKS,
    prefix="/books",
    tags=["books"],
    create_model=BookCreate,
    update_model=BookUpdate,
    read_capability="can_view_students_menu",
    write_capability="can_edit_students",
))

router.include_router(build_resource_router(
    LINKS,
    prefix="/links",
    tags=["links"],
    create_model=LinkCreate,
    update_model=LinkUpdate,
    read_capability="can_view_students_menu",
    write_capability="can_edit_students",
))

router.include_router(build_resource_router(
    BOOK_ASSIGNMENTS,
    prefix="/book-assignments",
    tags=["book-assignments"],
    create_model=BookAssignmentCreate,
    update_model=BookAssignmentUpdate,
    read_capability="can_view_students_menu",
    write_capability="can_edit_students",
))

router.include_router(build_resource_router(
    STUDENT_SUBJECTS,
    prefix="/student-subjects",
    tags=["student-subjects"],
    create_model=StudentSubjectCreate,
    update_model=StudentSubjectUpdate,
    read_capability="can_view_students_menu",
    write_capability="can_edit_students",
))
