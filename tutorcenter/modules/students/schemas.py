from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

OPTIONAL_TEXT_FIELDS = ("email", "telefon", "whatsapp", "messenger", "szkola", "klasa", "notatki")


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class StudentCreate(BaseModel):
    imie: str = Field(..., min_length=2)
    nazwisko: str = Field(..., min_length=2)
    email: Optional[EmailStr] = None
    telefon: Optional[str] = None
    whatsapp: Optional[str] = None
    messenger: Optional[str] = None
    szkola: Optional[str] = None
    klasa: Optional[str] = None
    notatki: Optional[str] = None

    @field_validator("imie", "nazwisko", mode="before")
    @classmethod
    def strip_names(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return _blank_to_none(value)


class StudentUpdate(BaseModel):
    imie: Optional[str] = Field(None, min_length=2)
    nazwisko: Optional[str] = Field(None, min_length=2)
    email: Optional[EmailStr] = None
    telefon: Optional[str] = None
    whatsapp: Optional[str] = None
    messenger: Optional[str] = None
    szkola: Optional[str] = None
    klasa: Optional[str] = None
    notatki: Optional[str] = None

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return _blank_to_none(value)

    @field_validator("imie", "nazwisko", mode="before")
    @classmethod
    def names_not_null(cls, value):
        if value is None:
            raise ValueError("Pole nie może być puste")
        return value.strip() if isinstance(value, str) else value


class StudentResponse(BaseModel):
    id: str
    imie: str
    nazwisko: str
    email: Optional[str] = None
    telefon: Optional[str] = None
    whatsapp: Optional[str] = None
    messenger: Optional[str] = None
    szkola: Optional[str] = None
    klasa: Optional[str] = None
    notatki: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    tutor_name: Optional[str] = None
    guardian_count: Optional[int] = None

    class Config:
        from_attributes = True


class GuardianLinkCreate(BaseModel):
    guardian_user_id: str


class GuardianLinkResponse(BaseModel):
    id: str
    student_id: str
    guardian_user_id: str
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StudentOverview(BaseModel):
    student_id: str
    total_lessons: int
    total_payments: float
    pending_payments: float
