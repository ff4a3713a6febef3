from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import date
from tutorcenter.core.enums import Subject, OwnerType, LinkKind


def _reject_null(value):
    if value is None:
        raise ValueError("Pole nie może być puste")
    return value


class DiagnosisCreate(BaseModel):
    student_id: str
    subject: Subject
    data_testu: date
    narzedzie: Optional[str] = None
    wynik: Optional[float] = None
    rubric: Optional[Dict[str, Any]] = None
    wnioski: Optional[str] = None
    cele: Optional[str] = None


class DiagnosisUpdate(BaseModel):
    subject: Optional[Subject] = None
    data_testu: Optional[date] = None
    narzedzie: Optional[str] = None
    wynik: Optional[float] = None
    rubric: Optional[Dict[str, Any]] = None
    wnioski: Optional[str] = None
    cele: Optional[str] = None

    @field_validator("subject", "data_testu", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)


class BookCreate(BaseModel):
    tytul: str = Field(..., min_length=1)
    wydawnictwo: Optional[str] = None
    url: Optional[str] = None


class BookUpdate(BaseModel):
    tytul: Optional[str] = Field(None, min_length=1)
    wydawnictwo: Optional[str] = None
    url: Optional[str] = None

    @field_validator("tytul", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)


class LinkCreate(BaseModel):
    owner_type: OwnerType
    owner_id: Optional[str] = None
    kind: LinkKind = LinkKind.RESOURCE
    url: str = Field(..., min_length=1)
    label: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class LinkUpdate(BaseModel):
    kind: Optional[LinkKind] = None
    url: Optional[str] = Field(None, min_length=1)
    label: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("kind", "url", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)


class BookAssignmentCreate(BaseModel):
    student_id: str
    ksiazka_id: str
    subject: Optional[Subject] = None
    unikalne: bool = False


class BookAssignmentUpdate(BaseModel):
    subject: Optional[Subject] = None
    unikalne: Optional[bool] = None

    @field_validator("unikalne", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)


class StudentSubjectCreate(BaseModel):
    student_id: str
    subject: Subject
    notatki: Optional[str] = None


class StudentSubjectUpdate(BaseModel):
    subject: Optional[Subject] = None
    notatki: Optional[str] = None

    @field_validator("subject", mode="before")
    @classmethod
    def required_not_null(cls, value):
        return _reject_null(value)
