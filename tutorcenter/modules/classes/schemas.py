from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime, time
from tutorcenter.core.enums import Subject, HomeworkStatus

MAX_RECURRING_WEEKS = 52


class ClassCreate(BaseModel):
    """Class form: one lesson, or one per week for recurring_weeks weeks when is_recurring"""
    student_id: str
    subject: Subject
    date: date
    start_time: time
    end_time: Optional[time] = None
    temat: Optional[str] = None
    zrozumienie: Optional[int] = Field(None, ge=1, le=5)
    trudnosci: Optional[str] = None
    praca_domowa: Optional[str] = None
    status_pd: HomeworkStatus = HomeworkStatus.NONE
    is_recurring: bool = False
    recurring_weeks: Optional[int] = Field(None, ge=1, le=MAX_RECURRING_WEEKS)

    @field_validator("end_time", "temat", "zrozumienie", "trudnosci", "praca_domowa", "recurring_weeks", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def check_recurrence(self):
        if self.is_recurring and self.recurring_weeks is None:
            raise ValueError("Liczba tygodni jest wymagana dla zajęć cyklicznych")
        return self


class ClassUpdate(BaseModel):
    subject: Optional[Subject] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    temat: Optional[str] = None
    zrozumienie: Optional[int] = Field(None, ge=1, le=5)
    trudnosci: Optional[str] = None
    praca_domowa: Optional[str] = None
    status_pd: Optional[HomeworkStatus] = None

    @field_validator("subject", "start_at", "status_pd", mode="before")
    @classmethod
    def required_not_null(cls, value):
        if value is None:
            raise ValueError("Pole nie może być puste")
        return value


class ClassResponse(BaseModel):
    id: str
    student_id: str
    subject: Subject
    start_at: datetime
    end_at: Optional[datetime] = None
    temat: Optional[str] = None
    zrozumienie: Optional[int] = None
    trudnosci: Optional[str] = None
    praca_domowa: Optional[str] = None
    status_pd: HomeworkStatus
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClassBatchResult(BaseModel):
    created: List[ClassResponse]
    failed: int
    total: int
    errors: List[str] = []
    message: str
