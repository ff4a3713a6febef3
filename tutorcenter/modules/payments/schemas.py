from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from tutorcenter.config.settings import settings
from tutorcenter.core.enums import PaymentStatus


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PaymentCreate(BaseModel):
    student_id: str
    zajecia_id: Optional[str] = None
    data_platnosci: date
    kwota: float = Field(..., gt=0)
    waluta: str = Field(default_factory=lambda: settings.default_currency)
    metoda: Optional[str] = None
    status: PaymentStatus
    notatki: Optional[str] = None
    invoice_url: Optional[str] = None

    @field_validator("zajecia_id", "metoda", "notatki", "invoice_url", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return _blank_to_none(value)


class PaymentUpdate(BaseModel):
    zajecia_id: Optional[str] = None
    data_platnosci: Optional[date] = None
    kwota: Optional[float] = Field(None, gt=0)
    waluta: Optional[str] = None
    metoda: Optional[str] = None
    status: Optional[PaymentStatus] = None
    notatki: Optional[str] = None
    invoice_url: Optional[str] = None

    @field_validator("data_platnosci", "kwota", "waluta", "status", mode="before")
    @classmethod
    def required_not_null(cls, value):
        if value is None:
            raise ValueError("Pole nie może być puste")
        return value


class PaymentResponse(BaseModel):
    id: str
    student_id: str
    zajecia_id: Optional[str] = None
    data_platnosci: date
    kwota: float
    waluta: str
    metoda: Optional[str] = None
    status: PaymentStatus
    notatki: Optional[str] = None
    invoice_url: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
