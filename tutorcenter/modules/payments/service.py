from supabase import Client
from tutorcenter.core.resource import OrderBy, define_resource
from tutorcenter.modules.payments.schemas import PaymentCreate, PaymentUpdate, PaymentResponse
from typing import List, Optional
from fastapi import HTTPException

PAYMENTS = define_resource(
    "platnosci",
    filter_columns=("student_id",),
    order_by=OrderBy("data_platnosci", ascending=False),
    auto_created_by=True,
    error_messages={
        "fetch": "Błąd pobierania płatności",
        "insert": "Błąd dodawania płatności",
        "update": "Błąd aktualizacji płatności",
        "delete": "Błąd usuwania płatności",
    },
)


class PaymentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.payments = PAYMENTS.bind(supabase)

    def list_payments(self, student_id: Optional[str] = None) -> List[PaymentResponse]:
        filters = {"student_id": student_id} if student_id else None
        return [PaymentResponse(**row) for row in self.payments.list(filters).unwrap()]

    def get_payment(self, payment_id: str) -> PaymentResponse:
        row = self.payments.get(payment_id).unwrap()
        if row is None:
            raise HTTPException(status_code=404, detail="Płatność nie została znaleziona")
        return PaymentResponse(**row)

    def create_payment(self, payment_data: PaymentCreate, user_id: str) -> PaymentResponse:
        row = self.payments.insert(payment_data.model_dump(mode="json"), user_id).unwrap(status_code=400)
        return PaymentResponse(**row)

    def update_payment(self, payment_id: str, payment_data: PaymentUpdate) -> PaymentResponse:
        updates = payment_data.model_dump(mode="json", exclude_unset=True)
        if not updates:
            raise HTTPException(status_code=400, detail="No fields to update")
        return PaymentResponse(**self.payments.update(payment_id, updates).unwrap(status_code=400))

    def delete_payment(self, payment_id: str) -> None:
        self.payments.remove(payment_id).unwrap()
