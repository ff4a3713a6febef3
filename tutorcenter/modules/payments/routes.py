from fastapi import APIRouter, Depends
from tutorcenter.database.supabase_client import get_user_supabase
from tutorcenter.modules.payments.schemas import PaymentCreate, PaymentUpdate, PaymentResponse
from tutorcenter.modules.payments.service import PaymentService
from tutorcenter.core.dependencies import require_capability
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/payments", tags=["payments"])


def get_payment_service(supabase: Client = Depends(get_user_supabase)) -> PaymentService:
    return PaymentService(supabase)


@router.get("", response_model=List[PaymentResponse])
async def list_payments(
    student_id: Optional[str] = None,
    user: Dict = Depends(require_capability("can_view_payments")),
    service: PaymentService = Depends(get_payment_service)
):
    """List payments, newest first, optionally for one student"""
    return service.list_payments(student_id)


@router.post("", response_model=PaymentResponse, status_code=201)
async def create_payment(
    payment_data: PaymentCreate,
    user: Dict = Depends(require_capability("can_manage_payments")),
    service: PaymentService = Depends(get_payment_service)
):
    return service.create_payment(payment_data, user["id"])


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: str,
    user: Dict = Depends(require_capability("can_view_payments")),
    service: PaymentService = Depends(get_payment_service)
):
    return service.get_payment(payment_id)


@router.patch("/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    payment_id: str,
    payment_data: PaymentUpdate,
    user: Dict = Depends(require_capability("can_manage_payments")),
    service: PaymentService = Depends(get_payment_service)
):
    return service.update_payment(payment_id, payment_data)


@router.delete("/{payment_id}", status_code=204)
async def delete_payment(
    payment_id: str,
    user: Dict = Depends(require_capability("can_manage_payments")),
    service: PaymentService = Depends(get_payment_service)
):
    service.delete_payment(payment_id)
    return None
