"""Fee collection: record payments, list history, receipt data."""
from datetime import date

from fastapi import APIRouter, Query

from feedesk.api.deps import CurrentStaff
from feedesk.models.payment import PaymentCreate
from feedesk.services import payments
from feedesk.services.receipt import receipt_context

router = APIRouter()


@router.get("/")
async def list_transactions(
    user: CurrentStaff,
    student_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    q: str | None = Query(None, description="Search by student name, roll number or transaction id"),
):
    return await payments.list_payments(student_id=student_id, date_from=date_from, date_to=date_to, q=q)


@router.post("/", status_code=201)
async def record_transaction(data: PaymentCreate, user: CurrentStaff):
    payment_id = await payments.record_payment(
        data.student_id,
        data.amount,
        data.payment_mode,
        data.external_transaction_id,
        data.academic_term,
    )
    return {"id": payment_id}


@router.get("/{payment_id}/receipt")
async def get_receipt(payment_id: str, user: CurrentStaff):
    return await receipt_context(payment_id)
