"""Receipt data for a recorded payment (header, student, amount in words)."""
from decimal import ROUND_HALF_UP, Decimal

from feedesk.config import settings
from feedesk.models.fee_plan import FeePlan
from feedesk.models.student import Student
from feedesk.models.types import to_object_id
from feedesk.services.catalog import get_org_settings
from feedesk.services.payments import get_payment

_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
         "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
         "Seventeen", "Eighteen", "Nineteen"]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Indian grouping, largest first
_SCALES = [(10_000_000, "Crore"), (100_000, "Lakh"), (1000, "Thousand"), (100, "Hundred")]


def _below_hundred(n: int) -> str:
    if n < 20:
        return _ONES[n]
    t, o = divmod(n, 10)
    return (_TENS[t] + " " + _ONES[o]).strip()


def _words(n: int) -> str:
    parts = []
    for size, label in _SCALES:
        if n >= size:
            q, n = divmod(n, size)
            parts.append(f"{_words(q)} {label}")
    if n:
        parts.append(_below_hundred(n))
    return " ".join(parts)


def amount_in_words(amount) -> str:
    """52000 -> 'Rupees Fifty Two Thousand Only' (rounded to whole rupees)."""
    n = int(Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if n < 0:
        return "Rupees (Negative) Only"
    if n == 0:
        return "Rupees Zero Only"
    return f"Rupees {_words(n)} Only"


async def receipt_context(payment_id: str) -> dict:
    payment = await get_payment(payment_id)
    oid = to_object_id(payment.student_id)
    student = await Student.get(oid) if oid else None
    plan = None
    if student:
        plan_oid = to_object_id(student.plan_id)
        plan = await FeePlan.get(plan_oid) if plan_oid else None
    org = await get_org_settings()
    return {
        "receipt_no": str(payment.id),
        "org_name": org.name or settings.app_name,
        "org_address": org.address,
        "org_phone": org.phone,
        "org_logo": org.logo,
        "student_name": student.name if student else None,
        "roll_no": student.roll_no if student else None,
        "guardian_name": student.guardian_name if student else None,
        "plan_name": plan.name if plan else None,
        "amount": payment.amount,
        "amount_in_words": amount_in_words(payment.amount),
        "payment_mode": payment.payment_mode.value,
        "external_transaction_id": payment.external_transaction_id,
        "academic_term": payment.academic_term,
        "date": payment.created_at.date().isoformat(),
    }
