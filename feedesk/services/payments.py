"""Payment ledger: append-only record of money received.

The external transaction id rule is enforced twice: a lookup before insert
gives a clean error in the common case, and the sparse unique index on
``external_transaction_id`` rejects whichever of two racing inserts lands
second.
"""
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from pymongo.errors import DuplicateKeyError

from feedesk.errors import DuplicateTransactionError, NotFoundError, ValidationError
from feedesk.models.payment import Payment, PaymentMode
from feedesk.models.student import Student
from feedesk.models.types import fits_decimal128, to_object_id

logger = logging.getLogger(__name__)


def normalize_external_id(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


async def find_by_external_id(external_transaction_id: str) -> Optional[Payment]:
    return await Payment.find_one(Payment.external_transaction_id == external_transaction_id)


async def record_payment(
    student_id: str,
    amount,
    mode: PaymentMode = PaymentMode.CASH,
    external_transaction_id: Optional[str] = None,
    academic_term: str = "",
) -> str:
    """Insert one payment. Unknown students and overpayment are accepted."""
    amount = Decimal(amount)
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if not fits_decimal128(amount):
        raise ValidationError("Amount has more precision than can be stored")
    ext_id = normalize_external_id(external_transaction_id)
    if ext_id and await find_by_external_id(ext_id):
        logger.warning("Rejected duplicate transaction id %r for student %s", ext_id, student_id)
        raise DuplicateTransactionError(ext_id)
    payment = Payment(
        student_id=student_id,
        amount=amount,
        payment_mode=PaymentMode(mode),
        external_transaction_id=ext_id,
        academic_term=(academic_term or "").strip(),
    )
    try:
        await payment.insert()
    except DuplicateKeyError:
        logger.warning("Unique index rejected transaction id %r for student %s", ext_id, student_id)
        raise DuplicateTransactionError(ext_id)
    logger.info("Recorded payment %s student=%s amount=%s mode=%s", payment.id, student_id, amount, payment.payment_mode.value)
    return str(payment.id)


async def get_payment(payment_id: str) -> Payment:
    oid = to_object_id(payment_id)
    payment = await Payment.get(oid) if oid else None
    if not payment:
        raise NotFoundError("Payment not found")
    return payment


def _day_start(value: date) -> datetime:
    return value if isinstance(value, datetime) else datetime.combine(value, time.min)


def _day_end(value: date) -> datetime:
    # A bare date covers the whole day
    return value if isinstance(value, datetime) else datetime.combine(value, time.max)


async def _students_by_id(student_ids: set[str]) -> dict[str, Student]:
    oids = [oid for oid in (to_object_id(s) for s in student_ids) if oid]
    if not oids:
        return {}
    students = await Student.find({"_id": {"$in": oids}}).to_list()
    return {str(s.id): s for s in students}


def payment_to_dict(p: Payment, student: Optional[Student]) -> dict:
    return {
        "id": str(p.id),
        "student_id": p.student_id,
        "amount": p.amount,
        "payment_mode": p.payment_mode.value,
        "external_transaction_id": p.external_transaction_id,
        "academic_term": p.academic_term,
        "created_at": p.created_at.isoformat() if p.created_at else None,
        "student_name": student.name if student else None,
        "roll_no": student.roll_no if student else None,
    }


async def list_payments(
    student_id: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    q: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[dict]:
    """Most recent first, joined with student name and roll number."""
    query: dict = {}
    if student_id:
        query["student_id"] = student_id
    created: dict = {}
    if date_from:
        created["$gte"] = _day_start(date_from)
    if date_to:
        created["$lte"] = _day_end(date_to)
    if created:
        query["created_at"] = created
    finder = Payment.find(query).sort("-created_at", "-_id")
    if limit and not q:
        finder = finder.limit(limit)
    payments = await finder.to_list()
    students = await _students_by_id({p.student_id for p in payments})
    rows = [payment_to_dict(p, students.get(p.student_id)) for p in payments]
    if q and q.strip():
        needle = q.strip().lower()
        rows = [
            r for r in rows
            if any(needle in (r[k] or "").lower() for k in ("student_name", "roll_no", "external_transaction_id"))
        ]
        if limit:
            rows = rows[:limit]
    return rows
