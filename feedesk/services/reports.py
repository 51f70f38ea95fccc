"""Read-only aggregates over plans, students and payments. Recomputed on every call."""
from decimal import Decimal

from feedesk.config import settings
from feedesk.models.fee_plan import FeePlan
from feedesk.models.payment import Payment
from feedesk.models.student import Student
from feedesk.services.enrollment import paid_totals
from feedesk.services.payments import list_payments


async def summary() -> dict:
    payments = await Payment.find_all().to_list()
    return {
        "total_collections": sum((p.amount for p in payments), Decimal("0")),
        "student_count": await Student.count(),
        "plan_count": await FeePlan.count(),
        "recent_payments": await list_payments(limit=settings.recent_payments_limit),
    }


async def ledger() -> list[dict]:
    """One row per student: total_due from the plan (0 if gone), total_paid, balance."""
    students = await Student.find_all().sort("created_at").to_list()
    plans = {str(p.id): p for p in await FeePlan.find_all().to_list()}
    totals = await paid_totals()
    rows = []
    for s in students:
        plan = plans.get(s.plan_id)
        total_due = plan.total_amount if plan else Decimal("0")
        total_paid = totals.get(str(s.id), Decimal("0"))
        rows.append({
            "id": str(s.id),
            "name": s.name,
            "roll_no": s.roll_no,
            "plan_name": plan.name if plan else None,
            "total_due": total_due,
            "total_paid": total_paid,
            "balance": total_due - total_paid,
        })
    return rows
