from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from feedesk.errors import DuplicateTransactionError
from feedesk.models.fee_plan import FeeHeadIn, Frequency
from feedesk.models.payment import Payment, PaymentMode
from feedesk.models.student import StudentCreate
from feedesk.services import enrollment, fee_plans, payments, reports


async def enroll(plan_id, roll_no="R1", name="Asha Rao"):
    return await enrollment.enroll(
        StudentCreate(name=name, roll_no=roll_no, plan_id=plan_id, branch_id="b", semester_id="s", session_id="x")
    )


def row_for(rows, student_id):
    return next(r for r in rows if r["id"] == student_id)


async def test_bsc_cs_scenario(db):
    plan_id = await fee_plans.create_plan(
        "BSc CS",
        Frequency.SEMESTER,
        [FeeHeadIn(name="Tuition", amount=Decimal("50000")), FeeHeadIn(name="Lab", amount=Decimal("5000"))],
    )
    assert (await fee_plans.get_plan(plan_id)).total_amount == Decimal("55000")
    sid = await enroll(plan_id)

    await payments.record_payment(sid, Decimal("20000"), PaymentMode.CASH)
    row = row_for(await reports.ledger(), sid)
    assert (row["total_due"], row["total_paid"], row["balance"]) == (Decimal("55000"), Decimal("20000"), Decimal("35000"))

    await payments.record_payment(sid, Decimal("40000"), PaymentMode.UPI, "TXN1")
    row = row_for(await reports.ledger(), sid)
    assert (row["total_paid"], row["balance"]) == (Decimal("60000"), Decimal("-5000"))

    with pytest.raises(DuplicateTransactionError):
        await payments.record_payment(sid, Decimal("1000"), PaymentMode.UPI, "TXN1")
    assert row_for(await reports.ledger(), sid) == row


async def test_ledger_without_payments(db):
    plan_id = await fee_plans.create_plan("MBA", Frequency.ANNUAL, [FeeHeadIn(name="Tuition", amount=Decimal("90000"))])
    sid = await enroll(plan_id)
    row = row_for(await reports.ledger(), sid)
    assert row["plan_name"] == "MBA"
    assert (row["total_due"], row["total_paid"], row["balance"]) == (Decimal("90000"), 0, Decimal("90000"))


async def test_deleted_plan_yields_zero_due(db):
    plan_id = await fee_plans.create_plan("Temp", Frequency.ANNUAL, [FeeHeadIn(name="Tuition", amount=Decimal("100"))])
    sid = await enroll(plan_id)
    await payments.record_payment(sid, Decimal("40"))
    await fee_plans.delete_plan(plan_id)

    assert (await enrollment.get_enrollment(sid))["roll_no"] == "R1"
    row = row_for(await reports.ledger(), sid)
    assert row["plan_name"] is None
    assert (row["total_due"], row["total_paid"], row["balance"]) == (0, Decimal("40"), Decimal("-40"))


async def test_orphan_payments_excluded_from_ledger_but_counted_in_summary(db):
    plan_id = await fee_plans.create_plan("BA", Frequency.ANNUAL, [FeeHeadIn(name="Tuition", amount=Decimal("10"))])
    keep = await enroll(plan_id, "R1")
    gone = await enroll(plan_id, "R2", "Vikram Shah")
    await payments.record_payment(keep, Decimal("5"))
    await payments.record_payment(gone, Decimal("7"))
    await enrollment.delete_enrollment(gone)

    rows = await reports.ledger()
    assert [r["id"] for r in rows] == [keep]
    data = await reports.summary()
    assert data["total_collections"] == Decimal("12")
    assert data["student_count"] == 1
    assert data["plan_count"] == 1


async def test_summary_recent_payments(db):
    sid = await enroll("p")
    now = datetime.utcnow()
    for i in range(7):
        await Payment(student_id=sid, amount=Decimal(i + 1), created_at=now - timedelta(minutes=10 - i)).insert()
    data = await reports.summary()
    assert data["total_collections"] == Decimal("28")
    assert [p["amount"] for p in data["recent_payments"]] == [Decimal(n) for n in (7, 6, 5, 4, 3)]
    assert data["recent_payments"][0]["student_name"] == "Asha Rao"


async def test_summary_empty(db):
    data = await reports.summary()
    assert data == {"total_collections": 0, "student_count": 0, "plan_count": 0, "recent_payments": []}
