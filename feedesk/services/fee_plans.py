"""Fee plan registry.

A plan's ``total_amount`` is derived from its heads. Heads are embedded in the
plan document and only ever replaced as a whole list, so the recompute and the
head write land in the same single-document update.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from pymongo.errors import DuplicateKeyError

from feedesk.errors import DuplicateError, NotFoundError, ValidationError
from feedesk.models.fee_plan import FeeHead, FeeHeadIn, FeePlan, Frequency
from feedesk.models.types import fits_decimal128, to_object_id

logger = logging.getLogger(__name__)


def build_heads(heads: Iterable[FeeHeadIn]) -> tuple[list[FeeHead], Decimal]:
    """Validate a head list and return it with its total."""
    result: list[FeeHead] = []
    for h in heads:
        name = (h.name or "").strip()
        if not name:
            raise ValidationError("Every fee head needs a name")
        amount = Decimal(h.amount)
        if not amount.is_finite() or amount < 0 or not fits_decimal128(amount):
            raise ValidationError(f"Fee head {name!r} has an invalid amount")
        result.append(FeeHead(name=name, amount=amount))
    if not result:
        raise ValidationError("A fee plan needs at least one fee head")
    total = sum((h.amount for h in result), Decimal("0"))
    if not fits_decimal128(total):
        raise ValidationError("Fee plan total is out of range")
    return result, total


async def _check_name_free(name: str, exclude: Optional[FeePlan] = None) -> None:
    clash = await FeePlan.find_one(FeePlan.name == name)
    if clash and (exclude is None or clash.id != exclude.id):
        raise DuplicateError(f"Fee plan {name!r} already exists")


async def create_plan(name: str, frequency: Frequency, heads: Iterable[FeeHeadIn]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Plan name is required")
    head_list, total = build_heads(heads)
    await _check_name_free(name)
    plan = FeePlan(name=name, frequency=Frequency(frequency), heads=head_list, total_amount=total)
    try:
        await plan.insert()
    except DuplicateKeyError:
        raise DuplicateError(f"Fee plan {name!r} already exists")
    logger.info("Created fee plan %s (%s) total=%s", plan.id, name, total)
    return str(plan.id)


async def get_plan(plan_id: str) -> FeePlan:
    oid = to_object_id(plan_id)
    plan = await FeePlan.get(oid) if oid else None
    if not plan:
        raise NotFoundError("Fee plan not found")
    return plan


async def list_plans() -> list[FeePlan]:
    return await FeePlan.find_all().sort("created_at").to_list()


async def replace_plan_heads(
    plan_id: str,
    heads: Iterable[FeeHeadIn],
    name: Optional[str] = None,
    frequency: Optional[Frequency] = None,
) -> FeePlan:
    """Replace the entire head list and recompute the total. No partial merge."""
    plan = await get_plan(plan_id)
    head_list, total = build_heads(heads)
    if name is not None:
        name = name.strip()
        if not name:
            raise ValidationError("Plan name is required")
        await _check_name_free(name, exclude=plan)
        plan.name = name
    if frequency is not None:
        plan.frequency = Frequency(frequency)
    plan.heads = head_list
    plan.total_amount = total
    plan.updated_at = datetime.utcnow()
    try:
        await plan.save()
    except DuplicateKeyError:
        raise DuplicateError(f"Fee plan {plan.name!r} already exists")
    logger.info("Replaced heads of fee plan %s total=%s", plan.id, total)
    return plan


async def delete_plan(plan_id: str) -> None:
    """Unconditional; enrolled students keep the dangling plan_id."""
    plan = await get_plan(plan_id)
    await plan.delete()
    logger.info("Deleted fee plan %s (%s)", plan_id, plan.name)


def plan_to_dict(plan: FeePlan) -> dict:
    return {
        "id": str(plan.id),
        "name": plan.name,
        "frequency": plan.frequency.value,
        "total_amount": plan.total_amount,
        "heads": [{"name": h.name, "amount": h.amount} for h in plan.heads],
    }
