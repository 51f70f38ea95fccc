"""Fee plan CRUD. Editing replaces the full head list."""
from fastapi import APIRouter

from feedesk.api.deps import AdminOnly, CurrentStaff
from feedesk.models.fee_plan import FeePlanCreate, FeePlanUpdate
from feedesk.services import fee_plans
from feedesk.services.fee_plans import plan_to_dict

router = APIRouter()


@router.get("/")
async def list_plans(user: CurrentStaff):
    return [plan_to_dict(p) for p in await fee_plans.list_plans()]


@router.post("/", status_code=201)
async def create_plan(data: FeePlanCreate, admin: AdminOnly):
    plan_id = await fee_plans.create_plan(data.name, data.frequency, data.heads)
    return {"id": plan_id}


@router.get("/{plan_id}")
async def get_plan(plan_id: str, user: CurrentStaff):
    return plan_to_dict(await fee_plans.get_plan(plan_id))


@router.put("/{plan_id}")
async def update_plan(plan_id: str, data: FeePlanUpdate, admin: AdminOnly):
    plan = await fee_plans.replace_plan_heads(plan_id, data.heads, name=data.name, frequency=data.frequency)
    return plan_to_dict(plan)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(plan_id: str, admin: AdminOnly):
    await fee_plans.delete_plan(plan_id)
