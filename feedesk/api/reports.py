from fastapi import APIRouter

from feedesk.api.deps import CurrentStaff
from feedesk.services import reports

router = APIRouter()


@router.get("/summary")
async def get_summary(user: CurrentStaff):
    """Dashboard totals and the latest payments."""
    return await reports.summary()


@router.get("/ledger")
async def get_ledger(user: CurrentStaff):
    return await reports.ledger()
