"""Fee plans and the fee heads they are built from."""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field

from feedesk.models.types import Money


class Frequency(str, Enum):
    SEMESTER = "Semester"
    ANNUAL = "Annual"
    MONTHLY = "Monthly"
    ONE_TIME = "One-time"


class FeeHead(BaseModel):
    """Named line item of a plan, e.g. Tuition or Lab Fee."""

    name: str
    amount: Money


class FeePlan(Document):
    """Fee plan; total_amount is always the sum of its heads."""

    name: Indexed(str, unique=True)
    frequency: Frequency = Frequency.SEMESTER
    heads: list[FeeHead] = Field(default_factory=list)
    total_amount: Money = Decimal("0")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "fee_plans"
        use_state_management = True


class FeeHeadIn(BaseModel):
    name: str
    amount: Decimal


class FeePlanCreate(BaseModel):
    name: str
    frequency: Frequency = Frequency.SEMESTER
    heads: list[FeeHeadIn] = Field(default_factory=list)


class FeePlanUpdate(BaseModel):
    """Edit sends the full head list; heads are replaced, never merged."""

    heads: list[FeeHeadIn]
    name: Optional[str] = None
    frequency: Optional[Frequency] = None
