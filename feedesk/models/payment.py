"""Payments received from students. Append-only."""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field, model_validator
from pymongo import ASCENDING, DESCENDING, IndexModel

from feedesk.models.types import Money


class PaymentMode(str, Enum):
    CASH = "Cash"
    UPI = "UPI Digital"
    BANK_TRANSFER = "Bank Transfer"
    CHEQUE = "Cheque"


class Payment(Document):
    """One payment. external_transaction_id is unique whenever it is set."""

    student_id: Indexed(str)
    amount: Money
    payment_mode: PaymentMode = PaymentMode.CASH
    external_transaction_id: Optional[str] = None
    academic_term: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "transactions"
        # Absent ids are not stored, so the sparse index only covers real references
        keep_nulls = False
        indexes = [
            IndexModel(
                [("external_transaction_id", ASCENDING)],
                name="uq_external_transaction_id",
                unique=True,
                sparse=True,
            ),
            IndexModel([("created_at", DESCENDING)], name="created_at_desc"),
        ]


class PaymentCreate(BaseModel):
    student_id: str
    amount: Decimal
    payment_mode: PaymentMode = PaymentMode.CASH
    external_transaction_id: Optional[str] = None
    academic_term: str = ""

    @model_validator(mode="after")
    def _reference_required_for_digital(self):
        if self.payment_mode != PaymentMode.CASH and not (self.external_transaction_id or "").strip():
            raise ValueError("Transaction ID is mandatory for non-cash payments")
        return self
