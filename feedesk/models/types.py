"""Field types shared by the documents."""
from decimal import Decimal, Inexact, InvalidOperation
from typing import Annotated, Optional

from beanie import PydanticObjectId
from bson import Decimal128
from bson.errors import InvalidId
from pydantic import BeforeValidator


def _to_decimal(value):
    if isinstance(value, Decimal128):
        return value.to_decimal()
    return value


# Decimal in Python, Decimal128 in MongoDB
Money = Annotated[Decimal, BeforeValidator(_to_decimal)]


def to_object_id(value: str | None) -> Optional[PydanticObjectId]:
    """Parse a client-supplied id; None when it is not a valid ObjectId."""
    if not value:
        return None
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError, ValueError):
        return None


def fits_decimal128(value: Decimal) -> bool:
    """True when MongoDB can store the value exactly as Decimal128."""
    try:
        Decimal128(value)
    except (InvalidOperation, Inexact):
        return False
    return True
