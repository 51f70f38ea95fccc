"""Staff accounts allowed to log in to the admin console."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class StaffRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


class Staff(Document):
    staff_id: Indexed(str, unique=True)
    name: str
    hashed_password: str
    role: StaffRole = StaffRole.STAFF
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "staff"
        use_state_management = True


class StaffCreate(BaseModel):
    staff_id: str
    name: str
    password: str
    role: StaffRole = StaffRole.STAFF


class StaffUpdate(BaseModel):
    staff_id: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class StaffOut(BaseModel):
    id: str
    staff_id: str
    name: str
    role: StaffRole
