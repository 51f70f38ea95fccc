"""Organisation metadata: branches, semesters, sessions and the org header."""
from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class Branch(Document):
    name: Indexed(str, unique=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "branches"


class Semester(Document):
    name: Indexed(str, unique=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "semesters"


class AcademicSession(Document):
    """Academic session such as 2025-26."""

    name: Indexed(str, unique=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "sessions"


class OrgSettings(Document):
    """Single-doc organisation header used on receipts and the dashboard."""

    name: str = ""
    logo: Optional[str] = None  # URL or data URI
    address: str = ""
    phone: str = ""
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "org_settings"
        use_state_management = True


class CatalogEntryCreate(BaseModel):
    name: str


class OrgSettingsUpdate(BaseModel):
    name: Optional[str] = None
    logo: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
