"""Student enrollment: one fee plan, branch, semester and session per student."""
from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class Student(Document):
    """Enrollment record. Reference ids are plain strings and may dangle."""

    name: str
    guardian_name: str = ""
    roll_no: Indexed(str, unique=True)
    phone: str = ""
    plan_id: str
    branch_id: str
    semester_id: str
    session_id: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "students"
        use_state_management = True


class StudentCreate(BaseModel):
    name: str
    guardian_name: str = ""
    roll_no: str
    phone: str = ""
    plan_id: str
    branch_id: str
    semester_id: str
    session_id: str


class StudentUpdate(BaseModel):
    """All fields optional for PUT/PATCH."""

    name: Optional[str] = None
    guardian_name: Optional[str] = None
    roll_no: Optional[str] = None
    phone: Optional[str] = None
    plan_id: Optional[str] = None
    branch_id: Optional[str] = None
    semester_id: Optional[str] = None
    session_id: Optional[str] = None
