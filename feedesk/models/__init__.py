"""Beanie document models and Pydantic schemas."""
from feedesk.models.catalog import AcademicSession, Branch, CatalogEntryCreate, OrgSettings, OrgSettingsUpdate, Semester
from feedesk.models.fee_plan import FeeHead, FeeHeadIn, FeePlan, FeePlanCreate, FeePlanUpdate, Frequency
from feedesk.models.payment import Payment, PaymentCreate, PaymentMode
from feedesk.models.staff import Staff, StaffCreate, StaffOut, StaffRole, StaffUpdate
from feedesk.models.student import Student, StudentCreate, StudentUpdate

__all__ = [
    "AcademicSession",
    "Branch",
    "CatalogEntryCreate",
    "OrgSettings",
    "OrgSettingsUpdate",
    "Semester",
    "FeeHead",
    "FeeHeadIn",
    "FeePlan",
    "FeePlanCreate",
    "FeePlanUpdate",
    "Frequency",
    "Payment",
    "PaymentCreate",
    "PaymentMode",
    "Staff",
    "StaffCreate",
    "StaffOut",
    "StaffRole",
    "StaffUpdate",
    "Student",
    "StudentCreate",
    "StudentUpdate",
]
