"""Enrollment directory: students and the plan/branch/semester/session they point at."""
import logging
import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pymongo.errors import DuplicateKeyError

from feedesk.config import settings
from feedesk.errors import DuplicateError, NotFoundError, ValidationError
from feedesk.models.catalog import AcademicSession, Branch, Semester
from feedesk.models.fee_plan import FeePlan
from feedesk.models.payment import Payment
from feedesk.models.student import Student, StudentCreate, StudentUpdate
from feedesk.models.types import to_object_id
from feedesk.services.catalog import exists, name_map

logger = logging.getLogger(__name__)

REFERENCES = (
    ("plan_id", FeePlan),
    ("branch_id", Branch),
    ("semester_id", Semester),
    ("session_id", AcademicSession),
)


async def _check_references(fields: dict) -> None:
    """Only enforced in strict mode; by default unknown ids are accepted."""
    if not settings.strict_references:
        return
    for field, model in REFERENCES:
        if field in fields and not await exists(model, fields[field]):
            raise ValidationError(f"Unknown {field.removesuffix('_id')} {fields[field]!r}")


async def _check_roll_no_free(roll_no: str, exclude: Optional[Student] = None) -> None:
    clash = await Student.find_one(Student.roll_no == roll_no)
    if clash and (exclude is None or clash.id != exclude.id):
        raise DuplicateError(f"Roll No {roll_no!r} already exists")


async def enroll(data: StudentCreate) -> str:
    fields = data.model_dump()
    fields["name"] = fields["name"].strip()
    fields["roll_no"] = fields["roll_no"].strip()
    if not fields["name"] or not fields["roll_no"]:
        raise ValidationError("Name and Roll No are required")
    for field, _ in REFERENCES:
        fields[field] = (fields.get(field) or "").strip()
        if not fields[field]:
            raise ValidationError(f"{field} is required")
    await _check_references(fields)
    await _check_roll_no_free(fields["roll_no"])
    student = Student(**fields)
    try:
        await student.insert()
    except DuplicateKeyError:
        raise DuplicateError(f"Roll No {fields['roll_no']!r} already exists")
    logger.info("Enrolled student %s roll_no=%s plan=%s", student.id, student.roll_no, student.plan_id)
    return str(student.id)


async def _get(student_id: str) -> Student:
    oid = to_object_id(student_id)
    student = await Student.get(oid) if oid else None
    if not student:
        raise NotFoundError("Student not found")
    return student


async def update_enrollment(student_id: str, data: StudentUpdate) -> Student:
    student = await _get(student_id)
    update = data.model_dump(exclude_unset=True, exclude_none=True)
    if "roll_no" in update:
        update["roll_no"] = update["roll_no"].strip()
        if not update["roll_no"]:
            raise ValidationError("Roll No is required")
        await _check_roll_no_free(update["roll_no"], exclude=student)
    if "name" in update:
        update["name"] = update["name"].strip()
        if not update["name"]:
            raise ValidationError("Name is required")
    for field, _ in REFERENCES:
        if field in update:
            update[field] = update[field].strip()
            if not update[field]:
                raise ValidationError(f"{field} is required")
    await _check_references(update)
    for key, value in update.items():
        setattr(student, key, value)
    student.updated_at = datetime.utcnow()
    try:
        await student.save()
    except DuplicateKeyError:
        raise DuplicateError(f"Roll No {student.roll_no!r} already exists")
    return student


async def delete_enrollment(student_id: str) -> None:
    """Hard delete. Payments are kept and become orphans."""
    student = await _get(student_id)
    await student.delete()
    logger.info("Deleted student %s roll_no=%s", student_id, student.roll_no)


async def paid_totals(student_ids: Optional[list[str]] = None) -> dict[str, Decimal]:
    """student_id -> sum of payment amounts."""
    query = Payment.find_all() if student_ids is None else Payment.find({"student_id": {"$in": student_ids}})
    totals: dict[str, Decimal] = {}
    for p in await query.to_list():
        totals[p.student_id] = totals.get(p.student_id, Decimal("0")) + p.amount
    return totals


async def _lookups() -> dict:
    plans = {str(p.id): p for p in await FeePlan.find_all().to_list()}
    return {
        "plans": plans,
        "branches": await name_map(Branch),
        "semesters": await name_map(Semester),
        "sessions": await name_map(AcademicSession),
    }


def _row(s: Student, lookups: dict, total_paid: Decimal) -> dict:
    plan = lookups["plans"].get(s.plan_id)
    return {
        "id": str(s.id),
        "name": s.name,
        "guardian_name": s.guardian_name,
        "roll_no": s.roll_no,
        "phone": s.phone,
        "plan_id": s.plan_id,
        "branch_id": s.branch_id,
        "semester_id": s.semester_id,
        "session_id": s.session_id,
        "plan_name": plan.name if plan else None,
        "plan_total": plan.total_amount if plan else None,
        "branch_name": lookups["branches"].get(s.branch_id),
        "semester_name": lookups["semesters"].get(s.semester_id),
        "session_name": lookups["sessions"].get(s.session_id),
        "total_paid": total_paid,
    }


async def get_enrollment(student_id: str) -> dict:
    student = await _get(student_id)
    totals = await paid_totals([str(student.id)])
    return _row(student, await _lookups(), totals.get(str(student.id), Decimal("0")))


async def list_enrollments(
    q: Optional[str] = None,
    plan_id: Optional[str] = None,
    branch_id: Optional[str] = None,
    semester_id: Optional[str] = None,
) -> list[dict]:
    query: dict = {}
    if plan_id:
        query["plan_id"] = plan_id
    if branch_id:
        query["branch_id"] = branch_id
    if semester_id:
        query["semester_id"] = semester_id
    if q and q.strip():
        search = re.escape(q.strip())
        query["$or"] = [
            {"name": {"$regex": search, "$options": "i"}},
            {"roll_no": {"$regex": search, "$options": "i"}},
            {"phone": {"$regex": search, "$options": "i"}},
        ]
    students = await Student.find(query).sort("created_at").to_list()
    lookups = await _lookups()
    totals = await paid_totals([str(s.id) for s in students])
    return [_row(s, lookups, totals.get(str(s.id), Decimal("0"))) for s in students]
