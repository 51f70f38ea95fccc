"""Student enrollment CRUD with resolved plan/branch/semester/session names."""
from fastapi import APIRouter, Query

from feedesk.api.deps import CurrentStaff
from feedesk.models.student import StudentCreate, StudentUpdate
from feedesk.services import enrollment

router = APIRouter()


@router.get("/")
async def list_students(
    user: CurrentStaff,
    q: str | None = Query(None, description="Search by name, roll number or phone"),
    plan_id: str | None = None,
    branch_id: str | None = None,
    semester_id: str | None = None,
):
    return await enrollment.list_enrollments(q=q, plan_id=plan_id, branch_id=branch_id, semester_id=semester_id)


@router.post("/", status_code=201)
async def create_student(data: StudentCreate, user: CurrentStaff):
    return {"id": await enrollment.enroll(data)}


@router.get("/{student_id}")
async def get_student(student_id: str, user: CurrentStaff):
    return await enrollment.get_enrollment(student_id)


@router.put("/{student_id}")
async def update_student(student_id: str, data: StudentUpdate, user: CurrentStaff):
    s = await enrollment.update_enrollment(student_id, data)
    return {"id": str(s.id), "name": s.name, "roll_no": s.roll_no}


@router.delete("/{student_id}", status_code=204)
async def delete_student(student_id: str, user: CurrentStaff):
    """Payments recorded against the student are kept."""
    await enrollment.delete_enrollment(student_id)
