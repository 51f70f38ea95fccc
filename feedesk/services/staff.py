"""Staff accounts: CRUD and credential checks."""
import logging
from datetime import datetime
from typing import Optional

from pymongo.errors import DuplicateKeyError

from feedesk.api.deps import get_password_hash, verify_password
from feedesk.errors import DuplicateError, NotFoundError, ValidationError
from feedesk.models.staff import Staff, StaffCreate, StaffOut, StaffRole, StaffUpdate
from feedesk.models.types import to_object_id

logger = logging.getLogger(__name__)


def staff_to_out(s: Staff) -> StaffOut:
    return StaffOut(id=str(s.id), staff_id=s.staff_id, name=s.name, role=s.role)


async def _get(staff_pk: str) -> Staff:
    oid = to_object_id(staff_pk)
    staff = await Staff.get(oid) if oid else None
    if not staff:
        raise NotFoundError("Staff not found")
    return staff


async def list_staff() -> list[StaffOut]:
    return [staff_to_out(s) for s in await Staff.find_all().sort("created_at").to_list()]


async def create_staff(data: StaffCreate) -> str:
    staff_id = data.staff_id.strip()
    if not staff_id or not data.name.strip() or not data.password:
        raise ValidationError("Staff ID, name and password are required")
    if await Staff.find_one(Staff.staff_id == staff_id):
        raise DuplicateError("Staff ID already exists")
    staff = Staff(
        staff_id=staff_id,
        name=data.name.strip(),
        hashed_password=get_password_hash(data.password),
        role=data.role,
    )
    try:
        await staff.insert()
    except DuplicateKeyError:
        raise DuplicateError("Staff ID already exists")
    logger.info("Created staff %s (%s)", staff_id, staff.role.value)
    return str(staff.id)


async def update_staff(staff_pk: str, data: StaffUpdate) -> StaffOut:
    staff = await _get(staff_pk)
    update = data.model_dump(exclude_unset=True, exclude_none=True)
    if "staff_id" in update:
        new_id = update["staff_id"].strip()
        if not new_id:
            raise ValidationError("Staff ID is required")
        clash = await Staff.find_one(Staff.staff_id == new_id)
        if clash and clash.id != staff.id:
            raise DuplicateError("Staff ID already exists")
        staff.staff_id = new_id
    if "name" in update:
        staff.name = update["name"].strip()
    if update.get("password"):
        staff.hashed_password = get_password_hash(update["password"])
    staff.updated_at = datetime.utcnow()
    try:
        await staff.save()
    except DuplicateKeyError:
        raise DuplicateError("Staff ID already exists")
    return staff_to_out(staff)


async def delete_staff(staff_pk: str) -> None:
    staff = await _get(staff_pk)
    if staff.role == StaffRole.ADMIN:
        raise ValidationError("Cannot delete admin")
    await staff.delete()
    logger.info("Deleted staff %s", staff.staff_id)


async def authenticate(staff_id: str, password: str) -> Optional[Staff]:
    """Return the staff member for valid credentials, else None. Never creates accounts."""
    staff = await Staff.find_one(Staff.staff_id == staff_id)
    if not staff or not staff.is_active:
        return None
    if not verify_password(password, staff.hashed_password):
        return None
    return staff
