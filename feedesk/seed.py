"""Seed the default admin account when no staff exists yet."""
import logging

from feedesk.api.deps import get_password_hash
from feedesk.config import settings
from feedesk.models.staff import Staff, StaffRole

logger = logging.getLogger(__name__)


async def seed_admin() -> bool:
    """Idempotent; returns True when the admin was created."""
    if await Staff.count() > 0:
        return False
    await Staff(
        staff_id=settings.default_admin_staff_id,
        name=settings.default_admin_name,
        hashed_password=get_password_hash(settings.default_admin_password),
        role=StaffRole.ADMIN,
    ).insert()
    logger.warning(
        "No staff accounts found; created default admin %r. Change its password.",
        settings.default_admin_staff_id,
    )
    return True
