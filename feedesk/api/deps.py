"""Shared dependencies: JWT auth and admin checks."""
from datetime import datetime, timedelta
from typing import Annotated, Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from feedesk.config import settings
from feedesk.models.staff import Staff, StaffRole
from feedesk.models.types import to_object_id

security = HTTPBearer(auto_error=False)


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def create_access_token(subject: str, role: str) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    to_encode = {"sub": subject, "role": role, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


async def get_current_staff(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> Staff:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = jwt.decode(credentials.credentials, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    oid = to_object_id(payload.get("sub"))
    if oid is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    staff = await Staff.get(oid)
    if not staff or not staff.is_active:
        raise HTTPException(status_code=401, detail="Staff not found or inactive")
    return staff


async def require_admin(staff: Annotated[Staff, Depends(get_current_staff)]) -> Staff:
    if staff.role != StaffRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return staff


# Type aliases for route injection
CurrentStaff = Annotated[Staff, Depends(get_current_staff)]
AdminOnly = Annotated[Staff, Depends(require_admin)]
