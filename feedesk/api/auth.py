"""JWT-based stateless authentication for staff."""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from feedesk.api.deps import CurrentStaff, create_access_token
from feedesk.services.staff import authenticate, staff_to_out

router = APIRouter()


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    staff: dict


class LoginRequest(BaseModel):
    staff_id: str
    password: str


@router.post("/login", response_model=TokenResponse)
async def login(req: LoginRequest):
    staff = await authenticate(req.staff_id, req.password)
    if not staff:
        raise HTTPException(status_code=401, detail="Invalid Staff ID or Password")
    token = create_access_token(str(staff.id), staff.role.value)
    return TokenResponse(access_token=token, staff=staff_to_out(staff).model_dump())


@router.get("/me")
async def me(staff: CurrentStaff):
    return staff_to_out(staff)
