from pydantic import BaseModel, EmailStr, Field

from jobboard.models.user import Role


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str | None = None
    role: Role | None = None


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class SignInResponse(BaseModel):
    token: str
    expires_in_seconds: int
    user_id: str


class ThrottleResponse(BaseModel):
    error: str
    retry_after_seconds: float


class RoleRequest(BaseModel):
    role: Role


class RoleResponse(BaseModel):
    user_id: str
    role: Role


class MeResponse(BaseModel):
    id: str
    email: str
    role: Role | None
    full_name: str | None
