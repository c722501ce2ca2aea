from typing import Optional, Annotated, List
from pydantic import BaseModel, EmailStr, Field, StringConstraints

from daily_diet.schemas.common import CamelModel, IsoDatetime

NameStr = Annotated[str, StringConstraints(min_length=3, max_length=120, strip_whitespace=True)]

# --- requests ---

class RegisterBody(BaseModel):
    name: NameStr
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

class VerifyBody(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6, description="Code received by email.")

class ResendBody(BaseModel):
    email: EmailStr = Field(..., description="Email used at registration.")

class LoginBody(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

# --- responses ---

class UserOut(CamelModel):
    id: str
    name: str
    email: EmailStr
    email_verified: bool
    verification_code: Optional[str] = None
    code_expires_at: Optional[IsoDatetime] = None
    created_at: IsoDatetime
    updated_at: IsoDatetime

class UserListResponse(CamelModel):
    users: List[UserOut]

class RegisterResponse(BaseModel):
    message: str = "User created successfully. Please check your email to verify your account."
    email: EmailStr

class SessionResponse(CamelModel):
    user: UserOut
    session_id: str
