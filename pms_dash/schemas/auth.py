from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pms_dash.models.enums import UserRole
from pms_dash.schemas.base import CamelModel


class TokenData(BaseModel):
    employee_code: Optional[str] = None


class LoginRequest(CamelModel):
    employee_code: str
    password: str


class UserRegister(CamelModel):
    full_name: str = Field(min_length=1)
    employee_code: str = Field(min_length=1)
    password: str = Field(min_length=6)
    confirm_password: str
    role: UserRole
    agree_to_terms: bool = False

    @field_validator("employee_code")
    @classmethod
    def normalise_code(cls, v: str) -> str:
        return v.strip().upper()


class AuthResponse(CamelModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user_id: str
    employee_code: str
    full_name: str
    role: UserRole
    assigned_programme_id: Optional[int] = None
