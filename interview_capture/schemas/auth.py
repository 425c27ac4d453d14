"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    """Request schema for user registration."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="User's password (min 8 characters)")
    role: Optional[str] = Field(default=None, pattern="^(ADMIN|EMPLOYEE)$", description="ADMIN or EMPLOYEE (default EMPLOYEE)")
    company_name: Optional[str] = Field(default=None, max_length=200, description="Company to join or create")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password too long (bcrypt limit 72 bytes)")
        return v

    @field_validator("company_name")
    @classmethod
    def blank_company_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v

    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane.doe@acme.com",
                "password": "SecurePass123",
                "role": "ADMIN",
                "company_name": "Acme"
            }
        }


class LoginRequest(BaseModel):
    """Request schema for user login."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane.doe@acme.com",
                "password": "SecurePass123"
            }
        }


class UserOut(BaseModel):
    id: int
    email: str
    role: str
    company_id: Optional[int] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Returned by register and login."""
    user: UserOut
    token: str = Field(..., description="Signed JWT, valid for 7 days")
    token_type: str = "bearer"
