"""
BizDesk — Auth and settings schemas.
"""

from enum import Enum

from pydantic import BaseModel, EmailStr, Field

from bizdesk.schemas import RequestModel, UpdateRequest


class UserRole(str, Enum):
    SUPER_ADMIN = "Super Admin"
    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class SignupRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    role: UserRole


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    avatar: str = ""
    created_at: str | None = Field(None, alias="createdAt")
    permissions: list[str] = []

    model_config = {"populate_by_name": True}


# ── Settings ────────────────────────────────────────────
SETTINGS_ID = "global_settings"

DEFAULT_SETTINGS = {
    "companyName": "Compliance Corp",
    "address": "123 Business Rd, Tech City",
    "contactEmail": "admin@compliance-corp.com",
    "currency": "USD",
}


class SettingsRequest(UpdateRequest):
    company_name: str | None = Field(None, alias="companyName", max_length=200)
    address: str | None = Field(None, max_length=500)
    contact_email: str | None = Field(None, alias="contactEmail", max_length=200)
    currency: str | None = Field(None, min_length=3, max_length=3)
