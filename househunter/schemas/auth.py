from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Annotated

from househunter.models.user import UserRole


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Annotated[Optional[str], Field(alias="fullName", max_length=200)] = None
    # free-form; seeker and owner are the values the clients send today
    role: Annotated[str, Field(min_length=1, max_length=20)] = UserRole.SEEKER.value
    phone_number: Annotated[Optional[str], Field(alias="phoneNumber", max_length=32)] = None
    email: Annotated[str, Field(max_length=320)]
    password: Annotated[str, Field(min_length=1)]

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if len(value) < 3 or "@" not in value:
            raise ValueError("email must be a non-blank address")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class SessionOut(BaseModel):
    email: str
    role: Optional[str] = None
    iat: Optional[int] = None
    exp: int


class SessionResponse(BaseModel):
    message: str
    user: SessionOut


# never carries password_hash
class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    email: str
    full_name: Annotated[Optional[str], Field(alias="fullName")] = None
    role: str
    phone_number: Annotated[Optional[str], Field(alias="phoneNumber")] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
