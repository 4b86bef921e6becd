"""Pydantic models for API request/response.

JSON field names follow the usuarios wire format (telefono, fechaN, genero,
_id, createdAt, updatedAt). Requests also accept the Python attribute names.
"""

from datetime import date, datetime
from typing import Annotated, Optional
from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def _check_email(value: str) -> str:
    """Reject malformed addresses but keep the value exactly as submitted."""
    validate_email(value, check_deliverability=False, globally_deliverable=False)
    return value


# Validated like EmailStr, stored verbatim
Email = Annotated[str, AfterValidator(_check_email)]


class UserCreateRequest(BaseModel):
    """Request model for creating a user."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Full name")
    email: Email = Field(..., description="Unique e-mail address")
    phone: str = Field(..., min_length=1, alias="telefono", description="Phone number")
    birth_date: date = Field(..., alias="fechaN", description="Birth date")
    gender: str = Field(..., min_length=1, alias="genero", description="Gender")
    rfc: str = Field(..., min_length=1, max_length=13, description="Tax identifier (RFC), unique")


class UserUpdateRequest(BaseModel):
    """Request model for updating a user. Only the fields sent are changed."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[Email] = None
    phone: Optional[str] = Field(None, min_length=1, alias="telefono")
    birth_date: Optional[date] = Field(None, alias="fechaN")
    gender: Optional[str] = Field(None, min_length=1, alias="genero")
    rfc: Optional[str] = Field(None, min_length=1, max_length=13)

    @field_validator('*')
    @classmethod
    def reject_null(cls, v):
        """Every stored field is required, so an explicit null is invalid."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    def changes(self) -> dict:
        """Return only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)


class UserResponse(BaseModel):
    """Response model for a stored user."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User ID (MongoDB _id)")
    name: str
    email: str
    phone: str = Field(..., alias="telefono")
    birth_date: date = Field(..., alias="fechaN")
    gender: str = Field(..., alias="genero")
    rfc: str
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")


class MessageResponse(BaseModel):
    """Response model for outcomes that only carry a message (and optional error detail)."""
    message: str
    error: Optional[str] = Field(None, description="Underlying error message")
