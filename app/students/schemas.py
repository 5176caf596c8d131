"""Pydantic schemas for students."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
DEPARTMENT_MAX_LENGTH = 50

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _required_text(value, label: str, max_length: int) -> str:
    if value is None:
        raise ValueError(f"{label} is required")
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value


class StudentRequest(BaseModel):
    """Schema for creating or replacing a student.

    Every field is required; missing and blank values share the same
    message so all violations come back together in one response.
    """

    model_config = ConfigDict(validate_default=True)

    name: Optional[str] = Field(None, description="Full name", examples=["John Doe"])
    email: Optional[str] = Field(
        None, description="Unique email address", examples=["john.doe@iub.edu"]
    )
    department: Optional[str] = Field(
        None, description="Academic department", examples=["Computer Science"]
    )

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        """Validate name format."""
        return _required_text(v, "Name", NAME_MAX_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, v):
        """Validate email format."""
        v = _required_text(v, "Email", EMAIL_MAX_LENGTH)
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email should be valid")
        return v

    @field_validator("department", mode="before")
    @classmethod
    def validate_department(cls, v):
        """Validate department format."""
        return _required_text(v, "Department", DEPARTMENT_MAX_LENGTH)


class StudentResponse(BaseModel):
    """Schema for student response."""

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    name: str
    email: str
    department: str
    created_at: datetime
    updated_at: datetime
