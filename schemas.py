from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

EMAIL_MAX_LENGTH = 150


class CamelModel(BaseModel):
    """Base schema exposing camelCase keys while accepting snake_case input"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Student Schemas
class StudentBase(CamelModel):
    """Base schema for student with common attributes"""
    name: str = Field(..., min_length=2, max_length=100, description="Student's full name")
    email: str = Field(..., description="Student's email address")
    age: int = Field(..., ge=1, le=150, description="Student's age")
    address: Optional[str] = Field(None, max_length=500, description="Postal address")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value

    @field_validator("email")
    @classmethod
    def email_valid(cls, value: str) -> str:
        """Check syntax and length but keep the address exactly as sent"""
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"Email should be valid: {exc}") from exc
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
        return value


class StudentCreate(StudentBase):
    """Schema for creating a new student"""
    pass


class StudentUpdate(StudentBase):
    """Schema for replacing a student's details (every field is overwritten)"""
    pass


class StudentResponse(CamelModel):
    """Schema for student response"""
    id: int
    name: str
    email: str
    age: int
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
