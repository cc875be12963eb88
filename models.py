from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from pydantic import NaiveDatetime
from typing import Optional
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite hands back on refresh."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Student(SQLModel, table=True):
    """Student model for database"""
    __tablename__ = "students"
    __table_args__ = (UniqueConstraint("email", name="uk_student_email"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=100)
    email: str = Field(index=True, max_length=150)
    age: int
    address: Optional[str] = Field(default=None, max_length=500)
    created_at: NaiveDatetime = Field(default_factory=utcnow)
    updated_at: NaiveDatetime = Field(default_factory=utcnow)
