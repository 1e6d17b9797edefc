# app/schemas/attendance.py
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from app.core.parsing import to_day
from app.schemas.base import CamelModel

Status = Literal["Present", "Absent"]


class MarkRecord(CamelModel):
    student_id: int = Field(gt=0)
    status: Status


class MarkAttendanceIn(CamelModel):
    date: date
    subject_id: int = Field(gt=0)
    class_id: int = Field(gt=0)
    session: Optional[str] = None
    records: List[MarkRecord] = Field(min_length=1)

    @field_validator("date", mode="before")
    @classmethod
    def truncate_to_day(cls, value):
        # "2024-02-01T10:30:00Z" is accepted and stored as 2024-02-01
        if value is None or value == "":
            raise ValueError("date is required")
        return to_day(value)


class StudentAttendance(CamelModel):
    student_id: int
    name: str
    roll_no: str
    status: Status


class StudentSummary(CamelModel):
    student_id: int
    name: str
    present: int
    total: int
    percentage: float


class TrendPoint(CamelModel):
    date: str  # YYYY-MM-DD
    present_count: int
    total: int


class DailyPoint(CamelModel):
    date: str  # YYYY-MM-DD
    day: int
    present_count: int
    total_marked: int
    class_strength: int
    percentage: float


class SubjectShare(CamelModel):
    name: str
    present: int
    total: int
    percentage: float


class StudentReport(CamelModel):
    overall: float
    by_subject: List[SubjectShare]


class AttendanceOut(CamelModel):
    id: int
    class_id: Optional[int] = None
    student_id: int
    subject_id: Optional[int] = None
    date: date
    session: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
