# app/db/models/attendance.py
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from app.db.base import Base

PRESENT = "Present"
ABSENT = "Absent"
STATUSES = (PRESENT, ABSENT)


class Attendance(Base):
    __tablename__ = "attendance"
    # One mark per student, subject, day and session
    __table_args__ = (
        UniqueConstraint(
            "class_id", "student_id", "subject_id", "date", "session",
            name="uq_attendance_class_student_subject_date_session",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Denormalized from the student; nullable so legacy rows can be backfilled by app.repair
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True, index=True)
    # No FK: students can be deleted while their attendance history stays
    student_id = Column(Integer, nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="SET NULL"), nullable=True, index=True)
    date = Column(Date, nullable=False, index=True)  # day granularity, e.g. 2024-02-01
    session = Column(String, nullable=False, default="Default")  # e.g. "Period 1", "Morning"

    # "Present" or "Absent"; checked at the request boundary, not by the column
    status = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
