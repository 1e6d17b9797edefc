# app/api/attendance.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.errors import ValidationError
from app.core.parsing import parse_day, parse_id
from app.crud import attendance as crud_attendance
from app.crud import reports as crud_reports
from app.schemas.attendance import (
    AttendanceOut,
    DailyPoint,
    MarkAttendanceIn,
    StudentAttendance,
    StudentReport,
    StudentSummary,
    TrendPoint,
)

# Any signed-in teacher or admin
router = APIRouter(dependencies=[Depends(get_current_user)])


def _range_params(class_id: Optional[str], subject_id: Optional[str],
                  date_from: Optional[str], date_to: Optional[str]):
    # ids and dates are checked before any filter is built
    if not class_id or not date_from or not date_to:
        raise ValidationError("Class ID and date range are required.")
    return (
        parse_id(class_id, "classId"),
        parse_id(subject_id, "subjectId", required=False),
        parse_day(date_from, "from"),
        parse_day(date_to, "to"),
    )


@router.post("/mark", status_code=status.HTTP_201_CREATED)
def mark_attendance(payload: MarkAttendanceIn, db: Session = Depends(get_db)):
    crud_attendance.mark_attendance(
        db,
        day=payload.date,
        subject_id=payload.subject_id,
        class_id=payload.class_id,
        records=payload.records,
        session=payload.session,
    )
    return {"message": "Attendance marked successfully"}


@router.get("", response_model=List[StudentAttendance])
def get_attendance(
    date: Optional[str] = Query(None),
    class_id: Optional[str] = Query(None, alias="classId"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    db: Session = Depends(get_db),
):
    if not date or not class_id:
        raise ValidationError("Date and Class ID are required.")
    return crud_attendance.get_attendance(
        db,
        day=parse_day(date, "date"),
        class_id=parse_id(class_id, "classId"),
        subject_id=parse_id(subject_id, "subjectId", required=False),
    )


@router.get("/report", response_model=List[StudentSummary])
def get_attendance_report(
    class_id: Optional[str] = Query(None, alias="classId"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(get_db),
):
    class_pk, subject_pk, day_from, day_to = _range_params(class_id, subject_id, date_from, date_to)
    return crud_reports.get_attendance_report(db, class_pk, day_from, day_to, subject_id=subject_pk)


@router.get("/report/daily", response_model=List[DailyPoint])
def get_daily_attendance_report(
    class_id: Optional[str] = Query(None, alias="classId"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(get_db),
):
    class_pk, subject_pk, day_from, day_to = _range_params(class_id, subject_id, date_from, date_to)
    return crud_reports.get_daily_attendance_report(db, class_pk, day_from, day_to, subject_id=subject_pk)


@router.get("/trends", response_model=List[TrendPoint])
def get_attendance_trends(
    class_id: Optional[str] = Query(None, alias="classId"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(get_db),
):
    class_pk, subject_pk, day_from, day_to = _range_params(class_id, subject_id, date_from, date_to)
    return crud_reports.get_attendance_trends(db, class_pk, day_from, day_to, subject_id=subject_pk)


@router.get("/debug", response_model=List[AttendanceOut])
def debug_attendance(
    class_id: Optional[str] = Query(None, alias="classId"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(get_db),
):
    return crud_attendance.debug_attendance(
        db,
        class_id=parse_id(class_id, "classId", required=False),
        subject_id=parse_id(subject_id, "subjectId", required=False),
        date_from=parse_day(date_from, "from", required=False),
        date_to=parse_day(date_to, "to", required=False),
    )


@router.get("/student/{student_id}/report", response_model=StudentReport)
def get_student_attendance_report(student_id: str, db: Session = Depends(get_db)):
    return crud_reports.get_student_attendance_report(db, parse_id(student_id, "studentId"))
