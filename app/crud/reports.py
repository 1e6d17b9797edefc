# app/crud/reports.py
"""
Attendance reports over a date range.

Counting is done by the database (GROUP BY student, day or subject); Python
only joins the grouped counts onto the roster or onto the calendar. Every
day-bucketed report walks the full calendar from ``date_from`` to ``date_to``
so days without marks still show up with zero counts.
"""
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.core.parsing import day_range, to_day
from app.crud.student import get_students_by_class, get_student_or_404
from app.db.models.attendance import Attendance, PRESENT
from app.db.models.subject import Subject

UNKNOWN_SUBJECT = "Unknown"


def percentage(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return part / whole * 100


def _present_count():
    return func.sum(case((Attendance.status == PRESENT, 1), else_=0))


def _range_query(db: Session, columns, student_ids, date_from: date, date_to: date,
                 subject_id: Optional[int]):
    query = db.query(*columns).filter(
        Attendance.student_id.in_(student_ids),
        Attendance.date >= date_from,
        Attendance.date <= date_to,
    )
    if subject_id:
        query = query.filter(Attendance.subject_id == subject_id)
    return query


def _counts_by_day(db: Session, student_ids, date_from, date_to, subject_id) -> Dict[date, Tuple[int, int]]:
    """{day: (present, marked)} for the roster's records in range."""
    if not student_ids:
        return {}
    rows = (
        _range_query(
            db,
            (Attendance.date, _present_count().label("present"), func.count(Attendance.id).label("marked")),
            student_ids, date_from, date_to, subject_id,
        )
        .group_by(Attendance.date)
        .all()
    )
    return {to_day(row.date): (int(row.present or 0), int(row.marked)) for row in rows}


def get_attendance_report(db: Session, class_id: int, date_from: date, date_to: date,
                          subject_id: Optional[int] = None) -> List[dict]:
    """Present/total counts and percentage per roster student."""
    roster = get_students_by_class(db, class_id)
    student_ids = [s.id for s in roster]

    counts = {}
    if student_ids:
        rows = (
            _range_query(
                db,
                (Attendance.student_id, _present_count().label("present"), func.count(Attendance.id).label("total")),
                student_ids, date_from, date_to, subject_id,
            )
            .group_by(Attendance.student_id)
            .all()
        )
        counts = {row.student_id: (int(row.present or 0), int(row.total)) for row in rows}

    report = []
    for student in roster:
        present, total = counts.get(student.id, (0, 0))
        report.append({
            "student_id": student.id,
            "name": student.name,
            "present": present,
            "total": total,
            "percentage": percentage(present, total),
        })
    return report


def get_attendance_trends(db: Session, class_id: int, date_from: date, date_to: date,
                          subject_id: Optional[int] = None) -> List[dict]:
    """Daily Present counts next to the class size."""
    student_ids = [s.id for s in get_students_by_class(db, class_id)]
    counts = _counts_by_day(db, student_ids, date_from, date_to, subject_id)
    total = len(student_ids)

    return [
        {"date": day.isoformat(), "present_count": counts.get(day, (0, 0))[0], "total": total}
        for day in day_range(date_from, date_to)
    ]


def get_daily_attendance_report(db: Session, class_id: int, date_from: date, date_to: date,
                                subject_id: Optional[int] = None) -> List[dict]:
    """Daily percentage of Present among the marks actually taken that day.

    Unlike the trend series this divides by the number of records, not the
    class size, so a day where only half the class was marked is not
    reported as half absent.
    """
    student_ids = [s.id for s in get_students_by_class(db, class_id)]
    counts = _counts_by_day(db, student_ids, date_from, date_to, subject_id)
    class_strength = len(student_ids)

    results = []
    for day in day_range(date_from, date_to):
        present, marked = counts.get(day, (0, 0))
        results.append({
            "date": day.isoformat(),
            "day": day.day,
            "present_count": present,
            "total_marked": marked,
            "class_strength": class_strength,
            "percentage": percentage(present, marked),
        })
    return results


def get_student_attendance_report(db: Session, student_id: int) -> dict:
    """All-time percentage for one student, overall and per subject name."""
    student = get_student_or_404(db, student_id)

    rows = (
        db.query(Subject.name, _present_count().label("present"), func.count(Attendance.id).label("total"))
        .select_from(Attendance)
        .outerjoin(Subject, Subject.id == Attendance.subject_id)
        .filter(Attendance.student_id == student.id)
        .group_by(Subject.name)
        .all()
    )

    buckets: Dict[str, List[int]] = {}
    for row in rows:
        name = row.name or UNKNOWN_SUBJECT
        bucket = buckets.setdefault(name, [0, 0])
        bucket[0] += int(row.present or 0)
        bucket[1] += int(row.total)

    present_all = sum(b[0] for b in buckets.values())
    total_all = sum(b[1] for b in buckets.values())

    return {
        "overall": percentage(present_all, total_all),
        "by_subject": [
            {"name": name, "present": present, "total": total, "percentage": percentage(present, total)}
            for name, (present, total) in sorted(buckets.items())
        ],
    }
