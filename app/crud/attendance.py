# app/crud/attendance.py
import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import PersistenceError
from app.crud.student import get_students_by_class
from app.db.models.attendance import Attendance, ABSENT, STATUSES

logger = logging.getLogger(__name__)


def find_record(db: Session, class_id: int, student_id: int, subject_id: int, day: date, session: str):
    return db.query(Attendance).filter(
        Attendance.class_id == class_id,
        Attendance.student_id == student_id,
        Attendance.subject_id == subject_id,
        Attendance.date == day,
        Attendance.session == session,
    ).first()


def _upsert_record(db: Session, class_id: int, student_id: int, subject_id: int,
                   day: date, session: str, status: str) -> Attendance:
    existing = find_record(db, class_id, student_id, subject_id, day, session)
    if existing:
        existing.status = status
        db.flush()
        return existing

    record = Attendance(
        class_id=class_id,
        student_id=student_id,
        subject_id=subject_id,
        date=day,
        session=session,
        status=status,
    )
    try:
        with db.begin_nested():
            db.add(record)
    except IntegrityError:
        # A concurrent writer inserted the same key first; overwrite its status
        existing = find_record(db, class_id, student_id, subject_id, day, session)
        if existing is None:
            raise
        existing.status = status
        db.flush()
        return existing
    return record


def mark_attendance(
    db: Session,
    day: date,
    subject_id: int,
    class_id: int,
    records: Iterable,
    session: Optional[str] = None,
) -> int:
    """
    Upsert one status per student for a class/subject/day/session.

    Every record is written inside its own savepoint, so a failing record
    does not undo or block the others. Records that did go through are
    committed even when some failed; in that case PersistenceError is raised
    afterwards. Returns the number of records written.
    """
    session = session or settings.DEFAULT_SESSION
    records = list(records)
    failed = []

    for record in records:
        try:
            with db.begin_nested():
                _upsert_record(db, class_id, record.student_id, subject_id, day, session, record.status)
        except SQLAlchemyError as e:
            logger.exception(
                f"Failed to mark student_id={record.student_id} class_id={class_id} "
                f"subject_id={subject_id} date={day} session={session}"
            )
            failed.append(e)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Attendance batch commit failed for class_id={class_id} date={day}")
        raise PersistenceError(str(e)) from e

    written = len(records) - len(failed)
    logger.info(
        f"Marked attendance class_id={class_id} subject_id={subject_id} date={day} "
        f"session={session}: {written}/{len(records)} written"
    )
    if failed:
        raise PersistenceError(f"{len(failed)} of {len(records)} attendance records failed: {failed[0]}")
    return written


def get_attendance(db: Session, day: date, class_id: int, subject_id: Optional[int] = None) -> List[dict]:
    """Status of every enrolled student on one day, in roster order.

    A student with no mark counts as Absent. If several sessions were marked
    that day and no subject narrows it down, the last record read wins.
    """
    roster = get_students_by_class(db, class_id)
    if not roster:
        return []

    query = db.query(Attendance.student_id, Attendance.status).filter(
        Attendance.student_id.in_([s.id for s in roster]),
        Attendance.date == day,
    )
    if subject_id:
        query = query.filter(Attendance.subject_id == subject_id)

    status_by_student = {}
    for student_id, status in query.order_by(Attendance.id).all():
        status_by_student[student_id] = status

    result = []
    for student in roster:
        status = status_by_student.get(student.id, ABSENT)
        if status not in STATUSES:
            status = ABSENT
        result.append({
            "student_id": student.id,
            "name": student.name,
            "roll_no": student.roll_no,
            "status": status,
        })
    return result


def debug_attendance(
    db: Session,
    class_id: Optional[int] = None,
    subject_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Attendance]:
    query = db.query(Attendance)
    if class_id:
        query = query.filter(Attendance.class_id == class_id)
    if subject_id:
        query = query.filter(Attendance.subject_id == subject_id)
    if date_from:
        query = query.filter(Attendance.date >= date_from)
    if date_to:
        query = query.filter(Attendance.date <= date_to)
    return query.order_by(Attendance.date, Attendance.id).all()
