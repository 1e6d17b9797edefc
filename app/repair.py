# app/repair.py
"""
Offline repair of relations and attendance rows.

    python -m app.repair

- drops teacher/class/subject link rows pointing at deleted rows
- backfills attendance.class_id from the student's class when missing, unless
  that would duplicate an existing mark
- resets attendance statuses other than Present/Absent to Absent
"""
import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import DataIntegrityError
from app.crud.attendance import find_record
from app.db.models.attendance import Attendance, ABSENT, STATUSES
from app.db.models.links import teacher_classes, teacher_subjects, subject_classes
from app.db.models.school_class import SchoolClass
from app.db.models.student import Student
from app.db.models.subject import Subject
from app.db.models.teacher import Teacher

logger = logging.getLogger(__name__)


@dataclass
class RepairReport:
    links_removed: int = 0
    class_backfilled: int = 0
    class_unresolved: int = 0
    class_conflicts: int = 0
    status_fixed: int = 0
    issues: List[DataIntegrityError] = field(default_factory=list)


def _note(report: RepairReport, message: str):
    report.issues.append(DataIntegrityError(message))
    logger.warning(message)


def _drop_dangling_links(db: Session) -> int:
    removed = 0
    checks = [
        (teacher_classes, teacher_classes.c.teacher_id, Teacher.id),
        (teacher_classes, teacher_classes.c.class_id, SchoolClass.id),
        (teacher_subjects, teacher_subjects.c.teacher_id, Teacher.id),
        (teacher_subjects, teacher_subjects.c.subject_id, Subject.id),
        (subject_classes, subject_classes.c.subject_id, Subject.id),
        (subject_classes, subject_classes.c.class_id, SchoolClass.id),
    ]
    for table, column, target in checks:
        result = db.execute(delete(table).where(column.not_in(select(target))))
        removed += result.rowcount or 0
    return removed


def _backfill_class(db: Session, report: RepairReport):
    missing = db.query(Attendance).filter(Attendance.class_id.is_(None)).all()
    logger.info(f"Attendance rows missing class_id: {len(missing)}")

    for record in missing:
        student = db.query(Student).filter(Student.id == record.student_id).first()
        if student is None or student.class_id is None:
            report.class_unresolved += 1
            _note(report, f"attendance id={record.id}: no class for student_id={record.student_id}")
            continue
        duplicate = find_record(db, student.class_id, record.student_id, record.subject_id, record.date, record.session)
        if duplicate is not None:
            report.class_conflicts += 1
            _note(
                report,
                f"attendance id={record.id}: class_id={student.class_id} would duplicate attendance id={duplicate.id}",
            )
            continue
        try:
            with db.begin_nested():
                record.class_id = student.class_id
        except SQLAlchemyError as e:
            report.class_unresolved += 1
            _note(report, f"attendance id={record.id}: backfill failed: {e}")
            continue
        report.class_backfilled += 1


def _fix_statuses(db: Session, report: RepairReport):
    invalid = db.query(Attendance).filter(Attendance.status.not_in(STATUSES)).all()
    for record in invalid:
        _note(report, f"attendance id={record.id}: status {record.status!r} reset to {ABSENT}")
        record.status = ABSENT
        report.status_fixed += 1


def repair_relations(db: Session) -> RepairReport:
    report = RepairReport()
    try:
        report.links_removed = _drop_dangling_links(db)
        _backfill_class(db, report)
        _fix_statuses(db, report)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(
        f"Repair completed: links_removed={report.links_removed} "
        f"class_backfilled={report.class_backfilled} class_unresolved={report.class_unresolved} "
        f"class_conflicts={report.class_conflicts} "
        f"status_fixed={report.status_fixed}"
    )
    return report


def main():
    from app.db.session import SessionLocal

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    db = SessionLocal()
    try:
        repair_relations(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
