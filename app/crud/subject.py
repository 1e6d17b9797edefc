# app/crud/subject.py
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.crud.school_class import get_class_or_404
from app.db.models.subject import Subject
from app.db.models.teacher import Teacher


def _get_teacher_or_404(db: Session, teacher_id: int) -> Teacher:
    teacher = db.query(Teacher).filter(Teacher.id == teacher_id).first()
    if not teacher:
        raise NotFoundError("Teacher not found")
    return teacher


def get_subject(db: Session, subject_id: int):
    return db.query(Subject).filter(Subject.id == subject_id).first()


def get_subject_or_404(db: Session, subject_id: int) -> Subject:
    subject = get_subject(db, subject_id)
    if not subject:
        raise NotFoundError("Subject not found")
    return subject


def get_subjects(db: Session):
    return db.query(Subject).order_by(Subject.id).all()


def create_subject(db: Session, subject_in):
    teacher = _get_teacher_or_404(db, subject_in.teacher_id)
    school_class = get_class_or_404(db, subject_in.class_id)
    if db.query(Subject).filter(Subject.code == subject_in.code).first():
        raise ConflictError(f"Subject code {subject_in.code} is already taken")

    subject = Subject(name=subject_in.name, code=subject_in.code)
    subject.teachers = [teacher]
    subject.classes = [school_class]
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject


def update_subject(db: Session, subject_id: int, changes):
    subject = get_subject_or_404(db, subject_id)

    # Providing a teacher or class replaces the whole list, as on create
    if changes.teacher_id:
        subject.teachers = [_get_teacher_or_404(db, changes.teacher_id)]
    if changes.class_id:
        subject.classes = [get_class_or_404(db, changes.class_id)]
    if changes.name:
        subject.name = changes.name
    if changes.code and changes.code != subject.code:
        if db.query(Subject).filter(Subject.code == changes.code).first():
            raise ConflictError(f"Subject code {changes.code} is already taken")
        subject.code = changes.code

    db.commit()
    db.refresh(subject)
    return subject


def delete_subject(db: Session, subject_id: int):
    subject = get_subject_or_404(db, subject_id)
    db.delete(subject)
    db.commit()
