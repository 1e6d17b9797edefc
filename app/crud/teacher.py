# app/crud/teacher.py
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.core.security import get_password_hash
from app.db.models.school_class import SchoolClass
from app.db.models.subject import Subject
from app.db.models.teacher import Teacher


def get_teacher_by_email(db: Session, email: str):
    return db.query(Teacher).filter(Teacher.email == email).first()


def get_teacher_by_id(db: Session, teacher_id: int):
    return db.query(Teacher).filter(Teacher.id == teacher_id).first()


def create_teacher(db: Session, teacher_data, role: str = "teacher"):
    if get_teacher_by_email(db, teacher_data.email):
        raise ConflictError("Teacher already exists")

    db_teacher = Teacher(
        name=teacher_data.name,
        email=teacher_data.email,
        password_hash=get_password_hash(teacher_data.password),
        role=role,
    )
    db.add(db_teacher)
    db.commit()
    db.refresh(db_teacher)
    return db_teacher


def update_teacher(db: Session, teacher: Teacher, changes) -> Teacher:
    if changes.email and changes.email != teacher.email:
        if get_teacher_by_email(db, changes.email):
            raise ConflictError("Email already in use")
        teacher.email = changes.email
    if changes.name:
        teacher.name = changes.name
    if changes.password:
        teacher.password_hash = get_password_hash(changes.password)
    if getattr(changes, "role", None):
        teacher.role = changes.role
    db.commit()
    db.refresh(teacher)
    return teacher


def delete_teacher(db: Session, teacher_id: int):
    teacher = get_teacher_by_id(db, teacher_id)
    if not teacher:
        raise NotFoundError("Teacher not found")
    db.delete(teacher)
    db.commit()


def _get_or_404(db: Session, model, obj_id: int, label: str):
    obj = db.query(model).filter(model.id == obj_id).first()
    if not obj:
        raise NotFoundError(f"{label} not found")
    return obj


# Links are kept symmetric by the ORM: Teacher.classes and SchoolClass.teachers
# share one association table, so a single append covers both sides.

def add_class_to_teacher(db: Session, teacher_id: int, class_id: int):
    teacher = _get_or_404(db, Teacher, teacher_id, "Teacher")
    school_class = _get_or_404(db, SchoolClass, class_id, "Class")
    if school_class not in teacher.classes:
        teacher.classes.append(school_class)
    db.commit()


def remove_class_from_teacher(db: Session, teacher_id: int, class_id: int):
    teacher = _get_or_404(db, Teacher, teacher_id, "Teacher")
    teacher.classes = [c for c in teacher.classes if c.id != class_id]
    db.commit()


def add_subject_to_teacher(db: Session, teacher_id: int, subject_id: int):
    teacher = _get_or_404(db, Teacher, teacher_id, "Teacher")
    subject = _get_or_404(db, Subject, subject_id, "Subject")
    if subject not in teacher.subjects:
        teacher.subjects.append(subject)
    db.commit()


def remove_subject_from_teacher(db: Session, teacher_id: int, subject_id: int):
    teacher = _get_or_404(db, Teacher, teacher_id, "Teacher")
    teacher.subjects = [s for s in teacher.subjects if s.id != subject_id]
    db.commit()
