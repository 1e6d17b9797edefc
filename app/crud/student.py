# app/crud/student.py
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.crud.school_class import get_class_or_404
from app.db.models.student import Student


def get_students_by_class(db: Session, class_id: int):
    """Class roster in enrollment order.

    This is the list of students that must appear in every per-class
    attendance view, whether or not they have any marks.
    """
    return (
        db.query(Student)
        .filter(Student.class_id == class_id)
        .order_by(Student.id)
        .all()
    )


def get_students(db: Session):
    return db.query(Student).order_by(Student.id).all()


def get_student(db: Session, student_id: int):
    return db.query(Student).filter(Student.id == student_id).first()


def get_student_or_404(db: Session, student_id: int) -> Student:
    student = get_student(db, student_id)
    if not student:
        raise NotFoundError("Student not found")
    return student


def _check_roll_no(db: Session, roll_no: str, exclude_id: int | None = None):
    query = db.query(Student).filter(Student.roll_no == roll_no)
    if exclude_id is not None:
        query = query.filter(Student.id != exclude_id)
    if query.first():
        raise ConflictError(f"Roll number {roll_no} is already taken")


def create_student(db: Session, student_in):
    get_class_or_404(db, student_in.class_id)
    _check_roll_no(db, student_in.roll_no)

    student = Student(
        name=student_in.name,
        roll_no=student_in.roll_no,
        class_id=student_in.class_id,
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def update_student(db: Session, student_id: int, changes):
    student = get_student_or_404(db, student_id)
    if changes.class_id:
        get_class_or_404(db, changes.class_id)
        student.class_id = changes.class_id
    if changes.roll_no and changes.roll_no != student.roll_no:
        _check_roll_no(db, changes.roll_no, exclude_id=student.id)
        student.roll_no = changes.roll_no
    if changes.name:
        student.name = changes.name
    db.commit()
    db.refresh(student)
    return student


def delete_student(db: Session, student_id: int):
    # Attendance rows are left in place
    student = get_student_or_404(db, student_id)
    db.delete(student)
    db.commit()
