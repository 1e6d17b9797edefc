from app.db.base import Base
from app.db.models.links import teacher_classes, teacher_subjects, subject_classes
from app.db.models.teacher import Teacher
from app.db.models.school_class import SchoolClass
from app.db.models.student import Student
from app.db.models.subject import Subject
from app.db.models.attendance import Attendance

__all__ = [
    "Base",
    "Teacher",
    "SchoolClass",
    "Student",
    "Subject",
    "Attendance",
    "teacher_classes",
    "teacher_subjects",
    "subject_classes",
]
