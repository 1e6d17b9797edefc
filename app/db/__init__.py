# app/db/__init__.py
# Importing app.db registers every model on Base.metadata

from app.db.models import Base, Teacher, SchoolClass, Student, Subject, Attendance

__all__ = ["Base", "Teacher", "SchoolClass", "Student", "Subject", "Attendance"]
