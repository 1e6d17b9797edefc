# app/db/models/school_class.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.db.models.links import teacher_classes, subject_classes


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)  # e.g. "10A"
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    students = relationship("Student", back_populates="school_class")
    teachers = relationship("Teacher", secondary=teacher_classes, back_populates="classes")
    subjects = relationship("Subject", secondary=subject_classes, back_populates="classes")
