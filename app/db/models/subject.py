# app/db/models/subject.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.db.models.links import teacher_subjects, subject_classes


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)  # e.g. "Mathematics"
    code = Column(String, unique=True, nullable=False)  # e.g. "MATH101"
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teachers = relationship("Teacher", secondary=teacher_subjects, back_populates="subjects")
    classes = relationship("SchoolClass", secondary=subject_classes, back_populates="subjects")
