# app/db/models/teacher.py
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.db.models.links import teacher_classes, teacher_subjects


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum("admin", "teacher", name="teacher_role"), nullable=False, default="teacher")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    classes = relationship("SchoolClass", secondary=teacher_classes, back_populates="teachers")
    subjects = relationship("Subject", secondary=teacher_subjects, back_populates="teachers")
