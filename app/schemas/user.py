# app/schemas/user.py
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.base import CamelModel


class TeacherCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class AdminTeacherCreate(TeacherCreate):
    role: Literal["admin", "teacher"] = "teacher"


class TeacherUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Literal["admin", "teacher"]] = None


class TeacherLogin(BaseModel):
    email: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str


class NamedRef(CamelModel):
    id: int
    name: str


class SubjectRef(NamedRef):
    code: str


class TeacherOut(CamelModel):
    id: int
    name: str
    email: str
    role: str
    classes: List[NamedRef] = []
    subjects: List[SubjectRef] = []


class TeacherClassLink(CamelModel):
    teacher_id: int
    class_id: int


class TeacherSubjectLink(CamelModel):
    teacher_id: int
    subject_id: int
