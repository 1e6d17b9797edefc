# app/schemas/school.py
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.base import CamelModel
from app.schemas.user import NamedRef


class ClassCreate(BaseModel):
    name: str = Field(min_length=1)


class ClassUpdate(BaseModel):
    name: Optional[str] = None


class ClassOut(CamelModel):
    id: int
    name: str


class StudentCreate(CamelModel):
    name: str = Field(min_length=1)
    roll_no: str = Field(min_length=1)
    class_id: int = Field(gt=0)


class StudentUpdate(CamelModel):
    name: Optional[str] = None
    roll_no: Optional[str] = None
    class_id: Optional[int] = None


class StudentOut(CamelModel):
    id: int
    name: str
    roll_no: str
    class_id: Optional[int] = None


class SubjectCreate(CamelModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    teacher_id: int = Field(gt=0)
    class_id: int = Field(gt=0)


class SubjectUpdate(CamelModel):
    name: Optional[str] = None
    code: Optional[str] = None
    teacher_id: Optional[int] = None
    class_id: Optional[int] = None


class TeacherRef(NamedRef):
    email: str


class SubjectOut(CamelModel):
    id: int
    name: str
    code: str
    teachers: List[TeacherRef] = []
    classes: List[NamedRef] = []
