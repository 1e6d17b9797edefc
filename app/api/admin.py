# app/api/admin.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_admin
from app.core.errors import NotFoundError
from app.core.parsing import parse_id
from app.crud import school_class as crud_class
from app.crud import student as crud_student
from app.crud import subject as crud_subject
from app.crud import teacher as crud_teacher
from app.schemas.school import (
    ClassCreate,
    ClassOut,
    ClassUpdate,
    StudentOut,
    SubjectCreate,
    SubjectOut,
    SubjectUpdate,
)
from app.schemas.user import (
    AdminTeacherCreate,
    TeacherClassLink,
    TeacherOut,
    TeacherSubjectLink,
    TeacherUpdate,
)

router = APIRouter(dependencies=[Depends(require_admin)])


# --- Teachers ---

@router.post("/teacher", response_model=TeacherOut, status_code=status.HTTP_201_CREATED)
def create_teacher(teacher_in: AdminTeacherCreate, db: Session = Depends(get_db)):
    return crud_teacher.create_teacher(db, teacher_in, role=teacher_in.role)


@router.put("/teacher/{teacher_id}", response_model=TeacherOut)
def update_teacher(teacher_id: str, changes: TeacherUpdate, db: Session = Depends(get_db)):
    teacher = crud_teacher.get_teacher_by_id(db, parse_id(teacher_id, "teacherId"))
    if not teacher:
        raise NotFoundError("Teacher not found")
    return crud_teacher.update_teacher(db, teacher, changes)


@router.delete("/teacher/{teacher_id}")
def delete_teacher(teacher_id: str, db: Session = Depends(get_db)):
    crud_teacher.delete_teacher(db, parse_id(teacher_id, "teacherId"))
    return {"message": "Teacher deleted successfully"}


# --- Relationships ---

@router.post("/teacher/add-class")
def add_class_to_teacher(link: TeacherClassLink, db: Session = Depends(get_db)):
    crud_teacher.add_class_to_teacher(db, link.teacher_id, link.class_id)
    return {"message": "Class and Teacher linked successfully."}


@router.post("/teacher/remove-class")
def remove_class_from_teacher(link: TeacherClassLink, db: Session = Depends(get_db)):
    crud_teacher.remove_class_from_teacher(db, link.teacher_id, link.class_id)
    return {"message": "Class and Teacher unlinked successfully."}


@router.post("/teacher/add-subject")
def add_subject_to_teacher(link: TeacherSubjectLink, db: Session = Depends(get_db)):
    crud_teacher.add_subject_to_teacher(db, link.teacher_id, link.subject_id)
    return {"message": "Subject and Teacher linked successfully."}


@router.post("/teacher/remove-subject")
def remove_subject_from_teacher(link: TeacherSubjectLink, db: Session = Depends(get_db)):
    crud_teacher.remove_subject_from_teacher(db, link.teacher_id, link.subject_id)
    return {"message": "Subject and Teacher unlinked successfully."}


# --- Classes ---

@router.post("/class", status_code=status.HTTP_201_CREATED)
def add_class(class_in: ClassCreate, db: Session = Depends(get_db)):
    school_class = crud_class.create_class(db, class_in.name)
    return {"message": "Class created successfully", "class": ClassOut.model_validate(school_class)}


@router.get("/class/{class_id}/students", response_model=List[StudentOut])
def get_class_students(class_id: str, db: Session = Depends(get_db)):
    return crud_student.get_students_by_class(db, parse_id(class_id, "classId"))


@router.put("/class/{class_id}")
def update_class(class_id: str, changes: ClassUpdate, db: Session = Depends(get_db)):
    school_class = crud_class.update_class(db, parse_id(class_id, "classId"), changes.name)
    return {"message": "Class updated successfully", "class": ClassOut.model_validate(school_class)}


@router.delete("/class/{class_id}")
def delete_class(class_id: str, db: Session = Depends(get_db)):
    crud_class.delete_class(db, parse_id(class_id, "classId"))
    return {"message": "Class deleted successfully"}


# --- Subjects ---

@router.post("/subject", status_code=status.HTTP_201_CREATED)
def create_subject(subject_in: SubjectCreate, db: Session = Depends(get_db)):
    subject = crud_subject.create_subject(db, subject_in)
    return {"message": "Subject created successfully", "subject": SubjectOut.model_validate(subject)}


@router.put("/subject/{subject_id}")
def update_subject(subject_id: str, changes: SubjectUpdate, db: Session = Depends(get_db)):
    subject = crud_subject.update_subject(db, parse_id(subject_id, "subjectId"), changes)
    return {"message": "Subject updated", "subject": SubjectOut.model_validate(subject)}


@router.delete("/subject/{subject_id}")
def delete_subject(subject_id: str, db: Session = Depends(get_db)):
    crud_subject.delete_subject(db, parse_id(subject_id, "subjectId"))
    return {"message": "Subject deleted successfully"}
