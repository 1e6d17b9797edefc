# app/api/students.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.parsing import parse_id
from app.crud import student as crud_student
from app.schemas.school import StudentCreate, StudentOut, StudentUpdate

router = APIRouter()


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def add_student(student_in: StudentCreate, db: Session = Depends(get_db)):
    return crud_student.create_student(db, student_in)


@router.get("", response_model=List[StudentOut])
def get_students(db: Session = Depends(get_db)):
    return crud_student.get_students(db)


@router.get("/class/{class_id}", response_model=List[StudentOut])
def get_students_by_class(
    class_id: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_student.get_students_by_class(db, parse_id(class_id, "classId"))


@router.get("/{student_id}", response_model=StudentOut)
def get_student_by_id(student_id: str, db: Session = Depends(get_db)):
    return crud_student.get_student_or_404(db, parse_id(student_id, "studentId"))


@router.put("/{student_id}", response_model=StudentOut)
def update_student(student_id: str, changes: StudentUpdate, db: Session = Depends(get_db)):
    return crud_student.update_student(db, parse_id(student_id, "studentId"), changes)


@router.delete("/{student_id}")
def delete_student(student_id: str, db: Session = Depends(get_db)):
    crud_student.delete_student(db, parse_id(student_id, "studentId"))
    return {"message": "Student deleted successfully"}
