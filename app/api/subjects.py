# app/api/subjects.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.parsing import parse_id
from app.crud import subject as crud_subject
from app.schemas.school import SubjectCreate, SubjectOut, SubjectUpdate

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_subject(subject_in: SubjectCreate, db: Session = Depends(get_db)):
    subject = crud_subject.create_subject(db, subject_in)
    return {"message": "Subject created successfully", "subject": SubjectOut.model_validate(subject)}


@router.get("/all-subjects", response_model=List[SubjectOut])
def get_all_subjects(db: Session = Depends(get_db)):
    return crud_subject.get_subjects(db)


@router.get("/{subject_id}", response_model=SubjectOut)
def get_subject_by_id(subject_id: str, db: Session = Depends(get_db)):
    return crud_subject.get_subject_or_404(db, parse_id(subject_id, "subjectId"))


@router.put("/{subject_id}")
def update_subject(subject_id: str, changes: SubjectUpdate, db: Session = Depends(get_db)):
    subject = crud_subject.update_subject(db, parse_id(subject_id, "subjectId"), changes)
    return {"message": "Subject updated", "subject": SubjectOut.model_validate(subject)}


@router.delete("/{subject_id}")
def delete_subject(subject_id: str, db: Session = Depends(get_db)):
    crud_subject.delete_subject(db, parse_id(subject_id, "subjectId"))
    return {"message": "Subject deleted successfully"}
