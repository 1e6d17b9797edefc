# app/api/classes.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.parsing import parse_id
from app.crud import school_class as crud_class
from app.schemas.school import ClassCreate, ClassOut, ClassUpdate

router = APIRouter()


@router.post("/addClass", status_code=status.HTTP_201_CREATED)
def add_class(class_in: ClassCreate, db: Session = Depends(get_db)):
    school_class = crud_class.create_class(db, class_in.name)
    return {"message": "Class created successfully", "class": ClassOut.model_validate(school_class)}


@router.get("/all-classes", response_model=List[ClassOut])
def get_classes(db: Session = Depends(get_db)):
    return crud_class.get_classes(db)


@router.get("/{class_id}", response_model=ClassOut)
def get_class_by_id(class_id: str, db: Session = Depends(get_db)):
    return crud_class.get_class_or_404(db, parse_id(class_id, "classId"))


@router.put("/{class_id}")
def update_class(class_id: str, changes: ClassUpdate, db: Session = Depends(get_db)):
    school_class = crud_class.update_class(db, parse_id(class_id, "classId"), changes.name)
    return {"message": "Class updated successfully", "class": ClassOut.model_validate(school_class)}


@router.delete("/{class_id}")
def delete_class(class_id: str, db: Session = Depends(get_db)):
    crud_class.delete_class(db, parse_id(class_id, "classId"))
    return {"message": "Class deleted successfully"}
