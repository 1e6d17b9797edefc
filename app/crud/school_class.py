# app/crud/school_class.py
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.db.models.school_class import SchoolClass


def get_class(db: Session, class_id: int):
    return db.query(SchoolClass).filter(SchoolClass.id == class_id).first()


def get_class_or_404(db: Session, class_id: int) -> SchoolClass:
    school_class = get_class(db, class_id)
    if not school_class:
        raise NotFoundError("Class not found")
    return school_class


def get_classes(db: Session):
    return db.query(SchoolClass).order_by(SchoolClass.id).all()


def create_class(db: Session, name: str):
    if db.query(SchoolClass).filter(SchoolClass.name == name).first():
        raise ConflictError("Class already exists")
    school_class = SchoolClass(name=name)
    db.add(school_class)
    db.commit()
    db.refresh(school_class)
    return school_class


def update_class(db: Session, class_id: int, name: str | None):
    school_class = get_class_or_404(db, class_id)
    if name and name != school_class.name:
        if db.query(SchoolClass).filter(SchoolClass.name == name).first():
            raise ConflictError("Class already exists")
        school_class.name = name
    db.commit()
    db.refresh(school_class)
    return school_class


def delete_class(db: Session, class_id: int):
    school_class = get_class_or_404(db, class_id)
    db.delete(school_class)
    db.commit()
