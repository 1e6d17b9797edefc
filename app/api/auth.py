# app/api/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.core.security import verify_password, create_access_token
from app.crud import teacher as crud_teacher
from app.db.models.teacher import Teacher
from app.schemas.user import TeacherCreate, TeacherLogin, TeacherOut, TeacherUpdate, Token

router = APIRouter()


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(teacher_in: TeacherCreate, db: Session = Depends(get_db)):
    # Self-registration always yields a plain teacher; admins are created via /api/admin
    teacher = crud_teacher.create_teacher(db, teacher_in)
    access_token = create_access_token(data={"sub": teacher.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/login", response_model=Token)
def login(form: TeacherLogin, db: Session = Depends(get_db)):
    teacher = crud_teacher.get_teacher_by_email(db, form.email)
    if not teacher or not verify_password(form.password, teacher.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": teacher.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/profile", response_model=TeacherOut)
def get_profile(current_user: Teacher = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=TeacherOut)
def update_profile(
    changes: TeacherUpdate,
    db: Session = Depends(get_db),
    current_user: Teacher = Depends(get_current_user),
):
    # Role changes go through /api/admin
    changes.role = None
    return crud_teacher.update_teacher(db, current_user, changes)
