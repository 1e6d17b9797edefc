import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.core.security import create_access_token, get_password_hash
from app.db import Base, Teacher, SchoolClass, Student, Subject
from app.db.session import enable_sqlite_savepoints
from app.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(db):
    # Requests share the test session so seeded rows and API writes see each other
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_teacher(db, email, role="teacher"):
    teacher = Teacher(
        name=email.split("@")[0],
        email=email,
        password_hash=get_password_hash("secret"),
        role=role,
    )
    db.add(teacher)
    db.commit()
    db.refresh(teacher)
    return teacher


@pytest.fixture
def teacher(db):
    return _make_teacher(db, "teacher@school.local")


@pytest.fixture
def admin(db):
    return _make_teacher(db, "admin@school.local", role="admin")


@pytest.fixture
def auth_headers(teacher):
    return {"Authorization": f"Bearer {create_access_token({'sub': teacher.email})}"}


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token({'sub': admin.email})}"}


@pytest.fixture
def school(db, teacher):
    """One class with two students, plus a second class and two subjects."""
    class_a = SchoolClass(name="10A")
    class_b = SchoolClass(name="10B")
    db.add_all([class_a, class_b])
    db.flush()

    math = Subject(name="Mathematics", code="MATH101")
    physics = Subject(name="Physics", code="PHY101")
    math.teachers = [teacher]
    math.classes = [class_a]
    physics.classes = [class_a]
    db.add_all([math, physics])

    s1 = Student(name="Alice", roll_no="A-01", class_id=class_a.id)
    s2 = Student(name="Bob", roll_no="A-02", class_id=class_a.id)
    other = Student(name="Carol", roll_no="B-01", class_id=class_b.id)
    db.add_all([s1, s2, other])
    db.commit()

    return {
        "class": class_a,
        "other_class": class_b,
        "math": math,
        "physics": physics,
        "s1": s1,
        "s2": s2,
        "other": other,
    }


@pytest.fixture
def foreign_keys(engine, db, school):
    """Turn on SQLite foreign key enforcement after the school is seeded."""
    db.commit()
    connection = engine.raw_connection()
    try:
        connection.cursor().execute("PRAGMA foreign_keys=ON")
    finally:
        connection.close()
    return school
