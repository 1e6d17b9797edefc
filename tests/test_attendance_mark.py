from datetime import date
from types import SimpleNamespace

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import OperationalError

from app.core.errors import PersistenceError
from app.crud import attendance as crud_attendance
from app.db.models.attendance import Attendance
from app.schemas.attendance import MarkRecord


def _mark(client, headers, school, records, day="2024-02-01", **extra):
    body = {
        "date": day,
        "subjectId": school["math"].id,
        "classId": school["class"].id,
        "records": records,
    }
    body.update(extra)
    return client.post("/api/attendance/mark", json=body, headers=headers)


def test_mark_creates_records(client, db, auth_headers, school):
    response = _mark(client, auth_headers, school, [
        {"studentId": school["s1"].id, "status": "Present"},
        {"studentId": school["s2"].id, "status": "Absent"},
    ])

    assert response.status_code == 201
    assert response.json() == {"message": "Attendance marked successfully"}

    rows = db.query(Attendance).order_by(Attendance.student_id).all()
    assert [(r.student_id, r.status) for r in rows] == [
        (school["s1"].id, "Present"),
        (school["s2"].id, "Absent"),
    ]
    assert all(r.session == "Default" for r in rows)
    assert all(r.class_id == school["class"].id for r in rows)


def test_marking_twice_keeps_one_record_with_latest_status(client, db, auth_headers, school):
    student_id = school["s1"].id
    _mark(client, auth_headers, school, [{"studentId": student_id, "status": "Present"}])
    response = _mark(client, auth_headers, school, [{"studentId": student_id, "status": "Absent"}])

    assert response.status_code == 201
    rows = db.query(Attendance).filter(Attendance.student_id == student_id).all()
    assert len(rows) == 1
    assert rows[0].status == "Absent"


def test_time_of_day_is_dropped_from_the_key(client, db, auth_headers, school):
    student_id = school["s1"].id
    _mark(client, auth_headers, school, [{"studentId": student_id, "status": "Present"}],
          day="2024-02-01T08:15:00Z")
    _mark(client, auth_headers, school, [{"studentId": student_id, "status": "Absent"}],
          day="2024-02-01T14:45:00")

    rows = db.query(Attendance).all()
    assert len(rows) == 1
    assert rows[0].date == date(2024, 2, 1)
    assert rows[0].status == "Absent"


def test_sessions_are_separate_records(client, db, auth_headers, school):
    student_id = school["s1"].id
    _mark(client, auth_headers, school, [{"studentId": student_id, "status": "Present"}], session="Period 1")
    _mark(client, auth_headers, school, [{"studentId": student_id, "status": "Absent"}], session="Period 2")
    _mark(client, auth_headers, school, [{"studentId": student_id, "status": "Present"}], session="")

    sessions = sorted(r.session for r in db.query(Attendance).all())
    assert sessions == ["Default", "Period 1", "Period 2"]


@pytest.mark.parametrize("missing", ["date", "subjectId", "classId", "records"])
def test_missing_required_field_is_rejected(client, db, auth_headers, school, missing):
    body = {
        "date": "2024-02-01",
        "subjectId": school["math"].id,
        "classId": school["class"].id,
        "records": [{"studentId": school["s1"].id, "status": "Present"}],
    }
    del body[missing]

    response = client.post("/api/attendance/mark", json=body, headers=auth_headers)

    assert response.status_code == 400
    assert db.query(Attendance).count() == 0


def test_empty_records_and_unknown_status_are_rejected(client, db, auth_headers, school):
    assert _mark(client, auth_headers, school, []).status_code == 400
    response = _mark(client, auth_headers, school, [{"studentId": school["s1"].id, "status": "Late"}])
    assert response.status_code == 400
    assert db.query(Attendance).count() == 0


def test_malformed_date_is_rejected(client, auth_headers, school):
    response = _mark(client, auth_headers, school,
                     [{"studentId": school["s1"].id, "status": "Present"}], day="first of feb")
    assert response.status_code == 400


def test_mark_requires_authentication(client, school):
    response = _mark(client, {}, school, [{"studentId": school["s1"].id, "status": "Present"}])
    assert response.status_code == 401


def test_failing_record_does_not_block_the_rest(db, school, monkeypatch):
    real_upsert = crud_attendance._upsert_record
    bad_student = school["s1"].id

    def flaky_upsert(db, class_id, student_id, *args):
        if student_id == bad_student:
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        return real_upsert(db, class_id, student_id, *args)

    monkeypatch.setattr(crud_attendance, "_upsert_record", flaky_upsert)

    records = [
        MarkRecord(student_id=bad_student, status="Present"),
        MarkRecord(student_id=school["s2"].id, status="Present"),
    ]
    with pytest.raises(PersistenceError):
        crud_attendance.mark_attendance(
            db, date(2024, 2, 1), school["math"].id, school["class"].id, records,
        )

    rows = db.query(Attendance).all()
    assert [r.student_id for r in rows] == [school["s2"].id]


def test_store_failure_is_a_500_without_raw_error(client, auth_headers, school, monkeypatch):
    def broken_upsert(*args):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(crud_attendance, "_upsert_record", broken_upsert)

    response = _mark(client, auth_headers, school, [{"studentId": school["s1"].id, "status": "Present"}])

    assert response.status_code == 500
    assert "disk I/O" not in response.json()["detail"]


def test_insert_losing_a_race_updates_the_winning_row(db, school, monkeypatch):
    real_find = crud_attendance.find_record
    key = dict(
        class_id=school["class"].id,
        student_id=school["s1"].id,
        subject_id=school["math"].id,
        date=date(2024, 2, 1),
        session="Default",
    )
    calls = []

    def find_after_concurrent_insert(*args):
        calls.append(args)
        if len(calls) == 1:
            # Another writer commits the same key between our lookup and our insert
            db.execute(insert(Attendance).values(status="Present", **key))
            return None
        return real_find(*args)

    monkeypatch.setattr(crud_attendance, "find_record", find_after_concurrent_insert)

    written = crud_attendance.mark_attendance(
        db, date(2024, 2, 1), school["math"].id, school["class"].id,
        [MarkRecord(student_id=school["s1"].id, status="Absent")],
    )

    assert written == 1
    assert len(calls) == 2
    rows = db.query(Attendance).all()
    assert len(rows) == 1
    assert rows[0].status == "Absent"


def test_record_rejected_by_the_store_is_reported_after_the_rest_commit(db, school):
    records = [
        SimpleNamespace(student_id=school["s1"].id, status=None),
        MarkRecord(student_id=school["s2"].id, status="Present"),
    ]

    with pytest.raises(PersistenceError):
        crud_attendance.mark_attendance(
            db, date(2024, 2, 1), school["math"].id, school["class"].id, records,
        )

    db.rollback()
    rows = db.query(Attendance).all()
    assert [(r.student_id, r.status) for r in rows] == [(school["s2"].id, "Present")]
