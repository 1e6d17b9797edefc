from datetime import date

from sqlalchemy import insert, select

from app.db.models.attendance import Attendance
from app.db.models.links import teacher_classes
from app.repair import repair_relations


def test_repair_backfills_class_and_fixes_status(db, school):
    s1, s2 = school["s1"], school["s2"]
    db.add_all([
        Attendance(class_id=None, student_id=s1.id, subject_id=school["math"].id,
                   date=date(2024, 1, 1), session="Default", status="Present"),
        Attendance(class_id=school["class"].id, student_id=s2.id, subject_id=school["math"].id,
                   date=date(2024, 1, 1), session="Default", status="Late"),
        Attendance(class_id=None, student_id=4242, subject_id=school["math"].id,
                   date=date(2024, 1, 1), session="Default", status="Absent"),
    ])
    db.commit()

    report = repair_relations(db)

    assert report.class_backfilled == 1
    assert report.class_unresolved == 1
    assert report.status_fixed == 1
    assert len(report.issues) == 2

    rows = {r.student_id: r for r in db.query(Attendance).all()}
    assert rows[s1.id].class_id == school["class"].id
    assert rows[s2.id].status == "Absent"
    assert rows[4242].class_id is None


def test_repair_drops_dangling_links(db, school, teacher):
    db.execute(insert(teacher_classes).values(teacher_id=teacher.id, class_id=school["class"].id))
    db.execute(insert(teacher_classes).values(teacher_id=9999, class_id=school["class"].id))
    db.commit()

    report = repair_relations(db)

    assert report.links_removed == 1
    remaining = db.execute(select(teacher_classes.c.teacher_id)).scalars().all()
    assert remaining == [teacher.id]


def test_repair_on_clean_data_changes_nothing(db, school):
    report = repair_relations(db)
    assert (report.links_removed, report.class_backfilled, report.status_fixed) == (0, 0, 0)


def test_repair_skips_backfill_that_would_duplicate_a_mark(db, school, teacher):
    s1, s2 = school["s1"], school["s2"]
    mark = dict(student_id=s1.id, subject_id=school["math"].id, date=date(2024, 1, 1), session="Default")
    db.add_all([
        Attendance(class_id=school["class"].id, status="Present", **mark),
        Attendance(class_id=None, status="Absent", **mark),
        Attendance(class_id=school["class"].id, student_id=s2.id, subject_id=school["math"].id,
                   date=date(2024, 1, 1), session="Default", status="Late"),
    ])
    db.execute(insert(teacher_classes).values(teacher_id=9999, class_id=school["class"].id))
    db.commit()

    report = repair_relations(db)

    assert report.class_conflicts == 1
    assert report.class_backfilled == 0
    assert report.links_removed == 1
    assert report.status_fixed == 1
    assert len(report.issues) == 2

    db.expire_all()
    s1_rows = db.query(Attendance).filter(Attendance.student_id == s1.id).order_by(Attendance.id).all()
    assert [(r.class_id, r.status) for r in s1_rows] == [
        (school["class"].id, "Present"),
        (None, "Absent"),
    ]
    assert db.query(Attendance).filter(Attendance.student_id == s2.id).one().status == "Absent"
    assert db.execute(select(teacher_classes)).all() == []
