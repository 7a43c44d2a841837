"""
Shared fixtures: a throwaway SQLite database with a small known dataset.

Users:    1 admin, 2 Ana (student), 3 Ben (student), 4 student account without a profile
Students: 1 S-001 Ana Cruz, 2 S-002 Ben Reyes, 3 S-003 Carla Diaz
Subjects: 1 MATH101 (Ana, Ben, Carla graded 90/80/60)
          2 SCI101  (Ana with an ungraded midterm, Ben without a grade row)
          3 HIST101 (nobody enrolled)
          4 PE101   (Ben graded 70, Carla without a grade row)
          5 ART101  (Carla without a grade row)
"""
import os
import sys
import tempfile

_db_dir = tempfile.mkdtemp(prefix="academic_records_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from database import (
    Base, engine, get_db_context,
    User, Student, Subject, SubjectStudent, Grade,
)


def _grade(grade_id, subject_id, student_id, prelim, midterm, semifinal, final):
    return Grade(
        id=grade_id,
        subject_id=subject_id,
        student_id=student_id,
        prelim=prelim,
        midterm=midterm,
        semifinal=semifinal,
        final=final,
        updated_by=1,
    )


@pytest.fixture(scope="session")
def setup_database():
    """Create a fresh schema and load the test dataset."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    with get_db_context() as db:
        db.add_all([
            User(id=1, email="admin@test.edu", name="Test Admin", role="admin"),
            User(id=2, email="ana.cruz@test.edu", name="Ana Cruz", role="student"),
            User(id=3, email="ben.reyes@test.edu", name="Ben Reyes", role="student"),
            User(id=4, email="orphan@test.edu", name="No Profile", role="student"),
        ])
        db.add_all([
            Student(id=1, student_id="S-001", first_name="Ana", last_name="Cruz",
                    email="ana.cruz@test.edu", course="BSIT"),
            Student(id=2, student_id="S-002", first_name="Ben", last_name="Reyes",
                    email="ben.reyes@test.edu", course="BSIT"),
            Student(id=3, student_id="S-003", first_name="Carla", last_name="Diaz",
                    email="carla.diaz@test.edu", course="BSCS"),
        ])
        db.add_all([
            Subject(id=1, subject_code="MATH101", subject_name="Mathematics", units=3),
            Subject(id=2, subject_code="SCI101", subject_name="Science", units=3),
            Subject(id=3, subject_code="HIST101", subject_name="History", units=3),
            Subject(id=4, subject_code="PE101", subject_name="Physical Education", units=2),
            Subject(id=5, subject_code="ART101", subject_name="Art Appreciation", units=3),
        ])
        db.flush()

        db.add_all([
            SubjectStudent(subject_id=1, student_id=1),
            SubjectStudent(subject_id=1, student_id=2),
            SubjectStudent(subject_id=1, student_id=3),
            SubjectStudent(subject_id=2, student_id=1),
            SubjectStudent(subject_id=2, student_id=2),
            SubjectStudent(subject_id=4, student_id=2),
            SubjectStudent(subject_id=4, student_id=3),
            SubjectStudent(subject_id=5, student_id=3),
        ])
        db.add_all([
            _grade(1, 1, 1, 90, 90, 90, 90),
            _grade(2, 1, 2, 80, 80, 80, 80),
            _grade(3, 1, 3, 60, 60, 60, 60),
            _grade(4, 2, 1, 85, None, 80, 90),
            _grade(5, 4, 2, 70, 70, 70, 70),
        ])

    yield

    Base.metadata.drop_all(bind=engine)
