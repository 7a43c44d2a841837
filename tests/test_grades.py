"""
Tests for rosters and grade tools.
"""
import pytest

from database import get_db_context, Grade
from tools import (
    get_subject_roster,
    list_subjects,
    save_grades,
    clamp_score,
    get_subject_grades,
    get_student_grades,
    get_my_grades,
    StudentAccessDenied,
    AdminOnlyError,
    ValidationError,
)


class TestRoster:
    """Tests for subject rosters."""

    def test_list_subjects_sorted(self, setup_database):
        with get_db_context() as db:
            names = [s["subject_name"] for s in list_subjects(db)]
            assert names == sorted(names)
            assert len(names) == 5

    def test_roster_with_grades(self, setup_database):
        with get_db_context() as db:
            roster = get_subject_roster(db, requester_id=1, subject_id=1)

            assert [r.student_code for r in roster] == ["S-001", "S-002", "S-003"]
            assert [r.name for r in roster] == ["Ana Cruz", "Ben Reyes", "Carla Diaz"]
            assert [r.scores.final for r in roster] == [90.0, 80.0, 60.0]
            assert all(r.grade_id is not None for r in roster)

    def test_roster_fills_missing(self, setup_database):
        """Ungraded terms and students without a row read as zero."""
        with get_db_context() as db:
            ana, ben = get_subject_roster(db, requester_id=1, subject_id=2)

            assert ana.grade_id == 4
            assert ana.scores.midterm == 0.0
            assert ana.scores.prelim == 85.0

            assert ben.grade_id is None
            assert ben.scores.total() == 0.0

    def test_empty_roster(self, setup_database):
        with get_db_context() as db:
            assert get_subject_roster(db, requester_id=1, subject_id=3) == []

    def test_student_cannot_view_roster(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(AdminOnlyError):
                get_subject_roster(db, requester_id=2, subject_id=1)

    def test_unknown_subject(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(ValidationError):
                get_subject_roster(db, requester_id=1, subject_id=999)


class TestSaveGrades:
    """Tests for saving grades."""

    def test_insert_and_update(self, setup_database):
        with get_db_context() as db:
            result = save_grades(
                db,
                admin_id=1,
                subject_id=4,
                entries=[
                    {"student_id": 2, "prelim": 95, "midterm": 101, "semifinal": -5, "final": 85},
                    {"student_id": 3, "prelim": 80, "midterm": 80, "semifinal": 80, "final": 80},
                ],
            )

            assert result["success"] is True
            assert result["inserted"] == 1
            assert result["updated"] == 1

            ben, carla = result["roster"]
            assert ben["scores"] == {"prelim": 95.0, "midterm": 100.0, "semifinal": 0.0, "final": 85.0}
            assert ben["grade_id"] == 5
            assert carla["scores"]["final"] == 80.0
            assert carla["grade_id"] is not None

            row = db.query(Grade).filter(Grade.id == 5).first()
            assert row.updated_by == 1
            assert row.midterm == 100.0

    def test_student_cannot_save(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(AdminOnlyError):
                save_grades(db, admin_id=2, subject_id=4, entries=[{"student_id": 2, "prelim": 99}])

    def test_student_must_be_enrolled(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(ValidationError):
                save_grades(db, admin_id=1, subject_id=4, entries=[{"student_id": 1, "prelim": 99}])

    @pytest.mark.parametrize("value,expected", [
        (50, 50.0),
        ("72.5", 72.5),
        (150, 100.0),
        (-1, 0.0),
        ("", 0.0),
        (None, 0.0),
    ])
    def test_clamp_score(self, value, expected):
        assert clamp_score(value) == expected


class TestReadGrades:
    """Tests for reading grades."""

    def test_subject_grades(self, setup_database):
        with get_db_context() as db:
            result = get_subject_grades(db, requester_id=1, subject_id=1)

            assert result["subject"]["subject_code"] == "MATH101"
            assert result["total_grades"] == 3
            assert [g["average"] for g in result["grades"]] == [90.0, 80.0, 60.0]
            assert [g["status"] for g in result["grades"]] == ["Excellent", "Good", "Failed"]

    def test_student_cannot_view_subject_grades(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(AdminOnlyError):
                get_subject_grades(db, requester_id=3, subject_id=1)

    def test_portal_view(self, setup_database):
        """Incomplete rows have no average and are left out of the GPA."""
        with get_db_context() as db:
            result = get_student_grades(db, requester_id=2, student_id=1)

            assert result["student"]["student_id"] == "S-001"
            assert result["total_subjects"] == 2

            math, science = result["grades"]
            assert math["subject_code"] == "MATH101"
            assert math["average"] == 90.0
            assert math["remarks"] == "Passed"
            assert science["average"] is None
            assert science["remarks"] == "Incomplete"

            assert result["gpa"] == 90.0
            assert result["passed_count"] == 1

    def test_student_cannot_view_other_student(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(StudentAccessDenied):
                get_student_grades(db, requester_id=2, student_id=2)

    def test_admin_views_any_student(self, setup_database):
        with get_db_context() as db:
            result = get_student_grades(db, requester_id=1, student_id=3)
            assert result["student"]["name"] == "Carla Diaz"

    def test_my_grades(self, setup_database):
        with get_db_context() as db:
            assert get_my_grades(db, user_id=2)["student"]["id"] == 1

    def test_my_grades_without_profile(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(ValidationError):
                get_my_grades(db, user_id=4)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
