"""
Unit tests for authorization and identity tools.
"""
import pytest

from database import get_db_context
from tools import (
    get_user,
    get_student_profile,
    list_users,
    create_user,
    AuthorizationService,
    StudentAccessDenied,
    AdminOnlyError,
    ValidationError,
    InvalidUserError,
)


class TestAuthorization:
    """Tests for authorization service."""

    def test_get_user_role(self, setup_database):
        """Test getting user role from database."""
        with get_db_context() as db:
            auth = AuthorizationService(db)
            assert auth.get_user_role(1) == "admin"
            assert auth.get_user_role(2) == "student"

    def test_invalid_user(self, setup_database):
        """Test error on invalid user."""
        with get_db_context() as db:
            auth = AuthorizationService(db)
            with pytest.raises(InvalidUserError):
                auth.get_user(9999)

    def test_admin_enforcement(self, setup_database):
        """Test admin-only enforcement."""
        with get_db_context() as db:
            auth = AuthorizationService(db)

            # Admin should pass
            auth.enforce_admin_only(1, "test_action")

            # Student should fail
            with pytest.raises(AdminOnlyError):
                auth.enforce_admin_only(2, "test_action")

    def test_student_linked_by_email(self, setup_database):
        """Test student accounts resolve to their profile."""
        with get_db_context() as db:
            auth = AuthorizationService(db)
            assert auth.get_student_for_user(2).student_id == "S-001"
            assert auth.get_student_for_user(1) is None
            assert auth.get_student_for_user(4) is None

    def test_student_data_access(self, setup_database):
        """Test student data access enforcement."""
        with get_db_context() as db:
            auth = AuthorizationService(db)

            # Admin can access any student
            auth.enforce_student_data_access(1, 1)
            auth.enforce_student_data_access(1, 3)

            # Student can access own data
            auth.enforce_student_data_access(2, 1)

            # Student cannot access other student
            with pytest.raises(StudentAccessDenied):
                auth.enforce_student_data_access(2, 2)

            # Account without a profile cannot access anyone
            with pytest.raises(StudentAccessDenied):
                auth.enforce_student_data_access(4, 1)


class TestIdentity:
    """Tests for identity tools."""

    def test_get_user(self, setup_database):
        with get_db_context() as db:
            assert get_user(db, 1) == {
                "id": 1, "email": "admin@test.edu", "name": "Test Admin", "role": "admin"
            }

    def test_student_profile(self, setup_database):
        with get_db_context() as db:
            profile = get_student_profile(db, 3)
            assert profile["student"]["student_id"] == "S-002"
            assert profile["student"]["name"] == "Ben Reyes"

            assert get_student_profile(db, 1)["student"] is None

    def test_list_users_by_role(self, setup_database):
        with get_db_context() as db:
            admins = list_users(db, role="admin")
            assert [u["id"] for u in admins] == [1]

            students = list_users(db, role="student")
            assert {2, 3, 4} <= {u["id"] for u in students}

    def test_create_user_rejects_bad_role(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(ValidationError):
                create_user(db, email="x@test.edu", name="X", role="teacher")

    def test_create_user_rejects_duplicate_email(self, setup_database):
        with get_db_context() as db:
            with pytest.raises(ValidationError):
                create_user(db, email="Admin@Test.edu", name="Again", role="admin")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
