"""
Authorization module for the Academic Records system.
Implements role-based access control with enforcement at the tool layer.

RULES:
1. Never trust the client for role - always get from DB
2. Students can only access their own grades
3. Admins can access all data and save grades
"""
from typing import Optional
from sqlalchemy.orm import Session

from database import User, Student
from .exceptions import (
    StudentAccessDenied,
    AdminOnlyError,
    InvalidUserError,
)


class AuthorizationService:
    """
    Service for handling authorization checks.
    All role information is fetched from the database, never trusted from client.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        """
        Get user from database.

        Raises:
            InvalidUserError: If user not found
        """
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise InvalidUserError(user_id)
        return user

    def get_user_role(self, user_id: int) -> str:
        """
        Get user's role from database.
        NEVER trust client-provided role.
        """
        return self.get_user(user_id).role

    def is_admin(self, user_id: int) -> bool:
        """Check if user is an administrator."""
        return self.get_user_role(user_id) == "admin"

    def is_student(self, user_id: int) -> bool:
        """Check if user is a student."""
        return self.get_user_role(user_id) == "student"

    def enforce_admin_only(self, user_id: int, action: str) -> None:
        """
        Enforce that only administrators can perform an action.

        Raises:
            AdminOnlyError: If user is not an administrator
        """
        if not self.is_admin(user_id):
            raise AdminOnlyError(user_id, action)

    def get_student_for_user(self, user_id: int) -> Optional[Student]:
        """
        Get the Student profile linked to a user account.
        Accounts and profiles are linked by email.

        Returns:
            The Student, or None if the account has no profile
        """
        user = self.get_user(user_id)
        return self.db.query(Student).filter(Student.email == user.email).first()

    def enforce_student_data_access(
        self,
        requester_id: int,
        target_student_id: int
    ) -> None:
        """
        Enforce that students can only access their own data.
        Admins can access any student's data.

        Args:
            requester_id: The ID of the user making the request
            target_student_id: students.id of the profile being accessed

        Raises:
            StudentAccessDenied: If a student tries to access another student's data
        """
        if self.is_admin(requester_id):
            return

        own = self.get_student_for_user(requester_id)
        if own is None or own.id != target_student_id:
            raise StudentAccessDenied(requester_id, target_student_id)


def get_authorization_service(db: Session) -> AuthorizationService:
    """Factory function to create AuthorizationService."""
    return AuthorizationService(db)
