"""
Identity tools for the Academic Records system.
Handles user identification and role retrieval.
"""
from typing import Dict, Any, Optional
from sqlalchemy.orm import Session

from config import get_logger
from database import User
from .authorization import AuthorizationService
from .exceptions import ValidationError

logger = get_logger(__name__)


def get_user(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Get user information from database.

    Raises:
        InvalidUserError: If user not found
    """
    user = AuthorizationService(db).get_user(user_id)

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role
    }


def get_student_profile(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Get user information with the linked student profile, if any.

    Returns:
        Dictionary with user info and a "student" key (None for admins
        and for accounts without a profile)
    """
    user_info = get_user(db, user_id)
    student = AuthorizationService(db).get_student_for_user(user_id)
    user_info["student"] = student.to_dict() if student else None
    return user_info


def list_users(db: Session, role: Optional[str] = None) -> list[Dict[str, Any]]:
    """
    List users, optionally filtered by role ('admin' or 'student').
    """
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    users = query.order_by(User.id).all()
    return [{"id": u.id, "email": u.email, "name": u.name, "role": u.role} for u in users]


def create_user(db: Session, email: str, name: str, role: str) -> Dict[str, Any]:
    """
    Create a new user account.

    Raises:
        ValidationError: if role invalid or email already taken
    """
    if role not in ("admin", "student"):
        raise ValidationError("Invalid role. Must be 'admin' or 'student'", field="role")

    email = email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise ValidationError(f"Email {email} is already registered", field="email")

    user = User(email=email, name=name, role=role)
    db.add(user)
    db.commit()
    logger.info(f"Created {role} account {user.id} ({email})")
    return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}
