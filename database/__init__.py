"""Database module."""
from .models import Base, User, Student, Subject, SubjectStudent, Grade, UserRole
from .connection import engine, SessionLocal, get_db, get_db_context, init_db

__all__ = [
    "Base",
    "User",
    "Student",
    "Subject",
    "SubjectStudent",
    "Grade",
    "UserRole",
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "init_db",
]
