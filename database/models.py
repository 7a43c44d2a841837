"""
Database models for the Academic Records system.
Defines the SQLAlchemy models for users, students, subjects, enrollments and grades.
"""
from enum import Enum as PyEnum
from sqlalchemy import (
    Column, Integer, String, Float, DateTime, Enum, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship, declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class UserRole(str, PyEnum):
    """User roles enum."""
    ADMIN = "admin"
    STUDENT = "student"


class User(Base):
    """
    Users table - accounts that can sign in to the application.

    Attributes:
        id: Unique identifier
        email: Login email, also used to link a student account to its Student row
        name: Display name
        role: Either 'admin' or 'student'
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    role = Column(Enum("admin", "student", name="user_role"), nullable=False)

    updated_grades = relationship("Grade", back_populates="updated_by_user")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class Student(Base):
    """
    Students table - the academic profile of a student.

    Attributes:
        id: Unique identifier
        student_id: School-issued student number (e.g., "2024-0001")
        first_name, last_name: Student's name
        email: Contact email, matches the student's User account when one exists
        phone, year_level, course: Profile details
    """
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(String(50), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    phone = Column(String(50), nullable=True)
    year_level = Column(String(50), nullable=True)
    course = Column(String(100), nullable=True)

    # Relationships
    enrollments = relationship("SubjectStudent", back_populates="student", cascade="all, delete-orphan")
    grades = relationship("Grade", back_populates="student", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self):
        return f"<Student(id={self.id}, student_id='{self.student_id}', name='{self.full_name}')>"

    def to_dict(self):
        """Convert student to dictionary for API responses."""
        return {
            "id": self.id,
            "student_id": self.student_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "year_level": self.year_level,
            "course": self.course,
        }


class Subject(Base):
    """
    Subjects table.

    Attributes:
        id: Unique identifier
        subject_code: Short code (e.g., "MATH101")
        subject_name: Display name (e.g., "College Algebra")
    """
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subject_code = Column(String(50), nullable=False, unique=True)
    subject_name = Column(String(255), nullable=False)
    description = Column(String(500), nullable=True)
    units = Column(Integer, nullable=True)

    # Relationships
    enrollments = relationship("SubjectStudent", back_populates="subject", cascade="all, delete-orphan")
    grades = relationship("Grade", back_populates="subject", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Subject(id={self.id}, code='{self.subject_code}', name='{self.subject_name}')>"

    def to_dict(self):
        """Convert subject to dictionary for API responses."""
        return {
            "id": self.id,
            "subject_code": self.subject_code,
            "subject_name": self.subject_name,
            "description": self.description,
            "units": self.units,
        }


class SubjectStudent(Base):
    """
    Association table linking students to the subjects they are enrolled in.
    """
    __tablename__ = "subject_students"

    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)

    # Relationships
    subject = relationship("Subject", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")

    def __repr__(self):
        return f"<SubjectStudent(subject_id={self.subject_id}, student_id={self.student_id})>"


class Grade(Base):
    """
    Grades table - one row per student per subject.

    The four term scores are nullable: a row can exist before every
    term has been graded.

    Attributes:
        id: Unique identifier
        subject_id: Subject the grades belong to
        student_id: Student (students.id) who received the grades
        prelim, midterm, semifinal, final: Term scores, conventionally 0-100
        updated_by: Admin who last saved this row
        updated_at: Timestamp of last update
    """
    __tablename__ = "grades"
    __table_args__ = (
        UniqueConstraint("subject_id", "student_id", name="uq_grades_subject_student"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    prelim = Column(Float, nullable=True)
    midterm = Column(Float, nullable=True)
    semifinal = Column(Float, nullable=True)
    final = Column(Float, nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    # Relationships
    subject = relationship("Subject", back_populates="grades")
    student = relationship("Student", back_populates="grades")
    updated_by_user = relationship("User", back_populates="updated_grades")

    def __repr__(self):
        return f"<Grade(id={self.id}, subject_id={self.subject_id}, student_id={self.student_id})>"

    def to_dict(self):
        """Convert grade row to dictionary for API responses."""
        return {
            "id": self.id,
            "subject_id": self.subject_id,
            "subject_code": self.subject.subject_code if self.subject else None,
            "subject_name": self.subject.subject_name if self.subject else None,
            "student_id": self.student_id,
            "student_code": self.student.student_id if self.student else None,
            "student_name": self.student.full_name if self.student else None,
            "prelim": self.prelim,
            "midterm": self.midterm,
            "semifinal": self.semifinal,
            "final": self.final,
            "updated_by": self.updated_by,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
