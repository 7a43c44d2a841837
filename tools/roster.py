"""
Subject and roster tools for the Academic Records system.

A roster is the list of students enrolled in a subject, each carrying the
scores stored for that subject. It is the input of the grade evaluator.
"""
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from database import Subject, Student, SubjectStudent, Grade
from .authorization import AuthorizationService
from .evaluator import StudentRecord
from .exceptions import ValidationError


def list_subjects(db: Session) -> List[Dict[str, Any]]:
    """Return all subjects ordered by name."""
    subjects = db.query(Subject).order_by(Subject.subject_name).all()
    return [s.to_dict() for s in subjects]


def get_subject(db: Session, subject_id: int) -> Subject:
    """
    Get a subject by id.

    Raises:
        ValidationError: If the subject does not exist
    """
    subject = db.query(Subject).filter(Subject.id == subject_id).first()
    if not subject:
        raise ValidationError(f"Subject with id {subject_id} not found", "subject_id")
    return subject


def get_enrolled_students(db: Session, subject_id: int) -> List[Student]:
    """Students enrolled in a subject, ordered by student number."""
    return (
        db.query(Student)
        .join(SubjectStudent, Student.id == SubjectStudent.student_id)
        .filter(SubjectStudent.subject_id == subject_id)
        .order_by(Student.student_id)
        .all()
    )


def load_roster(db: Session, subject_id: int) -> List[StudentRecord]:
    """
    Build the roster of a subject without authorization checks.

    Enrolled students without a grade row get zero scores and no grade_id.
    Stored NULL scores are read as 0 by StudentRecord.
    """
    get_subject(db, subject_id)

    enrolled = get_enrolled_students(db, subject_id)
    grades = {
        g.student_id: g
        for g in db.query(Grade).filter(Grade.subject_id == subject_id).all()
    }

    roster = []
    for student in enrolled:
        grade = grades.get(student.id)
        roster.append(StudentRecord(
            student_id=student.id,
            student_code=student.student_id,
            name=student.full_name,
            grade_id=grade.id if grade else None,
            prelim=grade.prelim if grade else 0,
            midterm=grade.midterm if grade else 0,
            semifinal=grade.semifinal if grade else 0,
            final=grade.final if grade else 0,
        ))
    return roster


def get_subject_roster(
    db: Session,
    requester_id: int,
    subject_id: int
) -> List[StudentRecord]:
    """
    Get the roster of a subject.

    AUTHORIZATION: Admin only.

    Raises:
        AdminOnlyError: If requester is not an administrator
        ValidationError: If the subject does not exist
    """
    AuthorizationService(db).enforce_admin_only(requester_id, "view_subject_roster")
    return load_roster(db, subject_id)
