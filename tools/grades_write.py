"""
Grade writing tools for the Academic Records system.
All write operations are restricted to administrators.
"""
from typing import Dict, Any, Iterable, Mapping
from sqlalchemy.orm import Session

from config import get_logger
from database import Grade, SubjectStudent
from .authorization import AuthorizationService
from .evaluator import TERMS, coerce_score
from .exceptions import ValidationError
from .roster import get_subject, load_roster

logger = get_logger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 100.0


def clamp_score(value: Any) -> float:
    """Read an entered score, clamped into [0, 100]. Unparsable input is 0."""
    return min(MAX_SCORE, max(MIN_SCORE, coerce_score(value)))


def save_grades(
    db: Session,
    admin_id: int,
    subject_id: int,
    entries: Iterable[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Save the term scores of students in a subject.

    Rows that already exist for (subject, student) are updated, the others
    are inserted.

    AUTHORIZATION: Admin only.

    Args:
        db: Database session
        admin_id: ID of the administrator saving the grades
        subject_id: ID of the subject
        entries: Mappings with "student_id" (students.id) and any of the
            four term scores

    Returns:
        Insert/update counts and the refreshed roster

    Raises:
        AdminOnlyError: If requester is not an administrator
        ValidationError: If the subject is unknown or a student is not enrolled
    """
    auth_service = AuthorizationService(db)

    # ENFORCEMENT: Only admins can save grades
    auth_service.enforce_admin_only(admin_id, "save_grades")

    subject = get_subject(db, subject_id)

    enrolled_ids = {
        row.student_id
        for row in db.query(SubjectStudent).filter(SubjectStudent.subject_id == subject_id).all()
    }
    existing = {
        g.student_id: g
        for g in db.query(Grade).filter(Grade.subject_id == subject_id).all()
    }

    inserted = 0
    updated = 0
    for entry in entries:
        student_id = entry.get("student_id")
        if student_id not in enrolled_ids:
            raise ValidationError(
                f"Student {student_id} is not enrolled in subject {subject.subject_code}",
                "student_id"
            )

        scores = {term: clamp_score(entry.get(term)) for term in TERMS}

        grade = existing.get(student_id)
        if grade:
            for term, value in scores.items():
                setattr(grade, term, value)
            grade.updated_by = admin_id
            updated += 1
        else:
            grade = Grade(subject_id=subject_id, student_id=student_id, updated_by=admin_id, **scores)
            db.add(grade)
            existing[student_id] = grade
            inserted += 1

    db.commit()
    logger.info(
        f"Admin {admin_id} saved grades for subject {subject.subject_code}: "
        f"{inserted} inserted, {updated} updated"
    )

    return {
        "success": True,
        "message": f"Grades saved for {subject.subject_name}",
        "inserted": inserted,
        "updated": updated,
        "roster": [r.model_dump() for r in load_roster(db, subject_id)],
    }
