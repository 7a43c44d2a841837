"""
Grade reading tools for the Academic Records system.
Implements read operations with proper authorization enforcement.

RULE: Students can only see their own grades.
"""
from typing import Dict, Any, Optional
from sqlalchemy.orm import Session

from database import Grade, Student
from .authorization import AuthorizationService
from .evaluator import TERMS, StudentRecord, evaluate_student, is_passing, round_half_up
from .exceptions import ValidationError
from .roster import get_subject

INCOMPLETE = "Incomplete"


def grade_average(grade: Grade) -> Optional[float]:
    """
    Average of a stored grade row for display in the portal.

    Returns:
        The 2-decimal average, or None while any term is still ungraded
    """
    values = [getattr(grade, term) for term in TERMS]
    if any(v is None for v in values):
        return None
    return round_half_up(sum(values) / len(TERMS))


def grade_remarks(average: Optional[float]) -> str:
    if average is None:
        return INCOMPLETE
    return "Passed" if is_passing(average) else "Failed"


def get_subject_grades(
    db: Session,
    requester_id: int,
    subject_id: int
) -> Dict[str, Any]:
    """
    Get the stored grade rows of a subject with their evaluation.

    AUTHORIZATION: Admin only.
    """
    AuthorizationService(db).enforce_admin_only(requester_id, "view_subject_grades")

    subject = get_subject(db, subject_id)

    grades = (
        db.query(Grade)
        .join(Student, Grade.student_id == Student.id)
        .filter(Grade.subject_id == subject_id)
        .order_by(Student.student_id)
        .all()
    )

    rows = []
    for grade in grades:
        row = grade.to_dict()
        evaluated = evaluate_student(StudentRecord.model_validate(row))
        row["average"] = evaluated.average
        row["status"] = evaluated.status.value
        rows.append(row)

    return {
        "subject": subject.to_dict(),
        "total_grades": len(rows),
        "grades": rows,
    }


def get_student_grades(
    db: Session,
    requester_id: int,
    student_id: int
) -> Dict[str, Any]:
    """
    Get every grade row of a student, as shown in the student portal.

    AUTHORIZATION:
    - Admins: Can access any student's grades
    - Students: Can ONLY access their own grades

    Args:
        db: Database session
        requester_id: ID of the user making the request
        student_id: students.id of the student

    Returns:
        Dictionary with student info, one entry per subject and a summary.
        Rows with an ungraded term have no average and count as Incomplete;
        the GPA averages complete rows only.

    Raises:
        StudentAccessDenied: If a student tries to access another student's grades
    """
    auth_service = AuthorizationService(db)

    # ENFORCEMENT: Students can only access their own data
    auth_service.enforce_student_data_access(requester_id, student_id)

    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise ValidationError(f"Student with id {student_id} not found", "student_id")

    grades = db.query(Grade).filter(Grade.student_id == student_id).all()

    entries = []
    for grade in grades:
        average = grade_average(grade)
        entries.append({
            "id": grade.id,
            "subject_id": grade.subject_id,
            "subject_code": grade.subject.subject_code,
            "subject_name": grade.subject.subject_name,
            "prelim": grade.prelim,
            "midterm": grade.midterm,
            "semifinal": grade.semifinal,
            "final": grade.final,
            "average": average,
            "remarks": grade_remarks(average),
        })
    entries.sort(key=lambda e: e["subject_name"])

    complete = [e["average"] for e in entries if e["average"] is not None]

    return {
        "student": student.to_dict(),
        "total_subjects": len(entries),
        "passed_count": sum(1 for e in entries if e["remarks"] == "Passed"),
        "gpa": round_half_up(sum(complete) / len(complete)) if complete else None,
        "grades": entries,
    }


def get_my_grades(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Convenience function for the student portal.
    Resolves the student profile linked to the account.

    Raises:
        ValidationError: If the account has no student profile
    """
    student = AuthorizationService(db).get_student_for_user(user_id)
    if student is None:
        raise ValidationError(f"No student record found for user {user_id}", "user_id")

    return get_student_grades(db=db, requester_id=user_id, student_id=student.id)
