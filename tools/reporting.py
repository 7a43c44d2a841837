"""
Reporting tools for the Academic Records system.
All reporting functions are restricted to administrators.
"""
import re
from typing import Tuple
from sqlalchemy.orm import Session

from config import get_logger
from .authorization import AuthorizationService
from .evaluator import Report, evaluate
from .report_pdf import render_subject_report
from .roster import get_subject, load_roster

logger = get_logger(__name__)


def get_subject_analysis(
    db: Session,
    requester_id: int,
    subject_id: int
) -> Report:
    """
    Evaluate the roster of a subject.

    AUTHORIZATION: Admin only.

    Args:
        db: Database session
        requester_id: ID of the requesting administrator
        subject_id: ID of the subject

    Returns:
        Report with per-student averages, statuses and comments plus
        class statistics

    Raises:
        AdminOnlyError: If requester is not an administrator
        ValidationError: If the subject does not exist
    """
    auth_service = AuthorizationService(db)

    # ENFORCEMENT: Only admins can view class-wide data
    auth_service.enforce_admin_only(requester_id, "view_subject_analysis")

    roster = load_roster(db, subject_id)
    report = evaluate(subject_id, roster)
    logger.debug(f"Subject {subject_id}: {report.message}")
    return report


def report_filename(subject_name: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9_-]+", "_", subject_name).strip("_") or "Subject"
    return f"Grades_Report_{safe}.pdf"


def get_subject_report_pdf(
    db: Session,
    requester_id: int,
    subject_id: int
) -> Tuple[str, bytes]:
    """
    Evaluate a subject and render the PDF report.

    AUTHORIZATION: Admin only.

    Returns:
        (file name, PDF content)
    """
    report = get_subject_analysis(db, requester_id, subject_id)
    subject = get_subject(db, subject_id)

    content = render_subject_report(
        report,
        subject_name=subject.subject_name,
        subject_code=subject.subject_code,
    )
    logger.info(
        f"Rendered report for subject {subject.subject_code} "
        f"({len(report.students)} students, {len(content)} bytes)"
    )
    return report_filename(subject.subject_name), content
