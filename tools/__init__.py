"""
Tools module for the Academic Records system.

This module provides the grade evaluator and the tools that load rosters,
save and read grades and build reports while enforcing authorization rules.
"""
from .exceptions import (
    AuthorizationError,
    StudentAccessDenied,
    AdminOnlyError,
    InvalidUserError,
    ValidationError,
)

from .authorization import (
    AuthorizationService,
    get_authorization_service,
)

from .evaluator import (
    Status,
    ScoreSet,
    StudentRecord,
    EvaluatedStudent,
    ClassStats,
    ClassInsight,
    Report,
    evaluate,
    evaluate_student,
    compute_average,
    compute_class_stats,
    classify,
    comment_for,
    class_insight_for,
    is_passing,
    round_half_up,
)

from .identity import (
    get_user,
    get_student_profile,
    list_users,
    create_user,
)

from .roster import (
    list_subjects,
    get_subject,
    get_subject_roster,
    load_roster,
)

from .grades_write import (
    save_grades,
    clamp_score,
)

from .grades_read import (
    get_subject_grades,
    get_student_grades,
    get_my_grades,
)

from .report_pdf import (
    render_subject_report,
    partition_by_pass,
)

from .reporting import (
    get_subject_analysis,
    get_subject_report_pdf,
)

__all__ = [
    # Exceptions
    "AuthorizationError",
    "StudentAccessDenied",
    "AdminOnlyError",
    "InvalidUserError",
    "ValidationError",
    # Authorization
    "AuthorizationService",
    "get_authorization_service",
    # Evaluator
    "Status",
    "ScoreSet",
    "StudentRecord",
    "EvaluatedStudent",
    "ClassStats",
    "ClassInsight",
    "Report",
    "evaluate",
    "evaluate_student",
    "compute_average",
    "compute_class_stats",
    "classify",
    "comment_for",
    "class_insight_for",
    "is_passing",
    "round_half_up",
    # Identity
    "get_user",
    "get_student_profile",
    "list_users",
    "create_user",
    # Subjects and rosters
    "list_subjects",
    "get_subject",
    "get_subject_roster",
    "load_roster",
    # Grades
    "save_grades",
    "clamp_score",
    "get_subject_grades",
    "get_student_grades",
    "get_my_grades",
    # Reporting
    "render_subject_report",
    "partition_by_pass",
    "get_subject_analysis",
    "get_subject_report_pdf",
]
