"""API module for the Academic Records system."""
from .routes import users_router, subjects_router, grades_router, reports_router
from .schemas import (
    GradeEntry,
    SaveGradesRequest,
    RosterEntry,
    AnalyzeRequest,
    UserResponse,
    SubjectResponse,
    RosterResponse,
    SaveGradesResponse,
    SubjectGradesResponse,
    StudentGradesResponse,
    ReportResponse,
    ErrorResponse,
)

__all__ = [
    "users_router",
    "subjects_router",
    "grades_router",
    "reports_router",
    "GradeEntry",
    "SaveGradesRequest",
    "RosterEntry",
    "AnalyzeRequest",
    "UserResponse",
    "SubjectResponse",
    "RosterResponse",
    "SaveGradesResponse",
    "SubjectGradesResponse",
    "StudentGradesResponse",
    "ReportResponse",
    "ErrorResponse",
]
