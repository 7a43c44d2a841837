"""
Pydantic schemas for API requests and responses.
"""
from typing import Optional, List, Any, Union
from pydantic import BaseModel, Field


# Request schemas
class GradeEntry(BaseModel):
    """Term scores of one student. Values are clamped into 0-100 on save."""
    student_id: int = Field(..., description="ID of the student record")
    prelim: Optional[float] = Field(None, description="Prelim score")
    midterm: Optional[float] = Field(None, description="Midterm score")
    semifinal: Optional[float] = Field(None, description="Semifinal score")
    final: Optional[float] = Field(None, description="Final score")


class SaveGradesRequest(BaseModel):
    """Request to save the grades of a subject."""
    admin_id: int = Field(..., description="ID of the administrator saving the grades")
    subject_id: int = Field(..., description="ID of the subject")
    entries: List[GradeEntry] = Field(..., description="Scores per student")


class RosterEntry(BaseModel):
    """
    A student row to evaluate. Scores are deliberately loose: anything
    that is not a number counts as 0.
    """
    student_id: Any = None
    name: Optional[str] = None
    prelim: Any = None
    midterm: Any = None
    semifinal: Any = None
    final: Any = None


class AnalyzeRequest(BaseModel):
    """Request to evaluate an ad-hoc roster."""
    subject_id: Optional[Union[int, str]] = Field(None, description="Passed through to the report")
    students: List[RosterEntry] = Field(default_factory=list)


# Response schemas
class UserResponse(BaseModel):
    """User information response."""
    id: int
    email: str
    name: str
    role: str


class SubjectResponse(BaseModel):
    """Subject information response."""
    id: int
    subject_code: str
    subject_name: str
    description: Optional[str]
    units: Optional[int]


class RosterResponse(BaseModel):
    """Roster of a subject."""
    subject: dict
    total_students: int
    students: List[dict]


class SaveGradesResponse(BaseModel):
    """Result of saving grades."""
    success: bool
    message: str
    inserted: int
    updated: int
    roster: List[dict]


class SubjectGradesResponse(BaseModel):
    """Stored grades of a subject."""
    subject: dict
    total_grades: int
    grades: List[dict]


class StudentGradesResponse(BaseModel):
    """Portal view of a student's grades."""
    student: dict
    total_subjects: int
    passed_count: int
    gpa: Optional[float]
    grades: List[dict]


class ReportResponse(BaseModel):
    """Evaluation report of a subject."""
    subject_id: Any
    stats: Optional[dict]
    students: List[dict]
    insights: Optional[dict]
    message: str


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str
    type: Optional[str] = None
