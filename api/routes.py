"""
API routes for the Academic Records system.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database import get_db
from tools import (
    get_user,
    list_users,
    list_subjects,
    get_subject,
    get_subject_roster,
    save_grades,
    get_subject_grades,
    get_student_grades,
    get_my_grades,
    evaluate,
    get_subject_analysis,
    get_subject_report_pdf,
    StudentAccessDenied,
    AdminOnlyError,
    ValidationError,
    InvalidUserError,
)
from .schemas import (
    SaveGradesRequest,
    AnalyzeRequest,
    UserResponse,
    SubjectResponse,
    RosterResponse,
    SaveGradesResponse,
    SubjectGradesResponse,
    StudentGradesResponse,
    ReportResponse,
)


# Router for user endpoints
users_router = APIRouter(prefix="/users", tags=["Users"])

# Router for subjects and rosters
subjects_router = APIRouter(prefix="/subjects", tags=["Subjects"])

# Router for grade entry and the student portal
grades_router = APIRouter(prefix="/grades", tags=["Grades"])

# Router for evaluation reports
reports_router = APIRouter(prefix="/reports", tags=["Reports"])


# ============== User Endpoints ==============

@users_router.get("/", response_model=list[UserResponse])
async def get_users_endpoint(role: str | None = None, db: Session = Depends(get_db)):
    """List users. Optional query param `role` filters by 'admin' or 'student'."""
    users = list_users(db=db, role=role)
    return [UserResponse(**u) for u in users]


@users_router.get("/{user_id}", response_model=UserResponse)
async def get_user_info(user_id: int, db: Session = Depends(get_db)):
    """Get user information."""
    try:
        user = get_user(db, user_id)
        return UserResponse(**user)
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")


# ============== Subject Endpoints ==============

@subjects_router.get("/", response_model=list[SubjectResponse])
async def get_subjects_endpoint(db: Session = Depends(get_db)):
    """Return all subjects ordered by name."""
    return [SubjectResponse(**s) for s in list_subjects(db)]


@subjects_router.get("/{subject_id}/roster", response_model=RosterResponse)
async def get_roster_endpoint(
    subject_id: int,
    requester_id: int,
    db: Session = Depends(get_db)
):
    """
    Get the enrolled students of a subject with their stored scores (Admin only).
    """
    try:
        roster = get_subject_roster(db=db, requester_id=requester_id, subject_id=subject_id)
        subject = get_subject(db, subject_id)
        return RosterResponse(
            subject=subject.to_dict(),
            total_students=len(roster),
            students=[r.model_dump() for r in roster],
        )
    except AdminOnlyError:
        raise HTTPException(status_code=403, detail="Only administrators can view rosters")
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


# ============== Grade Endpoints ==============

@grades_router.post("/save", response_model=SaveGradesResponse)
async def save_grades_endpoint(request: SaveGradesRequest, db: Session = Depends(get_db)):
    """
    Save the term scores of a subject (Admin only).

    Existing rows are updated, new ones inserted.
    """
    try:
        result = save_grades(
            db=db,
            admin_id=request.admin_id,
            subject_id=request.subject_id,
            entries=[e.model_dump() for e in request.entries],
        )
        return SaveGradesResponse(**result)
    except AdminOnlyError:
        raise HTTPException(status_code=403, detail="Only administrators can save grades")
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@grades_router.get("/subject/{subject_id}", response_model=SubjectGradesResponse)
async def get_subject_grades_endpoint(
    subject_id: int,
    requester_id: int,
    db: Session = Depends(get_db)
):
    """Get the stored grade rows of a subject (Admin only)."""
    try:
        return SubjectGradesResponse(
            **get_subject_grades(db=db, requester_id=requester_id, subject_id=subject_id)
        )
    except AdminOnlyError:
        raise HTTPException(status_code=403, detail="Only administrators can view subject grades")
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@grades_router.get("/me", response_model=StudentGradesResponse)
async def get_my_grades_endpoint(user_id: int, db: Session = Depends(get_db)):
    """Student portal: the signed-in student's own grades."""
    try:
        return StudentGradesResponse(**get_my_grades(db=db, user_id=user_id))
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=404, detail=e.message)


@grades_router.get("/student/{student_id}", response_model=StudentGradesResponse)
async def get_student_grades_endpoint(
    student_id: int,
    requester_id: int,
    db: Session = Depends(get_db)
):
    """
    Get a student's grades.

    Students can only get their own grades.
    Admins can get any student's grades.
    """
    try:
        return StudentGradesResponse(
            **get_student_grades(db=db, requester_id=requester_id, student_id=student_id)
        )
    except StudentAccessDenied:
        raise HTTPException(status_code=403, detail="Cannot access other students' grades")
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


# ============== Report Endpoints ==============

@reports_router.post("/analyze", response_model=ReportResponse)
async def analyze_endpoint(request: AnalyzeRequest):
    """
    Evaluate a roster sent in the request body.

    Nothing is read from or written to the database.
    """
    report = evaluate(request.subject_id, [s.model_dump() for s in request.students])
    return ReportResponse(**report.to_dict())


@reports_router.get("/subject/{subject_id}", response_model=ReportResponse)
async def get_subject_report_endpoint(
    subject_id: int,
    requester_id: int,
    db: Session = Depends(get_db)
):
    """Evaluate the stored grades of a subject (Admin only)."""
    try:
        report = get_subject_analysis(db=db, requester_id=requester_id, subject_id=subject_id)
        return ReportResponse(**report.to_dict())
    except AdminOnlyError:
        raise HTTPException(status_code=403, detail="Only administrators can view reports")
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@reports_router.get("/subject/{subject_id}/pdf")
async def get_subject_report_pdf_endpoint(
    subject_id: int,
    requester_id: int,
    db: Session = Depends(get_db)
):
    """Download the PDF report of a subject (Admin only)."""
    try:
        filename, content = get_subject_report_pdf(
            db=db, requester_id=requester_id, subject_id=subject_id
        )
    except AdminOnlyError:
        raise HTTPException(status_code=403, detail="Only administrators can download reports")
    except InvalidUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
