"""
Grade evaluator for the Academic Records system.

Turns the four term scores of every student in a subject into an average,
a status, and a comment, then aggregates the class statistics and a
class-level insight.

The evaluator is pure: it performs no I/O, touches no database and keeps no
state between calls. Callers load the roster first and pass it in.

Missing or non-numeric scores are read as 0 when a ScoreSet is built. This
lowers the average of a student whose grades are incomplete, and it is kept
that way on purpose because changing it would change grading outcomes.
"""
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


TERMS = ("prelim", "midterm", "semifinal", "final")

PASSING_AVERAGE = 75.0
GOOD_AVERAGE = 80.0
EXCELLENT_AVERAGE = 90.0

NO_STUDENTS_MESSAGE = "No students to analyze"


class Status(str, Enum):
    """Classification of a student's average, from lowest to highest."""
    FAILED = "Failed"
    PASSED = "Passed"
    GOOD = "Good"
    EXCELLENT = "Excellent"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = (Status.FAILED, Status.PASSED, Status.GOOD, Status.EXCELLENT)

STUDENT_COMMENTS = {
    Status.EXCELLENT: "Outstanding performance! Keep up the great work.",
    Status.GOOD: "Good performance. With a bit more effort, you can excel!",
    Status.PASSED: "You passed. Focus on improving weaker areas.",
    Status.FAILED: "Needs improvement. Consider extra practice and guidance.",
}

CLASS_INSIGHTS = {
    Status.EXCELLENT: "The class performed exceptionally well overall!",
    Status.GOOD: "The class performance is good, with room for improvement.",
    Status.PASSED: "The class passed, but some students may need extra attention.",
    Status.FAILED: "Class performance is below average; additional support recommended.",
}


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round like a two-decimal display would: halves go up, on the exact
    binary value of the float.
    """
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Large enough for every finite float plus the decimal places.
        ctx.prec = 400
        return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def coerce_score(value: Any) -> float:
    """Read a term score, treating anything that is not a finite number as 0."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


# ============== Records ==============

class ScoreSet(BaseModel):
    """The four term scores of one student in one subject."""
    model_config = ConfigDict(frozen=True)

    prelim: float = 0.0
    midterm: float = 0.0
    semifinal: float = 0.0
    final: float = 0.0

    @field_validator(*TERMS, mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float:
        return coerce_score(value)

    def total(self) -> float:
        return self.prelim + self.midterm + self.semifinal + self.final


class StudentRecord(BaseModel):
    """
    A student with their scores for one subject.

    Accepts either a nested ``scores`` mapping or the flat row shape
    ``{"student_id", "name", "prelim", "midterm", "semifinal", "final"}``.
    """
    model_config = ConfigDict(frozen=True)

    student_id: Any = None
    student_code: Optional[Union[int, str]] = None
    name: str = ""
    grade_id: Optional[int] = None
    scores: ScoreSet = Field(default_factory=ScoreSet)

    @model_validator(mode="before")
    @classmethod
    def _nest_scores(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "scores" not in data:
            data = dict(data)
            data["scores"] = {term: data.pop(term) for term in TERMS if term in data}
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return "" if value is None else str(value)


class EvaluatedStudent(StudentRecord):
    """A StudentRecord with its average, status and comment."""
    average: float
    status: Status
    comment: str

    def to_dict(self) -> dict:
        """Flat dictionary for API responses and reports."""
        return {
            "student_id": self.student_id,
            "student_code": self.student_code,
            "name": self.name,
            "grade_id": self.grade_id,
            "prelim": self.scores.prelim,
            "midterm": self.scores.midterm,
            "semifinal": self.scores.semifinal,
            "final": self.scores.final,
            "average": self.average,
            "status": self.status.value,
            "comment": self.comment,
        }


class ClassStats(BaseModel):
    """Aggregate statistics over the evaluated students of one subject."""
    model_config = ConfigDict(frozen=True)

    total: int
    class_avg: float
    highest: float
    lowest: float
    passed: int
    failed: int


class ClassInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    class_comment: str


class Report(BaseModel):
    """
    Result of evaluating one subject's roster.

    ``stats`` and ``insights`` are None when there was nobody to evaluate.
    """
    model_config = ConfigDict(frozen=True)

    subject_id: Any = None
    stats: Optional[ClassStats] = None
    students: List[EvaluatedStudent] = Field(default_factory=list)
    insights: Optional[ClassInsight] = None
    message: str

    @property
    def is_empty(self) -> bool:
        return self.stats is None

    def to_dict(self) -> dict:
        return {
            "subject_id": self.subject_id,
            "stats": self.stats.model_dump() if self.stats else None,
            "students": [s.to_dict() for s in self.students],
            "insights": self.insights.model_dump() if self.insights else None,
            "message": self.message,
        }


# ============== Rules ==============

def compute_average(scores: ScoreSet) -> float:
    """Mean of the four term scores, rounded to 2 decimals."""
    return round_half_up(scores.total() / len(TERMS))


def classify(average: float) -> Status:
    """Map an average onto its status band. Lower bounds are inclusive."""
    if average >= EXCELLENT_AVERAGE:
        return Status.EXCELLENT
    if average >= GOOD_AVERAGE:
        return Status.GOOD
    if average >= PASSING_AVERAGE:
        return Status.PASSED
    return Status.FAILED


def is_passing(average: float) -> bool:
    return average >= PASSING_AVERAGE


def comment_for(status: Status) -> str:
    return STUDENT_COMMENTS[status]


def class_insight_for(class_avg: float) -> str:
    return CLASS_INSIGHTS[classify(class_avg)]


def evaluate_student(record: StudentRecord) -> EvaluatedStudent:
    average = compute_average(record.scores)
    status = classify(average)
    return EvaluatedStudent(
        student_id=record.student_id,
        student_code=record.student_code,
        name=record.name,
        grade_id=record.grade_id,
        scores=record.scores,
        average=average,
        status=status,
        comment=comment_for(status),
    )


def compute_class_stats(students: List[EvaluatedStudent]) -> Optional[ClassStats]:
    """
    Aggregate the per-student averages.

    Pass/fail counts use only the 75 boundary, so ``failed`` matches the
    number of Failed statuses and ``passed`` covers the three other bands.

    Returns:
        ClassStats, or None for an empty list
    """
    if not students:
        return None

    averages = [s.average for s in students]
    passed = sum(1 for a in averages if is_passing(a))

    return ClassStats(
        total=len(students),
        class_avg=round_half_up(sum(averages) / len(averages)),
        highest=round_half_up(max(averages)),
        lowest=round_half_up(min(averages)),
        passed=passed,
        failed=len(averages) - passed,
    )


def _as_record(student: Any) -> StudentRecord:
    if isinstance(student, StudentRecord):
        return student
    return StudentRecord.model_validate(student)


def evaluate(subject_id: Any, students: Optional[Iterable[Any]]) -> Report:
    """
    Evaluate a subject's roster.

    Args:
        subject_id: Passed through to the report unchanged
        students: StudentRecord objects or row mappings, in display order

    Returns:
        Report with one EvaluatedStudent per input, in input order, the
        class statistics and the class insight. An empty roster gives a
        report without statistics and the "No students to analyze" message.

    Raises:
        pydantic.ValidationError: an entry is neither a StudentRecord nor a mapping
    """
    records = [_as_record(s) for s in (students or [])]

    if not records:
        return Report(subject_id=subject_id, message=NO_STUDENTS_MESSAGE)

    evaluated = [evaluate_student(r) for r in records]
    stats = compute_class_stats(evaluated)

    return Report(
        subject_id=subject_id,
        stats=stats,
        students=evaluated,
        insights=ClassInsight(class_comment=class_insight_for(stats.class_avg)),
        message=f"Analysis complete for {len(evaluated)} students.",
    )
