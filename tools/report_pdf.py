"""
PDF rendering of subject performance reports.

Layout: header with the subject, the student grades table, the class
summary with its insight, then the passed and failed students as bullet
lists. Passed/failed here is the plain 75 boundary, not the four statuses.
"""
import io
from typing import Any, List, Optional, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from config import settings
from .evaluator import EvaluatedStudent, Report, is_passing

GRADE_COLUMNS = ["Student ID", "Name", "Prelim", "Midterm", "Semifinal", "Final", "Average", "Comment"]
GRADE_COL_WIDTHS = [58, 89, 44, 46, 52, 40, 46, 160]


def partition_by_pass(
    students: List[EvaluatedStudent]
) -> Tuple[List[EvaluatedStudent], List[EvaluatedStudent]]:
    """Split students into (passed, failed) on the 75 average boundary, keeping order."""
    passed = [s for s in students if is_passing(s.average)]
    failed = [s for s in students if not is_passing(s.average)]
    return passed, failed


def _fmt_score(value: Any) -> str:
    if value is None:
        return "-"
    return f"{value:g}" if isinstance(value, float) else str(value)


def _build_styles() -> dict:
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            name="ReportTitle",
            parent=styles["Title"],
            fontSize=18,
            textColor=colors.HexColor("#4f46e5"),
            spaceAfter=4,
        ),
        "subtitle": ParagraphStyle(
            name="ReportSubtitle",
            parent=styles["Normal"],
            fontSize=11,
            alignment=1,
            textColor=colors.HexColor("#6b7280"),
            spaceAfter=14,
        ),
        "section": ParagraphStyle(
            name="SectionHeading",
            parent=styles["Heading2"],
            fontSize=12,
            spaceBefore=8,
            spaceAfter=6,
        ),
        "header_cell": ParagraphStyle(
            name="TableHeaderCell",
            parent=styles["Normal"],
            fontName="Helvetica-Bold",
            fontSize=8.5,
            leading=10,
        ),
        "body_cell": ParagraphStyle(
            name="TableBodyCell",
            parent=styles["Normal"],
            fontSize=8,
            leading=10,
        ),
        "comment_cell": ParagraphStyle(
            name="TableCommentCell",
            parent=styles["Normal"],
            fontName="Helvetica-Oblique",
            fontSize=8,
            leading=10,
        ),
        "body": styles["Normal"],
        "comment": ParagraphStyle(
            name="Comment",
            parent=styles["Normal"],
            fontName="Helvetica-Oblique",
            spaceBefore=4,
        ),
        "bullet": ParagraphStyle(
            name="BulletItem",
            parent=styles["Normal"],
            leftIndent=10,
            spaceAfter=2,
        ),
    }


def _grades_table(students: List[EvaluatedStudent], styles: dict) -> Table:
    rows = [[Paragraph(escape(c), styles["header_cell"]) for c in GRADE_COLUMNS]]
    for s in students:
        cells = [
            s.student_code if s.student_code is not None else s.student_id,
            s.name,
            _fmt_score(s.scores.prelim),
            _fmt_score(s.scores.midterm),
            _fmt_score(s.scores.semifinal),
            _fmt_score(s.scores.final),
            f"{s.average:.2f}",
        ]
        row = [Paragraph(escape("" if c is None else str(c)), styles["body_cell"]) for c in cells]
        row.append(Paragraph(escape(s.comment), styles["comment_cell"]))
        rows.append(row)

    table = Table(rows, colWidths=GRADE_COL_WIDTHS, repeatRows=1, hAlign="LEFT")
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#e0e7ff")),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("LINEBELOW", (0, 0), (-1, -1), 0.5, colors.HexColor("#d1d5db")),
                ("LEFTPADDING", (0, 0), (-1, -1), 4),
                ("RIGHTPADDING", (0, 0), (-1, -1), 4),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return table


def _summary_table(report: Report, styles: dict) -> Table:
    stats = report.stats
    lines = [
        Paragraph("<b>Class Summary</b>", styles["body"]),
        Paragraph(f"Total Students: {stats.total}", styles["body"]),
        Paragraph(f"Passed: {stats.passed}", styles["body"]),
        Paragraph(f"Failed: {stats.failed}", styles["body"]),
        Paragraph(f"Class Average: {stats.class_avg:.2f}", styles["body"]),
        Paragraph(f"Highest: {stats.highest:.2f}", styles["body"]),
        Paragraph(f"Lowest: {stats.lowest:.2f}", styles["body"]),
    ]
    if report.insights and report.insights.class_comment:
        lines.append(Paragraph(f"Insight: {escape(report.insights.class_comment)}", styles["comment"]))

    table = Table([[line] for line in lines], colWidths=[535], hAlign="LEFT")
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f3f4f6")),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
                ("TOPPADDING", (0, 0), (-1, -1), 1),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
            ]
        )
    )
    return table


def _student_list(title: str, students: List[EvaluatedStudent], styles: dict) -> List[Any]:
    elements = [Paragraph(title, styles["section"])]
    if not students:
        elements.append(Paragraph("None", styles["body"]))
        return elements
    for s in students:
        text = f"{escape(s.name)} ({s.average:.2f}) - {escape(s.comment)}"
        elements.append(Paragraph(text, styles["bullet"], bulletText="•"))
    return elements


def render_subject_report(
    report: Report,
    subject_name: Optional[str] = None,
    subject_code: Optional[str] = None,
    title: Optional[str] = None,
) -> bytes:
    """
    Render an evaluated subject as an A4 PDF document.

    Args:
        report: Output of ``evaluate``
        subject_name: Display name, "Unknown Subject" when missing
        subject_code: Subject code, "N/A" when missing
        title: Document title, ``settings.report_title`` by default

    Returns:
        The PDF file content
    """
    styles = _build_styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=30,
        rightMargin=30,
        topMargin=30,
        bottomMargin=30,
        title=title or settings.report_title,
    )

    name = subject_name or "Unknown Subject"
    code = subject_code or "N/A"

    elements: List[Any] = [
        Paragraph(escape(title or settings.report_title), styles["title"]),
        Paragraph(f"Subject: {escape(name)} ({escape(code)})", styles["subtitle"]),
    ]

    if report.is_empty:
        elements.append(Paragraph(escape(report.message), styles["body"]))
    else:
        passed, failed = partition_by_pass(report.students)

        elements.append(Paragraph("Student Grades", styles["section"]))
        elements.append(_grades_table(report.students, styles))
        elements.append(Spacer(1, 12))
        elements.append(_summary_table(report, styles))
        elements.append(Spacer(1, 6))
        elements.extend(_student_list("Passed Students", passed, styles))
        elements.extend(_student_list("Failed Students", failed, styles))

    doc.build(elements)
    pdf_value = buffer.getvalue()
    buffer.close()
    return pdf_value
