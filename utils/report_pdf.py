from typing import Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from config.constant import LANGUAGE_LABELS
from domain.models import AnalysisResult

REPORT_FILENAME = "Bugless-Report.pdf"


def score_band(score: int) -> str:
    if score >= 85:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"


_BAND_RGB = {"good": (34, 197, 94), "fair": (234, 179, 8), "poor": (239, 68, 68)}


def _latin1(text: str) -> str:
    # core fonts của FPDF chỉ hỗ trợ latin-1
    return (text or "").replace("\t", "    ").encode("latin-1", "replace").decode("latin-1")


def _paragraph(pdf: FPDF, text: str, h: float = 6) -> None:
    pdf.multi_cell(0, h, _latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def build_report_pdf(result: AnalysisResult, language: str, reviewed_at: Optional[str] = None) -> bytes:
    """Render the code quality report (score, issues, suggestions, corrected code) as PDF bytes."""
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 18)
    _paragraph(pdf, "Code Quality Report", h=10)
    pdf.set_font("Helvetica", "", 10)
    meta = f"Language: {LANGUAGE_LABELS.get(language, language)}"
    if reviewed_at:
        meta += f"    Reviewed: {reviewed_at}"
    _paragraph(pdf, meta)
    pdf.ln(2)

    pdf.set_font("Helvetica", "B", 14)
    pdf.set_text_color(*_BAND_RGB[score_band(result.score)])
    _paragraph(pdf, f"Overall Score: {result.score}/100", h=8)
    pdf.set_text_color(0, 0, 0)
    pdf.ln(2)

    pdf.set_font("Helvetica", "B", 13)
    _paragraph(pdf, "Identified Issues", h=8)
    pdf.set_font("Helvetica", "", 10)
    if not result.issues:
        _paragraph(pdf, "No issues found. Great job!")
    for issue in result.issues:
        line = f"line {issue.line}" if issue.line is not None else "general"
        _paragraph(pdf, f"[{issue.category}] ({line}) {issue.message}")
    pdf.ln(2)

    pdf.set_font("Helvetica", "B", 13)
    _paragraph(pdf, "Suggestions", h=8)
    pdf.set_font("Helvetica", "", 10)
    for suggestion in result.suggestions:
        _paragraph(pdf, f"- {suggestion}")
    pdf.ln(2)

    pdf.set_font("Helvetica", "B", 13)
    _paragraph(pdf, "Corrected Code", h=8)
    pdf.set_font("Courier", "", 8)
    _paragraph(pdf, result.corrected_code, h=4)

    return bytes(pdf.output())
