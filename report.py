# report.py
# Monthly statement PDF. Built-in fonts only, so every string here stays ASCII.
import io
from typing import Iterable

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from domain import ShiftRecord, ShiftSummary
from utils import format_currency, format_hours

COLUMNS = ["Date", "Start", "End", "Break (min)", "Hours", "Wage", "Pay"]
BORDER = colors.HexColor("#C7CCD6")


def statement_rows(records: Iterable[ShiftRecord]) -> list[list[str]]:
    """Table rows, oldest shift first."""
    ordered = sorted(records, key=lambda r: (r.work_date, r.start_time))
    return [
        [
            r.work_date.isoformat(),
            r.start_time.strftime("%H:%M"),
            r.end_time.strftime("%H:%M"),
            str(int(r.break_minutes)),
            f"{r.worked_hours:.2f}",
            format_currency(r.hourly_wage, " KRW"),
            format_currency(r.daily_pay, " KRW"),
        ]
        for r in ordered
    ]


def _draw_page_border(canvas, doc_obj):
    canvas.saveState()
    w, h = doc_obj.pagesize
    canvas.setStrokeColor(BORDER)
    canvas.setLineWidth(0.8)
    margin = 12
    canvas.rect(margin, margin, w - 2 * margin, h - 2 * margin)
    canvas.restoreState()


def monthly_statement_pdf(year: int, month: int, records: Iterable[ShiftRecord], summary: ShiftSummary) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=landscape(A4), topMargin=24, bottomMargin=24, leftMargin=24, rightMargin=24)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(name="TitleCentered", parent=styles["Title"], alignment=TA_CENTER)
    summary_style = ParagraphStyle(
        name="Summary", parent=styles["Normal"], alignment=TA_CENTER,
        fontSize=11, leading=13, spaceBefore=4, spaceAfter=2,
    )

    story = [Paragraph(f"Work statement {year:04d}-{month:02d}", title_style), Spacer(1, 8)]
    rows = statement_rows(records)
    if not rows:
        story.append(Paragraph("No shifts recorded.", styles["Normal"]))
    else:
        table = Table([COLUMNS] + rows, repeatRows=1, hAlign="CENTER")
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F5F5F7")),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#E0E0E0")),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        story.append(table)

    line = (
        f"Days worked: {summary.count} | Hours: {format_hours(summary.total_hours, ' h')} | "
        f"Expected pay: {format_currency(summary.total_pay, ' KRW')}"
    )
    box = Table([[Paragraph(line, summary_style)]], colWidths=[min(520, 0.65 * doc.width)], hAlign="CENTER")
    box.setStyle(TableStyle([
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("BOX", (0, 0), (-1, -1), 0.6, BORDER),
        ("TOPPADDING", (0, 0), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
    ]))
    story += [Spacer(1, 12), box]

    doc.build(story, onFirstPage=_draw_page_border, onLaterPages=_draw_page_border)
    return buf.getvalue()
