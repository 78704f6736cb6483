"""PDF rendering of the event report.

The report is a pure projection of already-fetched events: a first-page
header with contact details, one table row per event and a
"Page i of n" footer on every page.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from eventpanel.models.event import Event
from eventpanel.utils import settings
from eventpanel.utils.logger import logger

REPORT_FILENAME = "event-report.pdf"
COLUMNS = ["Title", "Date", "Time", "Location", "Category", "Status"]

_ACCENT = colors.Color(0, 102 / 255, 204 / 255)
_STRIPE = colors.Color(240 / 255, 240 / 255, 240 / 255)
_COL_WIDTHS = [44 * mm, 24 * mm, 16 * mm, 44 * mm, 28 * mm, 26 * mm]


class _NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output until the total page count is known."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._saved_pages: List[dict] = []

    def showPage(self) -> None:  # noqa: N802 - reportlab API
        self._saved_pages.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_pages)
        for number, state in enumerate(self._saved_pages, start=1):
            self.__dict__.update(state)
            self.setFont("Helvetica", 10)
            self.setFillGray(0.6)
            self.drawString(180 * mm, A4[1] - 290 * mm, f"Page {number} of {total}")
            super().showPage()
        super().save()


def _draw_header(pdf: canvas.Canvas, _doc) -> None:
    top = A4[1]
    logo = settings.REPORT_LOGO_PATH
    if logo and Path(logo).is_file():
        pdf.drawImage(logo, 160 * mm, top - 40 * mm, width=40 * mm, height=30 * mm,
                      preserveAspectRatio=True, mask="auto")
    pdf.setFont("Helvetica-Bold", 18)
    pdf.setFillGray(0)
    pdf.drawString(14 * mm, top - 25 * mm, "Event Report")
    pdf.setFont("Helvetica", 12)
    pdf.setFillGray(100 / 255)
    pdf.drawString(14 * mm, top - 35 * mm, f"Mobile: {settings.REPORT_MOBILE}")
    pdf.drawString(14 * mm, top - 42 * mm, f"Email: {settings.REPORT_EMAIL}")
    pdf.setStrokeColor(_ACCENT)
    pdf.line(14 * mm, top - 50 * mm, 196 * mm, top - 50 * mm)


def report_rows(events: Iterable[Event]) -> List[List[str]]:
    """Return the table body for `events`, one row of display strings each."""
    return [
        [
            event.title,
            event.date.isoformat(),
            event.time,
            event.location,
            event.category.value if event.category else "",
            event.status.value,
        ]
        for event in events
    ]


def render_event_report(events: Iterable[Event]) -> bytes:
    rows = report_rows(events)
    cell = getSampleStyleSheet()["BodyText"]
    cell.fontSize = 9
    cell.leading = 11

    body = [[Paragraph(escape(value), cell) if value else "" for value in row] for row in rows]
    if not body:
        body = [["No events found", "", "", "", "", ""]]

    table = Table([COLUMNS] + body, colWidths=_COL_WIDTHS, repeatRows=1)
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), _ACCENT),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, _STRIPE]),
        ("GRID", (0, 0), (-1, -1), 0.1 * mm, _ACCENT),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
    if not rows:
        style.append(("SPAN", (0, 1), (-1, 1)))
    table.setStyle(TableStyle(style))

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=20 * mm,
        bottomMargin=15 * mm,
        title="Event Report",
    )
    doc.build([Spacer(1, 40 * mm), table], onFirstPage=_draw_header, canvasmaker=_NumberedCanvas)
    logger.debug("Rendered event report", extra={"rows": len(rows)})
    return buffer.getvalue()


def save_event_report(events: Iterable[Event], path: Optional[Path] = None) -> Path:
    target = Path(path or REPORT_FILENAME)
    target.write_bytes(render_event_report(events))
    logger.info("Saved event report", extra={"path": str(target)})
    return target
