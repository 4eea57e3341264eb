"""
Event Export Service
Exports the calendar's events to Excel, CSV or Word.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from io import BytesIO
from typing import Any, Dict, List, Optional, Sequence
import logging

import pandas as pd
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt
from openpyxl.utils import get_column_letter

from auntrack_api.core.exceptions import ValidationException

logger = logging.getLogger("EVENT_EXPORT_SERVICE")

SHEET_NAME = "Calendar Events"

# column header -> spreadsheet width in characters
EXPORT_COLUMNS = {
    "Event Title": 20,
    "Category": 15,
    "Start Date": 12,
    "End Date": 12,
    "Description": 30,
    "Color": 10,
}

MEDIA_TYPES = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def sanitize_for_xml(text: str) -> str:
    """Drop control characters Word and Excel refuse to store."""
    if not text:
        return ""
    return re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]', '', text)


@dataclass
class ExportFile:
    filename: str
    media_type: str
    content: bytes
    total_events: int


class EventExportService:
    """
    Builds export files from events.

    Events may be ORM rows or dicts exposing ``title``, ``category_name``,
    ``start_date``, ``end_date``, ``description`` and ``color``.
    """

    def export(self, events: Sequence[Any], export_format: str, today: Optional[date] = None) -> ExportFile:
        """
        Export ``events`` in ``export_format`` (xlsx, csv or docx).

        Raises:
            ValidationException: Unknown format
        """
        export_format = (export_format or "").lower()
        if export_format not in MEDIA_TYPES:
            raise ValidationException(
                f"Unsupported export format: {export_format or '(empty)'}",
                {"supported": sorted(MEDIA_TYPES)},
            )

        today = today or datetime.now(timezone.utc).date()
        rows = self.build_rows(events)
        logger.info(f"Exporting {len(rows)} events as {export_format}")

        if export_format == "xlsx":
            content = self.to_excel(rows)
        elif export_format == "csv":
            content = self.to_csv(rows)
        else:
            content = self.to_word(rows)

        return ExportFile(
            filename=f"calendar_events_{today.isoformat()}.{export_format}",
            media_type=MEDIA_TYPES[export_format],
            content=content,
            total_events=len(rows),
        )

    def build_rows(self, events: Sequence[Any]) -> List[Dict[str, str]]:
        return [
            {
                "Event Title": sanitize_for_xml(_field(event, "title") or ""),
                "Category": sanitize_for_xml(_field(event, "category_name") or ""),
                "Start Date": _format_date(_field(event, "start_date")),
                "End Date": _format_date(_field(event, "end_date")),
                "Description": sanitize_for_xml(_field(event, "description") or ""),
                "Color": _field(event, "color") or "",
            }
            for event in events
        ]

    def _frame(self, rows: List[Dict[str, str]]) -> pd.DataFrame:
        return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))

    def to_excel(self, rows: List[Dict[str, str]]) -> bytes:
        buffer = BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            self._frame(rows).to_excel(writer, sheet_name=SHEET_NAME, index=False)
            worksheet = writer.sheets[SHEET_NAME]
            for idx, width in enumerate(EXPORT_COLUMNS.values(), start=1):
                worksheet.column_dimensions[get_column_letter(idx)].width = width
        return buffer.getvalue()

    def to_csv(self, rows: List[Dict[str, str]]) -> bytes:
        return self._frame(rows).to_csv(index=False).encode("utf-8")

    def to_word(self, rows: List[Dict[str, str]]) -> bytes:
        doc = Document()

        title = doc.add_heading('Calendar Events Export', 0)
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER

        doc.add_paragraph(f"Export Date: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}")
        doc.add_paragraph(f"Total Events: {len(rows)}")
        doc.add_paragraph("")

        headers = list(EXPORT_COLUMNS)
        table = doc.add_table(rows=1, cols=len(headers))
        table.style = 'Table Grid'
        for cell, header in zip(table.rows[0].cells, headers):
            cell.text = header
            for run in cell.paragraphs[0].runs:
                run.font.bold = True
                run.font.size = Pt(10)

        for row in rows:
            cells = table.add_row().cells
            for cell, header in zip(cells, headers):
                cell.text = row[header]

        buffer = BytesIO()
        doc.save(buffer)
        return buffer.getvalue()


def _field(event: Any, name: str) -> Any:
    if isinstance(event, dict):
        return event.get(name)
    return getattr(event, name, None)


def _format_date(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
