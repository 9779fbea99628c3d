"""
Builds a printable .docx service schedule from a generated YearCalendar.

Layout:
  - Title and generation summary
  - Key dates table (observance, date)
  - Services table (date, day, occasion, season), season cell shaded in
    the liturgical color
  - Validation notes, only when the calendar has errors or warnings
"""

from docx import Document
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls
from docx.shared import RGBColor
from docx.table import Table, _Cell

from liturgy.config import CROSS_SYMBOL
from liturgy.document.styles import create_document
from liturgy.schedule.generator import YearCalendar


def _is_dark(hex_color: str) -> bool:
    """True when white text reads better than black on this background."""
    red, green, blue = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    # ITU-R BT.601 luma
    return (299 * red + 587 * green + 114 * blue) / 1000 < 128


def _shade_cell(cell: _Cell, hex_color: str):
    """Fill a table cell with a solid background color."""
    fill = hex_color.lstrip("#").upper()
    shading = parse_xml(f'<w:shd {nsdecls("w")} w:val="clear" w:color="auto" w:fill="{fill}"/>')
    cell._tc.get_or_add_tcPr().append(shading)
    if _is_dark(hex_color):
        for paragraph in cell.paragraphs:
            for run in paragraph.runs:
                run.font.color.rgb = RGBColor(0xFF, 0xFF, 0xFF)


def _set_cell_text(cell: _Cell, text: str, style: str = "Table Text"):
    paragraph = cell.paragraphs[0]
    paragraph.style = style
    paragraph.add_run(text)


def _add_table(doc: Document, headers: list[str]) -> Table:
    table = doc.add_table(rows=1, cols=len(headers))
    table.style = "Table Grid"
    for cell, header in zip(table.rows[0].cells, headers):
        _set_cell_text(cell, header, style="Table Header")
    return table


class ScheduleBuilder:
    """Builds a schedule .docx for one generated year.

    Usage:
        calendar = generate_services_for_year(2025)
        doc = ScheduleBuilder(calendar).build()
        doc.save("output/2025 - Service Calendar.docx")
    """

    SERVICE_HEADERS = ["Date", "Day", "Occasion", "Season"]

    def __init__(self, calendar: YearCalendar, title: str = "Service Calendar"):
        self.calendar = calendar
        self.title = title

    def build(self) -> Document:
        doc = create_document()
        self._add_title(doc)
        self._add_key_dates(doc)
        self._add_services(doc)
        self._add_validation_notes(doc)
        return doc

    def _add_title(self, doc: Document):
        doc.add_paragraph(f"{CROSS_SYMBOL} {self.title} {self.calendar.year}", style="Heading")
        meta = self.calendar.metadata
        doc.add_paragraph(
            f"{meta.total_services} services: {meta.regular_sundays} Sundays and "
            f"{meta.special_weekdays} special weekday services.",
            style="Body",
        )
        doc.add_paragraph(
            f"Generated {self.calendar.generated_at:%B %-d, %Y} "
            f"(algorithm {self.calendar.algorithm_version}).",
            style="Body",
        )

    def _add_key_dates(self, doc: Document):
        if not self.calendar.key_dates:
            return
        doc.add_paragraph("Key Dates", style="Heading 2")
        table = _add_table(doc, ["Observance", "Date"])
        for name, day in sorted(self.calendar.key_dates.items(), key=lambda item: item[1]):
            row = table.add_row().cells
            _set_cell_text(row[0], name.replace("_", " ").title())
            _set_cell_text(row[1], day.strftime("%A, %B %-d"))

    def _add_services(self, doc: Document):
        doc.add_paragraph("Services", style="Heading 2")
        table = _add_table(doc, self.SERVICE_HEADERS)
        for service in self.calendar.services:
            row = table.add_row().cells
            _set_cell_text(row[0], service.date_string)
            _set_cell_text(row[1], service.day_of_week)
            _set_cell_text(row[2], service.special_day_name or "")
            _set_cell_text(row[3], service.season_name)
            _shade_cell(row[3], service.season_color)

    def _add_validation_notes(self, doc: Document):
        notes = ([f"Error: {e}" for e in self.calendar.validation_errors]
                 + [f"Warning: {w}" for w in self.calendar.validation_warnings])
        if not notes:
            return
        doc.add_paragraph("Validation Notes", style="Heading 2")
        for note in notes:
            doc.add_paragraph(note, style="Body - Note")
