"""
Paragraph styles and page setup for the printed service schedule.

Letter-size portrait pages. Two font families:
  - Adobe Garamond Pro: body text and notes
  - Gill Sans variants: headings and table text
"""

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from liturgy.config import (
    FONT_BODY,
    FONT_HEADING,
    FONT_HEADING2,
    FONT_TABLE,
    MARGIN_INCHES,
    PAGE_HEIGHT_INCHES,
    PAGE_WIDTH_INCHES,
)


def create_document() -> Document:
    """Create a new Document with all schedule styles and page setup."""
    doc = Document()
    _setup_page(doc)
    _create_styles(doc)
    return doc


def _setup_page(doc: Document):
    section = doc.sections[0]
    section.page_width = Inches(PAGE_WIDTH_INCHES)
    section.page_height = Inches(PAGE_HEIGHT_INCHES)
    section.left_margin = Inches(MARGIN_INCHES)
    section.right_margin = Inches(MARGIN_INCHES)
    section.top_margin = Inches(MARGIN_INCHES)
    section.bottom_margin = Inches(MARGIN_INCHES)


# ---------------------------------------------------------------------------
# Style definitions
# ---------------------------------------------------------------------------
# Each entry: (style_name, font_name, size_pt, bold, italic, alignment,
#               space_before_pt, space_after_pt)

_STYLE_DEFS = [
    # Document title: "Service Calendar 2025"
    ("Heading", FONT_HEADING, 18, False, False,
     WD_ALIGN_PARAGRAPH.CENTER, 0, 6),

    # Section headers: "Key Dates", "Services", "Validation Notes"
    ("Heading 2", FONT_HEADING2, 13, False, False,
     WD_ALIGN_PARAGRAPH.LEFT, 12, 4),

    # Body text under the title
    ("Body", FONT_BODY, 11, False, False,
     WD_ALIGN_PARAGRAPH.LEFT, 0, 3),

    # Validation errors and warnings
    ("Body - Note", FONT_BODY, 10, False, True,
     WD_ALIGN_PARAGRAPH.LEFT, 0, 2),

    # Table cell text
    ("Table Text", FONT_TABLE, 9, False, False,
     WD_ALIGN_PARAGRAPH.LEFT, 0, 0),

    # Table header row
    ("Table Header", FONT_TABLE, 9, True, False,
     WD_ALIGN_PARAGRAPH.LEFT, 0, 0),
]


def _create_styles(doc: Document):
    """Register all custom paragraph styles in the document."""
    for (name, font_name, size_pt, bold, italic, alignment,
         sp_before_pt, sp_after_pt) in _STYLE_DEFS:

        # Built-in names ("Heading 2") are modified in place
        try:
            style = doc.styles[name]
        except KeyError:
            style = doc.styles.add_style(name, 1)  # 1 = WD_STYLE_TYPE.PARAGRAPH

        style.font.name = font_name
        style.font.size = Pt(size_pt)
        style.font.bold = bold
        style.font.italic = italic
        style.font.color.rgb = RGBColor(0, 0, 0)  # Explicit black; overrides theme

        # Built-in heading styles are "linked" (paragraph + character).
        # Remove the link so they behave as pure paragraph styles.
        link_elem = style.element.find(qn("w:link"))
        if link_elem is not None:
            style.element.remove(link_elem)

        pf = style.paragraph_format
        pf.alignment = alignment
        pf.space_before = Pt(sp_before_pt)
        pf.space_after = Pt(sp_after_pt)

        if name.startswith("Heading"):
            pf.keep_with_next = True
