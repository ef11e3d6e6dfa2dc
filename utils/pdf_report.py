"""
PDF report for comparison results (PyMuPDF)

Text is set with embedded Noto Sans (from pymupdf-fonts) so accented and
non-Latin names survive; characters Noto Sans lacks (CJK) fall back to
MuPDF's built-in CJK font. Lines are wrapped by measured width.
"""
from datetime import date

import fitz  # PyMuPDF

from reconciliation.models import DISCREPANCY_LABELS

PAGE_WIDTH = 595   # A4 in points
PAGE_HEIGHT = 842
MARGIN = 50
TEXT_WIDTH = PAGE_WIDTH - 2 * MARGIN
BODY_SIZE = 9
HEADING_SIZE = 11
TITLE_SIZE = 16
FOOTER_SIZE = 8
LINE_SPACING = 1.4

REGULAR_FONT = "notos"
BOLD_FONT = "notosbo"
FALLBACK_FONT = "cjk"

SEVERITY_COLORS = {
    'critical': (0.75, 0.1, 0.1),
    'warning': (0.8, 0.5, 0.0),
    'minor': (0.2, 0.45, 0.2),
}
TEXT_COLOR = (0.1, 0.1, 0.1)


def _record_lines(discrepancy) -> list:
    lines = []
    agency = getattr(discrepancy, 'agency', None)
    mapping = getattr(discrepancy, 'mapping', None)
    term = getattr(discrepancy, 'term', None)

    if agency:
        lines.append(
            f"OneCX: {agency.onecx_agency_name} | SG Agency: {agency.sg_agency_name} | "
            f"Instance ID: {agency.sg_instance_id} | UUID: {agency.onecx_uuid} | "
            f"Department: {agency.department_name}"
        )
    if mapping:
        lines.append(
            f"Excel: {mapping.onecx_name} | Instance Name: {mapping.sg_instance_name} | "
            f"Instance ID: {mapping.instance_id} | UUID: {mapping.uuid} | "
            f"SAP Instance ID: {mapping.sap_instance_id}"
        )
    if term:
        lines.append(f"GraphQL: {term.label} | UUID: {term.uuid}")
    return lines


class _Typesetter:
    """Splits text into per-font runs, measures it and wraps it to the text width."""

    def __init__(self):
        self.fonts = {False: fitz.Font(REGULAR_FONT), True: fitz.Font(BOLD_FONT)}
        self.fallback = fitz.Font(FALLBACK_FONT)

    def runs(self, text: str, bold: bool = False) -> list:
        primary = self.fonts[bold]
        runs = []
        for char in text:
            code = ord(char)
            font = primary
            if not primary.has_glyph(code) and self.fallback.has_glyph(code):
                font = self.fallback
            if runs and runs[-1][0] is font:
                runs[-1][1] += char
            else:
                runs.append([font, char])
        return runs

    def width(self, text: str, fontsize: float, bold: bool = False) -> float:
        return sum(font.text_length(chunk, fontsize=fontsize) for font, chunk in self.runs(text, bold))

    def wrap(self, text: str, fontsize: float, bold: bool = False) -> list:
        lines = []
        line = ""
        for word in text.split():
            candidate = f"{line} {word}" if line else word
            if self.width(candidate, fontsize, bold) <= TEXT_WIDTH:
                line = candidate
                continue

            if line:
                lines.append(line)
                line = ""
            if self.width(word, fontsize, bold) <= TEXT_WIDTH:
                line = word
                continue

            # Word wider than a whole line: break between characters
            for char in word:
                if line and self.width(line + char, fontsize, bold) > TEXT_WIDTH:
                    lines.append(line)
                    line = char
                else:
                    line += char

        if line:
            lines.append(line)
        return lines or [""]

    def draw(self, page, point, text: str, fontsize: float, bold: bool = False, color=TEXT_COLOR):
        writer = fitz.TextWriter(page.rect, color=color)
        position = fitz.Point(point)
        for font, chunk in self.runs(text, bold):
            _, position = writer.append(position, chunk, font=font, fontsize=fontsize)
        writer.write_text(page)


class _PageWriter:
    """Writes lines top to bottom, starting a new page when the current one is full."""

    def __init__(self, doc, typesetter: _Typesetter):
        self.doc = doc
        self.typesetter = typesetter
        self.page = None
        self.y = PAGE_HEIGHT

    def _new_page(self):
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    def write(self, text: str, fontsize: float = BODY_SIZE, bold: bool = False, color=TEXT_COLOR):
        line_height = fontsize * LINE_SPACING
        for line in self.typesetter.wrap(text, fontsize, bold):
            if self.page is None or self.y + line_height > PAGE_HEIGHT - MARGIN:
                self._new_page()
            self.y += line_height
            self.typesetter.draw(self.page, (MARGIN, self.y), line, fontsize, bold, color)

    def gap(self, points: float = 6):
        self.y += points


def discrepancies_to_pdf(discrepancies, title: str = "Data Source Comparison Report") -> bytes:
    """
    Render discrepancies as a paginated A4 PDF.

    Args:
        discrepancies: Discrepancy list from a comparison run
        title: Report heading

    Returns:
        bytes: PDF file as bytes
    """
    doc = fitz.open()
    typesetter = _Typesetter()
    writer = _PageWriter(doc, typesetter)

    writer.write(title, fontsize=TITLE_SIZE, bold=True)
    writer.write(f"Generated {date.today().isoformat()} - {len(discrepancies)} discrepancies found")
    writer.gap(12)

    if not discrepancies:
        writer.write("No discrepancies found. All data sources are consistent with each other.")

    for discrepancy in discrepancies:
        severity = getattr(discrepancy, 'severity', None)
        heading = f"#{discrepancy.id}  {DISCREPANCY_LABELS[discrepancy.type]}"
        if severity:
            heading += f"  [{severity.value.upper()} {discrepancy.similarity_score:.0%}]"

        color = SEVERITY_COLORS.get(severity.value, TEXT_COLOR) if severity else TEXT_COLOR
        writer.write(heading, fontsize=HEADING_SIZE, bold=True, color=color)
        writer.write(discrepancy.description)
        writer.write(discrepancy.details)
        for line in _record_lines(discrepancy):
            writer.write(line)
        writer.gap()

    page_count = len(doc)
    for number, page in enumerate(doc, start=1):
        footer = f"Page {number} of {page_count}"
        x = PAGE_WIDTH - MARGIN - typesetter.width(footer, FOOTER_SIZE)
        typesetter.draw(page, (x, PAGE_HEIGHT - MARGIN / 2), footer, FOOTER_SIZE)

    pdf_bytes = doc.tobytes(garbage=3, deflate=True)
    doc.close()
    return pdf_bytes
