"""Generate the private equity proposal PDF using fpdf2."""

import io
import logging
from typing import NamedTuple

from PIL import Image

from config import (
    COMPANY_NAME, FOOTER_LINES,
    SIGNATORY_NAME, SIGNATORY_TITLE, SIGNATORY_CONTACT,
)
from models.projections import compute_projections
from models.proposal import ProposalRecord
from services.page_flow import (
    CONTENT_WIDTH, LEFT_MARGIN, PAGE_HEIGHT, PAGE_WIDTH,
    PageFlow, ProposalPDF, fit_within,
)
from services.proposal_content import DISCLAIMER, BulletList, Paragraph, Section, Table, build_sections
from services.table_renderer import render_table, table_height
from services.text_layout import (
    BLACK, BODY_FONT, BOLD_FONT, GRAY, FontSpec, LayoutError,
    block_height, draw_text_block, sanitize_text, wrap, wrap_lines,
)

logger = logging.getLogger(__name__)

# Colors
NAVY = (27, 42, 74)
GOLD = (200, 169, 81)
RED = (204, 0, 0)

HEADING_FONT = FontSpec("Helvetica", "B", 12)
DISCLAIMER_FONT = FontSpec("Helvetica", "I", 8)

LINE_SPACING = 14
HEADING_HEIGHT = 24
PARAGRAPH_GAP = 8
BULLET_GAP = 4
SECTION_GAP = 12
BULLET_INDENT = 15
SIGNATURE_BOX = (150, 50)


class ProposalGenerationError(Exception):
    """Fatal rendering or serialisation fault. No partial document is returned."""

    def __init__(self, kind: str, message: str):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class GeneratedDocument(NamedTuple):
    content: bytes
    page_count: int


def _load_image(data, role):
    """Decode optional image bytes once per build. Returns None when unusable."""
    if not data:
        logger.info(f"No {role} image supplied")
        return None
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (OSError, SyntaxError, ValueError) as e:
        logger.warning(f"Could not load {role} image: {e}")
        return None
    if img.mode not in ("RGB", "RGBA", "L"):
        img = img.convert("RGBA")
    return img


def _centered(pdf, y, text, font, color=BLACK):
    text = sanitize_text(text)
    pdf.use_font(font, color)
    pdf.draw_text((PAGE_WIDTH - pdf.string_width(text, font)) / 2, y, text)


def _cover_page(pdf, record, cover):
    """Full-bleed cover art, or a text-only title block when there is none."""
    pdf.add_page()
    if cover is not None:
        w, h = fit_within(cover.width, cover.height, PAGE_WIDTH, PAGE_HEIGHT)
        pdf.draw_image(cover, (PAGE_WIDTH - w) / 2, (PAGE_HEIGHT - h) / 2, w, h)
        return

    _centered(pdf, 700, COMPANY_NAME, FontSpec("Helvetica", "B", 28), NAVY)
    _centered(pdf, 660, "PRIVATE EQUITY PROPOSAL", FontSpec("Helvetica", "B", 18), GOLD)
    pdf.set_draw_color(*GOLD)
    pdf.set_line_width(1.5)
    pdf.draw_line(180, 640, PAGE_WIDTH - 180, 640)
    name_font = FontSpec("Helvetica", "", 14)
    y = 590
    for line in wrap(sanitize_text(f"Prepared for {record.client_name}"), CONTENT_WIDTH,
                     pdf.measure(name_font)):
        _centered(pdf, y, line, name_font, NAVY)
        y -= 20
    _centered(pdf, y, record.proposal_date, FontSpec("Helvetica", "", 12), NAVY)
    _centered(pdf, y - 50, "CONFIDENTIAL", FontSpec("Helvetica", "B", 11), RED)

    small = FontSpec("Helvetica", "", 9)
    y = 160
    for line in FOOTER_LINES:
        _centered(pdf, y, line, small, GRAY)
        y -= 13


def _client_block(flow, cursor, record):
    pdf = flow.pdf
    cursor = draw_text_block(pdf, cursor, f"Prepared for: {record.client_name}", LEFT_MARGIN,
                             CONTENT_WIDTH, FontSpec("Helvetica", "B", 12), line_spacing=20,
                             justified=False)

    pdf.use_font(FontSpec("Helvetica", "", 11))
    pdf.draw_text(LEFT_MARGIN, cursor.y, sanitize_text(f"Date: {record.proposal_date}"))
    cursor = cursor._replace(y=cursor.y - 18)

    measure = pdf.measure(BODY_FONT)
    for line in wrap_lines(sanitize_text(record.client_address), CONTENT_WIDTH / 2, measure):
        cursor = flow.reserve(cursor, LINE_SPACING)
        pdf.use_font(BODY_FONT)
        pdf.draw_text(LEFT_MARGIN, cursor.y, line)
        cursor = cursor._replace(y=cursor.y - LINE_SPACING)

    greeting = f"Dear {record.client_name},"
    height = block_height(pdf, greeting, CONTENT_WIDTH, BODY_FONT, LINE_SPACING)
    cursor = flow.reserve(cursor._replace(y=cursor.y - 16), height)
    cursor = draw_text_block(pdf, cursor, greeting, LEFT_MARGIN, CONTENT_WIDTH, BODY_FONT,
                             LINE_SPACING, justified=False)
    return cursor._replace(y=cursor.y - 16)


def _heading(pdf, cursor, title):
    """Section heading with a gold rule underneath."""
    pdf.use_font(HEADING_FONT, NAVY)
    pdf.draw_text(LEFT_MARGIN, cursor.y, sanitize_text(title))
    pdf.set_draw_color(*GOLD)
    pdf.set_line_width(0.8)
    pdf.draw_line(LEFT_MARGIN, cursor.y - 5, LEFT_MARGIN + CONTENT_WIDTH, cursor.y - 5)
    return cursor._replace(y=cursor.y - HEADING_HEIGHT)


def _bullet_text_width():
    return CONTENT_WIDTH - BULLET_INDENT


def _lead_height(pdf, block) -> float:
    """Height of the part of a block that must stay with its heading."""
    if isinstance(block, Paragraph):
        return block_height(pdf, block.text, CONTENT_WIDTH, BODY_FONT, LINE_SPACING)
    if isinstance(block, BulletList):
        if not block.items:
            return 0
        return block_height(pdf, block.items[0], _bullet_text_width(), BODY_FONT, LINE_SPACING)
    if isinstance(block, Table):
        return table_height(block.rows, block.row_height) + LINE_SPACING
    raise LayoutError(f"Unknown block type {type(block).__name__}")


def _paragraph(flow, cursor, block):
    height = block_height(flow.pdf, block.text, CONTENT_WIDTH, BODY_FONT, LINE_SPACING)
    cursor = flow.reserve(cursor, height)
    cursor = draw_text_block(flow.pdf, cursor, block.text, LEFT_MARGIN, CONTENT_WIDTH,
                             BODY_FONT, LINE_SPACING)
    return cursor._replace(y=cursor.y - PARAGRAPH_GAP)


def _bullets(flow, cursor, block):
    pdf = flow.pdf
    width = _bullet_text_width()
    for n, item in enumerate(block.items, start=1):
        cursor = flow.reserve(cursor, block_height(pdf, item, width, BODY_FONT, LINE_SPACING))
        marker = f"{n}." if block.numbered else "-"
        pdf.use_font(BODY_FONT)
        pdf.draw_text(LEFT_MARGIN, cursor.y, marker)
        cursor = draw_text_block(pdf, cursor, item, LEFT_MARGIN + BULLET_INDENT, width,
                                 BODY_FONT, LINE_SPACING)
        cursor = cursor._replace(y=cursor.y - BULLET_GAP)
    return cursor._replace(y=cursor.y - PARAGRAPH_GAP + BULLET_GAP)


def _table(flow, cursor, block):
    cursor = flow.reserve(cursor, table_height(block.rows, block.row_height) + LINE_SPACING)
    top = cursor.y + LINE_SPACING * 0.5
    bottom = render_table(flow.pdf, block.rows, block.col_widths, LEFT_MARGIN, top,
                          row_height=block.row_height,
                          header_font=FontSpec("Helvetica", "B", 9),
                          body_font=FontSpec("Helvetica", "", 9))
    return cursor._replace(y=bottom - 2 * LINE_SPACING)


_BLOCK_DRAWERS = {
    Paragraph: _paragraph,
    BulletList: _bullets,
    Table: _table,
}


def _draw_section(flow, cursor, section: Section):
    """Heading plus blocks. The heading never ends up alone at a page bottom."""
    lead = _lead_height(flow.pdf, section.blocks[0]) if section.blocks else 0
    cursor = flow.reserve(cursor, HEADING_HEIGHT + lead)
    cursor = _heading(flow.pdf, cursor, section.heading)
    for block in section.blocks:
        cursor = _BLOCK_DRAWERS[type(block)](flow, cursor, block)
    return cursor._replace(y=cursor.y - SECTION_GAP)


def _signature_block(flow, cursor, signature):
    pdf = flow.pdf
    if signature is not None:
        sig_w, sig_h = fit_within(signature.width, signature.height, *SIGNATURE_BOX)
    else:
        sig_w, sig_h = 0, 30
    cursor = flow.reserve(cursor, sig_h + 5 * LINE_SPACING)

    pdf.use_font(BODY_FONT)
    pdf.draw_text(LEFT_MARGIN, cursor.y, "Yours sincerely,")
    cursor = cursor._replace(y=cursor.y - 10)

    if signature is not None:
        pdf.draw_image(signature, LEFT_MARGIN, cursor.y - sig_h, sig_w, sig_h)
    cursor = cursor._replace(y=cursor.y - sig_h - LINE_SPACING)

    pdf.use_font(BOLD_FONT)
    pdf.draw_text(LEFT_MARGIN, cursor.y, sanitize_text(SIGNATORY_NAME))
    pdf.use_font(BODY_FONT)
    for line in (SIGNATORY_TITLE, SIGNATORY_CONTACT):
        cursor = cursor._replace(y=cursor.y - LINE_SPACING)
        pdf.draw_text(LEFT_MARGIN, cursor.y, sanitize_text(line))
    return cursor._replace(y=cursor.y - 2 * HEADING_HEIGHT)


def _client_confirmation(flow, cursor):
    pdf = flow.pdf
    cursor = flow.reserve(cursor, HEADING_HEIGHT + 100)
    cursor = _heading(pdf, cursor, "Client Confirmation")
    cursor = draw_text_block(
        pdf, cursor,
        "I, the undersigned, hereby acknowledge receipt and acceptance of this proposal.",
        LEFT_MARGIN, CONTENT_WIDTH, BODY_FONT, LINE_SPACING,
    )
    cursor = cursor._replace(y=cursor.y - 46)

    pdf.use_font(BODY_FONT)
    pdf.draw_text(LEFT_MARGIN, cursor.y, "_____________________________")
    pdf.draw_text(LEFT_MARGIN + 250, cursor.y, "Date: _____________________")
    pdf.use_font(FontSpec("Helvetica", "", 9))
    pdf.draw_text(LEFT_MARGIN, cursor.y - 15, "Client Signature")
    return cursor._replace(y=cursor.y - 15 - 2 * HEADING_HEIGHT)


def _disclaimer(flow, cursor):
    pdf = flow.pdf
    height = block_height(pdf, DISCLAIMER, CONTENT_WIDTH, DISCLAIMER_FONT, 12)
    cursor = flow.reserve(cursor, HEADING_HEIGHT + height)
    cursor = _heading(pdf, cursor, "Disclaimer")
    return draw_text_block(pdf, cursor, DISCLAIMER, LEFT_MARGIN, CONTENT_WIDTH,
                           DISCLAIMER_FONT, 12, color=GRAY)


def generate_pdf(record: ProposalRecord,
                 cover_image: bytes = None,
                 logo_image: bytes = None,
                 signature_image: bytes = None) -> GeneratedDocument:
    """Build the proposal document for one validated record."""
    figures = compute_projections(record)

    cover = _load_image(cover_image, "cover")
    logo = _load_image(logo_image, "logo")
    signature = _load_image(signature_image, "signature")

    try:
        pdf = ProposalPDF(title=sanitize_text(f"Private Equity Proposal - {record.client_name}"))
        _cover_page(pdf, record, cover)

        flow = PageFlow(pdf, logo=logo)
        cursor = flow.start_page()
        cursor = _client_block(flow, cursor, record)
        for section in build_sections(record, figures):
            cursor = _draw_section(flow, cursor, section)

        # Acceptance always opens on its own page
        cursor = flow.start_page()
        cursor = _signature_block(flow, cursor, signature)
        cursor = _client_confirmation(flow, cursor)
        _disclaimer(flow, cursor)

        content = bytes(pdf.output())
        page_count = pdf.page_no()
    except LayoutError as e:
        logger.exception(f"Layout failed for proposal '{record.client_name}'")
        raise ProposalGenerationError("layout", str(e)) from e
    except Exception as e:
        logger.exception(f"PDF generation failed for proposal '{record.client_name}'")
        raise ProposalGenerationError("rendering", str(e)) from e

    logger.info(f"Proposal PDF generated: {page_count} pages, {len(content):,} bytes")
    return GeneratedDocument(content, page_count)
