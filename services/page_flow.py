"""Fixed-size A4 canvas plus the page-break policy for content pages."""

import logging
from typing import NamedTuple

from fpdf import FPDF

from config import COMPANY_NAME, FOOTER_LINES
from services.text_layout import BLACK, FontSpec, sanitize_text

logger = logging.getLogger(__name__)

# A4 in points, origin bottom-left for all layout code
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
LEFT_MARGIN = 50
CONTENT_WIDTH = 495

TOP_OF_CONTENT = 730
BOTTOM_LIMIT = 100  # footer reservation

FOOTER_Y = 40
FOOTER_FONT = FontSpec("Helvetica", "", 8)
LOGO_BOX = (160, 53)
LOGO_TOP = 813
LOGO_RIGHT_MARGIN = 40


class Cursor(NamedTuple):
    page: int
    y: float


def fit_within(width, height, max_width, max_height) -> tuple[float, float]:
    """Scale (width, height) to fit inside the box, preserving aspect ratio."""
    if width <= 0 or height <= 0:
        return 0.0, 0.0
    scale = min(max_width / width, max_height / height)
    return width * scale, height * scale


class ProposalPDF(FPDF):
    """A4 canvas in points with bottom-left drawing helpers."""

    def __init__(self, title=""):
        super().__init__(orientation="P", unit="pt", format=(PAGE_WIDTH, PAGE_HEIGHT))
        self.set_auto_page_break(auto=False)
        self.set_margins(LEFT_MARGIN, 40, LEFT_MARGIN)
        self.set_creator(COMPANY_NAME)
        if title:
            self.set_title(title)

    def use_font(self, font: FontSpec, color=BLACK):
        self.set_font(font.family, font.style, font.size)
        self.set_text_color(*color)

    def string_width(self, text: str, font: FontSpec) -> float:
        self.set_font(font.family, font.style, font.size)
        return self.get_string_width(text)

    def measure(self, font: FontSpec):
        """Per-string width function for one font, as used by the wrapper."""
        return lambda s: self.string_width(s, font)

    def draw_text(self, x, y, text):
        self.text(x, self.h - y, text)

    def draw_line(self, x1, y1, x2, y2):
        self.line(x1, self.h - y1, x2, self.h - y2)

    def draw_rect(self, x, y, w, h, style="D"):
        self.rect(x, self.h - y - h, w, h, style=style)

    def draw_image(self, image, x, y, w, h):
        self.image(image, x=x, y=self.h - y - h, w=w, h=h)


class PageFlow:
    """Owns page allocation for content pages and re-applies running decorations."""

    def __init__(self, pdf: ProposalPDF, logo=None, footer_lines=None):
        self.pdf = pdf
        self.logo = logo
        self.footer_lines = list(FOOTER_LINES if footer_lines is None else footer_lines)
        self.content_pages = 0

    @property
    def state(self) -> str:
        return "on_page" if self.content_pages else "no_page"

    def start_page(self) -> Cursor:
        self.pdf.add_page()
        self.content_pages += 1
        self._draw_footer()
        if self.logo is not None:
            self._draw_logo()
        return Cursor(self.pdf.page_no(), TOP_OF_CONTENT)

    def ensure_space(self, cursor: Cursor, minimum_needed: float) -> Cursor:
        """Start a new page when the cursor sits below minimum_needed."""
        if cursor.y < minimum_needed:
            logger.debug(f"Page break at y={cursor.y:.1f} (needed {minimum_needed:.1f})")
            return self.start_page()
        return cursor

    def reserve(self, cursor: Cursor, height: float) -> Cursor:
        """Make sure a block of the given height fits above the footer."""
        return self.ensure_space(cursor, BOTTOM_LIMIT + height)

    def _draw_footer(self):
        self.pdf.use_font(FOOTER_FONT, BLACK)
        n = len(self.footer_lines)
        for i, line in enumerate(self.footer_lines):
            self.pdf.draw_text(LEFT_MARGIN, FOOTER_Y + (n - 1 - i) * 10, sanitize_text(line))

    def _draw_logo(self):
        w, h = fit_within(self.logo.width, self.logo.height, *LOGO_BOX)
        x = PAGE_WIDTH - LOGO_RIGHT_MARGIN - w
        self.pdf.draw_image(self.logo, x, LOGO_TOP - h, w, h)
