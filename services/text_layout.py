"""Word wrapping and full justification on a fixed-width canvas."""

import math
import re
from typing import Callable, NamedTuple

Measure = Callable[[str], float]

BLACK = (0, 0, 0)
GRAY = (100, 100, 100)

_WHITESPACE = re.compile(r"\s+")

# Typographic characters the core Helvetica font cannot encode
_REPLACEMENTS = {
    "‘": "'", "’": "'", "‚": ",", "‛": "'",
    "“": '"', "”": '"', "„": '"',
    "–": "-", "—": "-", "−": "-",
    "•": "-", "·": "-",
    "…": "...",
    "\u00a0": " ", "\u2009": " ", "\u202f": " ",
    "€": "EUR",
}


class LayoutError(ValueError):
    """Raised on an internal layout inconsistency (bad font metric, ragged table)."""


class FontSpec(NamedTuple):
    family: str = "Helvetica"
    style: str = ""
    size: float = 10


BODY_FONT = FontSpec("Helvetica", "", 10)
BOLD_FONT = FontSpec("Helvetica", "B", 10)


def sanitize_text(text) -> str:
    """Map text onto the Latin-1 subset the built-in fonts can encode."""
    if text is None:
        return ""
    text = str(text)
    for src, dst in _REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", "replace").decode("latin-1")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


def _checked(measure: Measure) -> Measure:
    def width(s: str) -> float:
        w = measure(s)
        if w is None or math.isnan(w) or w < 0:
            raise LayoutError(f"Font metric returned invalid width {w!r} for {s!r}")
        return w
    return width


def wrap(text: str, max_width: float, measure: Measure) -> list[str]:
    """Greedy word wrap. A word wider than max_width gets a line of its own."""
    text = normalize_whitespace(text)
    if not text:
        return []
    width = _checked(measure)

    lines = []
    current: list[str] = []
    for word in text.split(" "):
        candidate = current + [word]
        if width(" ".join(candidate)) > max_width and current:
            lines.append(" ".join(current))
            current = [word]
        else:
            current = candidate
    if current:
        lines.append(" ".join(current))
    return lines


def wrap_lines(text: str, max_width: float, measure: Measure) -> list[str]:
    """Like wrap(), but embedded line breaks are honoured as hard breaks."""
    lines = []
    for raw in (text or "").splitlines():
        lines.extend(wrap(raw, max_width, measure))
    return lines


def justify(line: str, max_width: float, measure: Measure) -> list[tuple[str, float]]:
    """Spread the line's shortfall evenly over its word gaps.

    Returns (word, x_offset) pairs; the last word ends exactly at max_width.
    """
    width = _checked(measure)
    words = line.split(" ")
    if len(words) == 1:
        return [(line, 0.0)]

    widths = [width(w) for w in words]
    gap = (max_width - sum(widths)) / (len(words) - 1)

    placed = []
    x = 0.0
    for word, w in zip(words, widths):
        placed.append((word, x))
        x += w + gap
    return placed


def place_lines(lines: list[str], max_width: float, measure: Measure,
                justified: bool = True) -> list[list[tuple[str, float]]]:
    """Position each line. The last line and single-word lines keep natural spacing."""
    placed = []
    last = len(lines) - 1
    for i, line in enumerate(lines):
        if justified and i < last and " " in line:
            placed.append(justify(line, max_width, measure))
        else:
            placed.append([(line, 0.0)])
    return placed


def draw_text_block(pdf, cursor, text, x, max_width, font=BODY_FONT, line_spacing=14,
                    justified=True, color=BLACK):
    """Wrap, position and draw a paragraph. Returns the cursor below its last line."""
    measure = pdf.measure(font)
    lines = wrap(sanitize_text(text), max_width, measure)
    if not lines:
        return cursor

    pdf.use_font(font, color)
    y = cursor.y
    for tokens in place_lines(lines, max_width, measure, justified):
        for token, offset in tokens:
            pdf.draw_text(x + offset, y, token)
        y -= line_spacing
    return cursor._replace(y=y)


def block_height(pdf, text, max_width, font=BODY_FONT, line_spacing=14) -> float:
    """Vertical extent draw_text_block() will use for this text."""
    lines = wrap(sanitize_text(text), max_width, pdf.measure(font))
    return len(lines) * line_spacing
