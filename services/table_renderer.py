"""Bordered grid tables drawn line by line on the proposal canvas."""

from services.text_layout import BLACK, BODY_FONT, BOLD_FONT, LayoutError, sanitize_text

HEADER_FILL = (242, 242, 242)


def table_height(rows, row_height=20) -> float:
    return len(rows) * row_height


def render_table(pdf, rows, col_widths, x, top, row_height=20,
                 header_font=BOLD_FONT, body_font=BODY_FONT, padding=5) -> float:
    """Draw a grid with the first row styled as header. Returns the table's bottom y.

    Cell values are expected to be short pre-formatted strings; nothing wraps.
    """
    n_cols = len(col_widths)
    for i, row in enumerate(rows):
        if len(row) != n_cols:
            raise LayoutError(f"Table row {i} has {len(row)} cells, expected {n_cols}")

    width = sum(col_widths)
    height = table_height(rows, row_height)
    bottom = top - height

    # Header shading sits under the grid lines
    if rows:
        pdf.set_fill_color(*HEADER_FILL)
        pdf.draw_rect(x, top - row_height, width, row_height, style="F")

    pdf.set_draw_color(*BLACK)
    pdf.set_line_width(1)
    pdf.draw_rect(x, bottom, width, height, style="D")

    col_x = x
    for w in col_widths[:-1]:
        col_x += w
        pdf.draw_line(col_x, top, col_x, bottom)

    for i in range(1, len(rows)):
        row_y = top - i * row_height
        pdf.draw_line(x, row_y, x + width, row_y)

    baseline = row_height * 0.7
    for i, row in enumerate(rows):
        pdf.use_font(header_font if i == 0 else body_font, BLACK)
        text_y = top - i * row_height - baseline
        cell_x = x
        for value, w in zip(row, col_widths):
            pdf.draw_text(cell_x + padding, text_y, sanitize_text(value))
            cell_x += w

    return bottom
