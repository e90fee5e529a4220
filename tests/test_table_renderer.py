import pytest

from services.proposal_content import CASH_FLOW_COL_WIDTHS, STRUCTURE_COL_WIDTHS
from services.table_renderer import render_table, table_height
from services.text_layout import LayoutError


def _rows(n_rows, n_cols):
    return [[f"r{r}c{c}" for c in range(n_cols)] for r in range(n_rows)]


def _outlines(canvas):
    return [r for r in canvas.rects if r[4] == "D"]


@pytest.mark.parametrize("n_rows,widths", [
    (5, STRUCTURE_COL_WIDTHS),
    (5, CASH_FLOW_COL_WIDTHS),
    (7, STRUCTURE_COL_WIDTHS),
    (1, [100, 100, 100]),
])
def test_divider_counts(canvas, n_rows, widths):
    render_table(canvas, _rows(n_rows, len(widths)), widths, 50, 600)

    vertical = [ln for ln in canvas.lines if ln[0] == ln[2]]
    horizontal = [ln for ln in canvas.lines if ln[1] == ln[3]]
    assert len(vertical) == len(widths) - 1
    assert len(horizontal) == n_rows - 1
    assert len(canvas.lines) == len(vertical) + len(horizontal)
    assert len(_outlines(canvas)) == 1


def test_geometry(canvas):
    bottom = render_table(canvas, _rows(5, 2), [150, 300], 50, 600, row_height=20)

    assert bottom == 500
    assert _outlines(canvas) == [(50, 500, 450, 100, "D")]
    assert (200, 600, 200, 500) in canvas.lines
    for i in range(1, 5):
        assert (50, 600 - i * 20, 500, 600 - i * 20) in canvas.lines


def test_cell_text_is_padded_and_header_is_bold(canvas):
    render_table(canvas, [["Component", "Details"], ["Amount", "R 1.00"]], [150, 300], 50, 600,
                 padding=5)

    by_text = {t: (x, y, font) for x, y, t, font in canvas.texts}
    assert by_text["Component"][:2] == (55, 600 - 14)
    assert by_text["Details"][:2] == (205, 600 - 14)
    assert by_text["Amount"][:2] == (55, 580 - 14)
    assert by_text["Component"][2].style == "B"
    assert by_text["Amount"][2].style == ""


def test_ragged_rows_are_rejected(canvas):
    with pytest.raises(LayoutError):
        render_table(canvas, [["a", "b"], ["only one"]], [100, 100], 50, 600)


def test_table_height():
    assert table_height(_rows(5, 6), 20) == 100
    assert table_height([], 20) == 0
