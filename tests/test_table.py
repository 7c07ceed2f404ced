import pytest

from ctrltools.table import TableCalculator


def test_widths_are_widest_cell_plus_padding():
    calc = TableCalculator(padding=2)
    calc.add_row_sizes(3, 5)
    calc.add_row_sizes(7, 1)
    assert calc.column_widths() == [9, 7]


def test_empty_table_has_no_columns():
    assert TableCalculator(padding=2).column_widths() == []


def test_ragged_rows_extend_columns():
    calc = TableCalculator()
    calc.add_row_sizes(1)
    calc.add_row_sizes(1, 2, 3)
    widths = calc.column_widths()
    assert len(widths) == 3
    assert widths[1:] == [2, 3]


def test_max_width_caps_columns_including_padding():
    calc = TableCalculator(padding=2, max_width=10)
    calc.add_row_sizes(50, 4)
    widths = calc.column_widths()
    assert widths[0] == 10
    assert widths[1] == 4 + 2


def test_no_cap_when_max_width_unset():
    calc = TableCalculator()
    calc.add_row_sizes(50)
    assert calc.column_widths() == [50]


def test_no_cap_when_max_width_not_above_padding():
    calc = TableCalculator(padding=3, max_width=3)
    calc.add_row_sizes(40)
    assert calc.column_widths() == [43]


@pytest.mark.parametrize("padding", [0, 1, 4])
def test_every_cell_fits_its_column(padding):
    rows = [(3, 8, 1), (9, 2), (0, 0, 6)]
    calc = TableCalculator(padding=padding)
    for row in rows:
        calc.add_row_sizes(*row)
    widths = calc.column_widths()
    for row in rows:
        for size, width in zip(row, widths):
            assert size + padding <= width
    for col, width in enumerate(widths):
        assert any(
            len(row) > col and row[col] + padding == width for row in rows
        )