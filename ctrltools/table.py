"""Column width calculation for terminal tables."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TableCalculator:
    """Computes column widths from the widest cell in each column, plus padding.

    A positive ``max_width`` caps each column (padding included).
    """

    padding: int = 0
    max_width: int = 0
    _cell_sizes_by_col: list[list[int]] = field(
        default_factory=list, init=False, repr=False
    )

    def add_row_sizes(self, *cell_sizes: int) -> None:
        """Register a row whose cells have the given widths."""
        while len(self._cell_sizes_by_col) < len(cell_sizes):
            self._cell_sizes_by_col.append([])
        for column, size in zip(self._cell_sizes_by_col, cell_sizes):
            column.append(size)

    def column_widths(self) -> list[int]:
        """Return the width of each column for the rows seen so far."""
        actual_max = self.max_width - self.padding
        widths = []
        for sizes in self._cell_sizes_by_col:
            width = max([0, *sizes])
            if actual_max > 0 and width > actual_max:
                width = actual_max
            widths.append(width + self.padding)
        return widths