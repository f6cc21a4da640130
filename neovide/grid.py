"""A grid of character cells with fast vertical scrolling."""

from __future__ import annotations

from collections import deque

from .style import Style

GridCell = tuple[str, "Style | None"]
DEFAULT_CELL: GridCell = (" ", None)


def _blank_line(width: int) -> list[GridCell]:
    return [DEFAULT_CELL] * width


class CharacterGrid:
    """Rows of cells; each cell is a grapheme and an optional style.

    Rows are kept in a ring so that full-height scrolling only rotates it.
    """

    def __init__(self, size: tuple[int, int]):
        width, height = size
        self.width = width
        self.height = height
        self._lines: deque[list[GridCell]] = deque(
            _blank_line(width) for _ in range(height)
        )

    def _line(self, y: int) -> list[GridCell]:
        if not 0 <= y < len(self._lines):
            raise IndexError(f"row {y} out of range for grid of height {self.height}")
        return self._lines[y]

    def resize(self, size: tuple[int, int]) -> None:
        """Resize the grid, keeping the cells that still fit."""
        width, height = size
        lines = list(self._lines)[:height]
        lines.extend(_blank_line(width) for _ in range(height - len(lines)))
        for line in lines:
            if len(line) > width:
                del line[width:]
            else:
                line.extend([DEFAULT_CELL] * (width - len(line)))
        self._lines = deque(lines)
        self.width = width
        self.height = height

    def clear(self) -> None:
        self.set_all_characters(DEFAULT_CELL)

    def get_cell(self, x: int, y: int) -> GridCell | None:
        """The cell at column ``x`` of row ``y``; None if ``x`` is outside the row."""
        line = self._line(y)
        if 0 <= x < len(line):
            return line[x]
        return None

    def set_cell(self, x: int, y: int, cell: GridCell) -> bool:
        """Store ``cell`` at ``(x, y)``; returns False if ``x`` is outside the row."""
        line = self._line(y)
        if 0 <= x < len(line):
            line[x] = cell
            return True
        return False

    def set_all_characters(self, value: GridCell) -> None:
        for line in self._lines:
            line[:] = [value] * len(line)

    def row(self, row_index: int) -> tuple[GridCell, ...] | None:
        if 0 <= row_index < self.height:
            return tuple(self._lines[row_index])
        return None

    def scroll_region(
        self, top: int, bottom: int, left: int, right: int, rows: int, cols: int
    ) -> bool:
        """Scroll the region by ``rows`` and ``cols``.

        Returns True for a pure full-grid up/down scroll, which only rotates
        the rows and leaves the scrolled-out lines in place.
        """
        if (
            top == 0
            and bottom == self.height
            and left == 0
            and right == self.width
            and cols == 0
        ):
            self._lines.rotate(-rows)
            return True

        if rows > 0:
            y_range = range(top + rows, bottom)
        else:
            y_range = reversed(range(top, bottom + rows))

        for y in y_range:
            dest_y = y - rows
            if not 0 <= dest_y < self.height:
                continue
            if cols > 0:
                x_range = range(left + cols, right)
            else:
                x_range = reversed(range(left, right + cols))
            for x in x_range:
                cell = self.get_cell(x, y)
                if cell is not None:
                    self.set_cell(x - cols, dest_y, cell)

        return False