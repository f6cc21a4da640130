"""An editor window: its character grid and the draw commands it emits."""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable, Iterator, Mapping

from .draw_commands import (
    AnchorInfo,
    DrawClear,
    DrawClose,
    DrawCommandBatcher,
    DrawHide,
    DrawLine,
    DrawPosition,
    DrawScroll,
    DrawShow,
    DrawViewport,
    LineFragment,
    WindowDraw,
    WindowDrawCommand,
    WindowType,
)
from .events import GridLineCell
from .grid import CharacterGrid
from .style import Style

_log = logging.getLogger(__name__)

_ZWJ = "\u200d"


def _is_regional_indicator(char: str) -> bool:
    return 0x1F1E6 <= ord(char) <= 0x1F1FF


def _extends(char: str) -> bool:
    code = ord(char)
    return (
        char == _ZWJ
        or unicodedata.category(char) in ("Mn", "Me", "Mc")
        or 0xFE00 <= code <= 0xFE0F
        or 0x1F3FB <= code <= 0x1F3FF
        or 0xE0020 <= code <= 0xE007F
    )


def _graphemes(text: str) -> Iterator[str]:
    """Split ``text`` into user-perceived characters."""
    cluster = ""
    previous = ""
    regional_count = 0
    for char in text:
        joins = (
            bool(cluster)
            and (
                previous == _ZWJ
                or _extends(char)
                or (previous == "\r" and char == "\n")
                or (
                    _is_regional_indicator(char)
                    and _is_regional_indicator(previous)
                    and regional_count % 2 == 1
                )
            )
        )
        if joins:
            cluster += char
        else:
            if cluster:
                yield cluster
            cluster = char
            regional_count = 0
        if _is_regional_indicator(char):
            regional_count += 1
        previous = char
    if cluster:
        yield cluster


class Window:
    """A Neovim grid shown as a window; every change is queued as a draw command."""

    def __init__(
        self,
        grid_id: int,
        window_type: WindowType,
        anchor_info: AnchorInfo | None,
        grid_position: tuple[float, float],
        grid_size: tuple[int, int],
        draw_command_batcher: DrawCommandBatcher,
    ):
        self.grid_id = grid_id
        self.grid = CharacterGrid((int(grid_size[0]), int(grid_size[1])))
        self.window_type = window_type
        self.anchor_info = anchor_info
        self.grid_position = grid_position
        self._batcher = draw_command_batcher
        self._send_updated_position()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def _send_command(self, command: WindowDrawCommand) -> None:
        self._batcher.queue(WindowDraw(grid_id=self.grid_id, command=command))

    def _send_updated_position(self) -> None:
        self._send_command(
            DrawPosition(
                grid_position=self.grid_position,
                grid_size=(self.grid.width, self.grid.height),
                anchor_info=self.anchor_info,
                window_type=self.window_type,
            )
        )

    def get_cursor_grid_cell(
        self, window_left: int, window_top: int
    ) -> tuple[str, Style | None, bool]:
        """The character and style under the cursor, and whether it is double width."""
        cell = self.grid.get_cell(window_left, window_top)
        character, style = cell if cell is not None else (" ", None)
        next_cell = self.grid.get_cell(window_left + 1, window_top)
        double_width = next_cell is not None and next_cell[0] == ""
        return character, style, double_width

    def position(
        self,
        anchor_info: AnchorInfo | None,
        grid_size: tuple[int, int],
        grid_position: tuple[float, float],
    ) -> None:
        self.grid.resize((int(grid_size[0]), int(grid_size[1])))
        self.anchor_info = anchor_info
        self.grid_position = grid_position
        self._send_updated_position()

    def resize(self, new_size: tuple[int, int]) -> None:
        self.grid.resize((int(new_size[0]), int(new_size[1])))
        self._send_updated_position()

    def _modify_grid(
        self,
        row_index: int,
        column_pos: int,
        cell: GridLineCell,
        defined_styles: Mapping[int, Style],
        previous_style: Style | None,
    ) -> tuple[int, Style | None]:
        if cell.highlight_id == 0:
            style = None
        elif cell.highlight_id is not None:
            style = defined_styles.get(cell.highlight_id)
        else:
            style = previous_style

        text = cell.text
        if cell.repeat is not None:
            # A repeat of zero only tells a terminal UI that the line ends here.
            if cell.repeat == 0:
                return column_pos, previous_style
            text = text * cell.repeat

        if not text:
            self.grid.set_cell(column_pos, row_index, (text, style))
            column_pos += 1
        else:
            for character in _graphemes(text):
                self.grid.set_cell(column_pos, row_index, (character, style))
                column_pos += 1

        return column_pos, style

    def _build_line_fragment(self, row_index: int, start: int) -> tuple[int, LineFragment]:
        """Fragment from ``start`` up to a style change or a double width character."""
        row = self.grid.row(row_index)
        if row is None:
            raise IndexError(f"row {row_index} out of range for grid of height {self.height}")

        style = row[start][1]
        text = []
        width = 0
        for character, cell_style in row[start : self.grid.width]:
            if cell_style != style:
                break
            width += 1
            # The previous character is double width; it stands on its own.
            if not character:
                break
            text.append(character)

        fragment = LineFragment(
            text="".join(text), window_left=start, width=width, style=style
        )
        return start + width, fragment

    def _redraw_line(self, row: int) -> None:
        fragments = []
        current_start = 0
        while current_start < self.grid.width:
            current_start, fragment = self._build_line_fragment(row, current_start)
            fragments.append(fragment)
        self._send_command(DrawLine(row=row, line_fragments=fragments))

    def draw_grid_line(
        self,
        row: int,
        column_start: int,
        cells: Iterable[GridLineCell],
        defined_styles: Mapping[int, Style],
    ) -> None:
        """Write ``cells`` into ``row`` and redraw it and its neighbours."""
        if row >= self.grid.height:
            _log.warning("Draw command out of bounds")
            return

        previous_style: Style | None = None
        column_pos = column_start
        for cell in cells:
            column_pos, previous_style = self._modify_grid(
                row, column_pos, cell, defined_styles, previous_style
            )

        # Underlines can be clipped by the next line, so the neighbours are redrawn too.
        if row < self.grid.height - 1:
            self._redraw_line(row + 1)
        self._redraw_line(row)
        if row > 0:
            self._redraw_line(row - 1)

    def scroll_region(
        self, top: int, bottom: int, left: int, right: int, rows: int, cols: int
    ) -> None:
        """Scroll the grid and tell the renderer to move what it has drawn."""
        is_pure_updown = self.grid.scroll_region(top, bottom, left, right, rows, cols)

        self._send_command(
            DrawScroll(top=top, bottom=bottom, left=left, right=right, rows=rows, cols=cols)
        )

        # Lines uncovered by a pure up/down scroll are sent by Neovim later.
        if not is_pure_updown:
            if rows > 0:
                bottom -= rows
            else:
                top -= rows
            for row in range(top, bottom):
                self._redraw_line(row)

    def clear(self) -> None:
        self.grid.clear()
        self._send_command(DrawClear())

    def redraw(self) -> None:
        """Clear and redraw every line, bottom up so underlines stay visible."""
        self._send_command(DrawClear())
        for row in reversed(range(self.grid.height)):
            self._redraw_line(row)

    def hide(self) -> None:
        self._send_command(DrawHide())

    def show(self) -> None:
        self._send_command(DrawShow())

    def close(self) -> None:
        self._send_command(DrawClose())

    def update_viewport(self, scroll_delta: float) -> None:
        self._send_command(DrawViewport(scroll_delta=scroll_delta))