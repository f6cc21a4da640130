"""The editor: turns Neovim redraw events into windows and draw commands."""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field

from .cursor import Cursor, CursorMode
from .draw_commands import (
    AnchorInfo,
    CloseWindow,
    DefaultStyleChanged,
    DrawCommandBatcher,
    FontChanged,
    LineSpaceChanged,
    ModeChanged,
    UIReady,
    UpdateCursor,
    WindowType,
)
from .event_aggregator import EVENT_AGGREGATOR, EventAggregator
from .events import (
    BusyStart,
    BusyStop,
    Clear,
    CursorGoto,
    DefaultColorsSet,
    Destroy,
    Flush,
    GridLine,
    GuiOption,
    HighlightAttributesDefine,
    MessageSetPosition,
    ModeChange,
    ModeInfoSet,
    MouseOff,
    MouseOn,
    OptionSet,
    RedrawEvent,
    Resize,
    Scroll,
    SetTitle,
    ShowIntro,
    Suspend,
    WindowAnchor,
    WindowClose,
    WindowFloatPosition,
    WindowHide,
    WindowPosition,
    WindowViewport,
)
from .style import Style
from .window import Window

_log = logging.getLogger(__name__)

MODE_CMDLINE = 4
_BASE_GRID = 1
_TOP_SORT_ORDER = 2**64 - 1


class EditorCommand:
    """Base of the commands the editor handles."""


@dataclass
class NeovimRedrawEvent(EditorCommand):
    event: RedrawEvent


@dataclass
class RedrawScreen(EditorCommand):
    pass


class WindowCommand:
    """Base of the commands the editor sends to the application window."""


@dataclass
class TitleChanged(WindowCommand):
    title: str


@dataclass
class SetMouseEnabled(WindowCommand):
    enabled: bool


@dataclass
class ListAvailableFonts(WindowCommand):
    pass


@dataclass
class Minimize(WindowCommand):
    pass


@dataclass
class ShowIntroCommand:
    """Asks Neovim to show the intro message."""

    message: list[str] = field(default_factory=list)


class Editor:
    """Keeps the windows, styles and cursor that Neovim describes."""

    def __init__(self, aggregator: EventAggregator | None = None):
        self._aggregator = EVENT_AGGREGATOR if aggregator is None else aggregator
        self.windows: dict[int, Window] = {}
        self.cursor = Cursor()
        self.defined_styles: dict[int, Style] = {}
        self.mode_list: list[CursorMode] = []
        self.draw_command_batcher = DrawCommandBatcher(self._aggregator)
        self.current_mode_index: int | None = None
        self.ui_ready = False

    def handle_editor_command(self, command: EditorCommand) -> None:
        """Apply one editor command."""
        if isinstance(command, RedrawScreen):
            self._redraw_screen()
        elif isinstance(command, NeovimRedrawEvent):
            self._handle_redraw_event(command.event)
        else:
            raise TypeError(f"not an editor command: {command!r}")

    def _handle_redraw_event(self, event: RedrawEvent) -> None:
        match event:
            case SetTitle(title=title):
                self._aggregator.send(TitleChanged(title or "Neovide"))
            case ModeInfoSet(cursor_modes=cursor_modes):
                self.mode_list = list(cursor_modes)
                index = self.current_mode_index
                if index is not None and index < len(self.mode_list):
                    self.cursor.change_mode(self.mode_list[index], self.defined_styles)
            case OptionSet(gui_option=gui_option):
                self._set_option(gui_option)
            case ModeChange(mode=mode, mode_index=mode_index):
                if mode_index < len(self.mode_list):
                    self.cursor.change_mode(self.mode_list[mode_index], self.defined_styles)
                    self.current_mode_index = mode_index
                else:
                    self.current_mode_index = None
                self.draw_command_batcher.queue(ModeChanged(mode))
            case MouseOn():
                self._aggregator.send(SetMouseEnabled(True))
            case MouseOff():
                self._aggregator.send(SetMouseEnabled(False))
            case BusyStart():
                self.cursor.enabled = False
            case BusyStop():
                self.cursor.enabled = True
            case Flush():
                self._send_cursor_info()
                self.draw_command_batcher.send_batch()
            case DefaultColorsSet(colors=colors):
                self.draw_command_batcher.queue(DefaultStyleChanged(Style(colors)))
                self._redraw_screen()
                self.draw_command_batcher.send_batch()
            case HighlightAttributesDefine(id=style_id, style=style):
                self.defined_styles[style_id] = style
            case CursorGoto(grid=grid, row=row, column=column):
                self._set_cursor_position(grid, column, row)
            case Resize(grid=grid, width=width, height=height):
                self._resize_window(grid, width, height)
            case GridLine(grid=grid, row=row, column_start=column_start, cells=cells):
                self._set_ui_ready()
                window = self.windows.get(grid)
                if window is not None:
                    window.draw_grid_line(row, column_start, cells, self.defined_styles)
            case Clear(grid=grid):
                window = self.windows.get(grid)
                if window is not None:
                    window.clear()
            case Destroy(grid=grid) | WindowClose(grid=grid):
                self._close_window(grid)
            case Scroll(
                grid=grid, top=top, bottom=bottom, left=left, right=right,
                rows=rows, columns=columns,
            ):
                window = self.windows.get(grid)
                if window is not None:
                    window.scroll_region(top, bottom, left, right, rows, columns)
            case WindowPosition(
                grid=grid, start_row=start_row, start_column=start_column,
                width=width, height=height,
            ):
                self._set_window_position(grid, start_column, start_row, width, height)
            case WindowFloatPosition(
                grid=grid, anchor=anchor, anchor_grid=anchor_grid,
                anchor_row=anchor_row, anchor_column=anchor_column, sort_order=sort_order,
            ):
                self._set_window_float_position(
                    grid, anchor_grid, anchor, anchor_column, anchor_row, sort_order
                )
            case WindowHide(grid=grid):
                window = self.windows.get(grid)
                if window is not None:
                    window.hide()
            case MessageSetPosition(grid=grid, row=row, scrolled=scrolled):
                self._set_message_position(grid, row, scrolled)
            case WindowViewport(grid=grid, scroll_delta=scroll_delta) if scroll_delta is not None:
                self._set_ui_ready()
                self._send_updated_viewport(grid, scroll_delta)
            case ShowIntro(message=message):
                self._aggregator.send(ShowIntroCommand(list(message)))
            case Suspend():
                # A suspend request is taken as a request to minimize the window.
                self._aggregator.send(Minimize())
            case _:
                pass

    def _close_window(self, grid: int) -> None:
        window = self.windows.pop(grid, None)
        if window is not None:
            window.close()
            self.draw_command_batcher.queue(CloseWindow(grid))

    def _new_window(
        self,
        grid: int,
        window_type: WindowType,
        anchor_info: AnchorInfo | None,
        position: tuple[float, float],
        size: tuple[int, int],
    ) -> None:
        self.windows[grid] = Window(
            grid, window_type, anchor_info, position, size, self.draw_command_batcher
        )

    def _resize_window(self, grid: int, width: int, height: int) -> None:
        window = self.windows.get(grid)
        if window is None:
            self._new_window(grid, WindowType.editor(), None, (0.0, 0.0), (width, height))
            return
        window.resize((width, height))
        info = window.anchor_info
        if info is not None:
            self._set_window_float_position(
                grid,
                info.anchor_grid_id,
                info.anchor_type,
                info.anchor_left,
                info.anchor_top,
                info.sort_order,
            )

    def _set_window_position(
        self, grid: int, start_left: int, start_top: int, width: int, height: int
    ) -> None:
        position = (float(start_left), float(start_top))
        window = self.windows.get(grid)
        if window is None:
            self._new_window(grid, WindowType.editor(), None, position, (width, height))
            return
        window.position(None, (width, height), position)
        window.show()

    def _set_window_float_position(
        self,
        grid: int,
        anchor_grid: int,
        anchor_type: WindowAnchor,
        anchor_left: float,
        anchor_top: float,
        sort_order: int | None,
    ) -> None:
        parent_position = self._window_top_left(anchor_grid)
        window = self.windows.get(grid)
        if window is None:
            _log.error("Attempted to float window that does not exist.")
            return
        width, height = window.width, window.height
        left, top = anchor_type.modified_top_left(anchor_left, anchor_top, width, height)
        if parent_position is not None:
            left += parent_position[0]
            top += parent_position[1]
        window.position(
            AnchorInfo(
                anchor_grid_id=anchor_grid,
                anchor_type=anchor_type,
                anchor_left=anchor_left,
                anchor_top=anchor_top,
                sort_order=grid if sort_order is None else sort_order,
            ),
            (width, height),
            (left, top),
        )
        window.show()

    def _set_message_position(self, grid: int, grid_top: int, scrolled: bool) -> None:
        parent = self.windows.get(_BASE_GRID)
        parent_width = parent.width if parent is not None else 1
        anchor_info = AnchorInfo(
            anchor_grid_id=_BASE_GRID,
            anchor_type=WindowAnchor.NORTH_WEST,
            anchor_left=0.0,
            anchor_top=float(grid_top),
            sort_order=_TOP_SORT_ORDER,
        )
        position = (0.0, float(grid_top))
        window = self.windows.get(grid)
        if window is None:
            self._new_window(
                grid, WindowType.message(scrolled), anchor_info, position, (parent_width, 1)
            )
            return
        window.window_type = WindowType.message(scrolled)
        window.position(anchor_info, (parent_width, window.height), position)
        window.show()

    def _window_top_left(self, grid: int) -> tuple[float, float] | None:
        window = self.windows.get(grid)
        if window is None:
            return None
        info = window.anchor_info
        if info is None:
            return window.grid_position
        parent = self._window_top_left(info.anchor_grid_id)
        if parent is None:
            return None
        left, top = info.anchor_type.modified_top_left(
            info.anchor_left, info.anchor_top, window.width, window.height
        )
        return (parent[0] + left, parent[1] + top)

    def _set_cursor_position(self, grid: int, grid_left: int, grid_top: int) -> None:
        window = self.windows.get(grid)
        if window is not None and window.window_type.is_message:
            # Typing ":" puts the cursor at column 1 of the message grid; any other
            # jump into a message grid is skipped to avoid confusing movements.
            intentional = grid_left == 1
            already_there = self.cursor.parent_window_id == grid
            using_cmdline = self.current_mode_index == MODE_CMDLINE
            if not (intentional or already_there or using_cmdline):
                _log.debug(
                    "Cursor unexpectedly sent to message buffer %d (%d, %d)",
                    grid, grid_left, grid_top,
                )
                return
        self.cursor.parent_window_id = grid
        self.cursor.grid_position = (grid_left, grid_top)

    def _send_cursor_info(self) -> None:
        grid_left, grid_top = self.cursor.grid_position
        window = self.windows.get(self.cursor.parent_window_id)
        if window is not None:
            character, style, double_width = window.get_cursor_grid_cell(grid_left, grid_top)
            self.cursor.grid_cell = (character, style)
            self.cursor.double_width = double_width
        else:
            self.cursor.double_width = False
            self.cursor.grid_cell = (" ", None)
        self.draw_command_batcher.queue(UpdateCursor(dataclasses.replace(self.cursor)))

    def _set_option(self, gui_option: GuiOption) -> None:
        _log.debug("Option set %r", gui_option)
        if gui_option.name == "guifont":
            if gui_option.value == "*":
                self._aggregator.send(ListAvailableFonts())
            self.draw_command_batcher.queue(FontChanged(gui_option.value))
            self._redraw_screen()
        elif gui_option.name == "linespace":
            self.draw_command_batcher.queue(LineSpaceChanged(gui_option.value))
            self._redraw_screen()

    def _send_updated_viewport(self, grid: int, scroll_delta: float) -> None:
        window = self.windows.get(grid)
        if window is None:
            _log.debug("viewport event received before window initialized")
            return
        window.update_viewport(scroll_delta)

    def _redraw_screen(self) -> None:
        for window in self.windows.values():
            window.redraw()

    def _set_ui_ready(self) -> None:
        if not self.ui_ready:
            self.ui_ready = True
            self.draw_command_batcher.queue(UIReady())

    @property
    def styles(self) -> Mapping[int, Style]:
        return self.defined_styles


def start_editor(aggregator: EventAggregator | None = None) -> threading.Thread:
    """Run an editor on a background thread fed by the aggregator's editor commands."""
    aggregator = EVENT_AGGREGATOR if aggregator is None else aggregator
    receiver = aggregator.register_event(EditorCommand)
    editor = Editor(aggregator)

    def run() -> None:
        while True:
            editor.handle_editor_command(receiver.get())

    thread = threading.Thread(target=run, name="editor", daemon=True)
    thread.start()
    return thread