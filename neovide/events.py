"""Redraw events sent by Neovim and the values they carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cursor import CursorMode
from .style import Colors, Style

StyledContent = list[tuple[int, str]]

KNOWN_GUI_OPTIONS = frozenset(
    {
        "arabicshape",
        "ambiwidth",
        "emoji",
        "guifont",
        "guifontset",
        "guifontwide",
        "linespace",
        "pumblend",
        "showtabline",
        "termguicolors",
    }
)


class ParseError(Exception):
    """A value in a redraw notification did not have the expected shape.

    ``kind`` names what was expected: array, map, string, u64, i64, f64,
    bool, window anchor, or event for a malformed event as a whole.
    """

    def __init__(self, kind: str, value: Any):
        self.kind = kind
        self.value = value
        super().__init__(f"invalid {kind} format {value}")


@dataclass
class GridLineCell:
    text: str
    highlight_id: int | None = None
    repeat: int | None = None


class MessageKind(Enum):
    UNKNOWN = ""
    CONFIRM = "confirm"
    CONFIRM_SUBSTITUTE = "confirm_sub"
    ERROR = "emsg"
    ECHO = "echo"
    ECHO_MESSAGE = "echomsg"
    ECHO_ERROR = "echoerr"
    LUA_ERROR = "lua_error"
    RPC_ERROR = "rpc_error"
    RETURN_PROMPT = "return_prompt"
    QUICK_FIX = "quickfix"
    SEARCH_COUNT = "search_count"
    WARNING = "wmsg"

    @classmethod
    def parse(cls, kind: str) -> MessageKind:
        """The kind Neovim calls ``kind``; UNKNOWN for anything else."""
        if not kind:
            return cls.UNKNOWN
        try:
            return cls(kind)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class GuiOption:
    """An ``option_set`` value; ``name`` is Neovim's option name."""

    name: str
    value: Any

    @property
    def is_known(self) -> bool:
        return self.name in KNOWN_GUI_OPTIONS


class WindowAnchor(Enum):
    NORTH_WEST = "NW"
    NORTH_EAST = "NE"
    SOUTH_WEST = "SW"
    SOUTH_EAST = "SE"

    def modified_top_left(
        self, grid_left: float, grid_top: float, width: int, height: int
    ) -> tuple[float, float]:
        """The top left corner of a window of the given size anchored here."""
        left = grid_left - width if self in (self.NORTH_EAST, self.SOUTH_EAST) else grid_left
        top = grid_top - height if self in (self.SOUTH_WEST, self.SOUTH_EAST) else grid_top
        return (float(left), float(top))


class EditorMode(Enum):
    """The main editor modes; any other mode name maps to UNKNOWN."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    REPLACE = "replace"
    CMDLINE = "cmdline_normal"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> EditorMode:
        return cls.UNKNOWN


class RedrawEvent:
    """Base of all redraw events."""


@dataclass
class SetTitle(RedrawEvent):
    title: str


@dataclass
class ModeInfoSet(RedrawEvent):
    cursor_modes: list[CursorMode] = field(default_factory=list)


@dataclass
class OptionSet(RedrawEvent):
    gui_option: GuiOption


@dataclass
class ModeChange(RedrawEvent):
    mode: EditorMode
    mode_index: int


@dataclass
class MouseOn(RedrawEvent):
    pass


@dataclass
class MouseOff(RedrawEvent):
    pass


@dataclass
class BusyStart(RedrawEvent):
    pass


@dataclass
class BusyStop(RedrawEvent):
    pass


@dataclass
class Flush(RedrawEvent):
    pass


@dataclass
class Resize(RedrawEvent):
    grid: int
    width: int
    height: int


@dataclass
class DefaultColorsSet(RedrawEvent):
    colors: Colors


@dataclass
class HighlightAttributesDefine(RedrawEvent):
    id: int
    style: Style


@dataclass
class GridLine(RedrawEvent):
    grid: int
    row: int
    column_start: int
    cells: list[GridLineCell] = field(default_factory=list)


@dataclass
class Clear(RedrawEvent):
    grid: int


@dataclass
class Destroy(RedrawEvent):
    grid: int


@dataclass
class CursorGoto(RedrawEvent):
    grid: int
    row: int
    column: int


@dataclass
class Scroll(RedrawEvent):
    grid: int
    top: int
    bottom: int
    left: int
    right: int
    rows: int
    columns: int


@dataclass
class WindowPosition(RedrawEvent):
    grid: int
    start_row: int
    start_column: int
    width: int
    height: int


@dataclass
class WindowFloatPosition(RedrawEvent):
    grid: int
    anchor: WindowAnchor
    anchor_grid: int
    anchor_row: float
    anchor_column: float
    focusable: bool
    sort_order: int | None = None


@dataclass
class WindowExternalPosition(RedrawEvent):
    grid: int


@dataclass
class WindowHide(RedrawEvent):
    grid: int


@dataclass
class WindowClose(RedrawEvent):
    grid: int


@dataclass
class MessageSetPosition(RedrawEvent):
    grid: int
    row: int
    scrolled: bool
    separator_character: str


@dataclass
class WindowViewport(RedrawEvent):
    grid: int
    top_line: float
    bottom_line: float
    current_line: float
    current_column: float
    line_count: float | None = None
    scroll_delta: float | None = None


@dataclass
class CommandLineShow(RedrawEvent):
    content: StyledContent
    position: int
    first_character: str
    prompt: str
    indent: int
    level: int


@dataclass
class CommandLinePosition(RedrawEvent):
    position: int
    level: int


@dataclass
class CommandLineSpecialCharacter(RedrawEvent):
    character: str
    shift: bool
    level: int


@dataclass
class CommandLineHide(RedrawEvent):
    pass


@dataclass
class CommandLineBlockShow(RedrawEvent):
    lines: list[StyledContent] = field(default_factory=list)


@dataclass
class CommandLineBlockAppend(RedrawEvent):
    line: StyledContent = field(default_factory=list)


@dataclass
class CommandLineBlockHide(RedrawEvent):
    pass


@dataclass
class MessageShow(RedrawEvent):
    kind: MessageKind
    content: StyledContent
    replace_last: bool


@dataclass
class MessageClear(RedrawEvent):
    pass


@dataclass
class MessageShowMode(RedrawEvent):
    content: StyledContent = field(default_factory=list)


@dataclass
class MessageShowCommand(RedrawEvent):
    content: StyledContent = field(default_factory=list)


@dataclass
class MessageRuler(RedrawEvent):
    content: StyledContent = field(default_factory=list)


@dataclass
class MessageHistoryShow(RedrawEvent):
    entries: list[tuple[MessageKind, StyledContent]] = field(default_factory=list)


@dataclass
class ShowIntro(RedrawEvent):
    message: list[str] = field(default_factory=list)


@dataclass
class Suspend(RedrawEvent):
    pass