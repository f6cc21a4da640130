"""Commands the editor sends to the renderer, and their batching."""

from __future__ import annotations

from dataclasses import dataclass, field
from queue import Empty, SimpleQueue

from .cursor import Cursor
from .event_aggregator import EVENT_AGGREGATOR, EventAggregator
from .events import EditorMode, WindowAnchor
from .style import Style


@dataclass
class AnchorInfo:
    """Where a floating window hangs from its anchor grid."""

    anchor_grid_id: int
    anchor_type: WindowAnchor
    anchor_left: float
    anchor_top: float
    sort_order: int


@dataclass(frozen=True)
class WindowType:
    """An editor window, or a message window that may be scrolled."""

    is_message: bool = False
    scrolled: bool = False

    @classmethod
    def editor(cls) -> WindowType:
        return cls()

    @classmethod
    def message(cls, scrolled: bool = False) -> WindowType:
        return cls(is_message=True, scrolled=scrolled)


@dataclass
class LineFragment:
    """A run of cells in one row sharing a style."""

    text: str
    window_left: int
    width: int
    style: Style | None = None


class WindowDrawCommand:
    """Base of the commands addressed to a single window."""


@dataclass
class DrawPosition(WindowDrawCommand):
    grid_position: tuple[float, float]
    grid_size: tuple[int, int]
    anchor_info: AnchorInfo | None
    window_type: WindowType


@dataclass
class DrawLine(WindowDrawCommand):
    row: int
    line_fragments: list[LineFragment] = field(default_factory=list)


@dataclass
class DrawScroll(WindowDrawCommand):
    top: int
    bottom: int
    left: int
    right: int
    rows: int
    cols: int


@dataclass
class DrawClear(WindowDrawCommand):
    pass


@dataclass
class DrawShow(WindowDrawCommand):
    pass


@dataclass
class DrawHide(WindowDrawCommand):
    pass


@dataclass
class DrawClose(WindowDrawCommand):
    pass


@dataclass
class DrawViewport(WindowDrawCommand):
    scroll_delta: float


class DrawCommand:
    """Base of the commands sent to the renderer."""


@dataclass
class CloseWindow(DrawCommand):
    grid_id: int


@dataclass
class WindowDraw(DrawCommand):
    grid_id: int
    command: WindowDrawCommand


@dataclass
class UpdateCursor(DrawCommand):
    cursor: Cursor


@dataclass
class FontChanged(DrawCommand):
    font: str


@dataclass
class DefaultStyleChanged(DrawCommand):
    style: Style


@dataclass
class ModeChanged(DrawCommand):
    mode: EditorMode


@dataclass
class LineSpaceChanged(DrawCommand):
    line_space: int


@dataclass
class UIReady(DrawCommand):
    pass


class DrawCommandBatcher:
    """Collects draw commands and sends them to the aggregator as one list."""

    def __init__(self, aggregator: EventAggregator | None = None):
        self._aggregator = EVENT_AGGREGATOR if aggregator is None else aggregator
        self._pending: SimpleQueue[DrawCommand] = SimpleQueue()

    def queue(self, draw_command: DrawCommand) -> None:
        self._pending.put(draw_command)

    def send_batch(self) -> None:
        """Send everything queued so far as a single list, even if empty."""
        batch: list[DrawCommand] = []
        while True:
            try:
                batch.append(self._pending.get_nowait())
            except Empty:
                break
        self._aggregator.send(batch)