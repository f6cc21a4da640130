from neovide.draw_commands import (
    AnchorInfo,
    CloseWindow,
    DrawClear,
    DrawCommandBatcher,
    DrawPosition,
    FontChanged,
    UIReady,
    WindowDraw,
    WindowType,
)
from neovide.event_aggregator import EventAggregator
from neovide.events import WindowAnchor


def _batcher():
    aggregator = EventAggregator()
    receiver = aggregator.register_event(list)
    return DrawCommandBatcher(aggregator), receiver


def test_batch_keeps_queue_order():
    batcher, receiver = _batcher()
    batcher.queue(UIReady())
    batcher.queue(FontChanged("Fira Code:h12"))
    batcher.queue(CloseWindow(3))
    batcher.send_batch()
    assert receiver.get_nowait() == [UIReady(), FontChanged("Fira Code:h12"), CloseWindow(3)]


def test_empty_batch_is_still_sent():
    batcher, receiver = _batcher()
    batcher.send_batch()
    assert receiver.get_nowait() == []


def test_each_batch_holds_only_new_commands():
    batcher, receiver = _batcher()
    batcher.queue(CloseWindow(1))
    batcher.send_batch()
    batcher.queue(CloseWindow(2))
    batcher.send_batch()
    assert receiver.get_nowait() == [CloseWindow(1)]
    assert receiver.get_nowait() == [CloseWindow(2)]


def test_window_draw_carries_position():
    batcher, receiver = _batcher()
    anchor = AnchorInfo(1, WindowAnchor.NORTH_WEST, 0.0, 5.0, 2)
    command = WindowDraw(
        2, DrawPosition((0.0, 5.0), (10, 3), anchor, WindowType.message(scrolled=True))
    )
    batcher.queue(command)
    batcher.queue(WindowDraw(2, DrawClear()))
    batcher.send_batch()
    batch = receiver.get_nowait()
    assert batch[0].command.anchor_info == anchor
    assert batch[0].command.window_type.scrolled is True
    assert batch[1] == WindowDraw(2, DrawClear())


def test_window_type_constructors():
    assert WindowType.editor() == WindowType()
    assert WindowType.editor().is_message is False
    assert WindowType.message().is_message is True
    assert WindowType.message(True) != WindowType.message(False)