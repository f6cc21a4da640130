"""Typed channels that carry events between the parts of the editor."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_log = logging.getLogger(__name__)


def _type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class LoggingSender(Generic[T]):
    """Sends messages into a queue, logging each one with the channel name."""

    def __init__(self, channel: queue.Queue, channel_name: str):
        self._channel = channel
        self.channel_name = channel_name

    def send(self, message: T) -> None:
        _log.debug("%s %r", self.channel_name, message)
        self._channel.put(message)


@dataclass
class _Entry:
    sender: LoggingSender
    receiver: queue.Queue | None


class EventAggregator:
    """One channel per event type; any code may send, one receiver per type.

    An event goes to the channel of the nearest class in its MRO that has a
    channel; if none has one, a channel for the event's own type is made.
    """

    def __init__(self) -> None:
        self._entries: dict[type, _Entry] = {}
        self._lock = threading.Lock()

    def _create(self, event_type: type) -> _Entry:
        channel: queue.Queue = queue.Queue()
        entry = _Entry(LoggingSender(channel, _type_name(event_type)), channel)
        self._entries[event_type] = entry
        return entry

    def send(self, event: Any) -> None:
        """Queue ``event`` for the receiver of its type."""
        with self._lock:
            entry = next(
                (self._entries[cls] for cls in type(event).__mro__ if cls in self._entries),
                None,
            )
            if entry is None:
                entry = self._create(type(event))
        entry.sender.send(event)

    def register_event(self, event_type: type[T]) -> queue.Queue:
        """Take the receiving queue for ``event_type``; only one caller may."""
        with self._lock:
            entry = self._entries.get(event_type) or self._create(event_type)
            receiver = entry.receiver
            if receiver is None:
                raise RuntimeError(
                    f"a receiver for {_type_name(event_type)} is already registered"
                )
            entry.receiver = None
            return receiver


EVENT_AGGREGATOR = EventAggregator()