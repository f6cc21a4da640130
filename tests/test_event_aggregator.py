import logging
import queue
from dataclasses import dataclass

import pytest

from neovide.event_aggregator import EventAggregator, LoggingSender


@dataclass
class Ping:
    value: int


@dataclass
class Pong:
    text: str


class Base:
    pass


@dataclass
class Child(Base):
    name: str


def test_registered_receiver_gets_events_in_order():
    aggregator = EventAggregator()
    receiver = aggregator.register_event(Ping)
    aggregator.send(Ping(1))
    aggregator.send(Ping(2))
    assert receiver.get_nowait() == Ping(1)
    assert receiver.get_nowait() == Ping(2)
    assert receiver.empty()


def test_events_sent_before_registration_are_kept():
    aggregator = EventAggregator()
    aggregator.send(Ping(7))
    receiver = aggregator.register_event(Ping)
    assert receiver.get_nowait() == Ping(7)


def test_types_have_separate_channels():
    aggregator = EventAggregator()
    pings = aggregator.register_event(Ping)
    pongs = aggregator.register_event(Pong)
    aggregator.send(Pong("x"))
    assert pongs.get_nowait() == Pong("x")
    assert pings.empty()


def test_second_registration_fails():
    aggregator = EventAggregator()
    aggregator.register_event(Ping)
    with pytest.raises(RuntimeError):
        aggregator.register_event(Ping)


def test_subclass_events_reach_base_receiver():
    aggregator = EventAggregator()
    receiver = aggregator.register_event(Base)
    aggregator.send(Child("c"))
    assert receiver.get_nowait() == Child("c")


def test_list_batches_have_their_own_channel():
    aggregator = EventAggregator()
    receiver = aggregator.register_event(list)
    aggregator.send([Ping(1), Ping(2)])
    assert receiver.get_nowait() == [Ping(1), Ping(2)]


def test_logging_sender_puts_and_logs(caplog):
    channel = queue.Queue()
    sender = LoggingSender(channel, "pings")
    with caplog.at_level(logging.DEBUG, logger="neovide.event_aggregator"):
        sender.send(Ping(3))
    assert channel.get_nowait() == Ping(3)
    assert any("pings" in record.getMessage() for record in caplog.records)