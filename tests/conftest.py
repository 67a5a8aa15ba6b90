"""Shared test fixtures."""

import random
from datetime import datetime

import pytest

from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes

FIXED_NOW = datetime(2024, 1, 1, 9, 0, 0)


class RecordingPort:
    """EventPort 구현 — 발행된 이벤트를 순서대로 기록만 한다."""

    def __init__(self) -> None:
        self.events: list[GameEvent] = []

    def emit(self, event: GameEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [e.event_type for e in self.events]

    def of_type(self, event_type: str) -> list[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]


class EventRecorder:
    """실제 EventBus의 모든 EventTypes를 구독해서 기록."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[GameEvent] = []
        for name, value in vars(EventTypes).items():
            if name.isupper() and isinstance(value, str):
                bus.subscribe(value, self.events.append)

    @property
    def types(self) -> list[str]:
        return [e.event_type for e in self.events]

    def of_type(self, event_type: str) -> list[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]


@pytest.fixture()
def port() -> RecordingPort:
    return RecordingPort()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def recorder(bus: EventBus) -> EventRecorder:
    return EventRecorder(bus)


@pytest.fixture()
def rng() -> random.Random:
    """고정 시드 RNG"""
    return random.Random(1234)


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW
