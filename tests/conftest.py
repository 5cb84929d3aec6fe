"""Fakes standing in for the desktop commands."""

from __future__ import annotations

import io

import pytest

from callquiet.errors import SettingError, SignalQueryError
from callquiet.monitor import MonitorLoop


class FakeSignalSource:
    """Replays a scripted list of readings. An exception instance is raised instead of returned."""

    def __init__(self, readings, on_exhausted=None):
        self.readings = list(readings)
        self.calls = 0
        self.on_exhausted = on_exhausted

    def is_active(self) -> bool:
        self.calls += 1
        if not self.readings:
            if self.on_exhausted:
                self.on_exhausted()
            return False
        value = self.readings.pop(0)
        if isinstance(value, Exception):
            raise value
        if not self.readings and self.on_exhausted:
            self.on_exhausted()
        return value


class FakeSettingStore:
    def __init__(self, enabled: bool = False):
        self.enabled = enabled
        self.reads = 0
        self.writes: list[bool] = []
        self.fail_reads = 0
        self.fail_writes = 0

    def is_enabled(self) -> bool:
        self.reads += 1
        if self.fail_reads:
            self.fail_reads -= 1
            raise SettingError("xfconf-query exploded")
        return self.enabled

    def set_enabled(self, state: bool) -> None:
        if self.fail_writes:
            self.fail_writes -= 1
            raise SettingError("xfconf-query exploded")
        self.writes.append(state)
        self.enabled = state


class RecordingNotifier:
    def __init__(self, fail: bool = False):
        self.sent: list[tuple[str, str, int]] = []
        self.fail = fail

    def notify(self, title, message, duration_ms=3000):
        if self.fail:
            raise RuntimeError("notification daemon gone")
        self.sent.append((title, message, duration_ms))


@pytest.fixture()
def store() -> FakeSettingStore:
    return FakeSettingStore()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def make_loop(store, notifier):
    def _make(readings, **kwargs):
        source = kwargs.pop("source", None) or FakeSignalSource(readings)
        kwargs.setdefault("poll_interval", 0.001)
        kwargs.setdefault("progress", io.StringIO())
        return MonitorLoop(source, kwargs.pop("store", store), notifier=kwargs.pop("notifier", notifier), **kwargs)
    return _make


def query_error() -> SignalQueryError:
    return SignalQueryError("xwininfo: unable to open display")
