"""Shared fixtures."""

import copy

import pytest

from sim.config import DEFAULTS


ADJACENT = ["xxx", "xsx", "xex", "xxx"]
WALLED_IN = ["xxxxx", "xsxex", "xxxxx"]
# DFS finds the long way round (6 steps); shortest is 2
DETOUR = ["xxxxx", "x   x", "x x x", "xs ex", "xxxxx"]


class FakeTimer:
    """Timer driven by hand: fire() runs one tick if armed."""

    def __init__(self):
        self.active = False
        self.callback = None
        self.interval_ms = None
        self.starts = []
        self.cancels = 0

    def start(self, interval_ms, callback):
        self.active = True
        self.callback = callback
        self.interval_ms = interval_ms
        self.starts.append(interval_ms)

    def cancel(self):
        self.active = False
        self.cancels += 1

    def fire(self, times=1):
        for _ in range(times):
            if self.active:
                self.callback()

    def run(self, max_ticks=100000):
        ticks = 0
        while self.active and ticks < max_ticks:
            self.callback()
            ticks += 1
        return ticks


@pytest.fixture
def fake_timer():
    return FakeTimer()


@pytest.fixture
def config(tmp_path):
    cfg = copy.deepcopy(DEFAULTS)
    cfg['logging']['enabled'] = False
    cfg['logging']['log_dir'] = str(tmp_path / "logs")
    return cfg
