"""Tests for the playback driver."""

import pytest

from nav.dfs import solve
from nav.grid import locate_endpoints, parse
from sim.config import load_maze
from sim.playback import BlockingTimer, PlaybackDriver, PlaybackState
from tools.narrator import CELEBRATION, NO_SOLUTION, completion_message
from conftest import ADJACENT, WALLED_IN


def record(rows):
    grid = parse(rows)
    start, end = locate_endpoints(grid)
    return solve(grid, start, end)


class Collector:
    def __init__(self):
        self.frames = []
        self.completions = 0

    def on_frame(self, frame):
        self.frames.append(frame)

    def on_complete(self):
        self.completions += 1


def test_plays_every_frame_in_order(fake_timer):
    recorder = record(ADJACENT)
    expected = recorder.frames
    out = Collector()

    driver = PlaybackDriver(fake_timer)
    driver.play(recorder, 500, out.on_frame, out.on_complete)
    assert fake_timer.interval_ms == 500

    fake_timer.fire(len(expected))
    assert tuple(out.frames) == expected
    assert out.completions == 0

    fake_timer.fire()
    assert out.completions == 1
    assert driver.state == PlaybackState.FINISHED
    assert not fake_timer.active
    assert driver.frames_played == len(expected)


def test_complete_fires_once(fake_timer):
    out = Collector()
    driver = PlaybackDriver(fake_timer)
    driver.play(record(ADJACENT), 100, out.on_frame, out.on_complete)
    fake_timer.run()
    driver.tick()
    driver.tick()
    assert out.completions == 1


def test_interval_change_keeps_remaining_frames(fake_timer):
    maze = load_maze("classic")
    baseline = record(maze).frames

    out = Collector()
    driver = PlaybackDriver(fake_timer)
    driver.play(record(maze), 500, out.on_frame, out.on_complete)
    fake_timer.fire(25)
    driver.set_interval(20)
    fake_timer.fire(40)
    driver.set_interval(900)
    fake_timer.run()

    assert tuple(out.frames) == baseline
    assert out.completions == 1
    assert fake_timer.starts == [500, 20, 900]


def test_interval_change_after_finish_does_not_restart(fake_timer):
    out = Collector()
    driver = PlaybackDriver(fake_timer)
    driver.play(record(ADJACENT), 100, out.on_frame, out.on_complete)
    fake_timer.run()
    driver.set_interval(50)
    assert not fake_timer.active
    assert driver.interval_ms == 50


def test_pause_and_resume(fake_timer):
    recorder = record(ADJACENT)
    expected = recorder.frames
    out = Collector()
    driver = PlaybackDriver(fake_timer)
    driver.play(recorder, 100, out.on_frame, out.on_complete)

    fake_timer.fire(2)
    driver.pause()
    assert driver.state == PlaybackState.PAUSED
    fake_timer.fire(5)
    assert len(out.frames) == 2

    driver.resume()
    fake_timer.run()
    assert tuple(out.frames) == expected


def test_play_again_cancels_running_playback(fake_timer):
    first = record(ADJACENT)
    out = Collector()
    driver = PlaybackDriver(fake_timer)
    driver.play(first, 100, out.on_frame, out.on_complete)
    fake_timer.fire(2)

    second = record(ADJACENT)
    driver.play(second, 100, out.on_frame, out.on_complete)
    assert fake_timer.cancels == 1
    assert driver.frames_played == 0

    second_frames = second.frames
    fake_timer.run()

    # Abandoned frames of the first recorder are never played
    assert len(first) == len(second_frames) - 2
    assert tuple(out.frames[2:]) == second_frames
    assert out.completions == 1


def test_stop(fake_timer):
    out = Collector()
    driver = PlaybackDriver(fake_timer)
    driver.play(record(ADJACENT), 100, out.on_frame, out.on_complete)
    driver.stop()
    fake_timer.fire(10)
    driver.tick()
    assert driver.state == PlaybackState.STOPPED
    assert out.frames == []
    assert out.completions == 0


@pytest.mark.parametrize("interval", [0, -10, 1.5, "100", True, None])
def test_invalid_interval(fake_timer, interval):
    driver = PlaybackDriver(fake_timer)
    with pytest.raises(ValueError):
        driver.play(record(ADJACENT), interval, lambda f: None, lambda: None)
    assert driver.state == PlaybackState.IDLE


def test_no_solution_does_not_celebrate(fake_timer):
    recorder = record(WALLED_IN)
    messages = []
    driver = PlaybackDriver(fake_timer)
    driver.play(recorder, 100, lambda f: None,
                lambda: messages.append(completion_message(recorder.solved)))
    fake_timer.run()
    assert messages == [NO_SOLUTION]


def test_solution_celebrates(fake_timer):
    recorder = record(ADJACENT)
    messages = []
    driver = PlaybackDriver(fake_timer)
    driver.play(recorder, 100, lambda f: None,
                lambda: messages.append(completion_message(recorder.solved)))
    fake_timer.run()
    assert messages == [CELEBRATION]


def test_blocking_timer_sleeps_between_frames():
    sleeps = []
    timer = BlockingTimer(sleep=sleeps.append)
    out = Collector()
    recorder = record(ADJACENT)
    frame_count = len(recorder)

    driver = PlaybackDriver(timer)
    driver.play(recorder, 250, out.on_frame, out.on_complete)
    timer.run()

    assert len(out.frames) == frame_count
    assert out.completions == 1
    assert sleeps == [0.25] * (frame_count + 1)
