"""
Playback driver.

Purpose: Replay a completed frame sequence one frame per timer tick,
    at an interval that can change mid-playback without losing frames.

Inputs:
    - Closed FrameRecorder
    - Interval in milliseconds
    - on_frame / on_complete callbacks

Outputs:
    - Callbacks invoked in frame order; on_complete exactly once

Params:
    timer: object with start(interval_ms, callback), cancel(), active
"""

import time
from enum import Enum
from typing import Callable, Optional

import pygame

from nav.frames import Frame, FrameRecorder


# Event posted by PygameTimer on every tick
PLAYBACK_TICK = pygame.USEREVENT + 1


class PlaybackState(Enum):
    """Playback lifecycle."""
    IDLE = "IDLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    FINISHED = "FINISHED"
    STOPPED = "STOPPED"


def validate_interval(interval_ms) -> int:
    """Return interval as int; raise ValueError unless it is a positive integer."""
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
        raise ValueError(f"Playback interval must be a positive integer (ms), got {interval_ms!r}")
    return interval_ms


class PygameTimer:
    """Repeating timer backed by pygame.time.set_timer.

    The engine's event loop must call dispatch(event) for each event so
    PLAYBACK_TICK events reach the callback. Each start() posts ticks tagged
    with a new generation; ticks from an earlier start are dropped.
    """

    def __init__(self, event_type: int = PLAYBACK_TICK):
        self.event_type = event_type
        self.callback: Optional[Callable[[], None]] = None
        self.interval_ms = 0
        self.generation = 0
        self.active = False

    def start(self, interval_ms: int, callback: Callable[[], None]):
        self.cancel()
        self.generation += 1
        self.callback = callback
        self.interval_ms = interval_ms
        tick = pygame.event.Event(self.event_type, generation=self.generation)
        pygame.time.set_timer(tick, interval_ms)
        self.active = True

    def cancel(self):
        if self.active:
            pygame.time.set_timer(self.event_type, 0)
            # Ticks already queued belong to the cancelled timer
            pygame.event.clear(self.event_type)
        self.active = False

    def dispatch(self, event) -> bool:
        """Run the callback for a tick event. Returns True if the event was consumed."""
        if event.type != self.event_type:
            return False
        if self.active and self.callback is not None and getattr(event, "generation", None) == self.generation:
            self.callback()
        return True


class BlockingTimer:
    """Sleep-based timer for headless playback.

    start() only arms the timer; run() blocks and ticks until cancelled.
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self.sleep = sleep
        self.callback: Optional[Callable[[], None]] = None
        self.interval_ms = 0
        self.active = False

    def start(self, interval_ms: int, callback: Callable[[], None]):
        self.callback = callback
        self.interval_ms = interval_ms
        self.active = True

    def cancel(self):
        self.active = False

    def run(self):
        while self.active:
            self.sleep(self.interval_ms / 1000.0)
            if self.active and self.callback is not None:
                self.callback()


class PlaybackDriver:
    """Timed consumer of a frame recorder."""

    def __init__(self, timer):
        """
        Initialize playback driver.

        Args:
            timer: Timer providing start(interval_ms, callback) and cancel()
        """
        self.timer = timer
        self.state = PlaybackState.IDLE
        self.recorder: Optional[FrameRecorder] = None
        self.interval_ms = 0
        self.frames_played = 0
        self.on_frame: Optional[Callable[[Frame], None]] = None
        self.on_complete: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return self.state in (PlaybackState.PLAYING, PlaybackState.PAUSED)

    def play(self, recorder: FrameRecorder, interval_ms: int,
             on_frame: Callable[[Frame], None], on_complete: Callable[[], None]):
        """
        Start replaying recorder.

        Any playback in flight is stopped first so two loops never drain
        frames at the same time.

        Args:
            recorder: Frames to replay
            interval_ms: Milliseconds between frames
            on_frame: Called with each frame, in order
            on_complete: Called once when the recorder is empty
        """
        interval_ms = validate_interval(interval_ms)
        self.stop()

        self.recorder = recorder
        self.interval_ms = interval_ms
        self.on_frame = on_frame
        self.on_complete = on_complete
        self.frames_played = 0
        self.state = PlaybackState.PLAYING
        self.timer.start(self.interval_ms, self.tick)

    def tick(self):
        """Play one frame, or finish when none remain."""
        if self.state != PlaybackState.PLAYING:
            return

        frame = self.recorder.drain()
        if frame is not None:
            self.frames_played += 1
            self.on_frame(frame)
            return

        self.timer.cancel()
        self.state = PlaybackState.FINISHED
        self.on_complete()

    def set_interval(self, interval_ms: int):
        """Change speed; restarts the timer but keeps remaining frames."""
        self.interval_ms = validate_interval(interval_ms)
        if self.state == PlaybackState.PLAYING:
            self.timer.cancel()
            self.timer.start(self.interval_ms, self.tick)

    def pause(self):
        if self.state == PlaybackState.PLAYING:
            self.timer.cancel()
            self.state = PlaybackState.PAUSED

    def resume(self):
        if self.state == PlaybackState.PAUSED:
            self.state = PlaybackState.PLAYING
            self.timer.start(self.interval_ms, self.tick)

    def stop(self):
        """Cancel playback in flight. Remaining frames are abandoned."""
        if self.active:
            self.timer.cancel()
            self.state = PlaybackState.STOPPED
