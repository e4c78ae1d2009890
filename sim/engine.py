"""
Maze animation engine.

Purpose: Tie the pieces together: parse the maze, run the DFS to completion,
    then replay its frames with the playback driver, either in a pygame
    window or in the terminal.

Inputs:
    - Maze rows and name
    - Config dictionary (see sim/config.py)
    - Playback interval override

Outputs:
    - Animated maze (window or terminal lines)
    - Solve statistics logged to CSV

Params:
    interval_ms: int - Milliseconds between frames
    config_preset: str - Configuration preset name
"""

import time
from typing import Callable, Dict, List, Optional

import pygame

from nav.dfs import DFSPlanner
from nav.frames import Frame, FrameRecorder, render_frame
from nav.grid import locate_endpoints, parse
from nav.maps import MapUtils
from sim.playback import (
    BlockingTimer, PlaybackDriver, PlaybackState, PygameTimer, validate_interval,
)
from sim.renderer import GridRenderer
from tools.logger import SolveLogger
from tools.metrics import SolveMetrics
from tools.narrator import AnnotationLog, completion_message


class MazeSession:
    """One maze: grid, endpoints, and repeatable solves."""

    def __init__(self, rows: List[str], name: str, config: Dict, preset: str = "baseline"):
        """
        Initialize maze session. Grid errors are raised here, before any frame.

        Args:
            rows: Maze rows
            name: Maze name used in logs
            config: Config dictionary
            preset: Config preset name used in logs
        """
        self.name = name
        self.config = config
        self.preset = preset

        self.grid = parse(rows, config['maze']['symbols'])
        self.start, self.end = locate_endpoints(self.grid)
        self.planner = DFSPlanner(self.grid)
        self.shortest_path_baseline = MapUtils(self.grid).compute_shortest_path_baseline(self.start, self.end)

        self.logger = None
        if config['logging']['enabled']:
            self.logger = SolveLogger(name, preset, config['logging']['log_dir'])

        self.metrics: Optional[Dict] = None
        self.solves = 0

    def solve(self) -> FrameRecorder:
        """Run the search to completion and record its statistics."""
        t0 = time.perf_counter()
        recorder = self.planner.solve(self.start, self.end)
        plan_time = (time.perf_counter() - t0) * 1000.0
        self.solves += 1

        # Frames are read here, before playback drains them
        self.metrics = SolveMetrics.from_frames(
            recorder.frames,
            shortest_path_baseline=self.shortest_path_baseline,
            plan_time_ms=plan_time,
        ).finalize()

        status = "solved" if recorder.solved else "no solution"
        print(f"Maze {self.name}: {len(recorder)} frames, {status}, time: {plan_time:.2f}ms")

        if self.logger is not None:
            self.logger.log(**self.metrics)
        return recorder


class TerminalPlayback:
    """Headless playback: annotation lines printed at the playback interval."""

    def __init__(self, session: MazeSession, interval_ms: int,
                 printer: Callable[[str], None] = print, sleep: Callable[[float], None] = time.sleep,
                 show_grid: bool = False):
        self.session = session
        self.interval_ms = validate_interval(interval_ms)
        self.printer = printer
        self.show_grid = show_grid
        self.timer = BlockingTimer(sleep=sleep)
        self.driver = PlaybackDriver(self.timer)
        self.log = AnnotationLog(max_lines=session.config['render']['log_lines'])
        self.solved = False

    def _on_frame(self, frame: Frame):
        line = self.log.record(frame.annotation)
        if line is not None:
            self.printer(line)
        if self.show_grid:
            self.printer("\n".join(frame.rows))

    def _on_complete(self):
        self.printer(completion_message(self.solved))

    def run(self) -> bool:
        """Solve and replay. Returns whether the maze was solved."""
        recorder = self.session.solve()
        self.solved = recorder.solved
        self.driver.play(recorder, self.interval_ms, self._on_frame, self._on_complete)
        self.timer.run()
        return self.solved


class MazeAnimationEngine:
    """Pygame window replaying DFS frames."""

    def __init__(self, session: MazeSession, interval_ms: Optional[int] = None,
                 exit_on_complete: bool = False):
        """
        Initialize animation engine.

        Args:
            session: Maze session to animate
            interval_ms: Playback interval, overrides the config preset
            exit_on_complete: Close the window when playback ends
        """
        self.session = session
        self.config = session.config
        self.exit_on_complete = exit_on_complete

        playback_cfg = self.config['playback']
        render_cfg = self.config['render']
        self.interval_ms = validate_interval(interval_ms if interval_ms is not None else playback_cfg['interval_ms'])
        self.speed_step_ms = playback_cfg['speed_step_ms']
        self.fps = render_cfg['fps']

        self.renderer = GridRenderer(
            cell_size=render_cfg['cell_size'],
            stroke_width=render_cfg['stroke_width'],
        )
        self.log = AnnotationLog(max_lines=render_cfg['log_lines'], emoji=False)

        # Initialize Pygame
        pygame.init()
        grid_w, grid_h = self.renderer.surface_size(session.grid.rows)
        self.hud_height = 40
        self.log_width = render_cfg['log_width']
        self.width = grid_w + self.log_width
        self.height = max(grid_h, 240) + self.hud_height
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(f"DFS Maze - {session.name}")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 22)
        self.small_font = pygame.font.Font(None, 18)

        self.timer = PygameTimer()
        self.driver = PlaybackDriver(self.timer)

        # Playback state
        self.running = True
        self.recorder: Optional[FrameRecorder] = None
        self.current_frame: Optional[Frame] = None
        self.solved = False
        self.completed = False

    def run(self):
        """Main loop: events drive playback ticks, rendering runs at fps."""
        self._restart()

        while self.running:
            self.clock.tick(self.fps)
            self._handle_input()
            self._render()

            if self.completed and self.exit_on_complete:
                break

        self._cleanup()

    def _handle_input(self):
        """Handle timer ticks and keyboard input."""
        for event in pygame.event.get():
            if self.timer.dispatch(event):
                continue
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self._restart()
                elif event.key == pygame.K_SPACE:
                    if self.driver.state == PlaybackState.PAUSED:
                        self.driver.resume()
                    else:
                        self.driver.pause()
                elif event.key in (pygame.K_UP, pygame.K_PLUS, pygame.K_EQUALS):
                    self._set_interval(self.interval_ms - self.speed_step_ms)
                elif event.key in (pygame.K_DOWN, pygame.K_MINUS):
                    self._set_interval(self.interval_ms + self.speed_step_ms)

    def _set_interval(self, interval_ms: int):
        """Change playback speed without re-running the search."""
        self.interval_ms = max(1, interval_ms)
        self.driver.set_interval(self.interval_ms)
        print(f"Playback interval: {self.interval_ms}ms")

    def _on_frame(self, frame: Frame):
        self.current_frame = frame
        self.log.record(frame.annotation)

    def _on_complete(self):
        self.completed = True
        print(completion_message(self.solved))

    def _restart(self):
        """Stop any playback in flight, solve again, replay from the first frame."""
        self.driver.stop()
        self.log.clear()
        self.completed = False
        self.current_frame = None

        self.recorder = self.session.solve()
        self.solved = self.recorder.solved
        self.driver.play(self.recorder, self.interval_ms, self._on_frame, self._on_complete)

    def _render(self):
        """Render grid, annotation log and status bar."""
        self.screen.fill((255, 255, 255))

        if self.current_frame is not None:
            self.renderer.draw(self.screen, self.current_frame)
        else:
            self.renderer.draw(self.screen, render_frame(self.session.grid, ()))

        self._render_log()
        self._render_hud()
        pygame.display.flip()

    def _render_log(self):
        panel_x = self.width - self.log_width
        pygame.draw.rect(self.screen, (20, 20, 30), (panel_x, 0, self.log_width, self.height - self.hud_height))
        y = 8
        for i, line in enumerate(self.log.lines):
            color = (255, 255, 255) if i == 0 else (160, 160, 170)
            text = self.small_font.render(line, True, color)
            self.screen.blit(text, (panel_x + 8, y))
            y += 18

    def _render_hud(self):
        hud_y = self.height - self.hud_height
        pygame.draw.rect(self.screen, (20, 20, 30), (0, hud_y, self.width, self.hud_height))

        if self.completed:
            if self.solved:
                status = f"SOLVED! Path: {len(self.recorder.final_path)} cells"
                color = (100, 255, 100)
            else:
                status = "NO SOLUTION"
                color = (255, 100, 100)
        else:
            status = f"{self.driver.state.name}  frame {self.driver.frames_played}/{self.recorder.recorded}"
            color = (255, 200, 100)

        text = self.font.render(status, True, color)
        self.screen.blit(text, (10, hud_y + 12))

        speed = self.small_font.render(
            f"Interval: {self.interval_ms}ms  [Up/Down] speed  [Space] pause  [R] restart",
            True, (200, 200, 200),
        )
        self.screen.blit(speed, (self.width - speed.get_width() - 10, hud_y + 14))

    def _cleanup(self):
        """Stop playback and print a summary."""
        self.driver.stop()

        metrics = self.session.metrics or {}
        print("\n=== Solve Summary ===")
        print(f"Maze: {self.session.name}")
        print(f"Frames: {metrics.get('frames', 0)}")
        print(f"Solved: {metrics.get('solved', 0)}")
        print(f"Path length: {metrics.get('path_len', 0)}")
        print(f"Backtracks: {metrics.get('backtracks', 0)}")
        print(f"Efficiency: {metrics.get('efficiency', 0.0):.2f}")

        pygame.quit()
