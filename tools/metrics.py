"""
Metrics tracker for solve statistics.

Purpose: Count decisions in a frame sequence and compute the path
    efficiency against the shortest-path baseline.

Inputs:
    - Frame sequence (read before playback drains it)
    - Planning time
    - Shortest-path baseline

Outputs:
    - Finalized metrics dictionary

Params:
    shortest_path_baseline: float - Shortest path length in steps
"""

from typing import Dict, Iterable, Optional

from nav.frames import AnnotationKind, Frame, RejectReason


class SolveMetrics:
    """Per-solve statistics."""

    def __init__(self, shortest_path_baseline: Optional[float] = None):
        """
        Initialize metrics tracker.

        Args:
            shortest_path_baseline: Shortest path length for efficiency metric
        """
        self.shortest_path_baseline = shortest_path_baseline
        self.reset()

    def reset(self):
        """Reset metrics tracker."""
        self.frames = 0
        self.accepted = 0
        self.backtracks = 0
        self.rejections = {reason: 0 for reason in RejectReason}
        self.path_length = 0
        self.solved = False
        self.cpu_ms = 0.0

    def record_frame(self, frame: Frame):
        """Account for one frame."""
        self.frames += 1
        annotation = frame.annotation
        if annotation is None:
            return

        if annotation.kind in (AnnotationKind.STARTED, AnnotationKind.ACCEPTED):
            self.accepted += 1
        elif annotation.kind == AnnotationKind.REJECTED:
            self.rejections[annotation.reason] += 1
        elif annotation.kind == AnnotationKind.BACKTRACKED:
            self.backtracks += 1

        self.solved = annotation.kind == AnnotationKind.REACHED_END
        # Steps between cells, not cells
        self.path_length = max(0, len(frame.path) - 1)

    def record_plan_time(self, plan_time_ms: float):
        """Record planning time."""
        self.cpu_ms += plan_time_ms

    @classmethod
    def from_frames(cls, frames: Iterable[Frame], shortest_path_baseline: Optional[float] = None,
                    plan_time_ms: float = 0.0) -> "SolveMetrics":
        metrics = cls(shortest_path_baseline)
        for frame in frames:
            metrics.record_frame(frame)
        metrics.record_plan_time(plan_time_ms)
        return metrics

    def finalize(self) -> Dict:
        """
        Finalize metrics and compute efficiency.

        Returns:
            Dictionary with all metrics
        """
        if self.solved and self.shortest_path_baseline and self.path_length > 0:
            efficiency = self.shortest_path_baseline / self.path_length
        else:
            efficiency = 0.0

        return {
            "frames": self.frames,
            "accepted": self.accepted,
            "backtracks": self.backtracks,
            "rejected_out": self.rejections[RejectReason.OUT_OF_BOUNDS],
            "rejected_wall": self.rejections[RejectReason.WALL],
            "rejected_seen": self.rejections[RejectReason.ALREADY_VISITED],
            "path_len": self.path_length if self.solved else 0,
            "cpu_ms": self.cpu_ms,
            "solved": 1 if self.solved else 0,
            "efficiency": efficiency,
        }
