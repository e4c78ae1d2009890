"""
Frames and frame recorder.

Purpose: Immutable snapshots of the search state and the ordered queue
    that carries them from the search to playback.

Inputs:
    - Grid, current path stack, examined cell, annotation

Outputs:
    - Frame objects (symbolic rows + annotation)
    - FrameRecorder FIFO consumed by the playback driver
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from nav.grid import Cell, CellKind, Grid


class Direction(Enum):
    """Relative movement, in exploration priority order."""
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    def step(self, cell: Cell) -> Cell:
        dx, dy = self.value
        return (cell[0] + dx, cell[1] + dy)


# Exploration order; determines which path is found
DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


class AnnotationKind(Enum):
    STARTED = "STARTED"
    REJECTED = "REJECTED"
    ACCEPTED = "ACCEPTED"
    REACHED_END = "REACHED_END"
    BACKTRACKED = "BACKTRACKED"


class RejectReason(Enum):
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    WALL = "WALL"
    ALREADY_VISITED = "ALREADY_VISITED"


@dataclass(frozen=True)
class Annotation:
    """Why a frame was produced."""
    kind: AnnotationKind
    direction: Optional[Direction] = None
    reason: Optional[RejectReason] = None

    @classmethod
    def started(cls) -> "Annotation":
        return cls(AnnotationKind.STARTED)

    @classmethod
    def rejected(cls, reason: RejectReason, direction: Optional[Direction]) -> "Annotation":
        return cls(AnnotationKind.REJECTED, direction, reason)

    @classmethod
    def accepted(cls, direction: Direction) -> "Annotation":
        return cls(AnnotationKind.ACCEPTED, direction)

    @classmethod
    def reached_end(cls, direction: Optional[Direction]) -> "Annotation":
        return cls(AnnotationKind.REACHED_END, direction)

    @classmethod
    def backtracked(cls) -> "Annotation":
        return cls(AnnotationKind.BACKTRACKED)


class Tag(Enum):
    """Symbolic render tags; values are the characters used in frame rows."""
    WALL = "x"
    OPEN = " "
    START = "s"
    END = "e"
    PATH = "*"
    GOOD = "g"
    BAD = "b"


_KIND_TAGS = {
    CellKind.WALL.value: Tag.WALL.value,
    CellKind.OPEN.value: Tag.OPEN.value,
    CellKind.START.value: Tag.START.value,
    CellKind.END.value: Tag.END.value,
}


@dataclass(frozen=True)
class Frame:
    """
    One immutable snapshot of the search.

    Attributes:
        rows: Symbolic grid rows, one Tag character per cell
        annotation: Decision that produced the frame (None for progress frames)
        path: Path stack at capture time
        current: Cell under examination, if any
    """
    rows: Tuple[str, ...]
    annotation: Optional[Annotation] = None
    path: Tuple[Cell, ...] = ()
    current: Optional[Cell] = None

    def tag_at(self, cell: Cell) -> Tag:
        x, y = cell
        return Tag(self.rows[y][x])

    def tags(self) -> List[List[Tag]]:
        """2-D array of tags for the rendering collaborator."""
        return [[Tag(c) for c in row] for row in self.rows]


def render_frame(grid: Grid, path: Sequence[Cell], good: Optional[Cell] = None,
                 bad: Optional[Cell] = None, annotation: Optional[Annotation] = None) -> Frame:
    """
    Build a frame from the current search state.

    Path cells are marked PATH except start and end. The examined cell is
    marked GOOD or BAD on top of everything else when it lies in the grid.

    Args:
        grid: Grid being searched
        path: Current path stack
        good: Accepted cell, if any
        bad: Rejected cell, if any
        annotation: Optional annotation

    Returns:
        Frame
    """
    cells = [[_KIND_TAGS[int(code)] for code in row] for row in grid.kinds]

    for cell in path:
        if not grid.in_bounds(cell):
            continue
        x, y = cell
        if cells[y][x] in (Tag.START.value, Tag.END.value):
            continue
        cells[y][x] = Tag.PATH.value

    if good is not None and grid.in_bounds(good):
        cells[good[1]][good[0]] = Tag.GOOD.value
    if bad is not None and grid.in_bounds(bad):
        cells[bad[1]][bad[0]] = Tag.BAD.value

    return Frame(
        rows=tuple("".join(row) for row in cells),
        annotation=annotation,
        path=tuple(path),
        current=good if good is not None else bad,
    )


class RecorderClosedError(RuntimeError):
    """Raised when appending to a recorder whose search has completed."""


class FrameRecorder:
    """Append-only FIFO of frames, drained destructively by playback."""

    def __init__(self):
        self._queue = deque()
        self._last: Optional[Frame] = None
        self.closed = False
        self.recorded = 0

    def append(self, frame: Frame):
        if self.closed:
            raise RecorderClosedError("Frame recorder is read-only once the search completes")
        self._queue.append(frame)
        self._last = frame
        self.recorded += 1

    def close(self):
        """Mark the sequence complete; further appends fail."""
        self.closed = True

    def drain(self) -> Optional[Frame]:
        """Pop the oldest frame, or None when empty."""
        if not self._queue:
            return None
        return self._queue.popleft()

    @property
    def frames(self) -> Tuple[Frame, ...]:
        """Frames not yet drained, oldest first."""
        return tuple(self._queue)

    @property
    def solved(self) -> bool:
        """True when the final recorded frame reached the end."""
        return (
            self._last is not None
            and self._last.annotation is not None
            and self._last.annotation.kind == AnnotationKind.REACHED_END
        )

    @property
    def final_path(self) -> Tuple[Cell, ...]:
        """Path stack at termination."""
        return self._last.path if self._last is not None else ()

    def __len__(self):
        return len(self._queue)

    def __iter__(self):
        return iter(tuple(self._queue))
