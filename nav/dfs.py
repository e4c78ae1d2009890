"""
DFS (Depth-First Search) maze walker with backtracking.

Purpose: Exhaustive DFS over a maze grid that records a frame for every
    decision (entry, rejection, backtrack) instead of only returning a path.

Inputs:
    - Parsed Grid
    - Start and end cells as (column, row)

Outputs:
    - Closed FrameRecorder; recorder.solved and recorder.final_path
      describe the outcome

Params:
    Exploration order is fixed: up, right, down, left.
"""

import numpy as np
from typing import List, Optional

from nav.frames import (
    DIRECTIONS, Annotation, Direction, FrameRecorder, RejectReason, render_frame,
)
from nav.grid import Cell, Grid


class SearchState:
    """Visited set and path stack for one solve."""

    def __init__(self, grid: Grid):
        self.visited = np.zeros(grid.shape, dtype=bool)
        self.path: List[Cell] = []

    def is_visited(self, cell: Cell) -> bool:
        x, y = cell
        return bool(self.visited[y, x])

    def mark_visited(self, cell: Cell):
        x, y = cell
        self.visited[y, x] = True

    def push(self, cell: Cell):
        self.path.append(cell)

    def pop(self) -> Cell:
        return self.path.pop()


class DFSPlanner:
    """DFS maze walker producing a replayable frame sequence."""

    def __init__(self, grid: Grid):
        """
        Initialize DFS planner.

        Args:
            grid: Parsed maze grid
        """
        self.grid = grid

    def solve(self, start: Cell, end: Cell) -> FrameRecorder:
        """
        Walk the maze from start until end is reached or every branch fails.

        Args:
            start: (column, row) start cell
            end: (column, row) end cell

        Returns:
            Closed FrameRecorder holding every frame in decision order
        """
        recorder = FrameRecorder()
        state = SearchState(self.grid)

        # DFS search - ITERATIVE (to avoid recursion limit)
        # Each entry is [cell, index of the next direction to try]
        stack = []
        outcome = self._enter(start, None, end, state, recorder)
        if outcome is None:
            stack.append([start, 0])

        while stack and outcome is not True:
            entry = stack[-1]
            cell, next_dir = entry

            if next_dir < len(DIRECTIONS):
                direction = DIRECTIONS[next_dir]
                entry[1] += 1
                neighbor = direction.step(cell)
                outcome = self._enter(neighbor, direction, end, state, recorder)
                if outcome is None:
                    stack.append([neighbor, 0])
            else:
                # All four directions failed
                stack.pop()
                state.pop()
                recorder.append(render_frame(self.grid, state.path, annotation=Annotation.backtracked()))

        recorder.close()
        return recorder

    def _enter(self, curr: Cell, direction: Optional[Direction], end: Cell,
               state: SearchState, recorder: FrameRecorder) -> Optional[bool]:
        """
        Examine one cell.

        Returns:
            True if end was reached, False if the branch was rejected,
            None if the cell was accepted and its neighbours must be explored
        """
        if not self.grid.in_bounds(curr):
            recorder.append(render_frame(
                self.grid, state.path, bad=curr,
                annotation=Annotation.rejected(RejectReason.OUT_OF_BOUNDS, direction),
            ))
            return False

        if self.grid.is_wall(curr):
            recorder.append(render_frame(
                self.grid, state.path, bad=curr,
                annotation=Annotation.rejected(RejectReason.WALL, direction),
            ))
            return False

        if curr == end:
            state.push(curr)
            recorder.append(render_frame(
                self.grid, state.path, annotation=Annotation.reached_end(direction),
            ))
            return True

        if state.is_visited(curr):
            recorder.append(render_frame(
                self.grid, state.path, bad=curr,
                annotation=Annotation.rejected(RejectReason.ALREADY_VISITED, direction),
            ))
            return False

        annotation = Annotation.started() if direction is None else Annotation.accepted(direction)
        recorder.append(render_frame(self.grid, state.path, good=curr, annotation=annotation))

        state.push(curr)
        state.mark_visited(curr)
        recorder.append(render_frame(self.grid, state.path))
        return None


def solve(grid: Grid, start: Cell, end: Cell) -> FrameRecorder:
    """Run a DFS solve on grid; see DFSPlanner.solve."""
    return DFSPlanner(grid).solve(start, end)
