"""
Map utilities for maze grids.

Purpose: 4-connected neighbour lookup and shortest-path baseline used by
    the efficiency metric (DFS path length vs. shortest possible).

Inputs:
    - Parsed Grid
    - Start and end cells

Outputs:
    - Neighbour lists
    - Shortest path length in steps (inf if unreachable)

Params:
    grid: Grid - maze being solved
"""

import numpy as np
from scipy.sparse.csgraph import dijkstra
from scipy.sparse import csr_matrix

from nav.frames import DIRECTIONS
from nav.grid import CellKind


class MapUtils:
    """Map utility functions."""

    def __init__(self, grid):
        """
        Initialize map utilities.

        Args:
            grid: Grid object
        """
        self.grid = grid

    def get_neighbors(self, gx, gy):
        """
        Get 4-connected non-wall neighbours of a cell, in exploration order.

        Args:
            gx, gy: Grid coordinates

        Returns:
            List of (gx, gy) tuples of valid neighbors
        """
        neighbors = []
        for direction in DIRECTIONS:
            nx, ny = direction.step((gx, gy))
            if self.grid.in_bounds((nx, ny)) and not self.grid.is_wall((nx, ny)):
                neighbors.append((nx, ny))
        return neighbors

    def compute_shortest_path_baseline(self, start, goal):
        """
        Compute shortest path baseline using Dijkstra on the open cells.

        Args:
            start: (gx, gy) start cell
            goal: (gx, gy) goal cell

        Returns:
            float: Shortest path length in steps, inf if unreachable
        """
        free = self.grid.kinds != CellKind.WALL.value
        grid_to_node = np.full(self.grid.shape, -1, dtype=int)
        ys, xs = np.nonzero(free)
        grid_to_node[ys, xs] = np.arange(len(xs))

        n_nodes = len(xs)
        if n_nodes == 0:
            return float('inf')

        sx, sy = start
        gx, gy = goal
        if not (self.grid.in_bounds(start) and self.grid.in_bounds(goal)):
            return float('inf')
        start_node = grid_to_node[sy, sx]
        goal_node = grid_to_node[gy, gx]
        if start_node < 0 or goal_node < 0:
            return float('inf')
        if start_node == goal_node:
            return 0.0

        # Build adjacency matrix (4-connected, unit weights)
        row_indices = []
        col_indices = []
        for x, y in zip(xs, ys):
            for nx, ny in self.get_neighbors(int(x), int(y)):
                row_indices.append(grid_to_node[y, x])
                col_indices.append(grid_to_node[ny, nx])

        if not row_indices:
            return float('inf')

        data = np.ones(len(row_indices))
        graph = csr_matrix((data, (row_indices, col_indices)), shape=(n_nodes, n_nodes))

        dist_matrix = dijkstra(graph, directed=False, indices=start_node)
        shortest_dist = dist_matrix[goal_node]

        return float(shortest_dist) if np.isfinite(shortest_dist) else float('inf')
