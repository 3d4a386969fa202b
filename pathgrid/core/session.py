# pathgrid/core/session.py
#!/usr/bin/env python3
"""Interactive state between searches: grid, endpoints and the last path.

The viewer calls these in its event loop, so edits and searches never
overlap.
"""

import logging
import random
from typing import List, Optional

from pathgrid.core.astar import find_path
from pathgrid.core.maps import scatter_obstacles
from pathgrid.core.types import Cell, Grid, OutOfBoundsError, SearchResult

logger = logging.getLogger(__name__)


class PathfindingSession:
    def __init__(self, grid: Optional[Grid] = None):
        self.grid: Optional[Grid] = grid
        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None
        self.last_path: List[Cell] = []
        self.last_result: Optional[SearchResult] = None

    # ---------- grid ----------
    def configure_grid(self, columns: int, rows: int) -> Grid:
        if self.grid is not None:
            raise RuntimeError("grid dimensions are already fixed for this session")
        self.grid = Grid(columns, rows)
        logger.info("grid configured: %dx%d", columns, rows)
        return self.grid

    def _require_grid(self) -> Grid:
        if self.grid is None:
            raise RuntimeError("configure_grid() must be called first")
        return self.grid

    def set_obstacle(self, cell: Cell, blocked: bool = True) -> None:
        self._require_grid().set_blocked(cell, blocked)
        self.clear_path()

    def toggle_obstacle(self, cell: Cell) -> bool:
        flag = self._require_grid().toggle_blocked(cell)
        self.clear_path()
        return flag

    def scatter_obstacles(self, density: float = 0.3, seed: Optional[int] = None) -> int:
        grid = self._require_grid()
        grid.clear_obstacles()
        self.clear_path()
        return scatter_obstacles(grid, density, random.Random(seed))

    # ---------- endpoints ----------
    def _check(self, cell: Cell) -> Cell:
        grid = self._require_grid()
        if not grid.in_bounds(cell):
            raise OutOfBoundsError(cell, grid.width, grid.height)
        return cell

    def set_start(self, cell: Cell) -> None:
        self._check(cell)
        self.clear_path()
        self.start = cell

    def set_end(self, cell: Cell) -> None:
        self._check(cell)
        self.clear_path()
        self.end = cell

    @property
    def ready(self) -> bool:
        return self.start is not None and self.end is not None

    # ---------- search ----------
    def clear_path(self) -> List[Cell]:
        """Forget the previous path and hand it back for repainting."""
        old, self.last_path = self.last_path, []
        return old

    def search(self) -> SearchResult:
        if not self.ready:
            raise RuntimeError("both start and end must be set before searching")
        self.clear_path()
        result = find_path(self._require_grid(), self.start, self.end)
        self.last_result = result
        if result.found:
            self.last_path = list(result.path)
            logger.info("path found: %s -> %s, %d cells", self.start, self.end, len(self.last_path))
        elif result.status == "not_found":
            logger.info("No path found from %s to %s", self.start, self.end)
        else:
            logger.warning("search rejected: %s", result.reason)
        return result
