# pathgrid/core/astar.py
#!/usr/bin/env python3
"""
A* over a blocked grid, one expansion per step().

API:
- init(grid, start, goal) - reset() - step() -> StepResult - run() -> StepResult
- find_path(grid, start, goal) -> SearchResult (validates endpoints, runs to completion)

Heuristic:
- Manhattan distance; every move costs 1 on the 4-connected grid.

Tie-breaking in the PQ:
- (f, seq, cell): lower f first, then FIFO by seq among equal f.

Stale entries:
- Improving a cell pushes a new entry instead of decreasing the old one.
  Popped cells that were already expanded are skipped.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional

from pathgrid.core.path import path_length, reconstruct_path
from pathgrid.core.types import Cell, Grid, SearchResult, StepResult

logger = logging.getLogger(__name__)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class AStarAlgo:
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    goal: Optional[Cell] = None
    open_pq: List[Tuple[int, int, Cell]] = field(default_factory=list)  # (f, seq, cell)
    closed_set: set = field(default_factory=set)
    g: Dict[Cell, int] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    push_count: int = 0
    done: bool = False
    no_path: bool = False
    path: Optional[List[Cell]] = None
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, goal: Cell) -> None:
        """Bind to a grid and a query, then seed the frontier."""
        self.grid = grid
        self.start = start
        self.goal = goal
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.open_pq.clear()
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.push_count = 0
        self.done = False
        self.no_path = False
        self.path = None
        self.seq = 0

        s = self.start
        self.g[s] = 0
        self._push(self._h(s), s)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _push(self, f: int, c: Cell) -> None:
        heapq.heappush(self.open_pq, (f, self._bump(), c))
        self.push_count += 1

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.goal)

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest (f, seq) entry.
          - If goal, reconstruct and finish.
          - Skip it if already expanded, else relax its open neighbors.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=self.path,
                              metrics=self._metrics(path_len=path_length(self.path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        _, _, u = heapq.heappop(self.open_pq)

        if u == self.goal:
            self.done = True
            self.path = reconstruct_path(self.parent, self.start, u,
                                         self.grid.width * self.grid.height)
            return StepResult(status="done", current=u, path=self.path,
                              metrics=self._metrics(path_len=path_length(self.path)))

        # Ignore stale pops
        if u in self.closed_set:
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.closed_set.add(u)

        for v in self.grid.neighbors(u):
            if v in self.closed_set or self.grid.is_blocked(v):
                continue
            alt = self.g[u] + 1
            if v not in self.g or alt < self.g[v]:
                self.g[v] = alt
                self.parent[v] = u
                self._push(alt + self._h(v), v)

        return StepResult(status="running", closed=[u], current=u,
                          metrics=self._metrics())

    def run(self) -> StepResult:
        """Step until the search finishes either way."""
        res = self.step()
        while res.status == "running":
            res = self.step()
        return res

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "pushed": self.push_count,
            "frontier": len(self.open_pq),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
        }


def find_path(grid: Grid, start: Cell, goal: Cell) -> SearchResult:
    """Shortest 4-connected path from ``start`` to ``goal`` on ``grid``.

    Out-of-bounds or blocked endpoints give ``invalid_endpoint`` without
    searching. ``start == goal`` gives the single-cell path.
    """
    for label, c in (("start", start), ("goal", goal)):
        if not grid.in_bounds(c):
            return SearchResult(status="invalid_endpoint", reason=f"{label} {c} is out of bounds")
        if grid.is_blocked(c):
            return SearchResult(status="invalid_endpoint", reason=f"{label} {c} is blocked")

    if start == goal:
        return SearchResult(status="found", path=[start], metrics={"popped": 0, "path_len": 0})

    algo = AStarAlgo()
    algo.init(grid, start, goal)
    res = algo.run()
    logger.debug("A* %s -> %s: %s after %d expansions (%d pushes)",
                 start, goal, res.status, algo.popped_count, algo.push_count)

    if res.status == "done":
        return SearchResult(status="found", path=list(res.path), metrics=res.metrics)
    return SearchResult(status="not_found", reason=f"no route from {start} to {goal}",
                        metrics=res.metrics)
