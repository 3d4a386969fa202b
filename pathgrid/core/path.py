# pathgrid/core/path.py
#!/usr/bin/env python3
from typing import Dict, List, Sequence

from pathgrid.core.types import BrokenChainError, Cell, Grid


def reconstruct_path(parent: Dict[Cell, Cell], start: Cell, goal: Cell, limit: int) -> List[Cell]:
    """Walk ``parent`` back from ``goal`` to ``start`` and return start -> goal.

    ``limit`` caps the walk (width * height) so a cycle in ``parent`` fails
    instead of spinning forever.
    """
    path: List[Cell] = [goal]
    cur = goal
    steps = 0
    while cur != start:
        if steps >= limit:
            raise BrokenChainError(f"no route back to {start} within {limit} steps")
        try:
            cur = parent[cur]
        except KeyError:
            raise BrokenChainError(f"{cur} has no predecessor") from None
        path.append(cur)
        steps += 1
    path.reverse()
    return path


def path_length(path: Sequence[Cell]) -> int:
    """Number of steps in ``path`` (cells minus one)."""
    return max(0, len(path) - 1)


def is_adjacent(a: Cell, b: Cell) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def is_valid_path(grid: Grid, path: Sequence[Cell]) -> bool:
    """True if every cell is open and each consecutive pair is 4-adjacent."""
    if not path:
        return False
    for c in path:
        if not grid.in_bounds(c) or grid.is_blocked(c):
            return False
    return all(is_adjacent(a, b) for a, b in zip(path, path[1:]))
