# pathgrid/core/maps.py
#!/usr/bin/env python3
"""Grid sources: JSON map files and the random obstacle scatter."""

import json
import logging
import math
import random
from pathlib import Path
from typing import Optional, Tuple

from pathgrid.core.types import Cell, Grid

logger = logging.getLogger(__name__)


def scatter_obstacles(grid: Grid, density: float = 0.3, rng: Optional[random.Random] = None) -> int:
    """Block ``ceil(W*H*density)`` random cells, drawn with repetition.

    Repeated draws land on already blocked cells, so the final fill sits a
    little under ``density``. Returns the number of draws.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be within [0, 1], got {density}")
    rng = rng or random.Random()
    draws = math.ceil(grid.width * grid.height * density)
    for _ in range(draws):
        row = rng.randrange(grid.height)
        col = rng.randrange(grid.width)
        grid.set_blocked((col, row))
    logger.debug("scattered %d draws, %d cells blocked", draws, grid.blocked_count())
    return draws


def random_grid(columns: int, rows: int, density: float = 0.3, seed: Optional[int] = None) -> Grid:
    grid = Grid(columns, rows)
    scatter_obstacles(grid, density, random.Random(seed))
    return grid


def load_map(path: Path) -> Tuple[Grid, Optional[Cell], Optional[Cell]]:
    """Read ``{width, height, cells[row][col], start?, goal?}``; 1 marks a blocked cell."""
    with open(path, "r") as f:
        data = json.load(f)
    width  = int(data["width"])
    height = int(data["height"])
    cells  = data["cells"]
    assert len(cells) == height and all(len(r) == width for r in cells), "cells size mismatch"

    grid = Grid(width, height)
    for row in range(height):
        for col in range(width):
            if cells[row][col] == 1:
                grid.set_blocked((col, row))

    start = tuple(data["start"]) if data.get("start") is not None else None
    goal  = tuple(data["goal"]) if data.get("goal") is not None else None
    if start is not None:
        assert grid.in_bounds(start), "start out of bounds"
    if goal is not None:
        assert grid.in_bounds(goal), "goal out of bounds"
    return grid, start, goal


def save_map(path: Path, grid: Grid, start: Optional[Cell] = None, goal: Optional[Cell] = None) -> None:
    data = {
        "width": grid.width,
        "height": grid.height,
        "start": list(start) if start is not None else None,
        "goal": list(goal) if goal is not None else None,
        "cells": [[1 if ch == "#" else 0 for ch in line] for line in grid.rows()],
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
