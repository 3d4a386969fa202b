# pathgrid/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any, Set

Cell = Tuple[int, int]  # (col, row)


class OutOfBoundsError(IndexError):
    """A cell lies outside the grid. Always a caller bug."""

    def __init__(self, cell: Cell, width: int, height: int):
        super().__init__(f"cell {cell} outside {width}x{height} grid")
        self.cell = cell
        self.width = width
        self.height = height


class BrokenChainError(RuntimeError):
    """The predecessor map does not lead back to the start cell."""


@dataclass
class Grid:
    width: int
    height: int
    blocked: Set[Cell] = field(default_factory=set)

    def __post_init__(self):
        self.blocked = set(self.blocked)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        for c in self.blocked:
            self._check(c)

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise OutOfBoundsError(c, self.width, self.height)

    def is_blocked(self, c: Cell) -> bool:
        self._check(c)
        return c in self.blocked

    def set_blocked(self, c: Cell, flag: bool = True) -> None:
        self._check(c)
        if flag:
            self.blocked.add(c)
        else:
            self.blocked.discard(c)

    def toggle_blocked(self, c: Cell) -> bool:
        """Flip the flag of ``c`` and return the new value."""
        flag = not self.is_blocked(c)
        self.set_blocked(c, flag)
        return flag

    def clear_obstacles(self) -> None:
        self.blocked.clear()

    def blocked_count(self) -> int:
        return len(self.blocked)

    def neighbors(self, c: Cell) -> List[Cell]:
        """In-bounds 4-connected neighbors of ``c``: west, east, north, south."""
        x, y = c
        candidates = [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]
        return [n for n in candidates if self.in_bounds(n)]

    def rows(self) -> List[str]:
        """Text rows, '#' for blocked and '.' for open cells."""
        return [
            "".join("#" if (x, y) in self.blocked else "." for x in range(self.width))
            for y in range(self.height)
        ]


@dataclass
class SearchResult:
    status: str                   # "found" | "not_found" | "invalid_endpoint"
    path: Optional[List[Cell]] = None
    reason: str = ""
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == "found"


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
