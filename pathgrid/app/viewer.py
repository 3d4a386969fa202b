# pathgrid/app/viewer.py
#!/usr/bin/env python3
"""
A* Pathfinding Viewer

- Mouse:
    [LEFT]            -> set start
    [RIGHT]           -> set end
    [MIDDLE]/[SHIFT+LEFT] -> toggle obstacle
- Keyboard:
    [R]          -> re-scatter obstacles
    [C]          -> clear path
    [+]/[-]      -> animation speed
    [Q]/[ESC]    -> quit

Once both endpoints are set, every click clears the previous path, searches
again and animates the new path one cell at a time.

Settings: see pathgrid.app.config (ENV PATHGRID_* or --key=value).
"""

import logging
import sys
from typing import List, Optional, Tuple

import pygame

from pathgrid.app.config import Settings, resolve_settings
from pathgrid.core.maps import load_map
from pathgrid.core.path import path_length
from pathgrid.core.session import PathfindingSession
from pathgrid.core.types import Cell, Grid

logger = logging.getLogger(__name__)

STATUS_H = 28
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
GREEN       = ( 46,139, 87)
STATUS_BG   = ( 24, 28, 36)
TEXT_LIGHT  = (230,235,240)

MIN_DELAY_MS = 0
MAX_DELAY_MS = 1000
DELAY_STEP_MS = 25


def screen_to_cell(pos: Tuple[int, int], cell_w: int, cell_h: int,
                   columns: int, rows: int) -> Optional[Cell]:
    """Grid cell under pixel ``pos``, or None outside the grid area."""
    x, y = pos
    if x < 0 or y < 0:
        return None
    col, row = x // cell_w, y // cell_h
    if col >= columns or row >= rows:
        return None
    return (col, row)


# ---------- Path animation ----------
class PathAnimator:
    """Reveals a path one cell per ``delay_ms``; the first cell shows at once."""

    def __init__(self, delay_ms: int = 100):
        self.delay_ms = delay_ms
        self.path: List[Cell] = []
        self._elapsed = 0

    def start(self, path: List[Cell]) -> None:
        self.path = list(path)
        self._elapsed = 0

    def cancel(self) -> None:
        self.path = []
        self._elapsed = 0

    def update(self, dt_ms: int) -> None:
        if self.path:
            self._elapsed += dt_ms

    @property
    def revealed(self) -> List[Cell]:
        if not self.path:
            return []
        if self.delay_ms <= 0:
            return self.path
        return self.path[:min(len(self.path), self._elapsed // self.delay_ms + 1)]

    @property
    def finished(self) -> bool:
        return len(self.revealed) == len(self.path)


# ---------- Input handling ----------
class Controller:
    """Turns pygame events into session calls. Needs no display."""

    def __init__(self, session: PathfindingSession, settings: Settings):
        self.session = session
        self.settings = settings
        self.animator = PathAnimator(settings.step_delay_ms)
        self.state = "Left click: start, right click: end"
        self.running = True

    def _clear(self) -> None:
        self.session.clear_path()
        self.animator.cancel()

    def search_if_ready(self) -> None:
        if not self.session.ready:
            return
        result = self.session.search()
        if result.found:
            self.animator.start(result.path)
            self.state = f"Path: {path_length(result.path)} steps"
        elif result.status == "not_found":
            self.animator.cancel()
            self.state = "No path"
        else:
            self.animator.cancel()
            self.state = f"Invalid: {result.reason}"

    def click(self, button: int, cell: Cell, mods: int = 0) -> None:
        if button == 2 or (button == 1 and mods & pygame.KMOD_SHIFT):
            self.session.toggle_obstacle(cell)
        elif button == 1:
            self.session.set_start(cell)
        elif button == 3:
            self.session.set_end(cell)
        else:
            return
        self.animator.cancel()
        self.search_if_ready()

    def key(self, key: int) -> None:
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.running = False
        elif key == pygame.K_r:
            self.animator.cancel()
            self.session.scatter_obstacles(self.settings.density)
            self.state = "Obstacles re-scattered"
            self.search_if_ready()
        elif key == pygame.K_c:
            self._clear()
            self.state = "Path cleared"
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.animator.delay_ms = max(MIN_DELAY_MS, self.animator.delay_ms - DELAY_STEP_MS)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self.animator.delay_ms = min(MAX_DELAY_MS, self.animator.delay_ms + DELAY_STEP_MS)

    def handle_event(self, e: pygame.event.Event, cell_w: int, cell_h: int, mods: int = 0) -> None:
        grid = self.session.grid
        if e.type == pygame.QUIT:
            self.running = False
        elif e.type == pygame.KEYDOWN:
            self.key(e.key)
        elif e.type == pygame.MOUSEBUTTONDOWN:
            cell = screen_to_cell(e.pos, cell_w, cell_h, grid.width, grid.height)
            if cell is not None:
                self.click(e.button, cell, mods)


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: PathfindingSession, settings: Settings):
        pygame.init()

        self.session = session
        self.settings = settings
        self.controller = Controller(session, settings)
        grid = session.grid
        self.cell_w = max(1, settings.width // grid.width)
        self.cell_h = max(1, settings.height // grid.height)
        self.font = pygame.font.Font(FONT_NAME, 18)

        win_w = grid.width * self.cell_w
        win_h = grid.height * self.cell_h + STATUS_H
        self.screen = pygame.display.set_mode((win_w, win_h))
        pygame.display.set_caption("A* Pathfinding Visualization")
        self.clock = pygame.time.Clock()
        self.controller.search_if_ready()

    def run(self):
        while self.controller.running:
            dt = self.clock.tick(60)
            for e in pygame.event.get():
                self.controller.handle_event(e, self.cell_w, self.cell_h, pygame.key.get_mods())
            self.controller.animator.update(dt)
            self._draw()
        pygame.quit()

    # ---------- drawing ----------
    def _draw(self):
        self._draw_grid()
        self._draw_status()
        pygame.display.flip()

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        col, row = cell
        return pygame.Rect(col*self.cell_w, row*self.cell_h, self.cell_w, self.cell_h)

    def _draw_grid(self):
        grid: Grid = self.session.grid
        for row in range(grid.height):
            for col in range(grid.width):
                rect = self._cell_rect((col, row))
                pygame.draw.rect(self.screen, BLACK if (col, row) in grid.blocked else WHITE, rect)

        for cell in self.controller.animator.revealed:
            pygame.draw.rect(self.screen, GREEN, self._cell_rect(cell))

        if self.session.start is not None:
            self._draw_badge(self.session.start, BLUE, "S")
        if self.session.end is not None:
            self._draw_badge(self.session.end, RED, "G")

        for row in range(grid.height):
            for col in range(grid.width):
                pygame.draw.rect(self.screen, BLACK, self._cell_rect((col, row)), 1)

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        rect = self._cell_rect(cell)
        pygame.draw.rect(self.screen, color, rect)
        txt = self.font.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    def _draw_status(self):
        w = self.screen.get_width()
        top = self.screen.get_height() - STATUS_H
        pygame.draw.rect(self.screen, STATUS_BG, pygame.Rect(0, top, w, STATUS_H))
        text = (f"{self.controller.state}  |  obstacles: {self.session.grid.blocked_count()}"
                f"  |  delay: {self.controller.animator.delay_ms} ms")
        surf = self.font.render(text, True, TEXT_LIGHT)
        self.screen.blit(surf, (8, top + (STATUS_H - surf.get_height()) // 2))


# ---------- main ----------
def build_session(settings: Settings) -> PathfindingSession:
    """Grid from ``settings.map`` when given, else a random scatter."""
    if settings.map is not None:
        grid, start, goal = load_map(settings.map)
        session = PathfindingSession(grid)
        if start is not None:
            session.set_start(start)
        if goal is not None:
            session.set_end(goal)
        logger.info("loaded map %s (%dx%d)", settings.map, grid.width, grid.height)
        return session
    session = PathfindingSession()
    session.configure_grid(settings.columns, settings.rows)
    session.scatter_obstacles(settings.density, settings.seed)
    return session


def main():
    settings = resolve_settings()
    logging.basicConfig(
        level=logging.getLevelName(settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )
    try:
        session = build_session(settings)
    except (OSError, ValueError, KeyError, AssertionError) as ex:
        logger.error("Failed to load map %s: %s", settings.map, ex)
        sys.exit(1)
    Viewer(session, settings).run()

if __name__ == "__main__":
    main()
