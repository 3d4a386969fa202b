import pygame

from pathgrid.app.config import Settings
from pathgrid.app.viewer import Controller, PathAnimator, build_session, screen_to_cell
from pathgrid.core.session import PathfindingSession
from pathgrid.core.types import Grid

CELL = 20


def _controller(blocked=()) -> Controller:
    session = PathfindingSession(Grid(5, 5, blocked=set(blocked)))
    return Controller(session, Settings(columns=5, rows=5, width=100, height=100))


def _click(ctrl, button, cell, mods=0):
    col, row = cell
    ev = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=(col * CELL + 5, row * CELL + 5))
    ctrl.handle_event(ev, CELL, CELL, mods)


def _key(ctrl, key):
    ctrl.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key), CELL, CELL)


def test_screen_to_cell():
    assert screen_to_cell((0, 0), 32, 30, 25, 20) == (0, 0)
    assert screen_to_cell((65, 31), 32, 30, 25, 20) == (2, 1)
    assert screen_to_cell((799, 599), 32, 30, 25, 20) == (24, 19)
    assert screen_to_cell((800, 10), 32, 30, 25, 20) is None
    assert screen_to_cell((10, 610), 32, 30, 25, 20) is None
    assert screen_to_cell((-1, 10), 32, 30, 25, 20) is None


def test_animator_reveals_one_cell_per_delay():
    anim = PathAnimator(100)
    anim.start([(0, 0), (1, 0), (2, 0)])
    assert anim.revealed == [(0, 0)]
    anim.update(99)
    assert len(anim.revealed) == 1
    anim.update(1)
    assert anim.revealed == [(0, 0), (1, 0)]
    assert not anim.finished
    anim.update(500)
    assert anim.revealed == [(0, 0), (1, 0), (2, 0)]
    assert anim.finished


def test_animator_zero_delay_and_cancel():
    anim = PathAnimator(0)
    anim.start([(0, 0), (0, 1)])
    assert anim.revealed == [(0, 0), (0, 1)]
    anim.cancel()
    assert anim.revealed == []
    assert anim.finished


def test_left_then_right_click_searches():
    ctrl = _controller()
    _click(ctrl, 1, (0, 0))
    assert ctrl.session.start == (0, 0)
    assert ctrl.animator.path == []
    _click(ctrl, 3, (4, 4))
    assert ctrl.session.end == (4, 4)
    assert ctrl.state == "Path: 8 steps"
    assert len(ctrl.animator.path) == 9
    assert ctrl.animator.revealed == [(0, 0)]


def test_new_click_replaces_previous_path():
    ctrl = _controller()
    _click(ctrl, 1, (0, 0))
    _click(ctrl, 3, (4, 4))
    _click(ctrl, 1, (4, 0))
    assert ctrl.state == "Path: 4 steps"
    assert ctrl.animator.path[0] == (4, 0)
    assert ctrl.session.last_path == ctrl.animator.path


def test_no_path_state():
    ctrl = _controller(blocked=[(3, 4), (4, 3)])
    _click(ctrl, 1, (0, 0))
    _click(ctrl, 3, (4, 4))
    assert ctrl.state == "No path"
    assert ctrl.animator.path == []


def test_blocked_endpoint_state():
    ctrl = _controller(blocked=[(0, 0)])
    _click(ctrl, 1, (0, 0))
    _click(ctrl, 3, (4, 4))
    assert ctrl.state.startswith("Invalid")


def test_middle_and_shift_click_toggle_obstacles():
    ctrl = _controller()
    _click(ctrl, 2, (2, 2))
    assert ctrl.session.grid.is_blocked((2, 2))
    _click(ctrl, 1, (2, 2), mods=pygame.KMOD_SHIFT)
    assert not ctrl.session.grid.is_blocked((2, 2))
    assert ctrl.session.start is None


def test_click_outside_grid_is_ignored():
    ctrl = _controller()
    ev = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(5, 110))
    ctrl.handle_event(ev, CELL, CELL)
    assert ctrl.session.start is None


def test_keys():
    ctrl = _controller()
    _click(ctrl, 1, (0, 0))
    _click(ctrl, 3, (4, 4))

    _key(ctrl, pygame.K_c)
    assert ctrl.animator.path == [] and ctrl.session.last_path == []
    assert ctrl.state == "Path cleared"

    _key(ctrl, pygame.K_PLUS)
    assert ctrl.animator.delay_ms == 75
    _key(ctrl, pygame.K_MINUS)
    _key(ctrl, pygame.K_MINUS)
    assert ctrl.animator.delay_ms == 125

    _key(ctrl, pygame.K_r)
    assert ctrl.session.grid.blocked_count() > 0

    _key(ctrl, pygame.K_q)
    assert not ctrl.running


def test_quit_event():
    ctrl = _controller()
    ctrl.handle_event(pygame.event.Event(pygame.QUIT), CELL, CELL)
    assert not ctrl.running


def test_build_session_from_map(maps_dir):
    session = build_session(Settings(map=maps_dir / "corridor.json"))
    assert session.ready
    assert session.search().found


def test_build_session_random_is_seeded():
    a = build_session(Settings(columns=10, rows=8, seed=3))
    b = build_session(Settings(columns=10, rows=8, seed=3))
    assert (a.grid.width, a.grid.height) == (10, 8)
    assert a.grid.blocked == b.grid.blocked
    assert not a.ready
