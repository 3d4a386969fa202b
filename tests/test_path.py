import pytest

from pathgrid.core.path import is_valid_path, path_length, reconstruct_path
from pathgrid.core.types import BrokenChainError, Grid


def test_reconstruct_walks_back_and_reverses():
    parent = {(1, 0): (0, 0), (1, 1): (1, 0), (2, 1): (1, 1)}
    assert reconstruct_path(parent, (0, 0), (2, 1), 9) == [(0, 0), (1, 0), (1, 1), (2, 1)]


def test_reconstruct_start_equals_goal():
    assert reconstruct_path({}, (3, 3), (3, 3), 1) == [(3, 3)]


def test_reconstruct_missing_predecessor():
    with pytest.raises(BrokenChainError):
        reconstruct_path({(2, 0): (1, 0)}, (0, 0), (2, 0), 9)


def test_reconstruct_cycle_hits_limit():
    parent = {(1, 0): (2, 0), (2, 0): (1, 0)}
    with pytest.raises(BrokenChainError):
        reconstruct_path(parent, (0, 0), (1, 0), 4)


def test_path_length_counts_steps():
    assert path_length([(0, 0), (1, 0), (2, 0)]) == 2
    assert path_length([(0, 0)]) == 0
    assert path_length([]) == 0


def test_is_valid_path():
    grid = Grid(3, 3, blocked={(1, 1)})
    assert is_valid_path(grid, [(0, 0), (1, 0), (2, 0)])
    assert not is_valid_path(grid, [(0, 0), (1, 1)])            # diagonal
    assert not is_valid_path(grid, [(1, 0), (1, 1), (1, 2)])    # through a block
    assert not is_valid_path(grid, [(2, 0), (3, 0)])            # off the grid
    assert not is_valid_path(grid, [])
