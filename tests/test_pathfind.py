import random

import pytest

from mazegen import MazeGenerator, generate
from mazegrid import Grid, InvalidDimension, OutOfBounds, Position, Wall
from pathfind import find_path, heuristic, reconstruct_path


def _open_grid(width: int, height: int) -> Grid:
    return Grid(width, height, fill=Wall(0))


def _assert_steps_adjacent(start: Position, path: list) -> None:
    prev = start
    for pos in path:
        assert heuristic(prev, pos) == 1
        prev = pos


def test_heuristic_is_manhattan() -> None:
    assert heuristic((0, 0), (3, 4)) == 7
    assert heuristic(Position(5, 1), Position(2, 3)) == 5


@pytest.mark.parametrize("width,height", [(1, 1), (1, 6), (6, 1), (4, 4), (9, 5)])
def test_open_grid_path_is_manhattan_optimal(width: int, height: int) -> None:
    grid = _open_grid(width, height)
    goal = (width - 1, height - 1)
    path = find_path((0, 0), goal, grid, width, height)
    assert len(path) == (width - 1) + (height - 1)
    if path:
        assert path[-1] == goal
        _assert_steps_adjacent(Position(0, 0), path)


def test_default_search_ignores_walls() -> None:
    grid = Grid(5, 5)  # every wall closed
    path = find_path((0, 0), (4, 4), grid, 5, 5)
    assert len(path) == 8


def test_start_equals_goal_is_empty() -> None:
    grid = generate(4, 4, rng=random.Random(0))
    assert find_path((2, 2), (2, 2), grid, 4, 4) == []


@pytest.mark.parametrize("goal", [(5, 0), (0, 5), (-1, 2)])
def test_goal_out_of_bounds(goal: tuple) -> None:
    grid = _open_grid(5, 5)
    with pytest.raises(OutOfBounds):
        find_path((0, 0), goal, grid, 5, 5)


def test_start_out_of_bounds() -> None:
    grid = _open_grid(5, 5)
    with pytest.raises(OutOfBounds):
        find_path((9, 9), (0, 0), grid, 5, 5)


def test_dimension_mismatch() -> None:
    grid = _open_grid(5, 5)
    with pytest.raises(InvalidDimension):
        find_path((0, 0), (1, 1), grid, 4, 5)
    with pytest.raises(InvalidDimension):
        find_path((0, 0), (1, 1), grid, 0, 5)


def test_generated_maze_scenario() -> None:
    grid = generate(5, 5, rng=random.Random(7))
    path = find_path((0, 0), (4, 4), grid, 5, 5)
    assert path
    assert path[-1] == (4, 4)
    assert (0, 0) not in path
    assert len(set(path)) == len(path)
    _assert_steps_adjacent(Position(0, 0), path)


@pytest.mark.parametrize("seed", range(4))
def test_respect_walls_follows_passages(seed: int) -> None:
    maze = MazeGenerator(10, 7, seed=seed)
    grid = maze.grid
    path = find_path(maze.entrance, maze.exit, grid, 10, 7, respect_walls=True)
    if maze.entrance != maze.exit:
        assert path[-1] == maze.exit
    prev = maze.entrance
    for pos in path:
        opened = {n.position for n in grid.open_neighbours(prev)}
        assert pos in opened
        prev = pos
    # never shorter than the wall-ignoring route
    assert len(path) >= heuristic(maze.entrance, maze.exit)


def test_respect_walls_unreachable_is_empty() -> None:
    grid = Grid(3, 3)
    grid.carve((0, 0), Wall.RIGHT)
    assert find_path((0, 0), (2, 2), grid, 3, 3, respect_walls=True) == []
    assert find_path((0, 0), (1, 0), grid, 3, 3, respect_walls=True) == [Position(1, 0)]


def test_respect_walls_detour() -> None:
    # Wall between (0,0) and (1,0); passage goes up and around.
    grid = Grid(2, 2)
    grid.carve((0, 0), Wall.UP)
    grid.carve((0, 1), Wall.RIGHT)
    grid.carve((1, 1), Wall.BOTTOM)
    path = find_path((0, 0), (1, 0), grid, 2, 2, respect_walls=True)
    assert path == [Position(0, 1), Position(1, 1), Position(1, 0)]


def test_reconstruct_path_excludes_start() -> None:
    came_from = {Position(1, 0): Position(0, 0), Position(2, 0): Position(1, 0)}
    assert reconstruct_path(came_from, Position(2, 0)) == [Position(1, 0), Position(2, 0)]
