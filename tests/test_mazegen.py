import random

import pytest

from mazecheck import count_passages, reachable_from, validate_maze
from mazegen import MazeGenerator, generate
from mazegrid import InvalidDimension, Position, Wall, opposite_wall


SIZES = [(1, 1), (1, 7), (7, 1), (2, 2), (5, 5), (12, 8), (30, 17)]


@pytest.mark.parametrize("width,height", SIZES)
def test_generate_is_perfect(width: int, height: int) -> None:
    grid = generate(width, height, rng=random.Random(width * 100 + height))
    assert (grid.width, grid.height) == (width, height)
    assert count_passages(grid) == width * height - 1
    assert len(reachable_from(grid, (0, 0))) == width * height


@pytest.mark.parametrize("seed", range(5))
def test_walls_are_symmetric(seed: int) -> None:
    grid = generate(9, 6, rng=random.Random(seed))
    for pos in grid.positions():
        for n in grid.neighbours(pos):
            mine = bool(grid[pos] & n.shared_wall)
            theirs = bool(grid[n.position] & opposite_wall(n.shared_wall))
            assert mine == theirs


@pytest.mark.parametrize("seed", range(5))
def test_single_entrance_and_exit(seed: int) -> None:
    maze = MazeGenerator(8, 6, seed=seed)
    grid = maze.grid
    left_open = [y for y in range(6) if not grid[(0, y)] & Wall.LEFT]
    right_open = [y for y in range(6) if not grid[(7, y)] & Wall.RIGHT]
    assert left_open == [maze.entrance.y]
    assert right_open == [maze.exit.y]
    assert maze.entrance.x == 0
    assert maze.exit == Position(7, maze.exit.y)
    validate_maze(grid, entrance=maze.entrance, exit_=maze.exit)


def test_same_seed_same_grid() -> None:
    a = generate(15, 10, rng=random.Random(1234))
    b = generate(15, 10, rng=random.Random(1234))
    assert a == b
    assert a.to_bytes() == b.to_bytes()
    assert MazeGenerator(15, 10, seed=1234).grid.to_bytes() == a.to_bytes()


def test_different_seeds_usually_differ() -> None:
    grids = {generate(10, 10, rng=random.Random(s)).to_bytes() for s in range(5)}
    assert len(grids) > 1


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-3, 4)])
def test_invalid_dimensions(width: int, height: int) -> None:
    with pytest.raises(InvalidDimension):
        generate(width, height)


def test_on_step_called_per_carve() -> None:
    steps = []
    MazeGenerator(6, 4, seed=3, on_step=lambda m: steps.append(count_passages(m.grid)))
    # one call per carved passage plus a final call
    assert len(steps) == 6 * 4
    assert steps[-1] == 6 * 4 - 1
    assert steps == sorted(steps)
