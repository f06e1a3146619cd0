"""Structural checks for generated mazes."""

from collections import deque
from typing import Deque, Optional, Set

from mazegrid import Grid, Position, PositionLike, Wall, opposite_wall


class InvalidMaze(RuntimeError):
    """A grid violates the perfect-maze rules."""

    pass


def count_passages(grid: Grid) -> int:
    """Number of open interior passages, each counted once."""

    return sum(1 for _ in grid.passages())


def reachable_from(grid: Grid, start: PositionLike) -> Set[Position]:
    """Return every cell reachable from `start` through open passages."""

    start = Position(*start)
    seen: Set[Position] = {start}
    q: Deque[Position] = deque([start])
    while q:
        cur = q.popleft()
        for neighbour in grid.open_neighbours(cur):
            if neighbour.position in seen:
                continue
            seen.add(neighbour.position)
            q.append(neighbour.position)
    return seen


def validate_maze(
    grid: Grid,
    *,
    entrance: Optional[PositionLike] = None,
    exit_: Optional[PositionLike] = None,
) -> None:
    """Validate the maze structure.

    Checks:
    - Neighbouring cells have coherent walls.
    - The outer border is closed, except for the LEFT wall of `entrance`
      and the RIGHT wall of `exit_` when those are given.
    - Every cell is reachable.
    - Passages == cells - 1 (no loops).
    """

    w = grid.width
    h = grid.height

    # Wall coherence.
    for pos in grid.positions():
        walls = grid[pos]
        for neighbour in grid.neighbours(pos):
            mine = bool(walls & neighbour.shared_wall)
            theirs = bool(grid[neighbour.position] & opposite_wall(neighbour.shared_wall))
            if mine != theirs:
                raise InvalidMaze(
                    f"Invalid maze: incoherent walls between {pos} "
                    f"and {neighbour.position}"
                )

    # Border walls stay closed apart from the entrance and exit.
    allowed = set()
    if entrance is not None:
        allowed.add((Position(*entrance), Wall.LEFT))
    if exit_ is not None:
        allowed.add((Position(*exit_), Wall.RIGHT))

    border = []
    for y in range(h):
        border.append((Position(0, y), Wall.LEFT))
        border.append((Position(w - 1, y), Wall.RIGHT))
    for x in range(w):
        border.append((Position(x, 0), Wall.BOTTOM))
        border.append((Position(x, h - 1), Wall.UP))

    for pos, wall in border:
        if not grid[pos] & wall and (pos, wall) not in allowed:
            raise InvalidMaze(f"Invalid maze: unexpected {wall.name} opening at {pos}")

    total = w * h
    if len(reachable_from(grid, Position(0, 0))) != total:
        raise InvalidMaze("Invalid maze: disconnected cells exist")

    # A connected graph with nodes - 1 edges is a tree.
    if count_passages(grid) != total - 1:
        raise InvalidMaze("Invalid maze: maze contains loops")
