"""Reusable maze generator module.

Basic usage:

    import random
    from mazegen import generate

    grid = generate(20, 15, rng=random.Random(42))

The maze is a `mazegrid.Grid` of `Wall` flags. Before carving, the LEFT
wall of one random cell in column 0 (the entrance) and the RIGHT wall of one
random cell in the last column (the exit) are opened. The carve itself is a
randomized depth-first backtracker, so the result is a perfect maze: exactly
one simple path between any two cells.
"""

import logging
import random
from typing import Callable, List, Optional, Set

from mazegrid import Grid, Neighbour, Position, Wall, check_dimensions


logger = logging.getLogger(__name__)


class MazeGenerator:
    """Generate a perfect maze over a width x height grid.

    Randomness comes from `rng` if given, otherwise from a fresh
    `random.Random(seed)`. Draw order is fixed (entrance row, exit row,
    start x, start y, then one choice per carve step), so equal seeds give
    identical grids.
    """

    width: int
    height: int
    grid: Grid
    entrance: Position
    exit: Position
    _on_step: Optional[Callable[["MazeGenerator"], None]]

    def __init__(
        self,
        width: int,
        height: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        on_step: Optional[Callable[["MazeGenerator"], None]] = None,
    ) -> None:
        check_dimensions(width, height)
        self.width = width
        self.height = height
        self._on_step = on_step

        if rng is None:
            rng = random.Random(seed)

        self.grid = Grid(width, height)
        self._open_boundaries(rng)
        self._generate_perfect_maze(rng)

        if self._on_step is not None:
            self._on_step(self)

    def _open_boundaries(self, rng: random.Random) -> None:
        # Both openings are placed before the carve and are not revisited.
        self.entrance = Position(0, rng.randrange(self.height))
        self.exit = Position(self.width - 1, rng.randrange(self.height))
        self.grid.open_boundary(self.entrance, Wall.LEFT)
        self.grid.open_boundary(self.exit, Wall.RIGHT)

    def _neighbours_unvisited(
        self, pos: Position, visited: Set[Position]
    ) -> List[Neighbour]:
        return [n for n in self.grid.neighbours(pos) if n.position not in visited]

    def _carve_between(self, pos: Position, neighbour: Neighbour) -> None:
        self.grid.carve(pos, neighbour.shared_wall)

        if self._on_step is not None:
            self._on_step(self)

    def _generate_perfect_maze(self, rng: random.Random) -> None:
        start = Position(rng.randrange(self.width), rng.randrange(self.height))

        stack: List[Position] = [start]
        visited: Set[Position] = {start}

        while stack:
            current = stack[-1]
            unvisited = self._neighbours_unvisited(current, visited)
            if not unvisited:
                stack.pop()
                continue
            nxt = rng.choice(unvisited)
            self._carve_between(current, nxt)
            visited.add(nxt.position)
            stack.append(nxt.position)

        if len(visited) != self.width * self.height:
            raise RuntimeError("Maze generation produced disconnected cells")

        logger.debug(
            "Carved %dx%d maze from %s (entrance=%s, exit=%s)",
            self.width,
            self.height,
            start,
            self.entrance,
            self.exit,
        )


def generate(
    width: int, height: int, rng: Optional[random.Random] = None
) -> Grid:
    """Return a freshly carved perfect maze of the given size.

    Raises InvalidDimension if either side is not a positive integer.
    """

    return MazeGenerator(width, height, rng=rng).grid
