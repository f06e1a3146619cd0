"""A* shortest-path search over a maze grid.

By default neighbours are any in-bounds orthogonal cells, regardless of
walls, so the result is a Manhattan-optimal route across the open grid.
Pass `respect_walls=True` to only step through carved passages.
"""

import heapq
import logging
from itertools import count
from typing import Dict, Iterator, List, Set, Tuple

from mazegrid import (
    Grid,
    InvalidDimension,
    OutOfBounds,
    Position,
    PositionLike,
    check_dimensions,
)


logger = logging.getLogger(__name__)


def heuristic(a: PositionLike, b: PositionLike) -> int:
    """Manhattan distance between two cells."""

    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _expand(grid: Grid, pos: Position, respect_walls: bool) -> Iterator[Position]:
    neighbours = grid.open_neighbours(pos) if respect_walls else grid.neighbours(pos)
    for neighbour in neighbours:
        yield neighbour.position


def reconstruct_path(
    came_from: Dict[Position, Position], current: Position
) -> List[Position]:
    """Walk predecessors back from `current`; the start cell is not included."""

    path: List[Position] = []
    while current in came_from:
        path.append(current)
        current = came_from[current]
    path.reverse()
    return path


def find_path(
    start: PositionLike,
    goal: PositionLike,
    grid: Grid,
    width: int,
    height: int,
    *,
    respect_walls: bool = False,
) -> List[Position]:
    """Return the cells from just after `start` up to and including `goal`.

    An empty list means either start == goal or the goal is unreachable.
    Raises OutOfBounds for coordinates outside the grid and
    InvalidDimension when width/height are invalid or disagree with `grid`.
    """

    check_dimensions(width, height)
    if (width, height) != (grid.width, grid.height):
        raise InvalidDimension(
            f"Expected a {width}x{height} grid, got {grid.width}x{grid.height}"
        )

    start = Position(*start)
    goal = Position(*goal)
    for name, pos in (("start", start), ("goal", goal)):
        if not grid.in_bounds(pos):
            raise OutOfBounds(
                f"{name} {tuple(pos)} is outside a {width}x{height} grid"
            )

    if start == goal:
        return []

    came_from: Dict[Position, Position] = {}
    g_score: Dict[Position, int] = {start: 0}
    closed: Set[Position] = set()

    # (f, tie, g, position); tie keeps heap order stable for equal f.
    tie = count()
    open_heap: List[Tuple[int, int, int, Position]] = [
        (heuristic(start, goal), next(tie), 0, start)
    ]

    while open_heap:
        _, _, g, current = heapq.heappop(open_heap)
        if current in closed or g > g_score[current]:
            continue

        if current == goal:
            path = reconstruct_path(came_from, current)
            logger.debug("Found path %s -> %s (%d steps)", start, goal, len(path))
            return path

        closed.add(current)

        for nxt in _expand(grid, current, respect_walls):
            if nxt in closed:
                continue
            tentative = g + 1
            if tentative < g_score.get(nxt, tentative + 1):
                came_from[nxt] = current
                g_score[nxt] = tentative
                heapq.heappush(
                    open_heap,
                    (tentative + heuristic(nxt, goal), next(tie), tentative, nxt),
                )

    logger.debug("No path %s -> %s", start, goal)
    return []
