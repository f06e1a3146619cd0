"""Wall-flag grid shared by the maze generator and the path finder.

Each cell stores an `enum.IntFlag` of its closed walls. Coordinates are
(x, y) with x growing to the RIGHT and y growing UP:

    LEFT   -> (x - 1, y)
    RIGHT  -> (x + 1, y)
    BOTTOM -> (x, y - 1)
    UP     -> (x, y + 1)

Walls are always carved in pairs, so a cell's flag toward a neighbour is
clear iff the neighbour's opposite flag is clear.
"""

from enum import IntFlag
from typing import Iterator, List, NamedTuple, Tuple, Union


class Wall(IntFlag):
    """Closed walls of a single cell."""

    LEFT = 1
    RIGHT = 2
    UP = 4
    BOTTOM = 8


ALL_WALLS = Wall.LEFT | Wall.RIGHT | Wall.UP | Wall.BOTTOM


class Position(NamedTuple):
    x: int
    y: int


class Neighbour(NamedTuple):
    """An adjacent cell and the wall shared with it."""

    position: Position
    shared_wall: Wall


PositionLike = Union[Position, Tuple[int, int]]


_OPPOSITE = {
    Wall.LEFT: Wall.RIGHT,
    Wall.RIGHT: Wall.LEFT,
    Wall.UP: Wall.BOTTOM,
    Wall.BOTTOM: Wall.UP,
}

_OFFSETS = {
    Wall.LEFT: (-1, 0),
    Wall.RIGHT: (1, 0),
    Wall.UP: (0, 1),
    Wall.BOTTOM: (0, -1),
}

# Enumeration order for neighbours: left, bottom, up, right.
_NEIGHBOUR_ORDER: Tuple[Wall, ...] = (Wall.LEFT, Wall.BOTTOM, Wall.UP, Wall.RIGHT)


class MazeError(ValueError):
    """Base class for invalid maze inputs."""

    pass


class InvalidDimension(MazeError):
    """Width or height is not a positive integer."""

    pass


class OutOfBounds(MazeError):
    """A coordinate lies outside the grid."""

    pass


def opposite_wall(wall: Wall) -> Wall:
    """Return the wall facing `wall` from the neighbouring cell."""

    try:
        return _OPPOSITE[Wall(wall)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Not a single wall flag: {wall!r}") from exc


def check_dimensions(width: int, height: int) -> None:
    """Raise InvalidDimension unless both sides are integers >= 1."""

    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDimension(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidDimension(f"{name} must be > 0, got {value}")


class Grid:
    """A width x height array of wall states, stored row-major."""

    width: int
    height: int
    cells: List[List[Wall]]

    def __init__(self, width: int, height: int, fill: Wall = ALL_WALLS) -> None:
        check_dimensions(width, height)
        self.width = width
        self.height = height
        self.cells = [[Wall(fill) for _ in range(width)] for _ in range(height)]

    def __getitem__(self, pos: PositionLike) -> Wall:
        x, y = pos
        self._require(x, y)
        return self.cells[y][x]

    def __setitem__(self, pos: PositionLike, value: Wall) -> None:
        x, y = pos
        self._require(x, y)
        self.cells[y][x] = Wall(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.cells == other.cells
        )

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def in_bounds(self, pos: PositionLike) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def _require(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(
                f"({x}, {y}) is outside a {self.width}x{self.height} grid"
            )

    def positions(self) -> Iterator[Position]:
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)

    def neighbours(self, pos: PositionLike) -> Iterator[Neighbour]:
        """Yield every in-bounds neighbour, ignoring walls."""

        x, y = pos
        for wall in _NEIGHBOUR_ORDER:
            dx, dy = _OFFSETS[wall]
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield Neighbour(Position(nx, ny), wall)

    def open_neighbours(self, pos: PositionLike) -> Iterator[Neighbour]:
        """Yield neighbours reachable through an open passage."""

        walls = self[pos]
        for neighbour in self.neighbours(pos):
            if not walls & neighbour.shared_wall:
                yield neighbour

    def carve(self, pos: PositionLike, wall: Wall) -> Position:
        """Open the passage across `wall` on both sides and return the neighbour."""

        x, y = pos
        dx, dy = _OFFSETS[Wall(wall)]
        other = Position(x + dx, y + dy)
        self._require(x, y)
        if not self.in_bounds(other):
            raise OutOfBounds(f"No neighbour across {Wall(wall)!r} from ({x}, {y})")
        self.cells[y][x] &= ~wall
        self.cells[other.y][other.x] &= ~opposite_wall(wall)
        return other

    def open_boundary(self, pos: PositionLike, wall: Wall) -> None:
        """Clear an outer border wall (used for the entrance and the exit)."""

        x, y = pos
        dx, dy = _OFFSETS[Wall(wall)]
        self._require(x, y)
        if self.in_bounds((x + dx, y + dy)):
            raise ValueError(f"{Wall(wall)!r} of ({x}, {y}) is not on the border")
        self.cells[y][x] &= ~wall

    def passages(self) -> Iterator[Tuple[Position, Position]]:
        """Yield each open interior passage exactly once."""

        for pos in self.positions():
            walls = self.cells[pos.y][pos.x]
            if pos.x + 1 < self.width and not walls & Wall.RIGHT:
                yield pos, Position(pos.x + 1, pos.y)
            if pos.y + 1 < self.height and not walls & Wall.UP:
                yield pos, Position(pos.x, pos.y + 1)

    def copy(self) -> "Grid":
        clone = Grid(self.width, self.height)
        clone.cells = [list(row) for row in self.cells]
        return clone

    def to_bytes(self) -> bytes:
        """Return one byte per cell, row by row."""

        return bytes(int(w) for row in self.cells for w in row)
