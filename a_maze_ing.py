import logging
import random
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from mazecheck import InvalidMaze, validate_maze
from mazegen import MazeGenerator
from mazegrid import Grid, MazeError, Position, Wall
from parsing import Config, ConfigError, read_config
from pathfind import find_path


WALL_CHAR = "█"


def render_block(
    grid: Grid,
    *,
    marks: Optional[Dict[Position, str]] = None,
) -> List[str]:
    """Render the maze as block characters, highest row first."""

    marks = marks or {}
    h = grid.height
    w = grid.width

    out_h = 2 * h + 1
    out_w = 2 * w + 1
    canvas: List[List[str]] = [
        [WALL_CHAR for _ in range(out_w)]
        for _ in range(out_h)
    ]

    for pos in grid.positions():
        cr = 2 * (h - 1 - pos.y) + 1
        cc = 2 * pos.x + 1
        canvas[cr][cc] = " "

        walls = grid[pos]
        # carve passages
        if not walls & Wall.UP:
            canvas[cr - 1][cc] = " "
        if not walls & Wall.BOTTOM:
            canvas[cr + 1][cc] = " "
        if not walls & Wall.LEFT:
            canvas[cr][cc - 1] = " "
        if not walls & Wall.RIGHT:
            canvas[cr][cc + 1] = " "

        m = marks.get(pos)
        if m is not None and len(m) == 1:
            canvas[cr][cc] = m

    return ["".join(row) for row in canvas]


def path_marks(
    start: Position, goal: Position, path: Sequence[Position]
) -> Dict[Position, str]:
    marks: Dict[Position, str] = {pos: "." for pos in path}
    marks[start] = "S"
    marks[goal] = "G"
    return marks


def run(config: Config) -> int:
    """Generate, validate and solve the maze, then print it."""

    maze = MazeGenerator(
        config.width,
        config.height,
        rng=random.Random(config.seed),
    )
    grid = maze.grid
    validate_maze(grid, entrance=maze.entrance, exit_=maze.exit)

    start = config.start if config.start is not None else maze.entrance
    goal = config.goal if config.goal is not None else maze.exit
    path = find_path(
        start,
        goal,
        grid,
        config.width,
        config.height,
        respect_walls=config.respect_walls,
    )

    for line in render_block(grid, marks=path_marks(start, goal, path)):
        print(line)
    print(f"Path {start.x},{start.y} -> {goal.x},{goal.y}: {len(path)} steps")
    return 0


def main(argv: Sequence[str]) -> int:
    """CLI entrypoint."""

    if len(argv) != 2:
        print("Usage: python3 a_maze_ing.py config.txt", file=sys.stderr)
        return 2

    try:
        config = read_config(Path(argv[1]))
        logging.basicConfig(
            level=config.log_level,
            format="%(levelname)s %(name)s: %(message)s",
        )
        return run(config)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except (ConfigError, MazeError, InvalidMaze) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def entrypoint() -> int:
    return main(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
