import logging
from dataclasses import dataclass
from typing import Optional

from maze_carver.core.errors import InvalidArgument
from maze_carver.core.grid import normalize_dimension

logger = logging.getLogger(__name__)

PROGRAM_NAME = "maze"
VERSION = "0.2"

# --- Maze defaults ---
DEFAULT_WIDTH = 59
DEFAULT_HEIGHT = 59
MIN_DIMENSION = 3

# --- Output ---
DEFAULT_PIXPERCELL = 10
MAZE_IMAGE = "maze.png"
SOLVE_IMAGE = "solve.png"


def parse_cells(text: str) -> int:
    """Maze dimension from the command line, normalized to an odd value."""
    try:
        value = int(text)
    except (TypeError, ValueError):
        raise InvalidArgument(text) from None
    if value < MIN_DIMENSION:
        raise InvalidArgument(text)
    return normalize_dimension(value)


def parse_pixels(text: str) -> int:
    try:
        value = int(text)
    except (TypeError, ValueError):
        raise InvalidArgument(text) from None
    if value < 1:
        raise InvalidArgument(text)
    return value


@dataclass
class MazeConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    pixpercell: int = DEFAULT_PIXPERCELL
    solve: bool = True
    seed: Optional[int] = None
    maze_image: str = MAZE_IMAGE
    solve_image: str = SOLVE_IMAGE

    @classmethod
    def from_args(cls, args) -> "MazeConfig":
        """
        Builds a config from parsed command line options.
        Bad numeric values keep the default and log a warning.
        """
        config = cls(solve=not args.nosolve)
        if args.seed is not None:
            try:
                config.seed = int(args.seed)
            except ValueError:
                logger.warning(f"{args.seed} is not a number, using a random seed")
        if args.out:
            config.maze_image = args.out
        if args.solved_out:
            config.solve_image = args.solved_out

        for name, parse in (("height", parse_cells), ("width", parse_cells), ("pixpercell", parse_pixels)):
            text = getattr(args, name)
            if text is None:
                continue
            try:
                setattr(config, name, parse(text))
            except InvalidArgument as err:
                logger.warning(f"{err}, using default {getattr(config, name)}")

        return config
