import argparse
import logging
import random
import sys

from maze_carver import config as defaults
from maze_carver.config import MazeConfig
from maze_carver.core.errors import AllocationError, MissingArgumentValue

logger = logging.getLogger("maze_carver")

HELP_TEXT = f"""\
Generates a maze in black and white and saves it to {defaults.MAZE_IMAGE}. It also solves
the maze (marked in red) and saves it to {defaults.SOLVE_IMAGE}."""

VERSION_TEXT = f"""\
{defaults.PROGRAM_NAME} {defaults.VERSION}

For license and copyright information see the LICENSE file, which should
have been distributed with the software."""

# Placeholder shown when an option is missing its value
METAVARS = {"--height": "<cells>", "--width": "<cells>", "--pixpercell": "<pixels>"}

# Options that always consume the next token
VALUE_OPTIONS = ("--height", "--width", "--pixpercell", "--seed", "--out", "--solved-out")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=defaults.PROGRAM_NAME,
        description=f"{defaults.PROGRAM_NAME} - a maze generator and solver\n\n{HELP_TEXT}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        exit_on_error=False,
    )
    # Numbers are read as text so bad values can fall back to defaults with a warning
    parser.add_argument("--height", metavar="<cells>", help="Specify height of maze")
    parser.add_argument("--width", metavar="<cells>", help="Specify width of maze")
    parser.add_argument("--nosolve", action="store_true", help="Do not solve the generated maze")
    parser.add_argument("--pixpercell", metavar="<pixels>", help="Cell width and height")
    parser.add_argument("--seed", metavar="<int>", help="Random seed (default: seeded once per run)")
    parser.add_argument("--out", metavar="<file>", help=f"Maze image (default: {defaults.MAZE_IMAGE})")
    parser.add_argument("--solved-out", metavar="<file>", help=f"Solved maze image (default: {defaults.SOLVE_IMAGE})")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("-v", "--version", action="version", version=VERSION_TEXT,
                        help="Display program name and version number")
    return parser


def join_values(argv=None):
    """
    Binds each value option to the token after it, whatever it looks like,
    so `--height --nosolve` reads `--nosolve` as the (bad) height.
    Raises MissingArgumentValue when a value option is the last token.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)
    joined = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in VALUE_OPTIONS:
            if i + 1 >= len(tokens):
                metavar = METAVARS.get(token, "<value>")
                raise MissingArgumentValue(f"missing {metavar} after {token}")
            joined.append(f"{token}={tokens[i + 1]}")
            i += 2
        else:
            joined.append(token)
            i += 1
    return joined


def parse_args(argv=None):
    """
    Returns (args, unknown) where unknown holds the unrecognized flags.
    A flag without its value raises MissingArgumentValue.
    """
    parser = build_parser()
    try:
        return parser.parse_known_args(join_values(argv))
    except argparse.ArgumentError as err:
        flag = err.argument_name or "option"
        metavar = METAVARS.get(flag, "<value>")
        raise MissingArgumentValue(f"missing {metavar} after {flag}") from err


def run(config: MazeConfig) -> None:
    """Generate, render, then optionally solve and render again."""
    from maze_carver.core.grid import Grid
    from maze_carver.core.complexity import MazeStats
    from maze_carver.algo.dfs import RecursiveBacktracker
    from maze_carver.algo.solvers import RandomWalkSolver
    from maze_carver.viz.renderer import ImageRenderer

    # One randomness source per run, shared by both walks
    rng = random.Random(config.seed)
    renderer = ImageRenderer(config.pixpercell)

    phase = "initializing"
    grid = None
    try:
        grid = Grid(config.width, config.height)

        phase = "generating"
        logger.info(f"Generating {config.width}x{config.height} maze...")
        RecursiveBacktracker(grid, rng=rng).run_all()
        logger.debug(f"Stats: {MazeStats.calculate(grid)}")
        renderer.render(grid, config.maze_image)

        if config.solve:
            phase = "solving"
            logger.info("Solving maze...")
            solver = RandomWalkSolver(grid, rng=rng)
            if solver.run_all():
                logger.info(f"Solution length: {len(solver.path)}")
            else:
                logger.warning("No solution found")
            logger.debug(f"Stats: {MazeStats.calculate(grid)}")
            renderer.render(grid, config.solve_image)
    except AllocationError as err:
        raise AllocationError(f"memory allocation failure while {phase} maze") from err
    finally:
        if grid is not None:
            grid.destroy()


def main(argv=None) -> int:
    try:
        args, unknown = parse_args(argv)
    except MissingArgumentValue as err:
        setup_logging(False)
        logger.error(str(err))
        return 1

    setup_logging(args.verbose)
    for arg in unknown:
        logger.warning(f"unknown argument {arg} is ignored")

    config = MazeConfig.from_args(args)
    logger.debug(f"Config: {config}")

    try:
        run(config)
    except AllocationError as err:
        logger.error(str(err))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
