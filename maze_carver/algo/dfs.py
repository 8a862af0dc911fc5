import logging
from typing import Iterator, Optional, Tuple

from maze_carver.core.grid import Grid
from maze_carver.core.stack import BacktrackStack
from maze_carver.algo.base import Generator, DX, DY, PROGRESS_INTERVAL, shuffled_directions

logger = logging.getLogger(__name__)


class RecursiveBacktracker(Generator):
    """
    Randomized depth-first carving over the odd/odd room cells.

    Rooms are two cells apart, so every move hops over the wall between
    them and knocks it down. Backtracking uses an explicit stack of mother
    cells instead of recursion.
    """

    def run(self) -> Iterator[str]:
        grid = self.grid

        # Start next to the exit (bottom right)
        cx, cy = grid.goal
        grid.set(cx, cy, Grid.VISITED)

        with BacktrackStack() as stack:
            while True:
                target = self.pick_neighbor(cx, cy)

                if target:
                    nx, ny = target
                    # Knock down the wall in between
                    grid.set((cx + nx) // 2, (cy + ny) // 2, Grid.VISITED)
                    stack.push((cx, cy))
                    cx, cy = nx, ny
                    grid.set(cx, cy, Grid.VISITED)

                    self.step_count += 1
                    if self.step_count % PROGRESS_INTERVAL == 0:
                        yield f"Carving... Stack: {len(stack)}"
                else:
                    mother = stack.pop()
                    if mother is None:
                        # Back at the start with nothing left to carve
                        break
                    cx, cy = mother

                    self.backtrack_count += 1
                    if self.backtrack_count % PROGRESS_INTERVAL == 0:
                        yield f"Backtracking... Stack: {len(stack)}"

        # The interior walk never reaches the border, open the doorways here
        grid.set(*grid.entrance, Grid.VISITED)
        grid.set(*grid.exit, Grid.VISITED)

        logger.debug(
            "Carved %dx%d maze: %d moves, %d backtracks",
            grid.width, grid.height, self.step_count, self.backtrack_count,
        )
        yield "Done"

    def pick_neighbor(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        """Room two cells away that is still unvisited, tried in random order."""
        for direction in shuffled_directions(self.rng):
            nx = x + 2 * DX[direction]
            ny = y + 2 * DY[direction]
            if self.grid.in_interior(nx, ny) and self.grid.get(nx, ny) == Grid.UNVISITED:
                return (nx, ny)
        return None
