import logging
from typing import Iterator, Optional, Tuple

from maze_carver.core.grid import Grid
from maze_carver.core.stack import BacktrackStack
from maze_carver.algo.base import Solver, DX, DY, PROGRESS_INTERVAL, shuffled_directions

logger = logging.getLogger(__name__)


class RandomWalkSolver(Solver):
    """
    Randomized depth-first walk over carved cells, one cell per step.

    Cells on the current route are PATH; a cell with nowhere left to go
    becomes NOT_PATH and the walk returns to its mother cell. Only VISITED
    cells are candidates, so nothing is explored twice.
    """

    def run(self) -> Iterator[str]:
        grid = self.grid
        goal = grid.goal

        # Seal the doorways so the walk cannot leave the interior
        doorways = {cell: grid.get(*cell) for cell in (grid.entrance, grid.exit)}
        for cell in doorways:
            grid.set(*cell, Grid.WALL)

        cx, cy = grid.start
        grid.set(cx, cy, Grid.PATH)
        self.visited_count = 1

        with BacktrackStack() as stack:
            solved = (cx, cy) == goal

            while not solved:
                target = self.pick_neighbor(cx, cy)

                if target == goal:
                    grid.set(*target, Grid.PATH)
                    self.visited_count += 1
                    solved = True
                elif target:
                    stack.push((cx, cy))
                    cx, cy = target
                    grid.set(cx, cy, Grid.PATH)
                    self.visited_count += 1

                    if self.visited_count % PROGRESS_INTERVAL == 0:
                        yield f"Visited: {self.visited_count}"
                else:
                    # Dead end, return to the mother cell
                    grid.set(cx, cy, Grid.NOT_PATH)
                    mother = stack.pop()
                    if mother is None:
                        break
                    cx, cy = mother
                    self.backtrack_count += 1

            if solved:
                # Route = mother cells on the stack, the last cell, the goal
                route = list(stack)
                if (cx, cy) != goal:
                    route.append((cx, cy))
                route.append(goal)
                self.path = [grid.entrance] + route + [grid.exit]

        self.solved = solved

        if solved:
            grid.set(*grid.entrance, Grid.PATH)
            grid.set(*grid.exit, Grid.PATH)
            logger.debug(
                "Solved %dx%d maze: path %d cells, %d visited, %d backtracks",
                grid.width, grid.height, len(self.path), self.visited_count, self.backtrack_count,
            )
            yield "Solved"
        else:
            for cell, state in doorways.items():
                grid.set(*cell, state)
            logger.debug("No route from %s to %s", grid.start, goal)
            yield "No Path"

    def pick_neighbor(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        """Adjacent carved cell that has not been walked yet, tried in random order."""
        for direction in shuffled_directions(self.rng):
            nx = x + DX[direction]
            ny = y + DY[direction]
            if self.grid.in_interior(nx, ny) and self.grid.get(nx, ny) == Grid.VISITED:
                return (nx, ny)
        return None
