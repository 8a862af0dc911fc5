import random
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

from maze_carver.core.grid import Grid

# Direction Helpers
UP, DOWN, LEFT, RIGHT = 0, 1, 2, 3
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)
DX = {UP: 0, DOWN: 0, LEFT: -1, RIGHT: 1}
DY = {UP: -1, DOWN: 1, LEFT: 0, RIGHT: 0}

# Yield a progress string every N steps
PROGRESS_INTERVAL = 100


def shuffled_directions(rng: random.Random) -> List[int]:
    """Uniform random permutation of the four directions."""
    order = list(DIRECTIONS)
    rng.shuffle(order)
    return order


class Generator(ABC):
    def __init__(self, grid: Grid, seed: int = None, rng: Optional[random.Random] = None):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random(seed)
        self.step_count = 0
        self.backtrack_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass


class Solver(ABC):
    def __init__(self, grid: Grid, seed: int = None, rng: Optional[random.Random] = None):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random(seed)
        self.path: List[Tuple[int, int]] = []
        self.visited_count = 0
        self.backtrack_count = 0
        self.solved = False

    @abstractmethod
    def run(self) -> Iterator[str]:
        pass

    def run_all(self) -> bool:
        for _ in self.run():
            pass
        return self.solved
