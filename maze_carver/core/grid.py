from array import array
from typing import Iterator, List, Tuple

from maze_carver.core.errors import AllocationError


def normalize_dimension(value: int) -> int:
    """Round an even dimension down to the nearest odd one."""
    return value - 1 if value % 2 == 0 else value


class Grid:
    # Cell states (one byte per cell)
    UNVISITED = 0
    VISITED   = 1
    WALL      = 2
    PATH      = 3
    NOT_PATH  = 4

    STATES = (UNVISITED, VISITED, WALL, PATH, NOT_PATH)

    # ASCII dump glyphs
    GLYPHS = {UNVISITED: ' ', VISITED: ' ', WALL: '#', PATH: '.', NOT_PATH: 'x'}

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if width < 3 or height < 3 or width % 2 == 0 or height % 2 == 0:
            raise ValueError(f"Grid dimensions must be odd and >= 3, got {width}x{height}")

        self.width = width
        self.height = height

        try:
            # Even rows and even columns form the wall skeleton,
            # odd/odd cells are rooms waiting to be carved.
            wall_row = [self.WALL] * width
            room_row = [self.WALL if x % 2 == 0 else self.UNVISITED for x in range(width)]
            cells = array('B')
            for y in range(height):
                cells.extend(wall_row if y % 2 == 0 else room_row)
        except MemoryError as err:
            raise AllocationError(
                f"cannot allocate {width}x{height} grid"
            ) from err

        self.cells = cells

    @property
    def released(self) -> bool:
        return len(self.cells) == 0

    def destroy(self):
        """Release the cell buffer. Safe to call more than once."""
        self.cells = array('B')

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height and not self.released:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def get(self, x: int, y: int) -> int:
        return self.cells[self.get_index(x, y)]

    def set(self, x: int, y: int, state: int):
        if state not in self.STATES:
            raise ValueError(f"Unknown cell state {state!r}")
        self.cells[self.get_index(x, y)] = state

    def in_interior(self, x: int, y: int) -> bool:
        return 1 <= x <= self.width - 2 and 1 <= y <= self.height - 2

    def rooms(self) -> Iterator[Tuple[int, int]]:
        """Yields (x, y) for every odd/odd room cell, row by row."""
        for y in range(1, self.height - 1, 2):
            for x in range(1, self.width - 1, 2):
                yield (x, y)

    def count(self, state: int) -> int:
        return self.cells.count(state)

    # Landmarks
    @property
    def entrance(self) -> Tuple[int, int]:
        return (0, 1)

    @property
    def exit(self) -> Tuple[int, int]:
        return (self.width - 1, self.height - 2)

    @property
    def start(self) -> Tuple[int, int]:
        """Room next to the entrance, where solving begins."""
        return (1, 1)

    @property
    def goal(self) -> Tuple[int, int]:
        """Room next to the exit. Carving also starts here."""
        return (self.width - 2, self.height - 2)

    def rows(self) -> List[List[int]]:
        w = self.width
        return [list(self.cells[y * w:(y + 1) * w]) for y in range(len(self.cells) // w)]

    def __str__(self) -> str:
        return "\n".join(
            "".join(self.GLYPHS[state] for state in row) for row in self.rows()
        )
