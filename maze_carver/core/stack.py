from typing import Iterator, List, Optional, Tuple

from maze_carver.core.errors import AllocationError

Coord = Tuple[int, int]


class BacktrackStack:
    """
    LIFO of mother cells for a depth-first walk.
    The top is the cell the walk most recently moved away from.

    Use it as a context manager so the frames are dropped on every exit path:

        with BacktrackStack() as stack:
            stack.push((1, 1))
    """

    __slots__ = ('_frames',)

    def __init__(self):
        self._frames: List[Coord] = []

    def push(self, coord: Coord):
        try:
            self._frames.append(coord)
        except MemoryError as err:
            raise AllocationError(f"cannot push stack frame {coord}") from err

    def pop(self) -> Optional[Coord]:
        if not self._frames:
            return None
        return self._frames.pop()

    def clear(self):
        self._frames.clear()

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    def __iter__(self) -> Iterator[Coord]:
        # Bottom (oldest) to top
        return iter(list(self._frames))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.clear()
        return False
