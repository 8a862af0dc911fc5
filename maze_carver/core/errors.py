class MazeError(Exception):
    """Base class for every error raised by maze_carver."""


class AllocationError(MazeError, MemoryError):
    """Backing storage for the grid or a stack frame could not be obtained."""


class InvalidArgument(MazeError, ValueError):
    """An option value is not a usable number. Recovered with a warning."""

    def __init__(self, value: str):
        super().__init__(f"{value} is not a number")
        self.value = value


class MissingArgumentValue(MazeError):
    """An option that needs a value was given none. Fatal."""
