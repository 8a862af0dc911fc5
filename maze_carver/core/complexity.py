from maze_carver.core.grid import Grid


class MazeStats:
    @staticmethod
    def calculate(grid: Grid):
        """
        Summarises a carved (and possibly solved) grid.
        passages: opened wall cells between two rooms
        dead_ends: rooms with exactly one open side
        """
        rooms = 0
        passages = 0
        dead_ends = 0

        def is_open(x, y):
            return grid.get(x, y) != Grid.WALL and grid.get(x, y) != Grid.UNVISITED

        for x, y in grid.rooms():
            rooms += 1

            # Count each passage once, from its left/top room
            if x + 2 <= grid.width - 2 and is_open(x + 1, y):
                passages += 1
            if y + 2 <= grid.height - 2 and is_open(x, y + 1):
                passages += 1

            exits = 0
            if is_open(x, y - 1): exits += 1
            if is_open(x, y + 1): exits += 1
            if is_open(x - 1, y): exits += 1
            if is_open(x + 1, y): exits += 1
            if exits == 1:
                dead_ends += 1

        return {
            "rooms": rooms,
            "passages": passages,
            "dead_ends": dead_ends,
            "path_cells": grid.count(Grid.PATH),
            "not_path_cells": grid.count(Grid.NOT_PATH),
            "dead_end_percent": (dead_ends / rooms) * 100 if rooms > 0 else 0
        }
