import unittest
import sys
import os
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.grid import Grid
from maze_carver.core.stack import BacktrackStack
from maze_carver.core.errors import AllocationError
from maze_carver.algo.dfs import RecursiveBacktracker
from maze_carver.algo.solvers import RandomWalkSolver

class TestSolvers(unittest.TestCase):
    def create_maze(self, w, h, seed=42):
        grid = Grid(w, h)
        RecursiveBacktracker(grid, seed=seed).run_all()
        return grid

    def create_corridor_maze(self):
        # 5x5 carved by hand: (1,1) -> (3,1) -> (3,3), with a branch (1,1) -> (1,3)
        grid = Grid(5, 5)
        for cell in [(1, 1), (2, 1), (3, 1), (3, 2), (3, 3), (1, 2), (1, 3), (0, 1), (4, 3)]:
            grid.set(*cell, Grid.VISITED)
        return grid

    def assert_single_route(self, grid, solver):
        path = solver.path
        self.assertEqual(path[0], grid.entrance)
        self.assertEqual(path[-1], grid.exit)
        self.assertEqual(len(path), len(set(path)), "path revisits a cell")

        # Consecutive cells are neighbours
        for (x1, y1), (x2, y2) in zip(path, path[1:]):
            self.assertEqual(abs(x1 - x2) + abs(y1 - y2), 1)

        # Every PATH cell is on the route and nothing else is
        self.assertEqual(grid.count(Grid.PATH), len(path))
        for cell in path:
            self.assertEqual(grid.get(*cell), Grid.PATH)

    def test_solves_generated_mazes(self):
        for w, h in [(5, 5), (7, 13), (21, 21), (59, 59)]:
            grid = self.create_maze(w, h)
            solver = RandomWalkSolver(grid, seed=1)
            self.assertTrue(solver.run_all(), f"{w}x{h} not solved")
            self.assertTrue(solver.solved)
            self.assert_single_route(grid, solver)

    def test_many_seeds(self):
        for seed in range(25):
            grid = self.create_maze(11, 9, seed=seed)
            solver = RandomWalkSolver(grid, seed=seed)
            self.assertTrue(solver.run_all())
            self.assert_single_route(grid, solver)

    def test_dead_ends_marked(self):
        grid = self.create_maze(31, 31)
        solver = RandomWalkSolver(grid, seed=2)
        solver.run_all()

        on_path = set(solver.path)
        for y in range(grid.height):
            for x in range(grid.width):
                if grid.get(x, y) == Grid.NOT_PATH:
                    self.assertNotIn((x, y), on_path)
        self.assertEqual(solver.visited_count, grid.count(Grid.PATH) - 2 + grid.count(Grid.NOT_PATH))

    def test_corridor_maze(self):
        grid = self.create_corridor_maze()
        solver = RandomWalkSolver(grid, seed=0)
        for _ in solver.run(): pass

        self.assertEqual(solver.path, [(0, 1), (1, 1), (2, 1), (3, 1), (3, 2), (3, 3), (4, 3)])
        # The branch is either untouched or proven a dead end
        self.assertIn(grid.get(1, 2), (Grid.VISITED, Grid.NOT_PATH))
        self.assertIn(grid.get(1, 3), (Grid.VISITED, Grid.NOT_PATH))

    def test_smallest_maze(self):
        grid = self.create_maze(3, 3)
        solver = RandomWalkSolver(grid, seed=0)
        self.assertTrue(solver.run_all())

        self.assertEqual(solver.path, [(0, 1), (1, 1), (2, 1)])
        self.assertEqual(solver.backtrack_count, 0)
        self.assertEqual(grid.get(1, 1), Grid.PATH)
        self.assertEqual(grid.get(0, 1), Grid.PATH)
        self.assertEqual(grid.get(2, 1), Grid.PATH)

    def test_determinism(self):
        grid1 = self.create_maze(25, 25, seed=8)
        grid2 = self.create_maze(25, 25, seed=8)

        s1 = RandomWalkSolver(grid1, seed=99)
        s1.run_all()
        s2 = RandomWalkSolver(grid2, seed=99)
        s2.run_all()

        self.assertEqual(grid1.cells.tobytes(), grid2.cells.tobytes())
        self.assertEqual(s1.path, s2.path)

    def test_no_path(self):
        grid = Grid(5, 5) # Nothing carved
        grid.set(1, 1, Grid.VISITED)
        solver = RandomWalkSolver(grid, seed=0)
        messages = list(solver.run())

        self.assertEqual(messages[-1], "No Path")
        self.assertFalse(solver.solved)
        self.assertEqual(solver.path, [])
        self.assertEqual(grid.get(1, 1), Grid.NOT_PATH)
        self.assertEqual(grid.get(0, 1), Grid.WALL)

    def test_allocation_failure_releases_stack(self):
        grid = self.create_maze(11, 11)
        with mock.patch.object(BacktrackStack, "push", side_effect=AllocationError("no memory")), \
             mock.patch.object(BacktrackStack, "clear", autospec=True) as clear:
            with self.assertRaises(AllocationError):
                RandomWalkSolver(grid, seed=1).run_all()
        clear.assert_called_once()

if __name__ == '__main__':
    unittest.main()
