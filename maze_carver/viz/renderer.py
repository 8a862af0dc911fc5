import logging
import os

import numpy as np
import pygame

from maze_carver.core.grid import Grid

logger = logging.getLogger(__name__)


class ImageRenderer:
    COLOR_BG = (255, 255, 255)
    COLOR_WALL = (0, 0, 0)
    COLOR_PATH = (255, 0, 0)

    def __init__(self, pixpercell: int = 10):
        if pixpercell < 1:
            raise ValueError(f"pixpercell must be >= 1, got {pixpercell}")
        self.pixpercell = pixpercell

        # Cell state -> RGB, anything not listed stays background
        self.palette = np.empty((len(Grid.STATES), 3), dtype=np.uint8)
        self.palette[:] = self.COLOR_BG
        self.palette[Grid.WALL] = self.COLOR_WALL
        self.palette[Grid.PATH] = self.COLOR_PATH

    def to_array(self, grid: Grid) -> np.ndarray:
        """RGB pixels as (height * pixpercell, width * pixpercell, 3)."""
        cells = np.frombuffer(grid.cells, dtype=np.uint8).reshape(grid.height, grid.width)
        pixels = self.palette[cells]

        # Each cell becomes a pixpercell x pixpercell block
        size = self.pixpercell
        return np.repeat(np.repeat(pixels, size, axis=0), size, axis=1)

    def render(self, grid: Grid, filepath: str):
        pixels = self.to_array(grid)

        # surfarray wants (width, height, 3)
        surface = pygame.surfarray.make_surface(np.transpose(pixels, (1, 0, 2)))

        folder = os.path.dirname(filepath)
        if folder:
            os.makedirs(folder, exist_ok=True)

        pygame.image.save(surface, filepath)
        logger.info(f"Saved {surface.get_width()}x{surface.get_height()} image to {filepath}")
