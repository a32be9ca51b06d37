"""
Visualization Module
====================

Static matplotlib display of atlases and previews, with tile grid and
fence overlays. Helps checking by eye that tiles join seamlessly.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from typing import List, Optional, Tuple

from ..config import VisualizationConfig
from ..layout import Tileset


class TilesetVisualizer:
    """
    Display of generated tiles.

    Images are shown with pixel (0, 0) at the top-left, pixel boundaries
    fall on half-integer coordinates.
    """

    def __init__(self, config: Optional[VisualizationConfig] = None):
        """
        Initialize visualizer.

        Args:
            config: Visualization configuration
        """
        self.config = config or VisualizationConfig()

    def plot_image(self, colors: np.ndarray, ax=None, title: Optional[str] = None) -> plt.Axes:
        """
        Plot an RGBA buffer over the background color.

        Args:
            colors: Float RGBA buffer
            ax: Matplotlib axes (creates new if None)
            title: Axes title

        Returns:
            Matplotlib axes
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=self.config.figure_size, dpi=self.config.dpi)

        ax.set_facecolor(self.config.background_color)
        ax.imshow(np.clip(colors, 0.0, 1.0), interpolation='nearest')
        ax.set_xticks([])
        ax.set_yticks([])

        if title:
            ax.set_title(title)

        return ax

    def plot_grid(self, ax, shape: Tuple[int, int], step: int):
        """Draw tile boundaries every ``step`` pixels"""
        height, width = shape
        segments = []

        for x in range(step, width, step):
            segments.append([(x - 0.5, -0.5), (x - 0.5, height - 0.5)])

        for y in range(step, height, step):
            segments.append([(-0.5, y - 0.5), (width - 0.5, y - 0.5)])

        if segments:
            ax.add_collection(LineCollection(segments, colors=self.config.grid_color,
                                             linewidths=0.5, alpha=0.6))

    def plot_fences(self, ax, tilesets: List[Tileset], step: int, margin: int = 0):
        """
        Draw fence segments of tilesets.

        Args:
            ax: Matplotlib axes
            tilesets: Tilesets to draw
            step: Pixel distance between two tiles
            margin: Pixel offset of a tile inside its cell
        """
        segments = []

        for tileset in tilesets:
            tx, ty = tileset.position

            for (x, y), tile in tileset.items():
                ox = (tx + x) * step + margin - 0.5
                oy = (ty + y) * step + margin - 0.5

                for fence in tile.fences:
                    segments.append([
                        (ox + fence.p0[0], oy + fence.p0[1]),
                        (ox + fence.p1[0], oy + fence.p1[1]),
                    ])

        if segments:
            ax.add_collection(LineCollection(segments, colors=self.config.fence_color, linewidths=1.5))

    def create_atlas_figure(self, colors: np.ndarray, tilesets: List[Tileset],
                            tile_size: int, spacing: int, title: str = 'Tileset') -> plt.Figure:
        """Atlas with grid and fence overlays according to the configuration"""
        fig, ax = plt.subplots(figsize=self.config.figure_size, dpi=self.config.dpi)
        self.plot_image(colors, ax=ax, title=title)
        step = tile_size + 2 * spacing

        if self.config.show_grid:
            self.plot_grid(ax, colors.shape[:2], step)

        if self.config.show_fences:
            self.plot_fences(ax, tilesets, step, margin=spacing)

        fig.tight_layout()
        return fig

    def create_preview_figure(self, colors: np.ndarray, title: str = 'Preview') -> plt.Figure:
        """Single-item preview, tiles are already separated by gutters"""
        fig, ax = plt.subplots(figsize=self.config.figure_size, dpi=self.config.dpi)
        self.plot_image(colors, ax=ax, title=title)
        fig.tight_layout()
        return fig

    def save_figure(self, fig: plt.Figure, path: str):
        fig.savefig(path, dpi=self.config.dpi, bbox_inches='tight')
        plt.close(fig)
