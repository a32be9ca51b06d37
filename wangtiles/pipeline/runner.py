"""
Pipeline Runner Module
======================

One "generate" trigger: tileset synthesis, colorization, atlas packing and
export of the image, the TSX description and a JSON summary.
"""

import json
import logging
import time
import numpy as np
from pathlib import Path
from typing import Dict, Optional, Tuple, Union
from dataclasses import dataclass, field, asdict

from ..config import Config
from ..terrain import TilesetData
from ..export import (
    AtlasCapacityError,
    compute_image_features,
    generate_tilesets,
    generate_tileset_image,
    generate_tileset_xml,
    save_atlas,
    save_tileset_xml,
)
from ..metrics import ValidationReport, compute_tileset_stats, validate_tilesets
from ..visualization import TilesetVisualizer

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Result from a single generation run"""
    seed: Optional[int] = None
    image_size: Tuple[int, int] = (0, 0)
    atom_count: int = 0
    wang2_count: int = 0
    wang3_count: int = 0
    tile_count: int = 0
    fence_count: int = 0
    files: Dict[str, str] = field(default_factory=dict)
    runtimes: Dict[str, float] = field(default_factory=dict)
    runtime: float = 0.0
    success: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


class TilesetRunner:
    """
    Runs the synthesis pipeline on a project.

    Features:
    - Seeded, reproducible generation
    - Per-stage timing
    - Capacity errors reported in the result instead of raised
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the runner.

        Args:
            config: Configuration object (uses default if None)
        """
        self.config = config or Config()

    def _rng(self) -> np.random.Generator:
        return np.random.default_rng(self.config.random_seed)

    def run(self, data: TilesetData, output_dir: Optional[Union[str, Path]] = None,
            figure_path: Optional[Union[str, Path]] = None,
            verbose: Optional[bool] = None) -> GenerationResult:
        """
        Generate the atlas of a project and write it to disk.

        Args:
            data: Project data
            output_dir: Directory for outputs (default: config output directory)
            figure_path: Also save an annotated figure of the written atlas
            verbose: Print progress (default: config verbose flag)

        Returns:
            GenerationResult
        """
        verbose = self.config.verbose if verbose is None else verbose
        output_path = Path(output_dir or self.config.output.directory)
        name = self.config.output.image_name

        result = GenerationResult(
            seed=self.config.random_seed,
            atom_count=len(data.atoms),
            wang2_count=len(data.wang2),
            wang3_count=len(data.wang3),
        )

        rng = self._rng()
        start = time.perf_counter()

        try:
            t0 = time.perf_counter()
            features = compute_image_features(data.settings)
            tilesets = generate_tilesets(rng, data, features)
            result.runtimes['synthesis'] = time.perf_counter() - t0
            result.image_size = features.size

            if verbose:
                print(f"Atlas: {features.width}x{features.height}px, "
                      f"{len(tilesets.atoms)} atoms, {len(tilesets.wang2)} wang2, {len(tilesets.wang3)} wang3")

            if features.height == 0:
                raise AtlasCapacityError("Empty atlas: every maximum count is zero")

            t0 = time.perf_counter()
            colors = generate_tileset_image(rng, data, tilesets)
            result.runtimes['colorization'] = time.perf_counter() - t0

            result.tile_count = tilesets.tile_count
            result.fence_count = sum(
                len(tile.fences) for tileset in tilesets.all_tilesets() for _, tile in tileset.items()
            )

            output_path.mkdir(parents=True, exist_ok=True)
            image_path = output_path / f'{name}.png'
            xml_path = output_path / f'{name}.tsx'

            t0 = time.perf_counter()
            save_atlas(image_path, colors)
            save_tileset_xml(xml_path, generate_tileset_xml(Path(image_path.name), data, tilesets))
            result.runtimes['export'] = time.perf_counter() - t0

            result.files = {'image': str(image_path), 'tsx': str(xml_path)}

            if figure_path is not None:
                visualizer = TilesetVisualizer(self.config.visualization)
                fig = visualizer.create_atlas_figure(colors, list(tilesets.all_tilesets()),
                                                     data.settings.tile.size, data.settings.tile.spacing,
                                                     title=name)
                visualizer.save_figure(fig, str(figure_path))
                result.files['figure'] = str(figure_path)

            result.success = True

            if verbose:
                print(f"Saved {image_path} and {xml_path}")

        except (AtlasCapacityError, OSError) as e:
            result.error = str(e)
            result.success = False
            logger.error("Generation failed: %s", e)

            if verbose:
                print(f"GENERATION ERROR: {e}")

        result.runtime = time.perf_counter() - start

        if self.config.output.write_log:
            output_path.mkdir(parents=True, exist_ok=True)
            log_path = output_path / 'logs.json'
            with open(log_path, 'w') as f:
                json.dump(result.to_dict(), f, indent=2, default=str)
            result.files['log'] = str(log_path)

        return result

    def check(self, data: TilesetData, check_borders: bool = False,
              verbose: Optional[bool] = None) -> ValidationReport:
        """
        Generate every tileset and run the coverage and adjacency checks.

        Raises:
            AtlasCapacityError: If the project does not fit into an atlas
        """
        verbose = self.config.verbose if verbose is None else verbose
        tilesets = generate_tilesets(self._rng(), data)

        groups = {
            'atoms': tilesets.atoms,
            'wang2': tilesets.wang2,
            'wang3': tilesets.wang3,
        }
        report = validate_tilesets(groups, check_borders=check_borders)

        if verbose:
            for kind, group in groups.items():
                for index, tileset in enumerate(group):
                    stats = compute_tileset_stats(tileset).to_dict(data)
                    shares = ', '.join(f"{atom}: {share:.0%}" for atom, share in stats['atom_share'].items())
                    print(f"{kind} #{index}: {stats['tile_count']} tiles, "
                          f"{stats['fence_count']} fences ({shares})")

        return report
