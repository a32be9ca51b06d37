"""
Configuration Settings Module
==============================

Dataclass-based run configuration with defaults.

Project data (atoms, rules, tile size) lives in the project document; this
module only covers how a run is executed and where its output goes.
"""

from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Optional, Any


@dataclass
class OutputConfig:
    """Output files of a generation run"""
    directory: str = 'output'
    image_name: str = 'tileset'  # <name>.png and <name>.tsx
    write_log: bool = True  # logs.json summary


@dataclass
class PreviewConfig:
    """Single-item preview rendering"""
    gutter: int = 1  # transparent pixels between tiles


@dataclass
class VisualizationConfig:
    """Visualization configuration"""
    figure_size: tuple = (10, 10)
    dpi: int = 100
    show_grid: bool = True
    show_fences: bool = True

    # Colors
    fence_color: str = 'red'
    grid_color: str = 'white'
    background_color: str = 'lightgray'


@dataclass
class Config:
    """
    Master configuration class combining all sub-configurations.

    Usage:
        config = Config()
        config = Config(output=OutputConfig(directory='build'), random_seed=42)
    """
    output: OutputConfig = field(default_factory=OutputConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)

    # Global settings
    random_seed: Optional[int] = None
    verbose: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Config':
        """Create Config from dictionary, nested sections may be dicts"""
        config = cls()
        sections = {
            'output': OutputConfig,
            'preview': PreviewConfig,
            'visualization': VisualizationConfig,
        }

        for key, value in d.items():
            if key in sections and isinstance(value, dict):
                known = {f.name for f in fields(sections[key])}
                value = sections[key](**{k: v for k, v in value.items() if k in known})

                if key == 'visualization':
                    value.figure_size = tuple(value.figure_size)

            if hasattr(config, key):
                setattr(config, key, value)

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        return asdict(self)
