"""
Configuration Module
====================

Centralized run configuration of the tileset generator.
"""

from .settings import (
    Config,
    OutputConfig,
    PreviewConfig,
    VisualizationConfig,
)

__all__ = [
    'Config',
    'OutputConfig',
    'PreviewConfig',
    'VisualizationConfig',
]
