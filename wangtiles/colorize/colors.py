"""
Color Buffer Module
===================

RGBA float buffers of shape ``(height, width, 4)`` with values in [0, 1],
and the HSV value operations used by pigments and border effects.
"""

import numpy as np
from typing import Tuple, Union

from matplotlib.colors import hsv_to_rgb, rgb_to_hsv

ColorLike = Union[Tuple[float, float, float, float], np.ndarray]


def new_colors(width: int, height: int) -> np.ndarray:
    """Fully transparent buffer"""
    return np.zeros((height, width, 4), dtype=np.float64)


def darker(color: ColorLike, percent) -> np.ndarray:
    """
    Scale the HSV value down by ``1 - percent``.

    Works on a single color or on an array of colors, ``percent`` is
    broadcast against the color shape without its channel axis.
    """
    color = np.array(color, dtype=np.float64)
    hsv = rgb_to_hsv(np.clip(color[..., :3], 0.0, 1.0))
    hsv[..., 2] *= 1.0 - np.asarray(percent, dtype=np.float64)
    color[..., :3] = hsv_to_rgb(np.clip(hsv, 0.0, 1.0))
    return color


def lighter(color: ColorLike, percent) -> np.ndarray:
    """
    Scale the HSV value up by ``1 + percent``.

    A value pushed above 1 is capped and the excess is taken from the
    saturation instead.
    """
    color = np.array(color, dtype=np.float64)
    hsv = rgb_to_hsv(np.clip(color[..., :3], 0.0, 1.0))

    value = hsv[..., 2] * (1.0 + np.asarray(percent, dtype=np.float64))
    saturation = hsv[..., 1]
    excess = np.maximum(value - 1.0, 0.0)

    hsv[..., 1] = np.maximum(saturation - excess, 0.0)
    hsv[..., 2] = np.minimum(value, 1.0)

    color[..., :3] = hsv_to_rgb(hsv)
    return color


def extend(colors: np.ndarray, space: int) -> np.ndarray:
    """Grow the buffer by ``space`` on each side, replicating the edge pixels"""
    if space <= 0:
        return colors.copy()

    return np.pad(colors, ((space, space), (space, space), (0, 0)), mode='edge')


def blit(target: np.ndarray, source: np.ndarray, offset: Tuple[int, int]):
    """Copy source into target at offset (x, y)"""
    x, y = offset
    height, width = source.shape[:2]

    if x < 0 or y < 0 or x + width > target.shape[1] or y + height > target.shape[0]:
        raise ValueError(
            f"Cannot blit a {width}x{height} buffer at {offset} "
            f"into a {target.shape[1]}x{target.shape[0]} buffer"
        )

    target[y:y + height, x:x + width] = source


def to_rgba8(colors: np.ndarray) -> np.ndarray:
    """Convert to 8-bit RGBA for image output"""
    return np.round(np.clip(colors, 0.0, 1.0) * 255.0).astype(np.uint8)
