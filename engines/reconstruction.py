"""Inverse DCT: coefficient grid -> placeholder image."""

import logging
from typing import Callable, List, TypeVar

import numpy as np

from engines.color_space import linear_to_srgb_array
from engines.dct_engine import cosine_basis, validate_size
from models.coefficient_grid import CoefficientGrid
from models.linear_color import LinearColor
from utils.constants import ALPHA_OPAQUE

logger = logging.getLogger(__name__)

T = TypeVar('T')


def render_linear(grid: CoefficientGrid, width: int, height: int) -> np.ndarray:
    """Evaluate the inverse DCT at every pixel. Returns (height, width, 3) clamped to [0, 1]."""
    validate_size(width, height)
    basis_x = cosine_basis(grid.components_x, width)   # (cx, W)
    basis_y = cosine_basis(grid.components_y, height)  # (cy, H)
    pixels = np.einsum('jy,ix,jic->yxc', basis_y, basis_x, grid.values, optimize=True)
    logger.debug("Rendered %dx%d grid to %dx%d", grid.components_x, grid.components_y, width, height)
    return np.clip(pixels, 0.0, 1.0)


def render(
    grid: CoefficientGrid,
    width: int,
    height: int,
    mapper: Callable[[LinearColor], T]
) -> List[T]:
    """Row-major list of width * height mapped pixels."""
    linear = render_linear(grid, width, height)
    return [mapper(LinearColor(float(r), float(g), float(b))) for r, g, b in linear.reshape(-1, 3)]


def render_rgb8(grid: CoefficientGrid, width: int, height: int) -> np.ndarray:
    """(height, width, 3) uint8 sRGB."""
    return linear_to_srgb_array(render_linear(grid, width, height))


def render_rgba8(grid: CoefficientGrid, width: int, height: int) -> np.ndarray:
    """(height, width, 4) uint8 sRGB, alpha always opaque."""
    rgb = render_rgb8(grid, width, height)
    alpha = np.full((height, width, 1), ALPHA_OPAQUE, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1)


def render_argb32(grid: CoefficientGrid, width: int, height: int) -> np.ndarray:
    """(height, width) uint32 packed as 0xAARRGGBB, alpha always opaque."""
    rgb = render_rgb8(grid, width, height).astype(np.uint32)
    return (
        (np.uint32(ALPHA_OPAQUE) << np.uint32(24))
        | (rgb[..., 0] << np.uint32(16))
        | (rgb[..., 1] << np.uint32(8))
        | rgb[..., 2]
    )
