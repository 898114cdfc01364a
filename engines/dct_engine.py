"""Truncated 2D DCT over linear-light images."""

import logging
from typing import Any, Iterable, Iterator, Tuple

import numpy as np

from engines.color_space import image_to_linear, iter_linear_rows
from models.coefficient_grid import CoefficientGrid
from models.errors import InvalidComponentCountError
from utils.constants import MIN_COMPONENTS, MAX_COMPONENTS

logger = logging.getLogger(__name__)


def validate_components(components_x: int, components_y: int) -> None:
    if not (MIN_COMPONENTS <= components_x <= MAX_COMPONENTS
            and MIN_COMPONENTS <= components_y <= MAX_COMPONENTS):
        raise InvalidComponentCountError(components_x, components_y)


def validate_size(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError(f"Image size must be positive, got {width}x{height}")


def cosine_basis(components: int, size: int) -> np.ndarray:
    """cos(pi * k * n / size) for k < components, n < size. Shape (components, size)."""
    k = np.arange(components, dtype=np.float64)[:, np.newaxis]
    n = np.arange(size, dtype=np.float64)[np.newaxis, :]
    return np.cos(np.pi * k * n / size)


def analysis_basis(components: int, size: int) -> np.ndarray:
    """Forward basis. A length-1 axis carries no variation, so only k = 0 survives."""
    if size == 1:
        basis = np.zeros((components, 1), dtype=np.float64)
        basis[0, 0] = 1.0
        return basis
    return cosine_basis(components, size)


def normalization(components_x: int, components_y: int, pixel_count: int) -> np.ndarray:
    """1/N for the DC term, 2/N for every AC term. Shape (cy, cx, 1)."""
    scale = np.full((components_y, components_x, 1), 2.0 / pixel_count)
    scale[0, 0, 0] = 1.0 / pixel_count
    return scale


def _accumulate_rows(
    rows: Iterable[Tuple[int, np.ndarray]],
    width: int,
    height: int,
    components_x: int,
    components_y: int
) -> np.ndarray:
    """Accumulate every coefficient in one traversal of (y, row) pairs."""
    basis_x = analysis_basis(components_x, width)
    basis_y = analysis_basis(components_y, height)
    acc = np.zeros((components_y, components_x, 3), dtype=np.float64)

    for y, row in rows:
        # (cx, W) @ (W, 3) -> (cx, 3), then spread over the y frequencies
        projected = basis_x @ row
        acc += basis_y[:, y, np.newaxis, np.newaxis] * projected[np.newaxis, :, :]

    return acc * normalization(components_x, components_y, width * height)


def _buffer_rows(linear: np.ndarray) -> Iterator[Tuple[int, np.ndarray]]:
    for y in range(linear.shape[0]):
        yield y, linear[y]


def compute_coefficients(
    pixels: Any,
    width: int,
    height: int,
    components_x: int,
    components_y: int
) -> CoefficientGrid:
    """DCT of a random-access pixel buffer (numpy array or sequence)."""
    validate_components(components_x, components_y)
    validate_size(width, height)
    linear = image_to_linear(pixels, width, height)
    values = _accumulate_rows(_buffer_rows(linear), width, height, components_x, components_y)
    logger.debug("Computed %dx%d coefficients for %dx%d image", components_x, components_y, width, height)
    return CoefficientGrid(components_x, components_y, values)


def compute_coefficients_iter(
    pixels: Iterable[Any],
    width: int,
    height: int,
    components_x: int,
    components_y: int
) -> CoefficientGrid:
    """DCT of a single-pass pixel iterable in row-major order.

    Consumes exactly width * height pixels without buffering the image;
    raises ValueError if the iterable runs out early.
    """
    validate_components(components_x, components_y)
    validate_size(width, height)
    rows = iter_linear_rows(pixels, width, height)
    values = _accumulate_rows(rows, width, height, components_x, components_y)
    logger.debug("Computed %dx%d coefficients for %dx%d pixel stream", components_x, components_y, width, height)
    return CoefficientGrid(components_x, components_y, values)
