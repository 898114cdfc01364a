"""BlurHash string serialization.

Layout (base83 digits):
    [0]        size flag, (components_x - 1) + (components_y - 1) * 9
    [1]        quantized maximum AC value
    [2:6]      DC color, packed 24-bit sRGB
    [6 + 2k:]  AC coefficient k, row-major, two digits each
"""

import logging
import math
from typing import Sequence, Tuple

import numpy as np

from engines import base83
from engines.color_space import linear_to_srgb, sign_pow, srgb_to_linear
from models.coefficient_grid import CoefficientGrid
from models.errors import InvalidComponentCountError, InvalidLengthError, InvalidPunchError
from utils.constants import (
    AC_DIGITS,
    AC_HALF_LEVEL,
    AC_LEVELS,
    AC_MAX_QUANT,
    AC_SCALE,
    DC_DIGITS,
    HEADER_LENGTH,
    MAX_AC_DIGITS,
    MAX_COMPONENTS,
    SIZE_FLAG_DIGITS,
)

logger = logging.getLogger(__name__)


def expected_length(components_x: int, components_y: int) -> int:
    return HEADER_LENGTH + AC_DIGITS * (components_x * components_y - 1)


def size_flag(components_x: int, components_y: int) -> int:
    return (components_x - 1) + (components_y - 1) * MAX_COMPONENTS


def split_size_flag(flag: int) -> Tuple[int, int]:
    """Size flag -> (components_x, components_y)."""
    return flag % MAX_COMPONENTS + 1, flag // MAX_COMPONENTS + 1


def quantize_max_ac(max_value: float) -> int:
    if max_value <= 0:
        return 0
    return int(max(0, min(AC_MAX_QUANT, math.floor(max_value * AC_SCALE - 0.5))))


def dequantize_max_ac(quantized: int) -> float:
    return (quantized + 1) / AC_SCALE


def encode_dc(color: Sequence[float]) -> int:
    r, g, b = color
    return (linear_to_srgb(r) << 16) | (linear_to_srgb(g) << 8) | linear_to_srgb(b)


def decode_dc(value: int) -> Tuple[float, float, float]:
    return (
        srgb_to_linear((value >> 16) & 0xFF),
        srgb_to_linear((value >> 8) & 0xFF),
        srgb_to_linear(value & 0xFF),
    )


def _quantize_channel(value: float, max_value: float) -> int:
    level = math.floor(sign_pow(value / max_value, 0.5) * AC_HALF_LEVEL + (AC_HALF_LEVEL + 0.5))
    return int(max(0, min(AC_LEVELS - 1, level)))


def encode_ac(color: Sequence[float], max_value: float) -> int:
    r, g, b = color
    return (
        _quantize_channel(r, max_value) * AC_LEVELS * AC_LEVELS
        + _quantize_channel(g, max_value) * AC_LEVELS
        + _quantize_channel(b, max_value)
    )


def _dequantize_channel(level: int, max_value: float) -> float:
    return sign_pow((level - AC_HALF_LEVEL) / AC_HALF_LEVEL, 2.0) * max_value


def decode_ac(value: int, max_value: float) -> Tuple[float, float, float]:
    return (
        _dequantize_channel(value // (AC_LEVELS * AC_LEVELS), max_value),
        _dequantize_channel((value // AC_LEVELS) % AC_LEVELS, max_value),
        _dequantize_channel(value % AC_LEVELS, max_value),
    )


def encode_blurhash(grid: CoefficientGrid) -> str:
    """Serialize a coefficient grid to its BlurHash string."""
    parts = [base83.encode(size_flag(grid.components_x, grid.components_y), SIZE_FLAG_DIGITS)]

    quantized_max = quantize_max_ac(grid.max_ac)
    max_value = dequantize_max_ac(quantized_max)
    parts.append(base83.encode(quantized_max, MAX_AC_DIGITS))

    parts.append(base83.encode(encode_dc(grid.flat[0]), DC_DIGITS))
    for ac in grid.acs:
        parts.append(base83.encode(encode_ac(ac, max_value), AC_DIGITS))

    return ''.join(parts)


def components(blurhash: str) -> Tuple[int, int]:
    """Read (components_x, components_y) from the size flag only."""
    if not blurhash:
        raise InvalidLengthError(0)
    return split_size_flag(base83.decode(blurhash[0]))


def decode_blurhash(blurhash: str, punch: float = 1.0) -> CoefficientGrid:
    """Parse a BlurHash string into a coefficient grid.

    `punch` scales the AC magnitude: > 1 exaggerates contrast, < 1 softens it.
    Parsing is all-or-nothing; any format error raises a BlurHashError.
    """
    base83.validate(blurhash)
    components_x, components_y = components(blurhash)
    expected = expected_length(components_x, components_y)
    if len(blurhash) != expected:
        raise InvalidLengthError(len(blurhash), expected)
    if components_y > MAX_COMPONENTS:
        raise InvalidComponentCountError(components_x, components_y)

    punch = float(punch)
    if not math.isfinite(punch) or punch < 0:
        raise InvalidPunchError(punch)

    max_value = dequantize_max_ac(base83.decode(blurhash[1])) * punch
    values = np.empty((components_x * components_y, 3), dtype=np.float64)
    values[0] = decode_dc(base83.decode(blurhash[2:HEADER_LENGTH], offset=2))
    for k in range(1, components_x * components_y):
        start = HEADER_LENGTH + (k - 1) * AC_DIGITS
        values[k] = decode_ac(base83.decode(blurhash[start:start + AC_DIGITS], offset=start), max_value)

    logger.debug("Decoded %dx%d BlurHash %s", components_x, components_y, blurhash)
    return CoefficientGrid(components_x, components_y, values.reshape(components_y, components_x, 3))
