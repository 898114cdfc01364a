"""sRGB <-> linear conversion and pixel format adapters."""

import math
from typing import Any, Callable, Iterable, Iterator, Protocol, Sequence, Tuple, TypeVar, runtime_checkable

import numpy as np

from models.linear_color import LinearColor
from utils.constants import (
    ALPHA_OPAQUE,
    SRGB_DECODE_THRESHOLD,
    SRGB_ENCODE_THRESHOLD,
    SRGB_GAMMA,
)

T = TypeVar('T')


@runtime_checkable
class AsLinear(Protocol):
    """Any pixel type that can convert itself to linear light."""

    def as_linear(self) -> LinearColor:
        ...


# Output capability: any callable LinearColor -> T
FromLinear = Callable[[LinearColor], T]


def srgb_to_linear(value: int) -> float:
    """8-bit sRGB channel to linear [0, 1]."""
    c = value / 255.0
    if c <= SRGB_DECODE_THRESHOLD:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** SRGB_GAMMA


def linear_to_srgb(value: float) -> int:
    """Linear channel to 8-bit sRGB, clamped."""
    v = min(max(value, 0.0), 1.0)
    if v <= SRGB_ENCODE_THRESHOLD:
        return int(v * 12.92 * 255 + 0.5)
    return int((1.055 * v ** (1 / SRGB_GAMMA) - 0.055) * 255 + 0.5)


def sign_pow(value: float, exp: float) -> float:
    """Sign-preserving power."""
    return math.copysign(abs(value) ** exp, value)


SRGB_TO_LINEAR_LUT = np.array([srgb_to_linear(v) for v in range(256)], dtype=np.float64)
SRGB_TO_LINEAR_LUT.setflags(write=False)


def srgb_to_linear_array(channels: np.ndarray) -> np.ndarray:
    """Vectorized sRGB -> linear for integer arrays in [0, 255]."""
    channels = np.asarray(channels)
    if channels.size and (channels.min() < 0 or channels.max() > 255):
        raise ValueError("8-bit channel values must be in [0, 255]")
    return SRGB_TO_LINEAR_LUT[channels.astype(np.intp)]


def linear_to_srgb_array(linear: np.ndarray) -> np.ndarray:
    """Vectorized linear -> sRGB uint8, clamped."""
    v = np.clip(np.asarray(linear, dtype=np.float64), 0.0, 1.0)
    encoded = np.where(
        v <= SRGB_ENCODE_THRESHOLD,
        v * 12.92,
        1.055 * np.power(v, 1 / SRGB_GAMMA) - 0.055,
    )
    return np.floor(encoded * 255 + 0.5).astype(np.uint8)


def unpack_argb(value: int) -> Tuple[int, int, int, int]:
    """0xAARRGGBB -> (a, r, g, b)."""
    value = int(value)
    return (value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def _check_channel(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"8-bit channel values must be integers, got {value!r}")
    if not 0 <= value <= 255:
        raise ValueError("8-bit channel values must be in [0, 255]")
    return int(value)


def rgb8_to_linear(pixel: Sequence[int]) -> LinearColor:
    r, g, b = (_check_channel(c) for c in pixel[:3])
    return LinearColor(srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))


def argb32_to_linear(value: int) -> LinearColor:
    _, r, g, b = unpack_argb(value)
    return LinearColor(srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))


def to_linear(pixel: Any) -> LinearColor:
    """Convert one pixel of any supported encoding to LinearColor.

    Supported: objects with `as_linear()`, packed 0xAARRGGBB ints, 8-bit
    RGB / RGBA sequences, and float numpy vectors (already linear).
    Alpha is ignored.
    """
    if isinstance(pixel, AsLinear):
        linear = pixel.as_linear()
        if isinstance(linear, LinearColor):
            return linear
        r, g, b = linear
        return LinearColor(float(r), float(g), float(b))

    if isinstance(pixel, (int, np.integer)) and not isinstance(pixel, bool):
        return argb32_to_linear(pixel)

    if isinstance(pixel, np.ndarray) and np.issubdtype(pixel.dtype, np.floating):
        if pixel.shape != (3,):
            raise TypeError(f"Linear pixel must have 3 channels, got shape {pixel.shape}")
        return LinearColor(float(pixel[0]), float(pixel[1]), float(pixel[2]))

    if isinstance(pixel, (tuple, list, bytes, bytearray, np.ndarray)) and len(pixel) in (3, 4):
        return rgb8_to_linear(pixel)

    raise TypeError(f"Unsupported pixel type: {type(pixel).__name__}")


def image_to_linear(pixels: Any, width: int, height: int) -> np.ndarray:
    """Random-access pixel buffer -> (height, width, 3) linear float array.

    numpy arrays are converted in one vectorized step:
      - uint8/integer (..., 3) or (..., 4): 8-bit sRGB, alpha ignored
      - integer with width*height elements: packed 0xAARRGGBB
      - float (..., 3): already linear
    Any other sequence must hold exactly width*height pixels.
    """
    total = width * height

    if isinstance(pixels, np.ndarray):
        if pixels.ndim >= 2 and pixels.shape[-1] in (3, 4) and pixels.size == total * pixels.shape[-1]:
            channels = pixels.reshape(height, width, pixels.shape[-1])[..., :3]
            if np.issubdtype(channels.dtype, np.floating):
                if pixels.shape[-1] != 3:
                    raise ValueError("Linear float buffers must have exactly 3 channels")
                return channels.astype(np.float64)
            return srgb_to_linear_array(channels)
        if np.issubdtype(pixels.dtype, np.integer) and pixels.size == total:
            packed = pixels.reshape(height, width).astype(np.uint32)
            channels = np.stack([(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF], axis=-1)
            return SRGB_TO_LINEAR_LUT[channels.astype(np.intp)]
        raise ValueError(
            f"Pixel array of shape {pixels.shape} does not describe a {width}x{height} image"
        )

    if len(pixels) != total:
        raise ValueError(f"Expected {total} pixels for a {width}x{height} image, got {len(pixels)}")
    linear = np.array([tuple(to_linear(p)) for p in pixels], dtype=np.float64)
    return linear.reshape(height, width, 3)


def iter_linear_rows(pixels: Iterable[Any], width: int, height: int) -> Iterator[Tuple[int, np.ndarray]]:
    """Single-pass producer: yields (y, row) with row shaped (width, 3).

    Consumes exactly width*height pixels; each yielded row is a fresh array.
    """
    iterator = iter(pixels)
    for y in range(height):
        row = np.empty((width, 3), dtype=np.float64)
        for x in range(width):
            try:
                pixel = next(iterator)
            except StopIteration:
                raise ValueError(
                    f"Pixel iterator ended after {y * width + x} of {width * height} pixels"
                ) from None
            row[x] = tuple(to_linear(pixel))
        yield y, row


# --- FromLinear mappers (input is already clamped to [0, 1]) ---

def to_rgb8(color: LinearColor) -> Tuple[int, int, int]:
    return linear_to_srgb(color.r), linear_to_srgb(color.g), linear_to_srgb(color.b)


def to_rgba8(color: LinearColor) -> Tuple[int, int, int, int]:
    return linear_to_srgb(color.r), linear_to_srgb(color.g), linear_to_srgb(color.b), ALPHA_OPAQUE


def to_argb32(color: LinearColor) -> int:
    return (
        (ALPHA_OPAQUE << 24)
        | (linear_to_srgb(color.r) << 16)
        | (linear_to_srgb(color.g) << 8)
        | linear_to_srgb(color.b)
    )


def to_linear_tuple(color: LinearColor) -> Tuple[float, float, float]:
    return color.r, color.g, color.b
