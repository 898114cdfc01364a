"""BlurHash engines - pure computation, no I/O."""

from .color_space import (
    AsLinear,
    srgb_to_linear,
    linear_to_srgb,
    sign_pow,
    to_linear,
    to_rgb8,
    to_rgba8,
    to_argb32,
    to_linear_tuple,
)
from .dct_engine import compute_coefficients, compute_coefficients_iter
from .serializer import encode_blurhash, decode_blurhash, components
from .reconstruction import render, render_linear, render_rgb8, render_rgba8, render_argb32
from .pipeline import encode_image, decode_to_image

__all__ = [
    'AsLinear',
    'srgb_to_linear',
    'linear_to_srgb',
    'sign_pow',
    'to_linear',
    'to_rgb8',
    'to_rgba8',
    'to_argb32',
    'to_linear_tuple',
    'compute_coefficients',
    'compute_coefficients_iter',
    'encode_blurhash',
    'decode_blurhash',
    'components',
    'render',
    'render_linear',
    'render_rgb8',
    'render_rgba8',
    'render_argb32',
    'encode_image',
    'decode_to_image',
]
