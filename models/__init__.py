"""Data models for coefficients, parameters and results."""

from .linear_color import LinearColor
from .coefficient_grid import CoefficientGrid
from .blurhash_params import EncodeParams, DecodeParams
from .blurhash_result import EncodeResult, DecodeResult
from .errors import (
    BlurHashError,
    InvalidLengthError,
    InvalidCharacterError,
    InvalidComponentCountError,
    InvalidPunchError,
)

__all__ = [
    'LinearColor',
    'CoefficientGrid',
    'EncodeParams',
    'DecodeParams',
    'EncodeResult',
    'DecodeResult',
    'BlurHashError',
    'InvalidLengthError',
    'InvalidCharacterError',
    'InvalidComponentCountError',
    'InvalidPunchError',
]
