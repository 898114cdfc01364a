"""Encode / decode parameters."""

import math
from dataclasses import dataclass

from models.errors import InvalidComponentCountError, InvalidPunchError
from utils.constants import MIN_COMPONENTS, MAX_COMPONENTS


@dataclass
class EncodeParams:
    """BlurHash encoding parameters."""
    
    components_x: int = 4
    components_y: int = 3
    measure_quality: bool = False
    
    def __post_init__(self):
        if not (MIN_COMPONENTS <= self.components_x <= MAX_COMPONENTS
                and MIN_COMPONENTS <= self.components_y <= MAX_COMPONENTS):
            raise InvalidComponentCountError(self.components_x, self.components_y)


@dataclass
class DecodeParams:
    """Placeholder rendering parameters."""
    
    width: int = 32
    height: int = 32
    punch: float = 1.0
    
    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Output size must be positive, got {self.width}x{self.height}")
        if not math.isfinite(self.punch) or self.punch < 0:
            raise InvalidPunchError(self.punch)
