"""Encode / decode results."""

from dataclasses import dataclass
from typing import Optional
import numpy as np

from models.coefficient_grid import CoefficientGrid


@dataclass
class EncodeResult:
    """Results from encoding an image."""
    
    blurhash: str
    grid: CoefficientGrid
    width: int
    height: int
    
    # Runtime
    encode_time_ms: float
    
    # Placeholder fidelity, rendered at source size (optional)
    psnr_rgb: Optional[float] = None
    ssim_rgb: Optional[float] = None


@dataclass
class DecodeResult:
    """Results from decoding a BlurHash to an image."""
    
    blurhash: str
    grid: CoefficientGrid
    image: np.ndarray
    
    decode_time_ms: float
