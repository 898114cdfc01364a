"""Shared utilities."""

from .constants import BASE83_ALPHABET, MAX_COMPONENTS
from .metrics import compute_psnr_ssim, Timer
from .test_images import (
    generate_solid,
    generate_colored_checkerboard,
    generate_thin_stripes,
    generate_gradient,
    generate_demo_image,
)
from .image_io import load_image, save_image

__all__ = [
    'BASE83_ALPHABET',
    'MAX_COMPONENTS',
    'compute_psnr_ssim',
    'Timer',
    'generate_solid',
    'generate_colored_checkerboard',
    'generate_thin_stripes',
    'generate_gradient',
    'generate_demo_image',
    'load_image',
    'save_image',
]
