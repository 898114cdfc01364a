"""Image -> BlurHash -> placeholder pipeline."""

import logging
import numpy as np

from models.blurhash_params import EncodeParams, DecodeParams
from models.blurhash_result import EncodeResult, DecodeResult
from engines.dct_engine import compute_coefficients
from engines.serializer import encode_blurhash, decode_blurhash
from engines.reconstruction import render_rgb8
from utils.metrics import compute_psnr_ssim, Timer

logger = logging.getLogger(__name__)


def _encode(image_rgb: np.ndarray, params: EncodeParams):
    height, width = image_rgb.shape[:2]
    grid = compute_coefficients(image_rgb, width, height, params.components_x, params.components_y)
    return grid, encode_blurhash(grid)


def encode_image(image_rgb: np.ndarray, params: EncodeParams = None) -> EncodeResult:
    """Compute the BlurHash of an (H, W, 3|4) uint8 sRGB image."""
    params = params or EncodeParams()
    if image_rgb.ndim != 3 or image_rgb.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got shape {image_rgb.shape}")
    height, width = image_rgb.shape[:2]
    
    timer = Timer()
    grid, blurhash = timer.measure("encode", _encode, image_rgb, params)
    logger.info("Encoded %dx%d image as %s in %.2f ms", width, height, blurhash, timer.elapsed_ms("encode"))
    
    result = EncodeResult(
        blurhash=blurhash,
        grid=grid,
        width=width,
        height=height,
        encode_time_ms=timer.elapsed_ms("encode")
    )
    
    # === METRICS ===
    if params.measure_quality:
        # Compare what a viewer would see: the decoded hash, not the raw grid
        placeholder = render_rgb8(decode_blurhash(blurhash), width, height)
        metrics = timer.measure(
            "quality", compute_psnr_ssim, np.ascontiguousarray(image_rgb[..., :3]), placeholder
        )
        logger.debug("Quality metrics computed in %.2f ms", timer.elapsed_ms("quality"))
        result.psnr_rgb = metrics['psnr_rgb']
        result.ssim_rgb = metrics['ssim_rgb']
    
    return result


def _decode(blurhash: str, params: DecodeParams):
    grid = decode_blurhash(blurhash, params.punch)
    return grid, render_rgb8(grid, params.width, params.height)


def decode_to_image(blurhash: str, params: DecodeParams = None) -> DecodeResult:
    """Render a BlurHash to an (H, W, 3) uint8 sRGB placeholder."""
    params = params or DecodeParams()
    timer = Timer()
    grid, image = timer.measure("decode", _decode, blurhash, params)
    logger.info(
        "Decoded %s to %dx%d in %.2f ms", blurhash, params.width, params.height, timer.elapsed_ms("decode")
    )
    return DecodeResult(blurhash=blurhash, grid=grid, image=image, decode_time_ms=timer.elapsed_ms("decode"))
