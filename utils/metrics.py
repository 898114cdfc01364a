"""Metrics: placeholder fidelity and runtime."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity
from typing import Dict

# Smallest side accepted by structural_similarity's default 7x7 window
SSIM_MIN_SIDE = 7


def compute_psnr_ssim(original_rgb: np.ndarray, reconstructed_rgb: np.ndarray) -> Dict[str, float]:
    """Compute PSNR and SSIM between two uint8 RGB images of equal shape.
    
    SSIM is NaN for images smaller than the SSIM window. PSNR is inf for
    identical images.
    """
    if original_rgb.shape != reconstructed_rgb.shape:
        raise ValueError(f"Shape mismatch: {original_rgb.shape} vs {reconstructed_rgb.shape}")
    
    psnr_rgb = peak_signal_noise_ratio(original_rgb, reconstructed_rgb, data_range=255)
    
    if min(original_rgb.shape[:2]) >= SSIM_MIN_SIDE:
        ssim_rgb = structural_similarity(
            original_rgb, reconstructed_rgb, channel_axis=2, data_range=255
        )
    else:
        ssim_rgb = float('nan')
    
    return {
        'psnr_rgb': float(psnr_rgb),
        'ssim_rgb': float(ssim_rgb),
    }


class Timer:
    """Wall-clock timings per pipeline stage, in milliseconds."""
    
    def __init__(self):
        self.stages_ms: Dict[str, float] = {}
    
    def measure(self, stage: str, func, *args, **kwargs):
        """Run func and record its duration under `stage`; repeated stages accumulate."""
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = (time.perf_counter() - start) * 1000.0
            self.stages_ms[stage] = self.stages_ms.get(stage, 0.0) + elapsed
    
    def elapsed_ms(self, stage: str) -> float:
        return self.stages_ms.get(stage, 0.0)
    
    @property
    def total_ms(self) -> float:
        return sum(self.stages_ms.values())

