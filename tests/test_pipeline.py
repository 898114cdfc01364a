"""Tests for the encode/decode pipeline and CLI."""

import math

import numpy as np
import pytest
from models.blurhash_params import EncodeParams, DecodeParams
from models.errors import InvalidComponentCountError, InvalidPunchError
from engines.pipeline import encode_image, decode_to_image
from utils.metrics import compute_psnr_ssim, Timer
from utils.test_images import (
    generate_colored_checkerboard,
    generate_gradient,
    generate_solid,
    generate_sky_over_ground,
    generate_thin_stripes,
)


def test_encode_decode_shapes_and_timing():
    image = generate_gradient(40, 30)
    result = encode_image(image, EncodeParams(components_x=4, components_y=3))
    assert len(result.blurhash) == 4 + 2 * 12
    assert (result.width, result.height) == (40, 30)
    assert result.encode_time_ms >= 0.0
    assert result.psnr_rgb is None

    decoded = decode_to_image(result.blurhash, DecodeParams(width=20, height=10))
    assert decoded.image.shape == (10, 20, 3)
    assert decoded.image.dtype == np.uint8
    assert decoded.grid.dim == (4, 3)
    assert decoded.decode_time_ms >= 0.0


def test_rgba_input_ignores_alpha():
    rgb = generate_sky_over_ground(32)
    rgba = np.concatenate([rgb, np.zeros((32, 32, 1), dtype=np.uint8)], axis=-1)
    assert encode_image(rgba).blurhash == encode_image(rgb).blurhash


def test_more_components_track_image_better():
    """Smooth images are approximated better with more components."""
    image = generate_sky_over_ground(48)
    coarse = encode_image(image, EncodeParams(1, 1, measure_quality=True))
    fine = encode_image(image, EncodeParams(6, 6, measure_quality=True))
    assert fine.psnr_rgb > coarse.psnr_rgb


def test_solid_image_placeholder_matches():
    image = generate_solid(16, 16, (40, 90, 200))
    result = encode_image(image, EncodeParams(1, 1, measure_quality=True))
    assert math.isinf(result.psnr_rgb)
    assert result.ssim_rgb == pytest.approx(1.0)


def test_checkerboard_placeholder_is_near_average():
    image = generate_colored_checkerboard(64, cell=4)
    decoded = decode_to_image(encode_image(image).blurhash, DecodeParams(8, 8))
    # Fine detail is lost; the placeholder stays near the midtone
    assert np.all(decoded.image > 100)
    assert np.all(decoded.image < 200)


def test_metrics_small_image_has_nan_ssim():
    image = generate_solid(4, 4, (10, 20, 30))
    metrics = compute_psnr_ssim(image, image.copy())
    assert math.isnan(metrics['ssim_rgb'])


def test_timer_accumulates_per_stage():
    timer = Timer()
    assert timer.measure("encode", sum, [1, 2, 3]) == 6
    timer.measure("encode", sum, [])
    timer.measure("quality", max, 1, 2)
    assert set(timer.stages_ms) == {"encode", "quality"}
    assert timer.elapsed_ms("encode") >= 0.0
    assert timer.elapsed_ms("decode") == 0.0
    assert timer.total_ms == pytest.approx(timer.elapsed_ms("encode") + timer.elapsed_ms("quality"))


def test_timer_records_failed_stage():
    timer = Timer()
    with pytest.raises(ZeroDivisionError):
        timer.measure("decode", lambda: 1 / 0)
    assert "decode" in timer.stages_ms


def test_stripe_orientation():
    vertical = generate_thin_stripes(32, 24, stripe_width=2)
    horizontal = generate_thin_stripes(32, 24, stripe_width=2, vertical=False)
    assert vertical.shape == horizontal.shape == (24, 32, 3)
    assert np.all(vertical == vertical[:1])
    assert np.all(horizontal == horizontal[:, :1])
    square = generate_thin_stripes(16, stripe_width=3)
    assert np.array_equal(generate_thin_stripes(16, stripe_width=3, vertical=False), square.transpose(1, 0, 2))
    assert len(encode_image(vertical).blurhash) == 28


def test_params_validation():
    with pytest.raises(InvalidComponentCountError):
        EncodeParams(components_x=10)
    with pytest.raises(ValueError):
        DecodeParams(width=0)
    with pytest.raises(InvalidPunchError):
        DecodeParams(punch=-0.5)


def test_encode_rejects_grayscale():
    with pytest.raises(ValueError):
        encode_image(np.zeros((8, 8), dtype=np.uint8))


def test_cli_encode_and_decode(tmp_path, capsys):
    from main import main

    assert main(['--encode', '--synthetic', 'gradient', '4', '3']) == 0
    blurhash = capsys.readouterr().out.strip().splitlines()[0]
    assert len(blurhash) == 28

    output = tmp_path / "placeholder.png"
    assert main(['--decode', blurhash, '16', '12', str(output)]) == 0
    assert output.exists()

    from utils.image_io import load_image
    assert load_image(str(output)).shape == (12, 16, 3)


def test_cli_rejects_bad_hash(tmp_path):
    from main import main

    assert main(['--decode', 'not a hash', '8', '8', str(tmp_path / "x.png")]) == 2
