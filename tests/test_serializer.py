"""Tests for BlurHash string encoding and parsing."""

import numpy as np
import pytest
from engines.dct_engine import compute_coefficients
from engines.serializer import (
    encode_blurhash,
    decode_blurhash,
    components,
    expected_length,
    quantize_max_ac,
    encode_dc,
    decode_dc,
)
from models.coefficient_grid import CoefficientGrid
from models.errors import (
    InvalidLengthError,
    InvalidCharacterError,
    InvalidComponentCountError,
    InvalidPunchError,
)
from utils.constants import BASE83_ALPHABET
from utils.test_images import generate_gradient, generate_solid

REFERENCE_HASH = "LlMF%n00%#MwS|WCWEM{R*bbWBbH"


def test_reference_vector_4x4_pattern():
    image = np.array([
        [255, 0, 0], [0, 0, 0], [255, 255, 255], [0, 0, 0],
        [0, 0, 0], [0, 0, 0], [255, 255, 255], [0, 0, 0],
        [255, 255, 255], [255, 255, 255], [0, 255, 0], [255, 255, 255],
        [0, 0, 0], [0, 0, 0], [255, 255, 255], [0, 0, 0],
    ], dtype=np.uint8)
    assert compute_coefficients(image, 4, 4, 3, 3).to_blurhash() == "KzKUZY=|HZ=|$5e9HZe9IS"


def test_reference_vector_gradient():
    image = generate_gradient(8, 6)
    assert compute_coefficients(image, 8, 6, 4, 3).to_blurhash() == "LiF$Ik3Ba|xuzONLfQnTeqf7fQf7"


def test_black_image():
    image = generate_solid(4, 4, (0, 0, 0))
    blurhash = encode_blurhash(compute_coefficients(image, 4, 4, 4, 4))
    assert blurhash == "U00000" + "fQ" * 15


def test_dc_only_hash_has_zero_max_digit():
    image = generate_solid(4, 4, (255, 127, 55))
    assert encode_blurhash(compute_coefficients(image, 4, 4, 1, 1)) == "00TNl]"


def test_single_red_pixel_hash():
    grid = compute_coefficients([0xFFFF0000], 1, 1, 4, 3)
    assert grid.to_blurhash() == "L0TI:j" + "fQ" * 11


def test_field_layout():
    blurhash = compute_coefficients(generate_gradient(16, 16), 16, 16, 5, 2).to_blurhash()
    assert blurhash[0] == BASE83_ALPHABET[(5 - 1) + (2 - 1) * 9]
    assert len(blurhash) == expected_length(5, 2) == 4 + 2 * 10


def test_decode_reference_hash():
    grid = decode_blurhash(REFERENCE_HASH, 1.0)
    assert grid.dim == (4, 3)
    assert components(REFERENCE_HASH) == (4, 3)
    assert encode_dc(grid.flat[0]) == 0xC19A8A
    # Re-encoding a decoded hash is stable
    assert grid.to_blurhash() == REFERENCE_HASH


def test_dc_packing_round_trip():
    value = (17 << 16) | (128 << 8) | 250
    assert encode_dc(decode_dc(value)) == value


def test_quantize_max_ac():
    assert quantize_max_ac(0.0) == 0
    assert quantize_max_ac(1e-9) == 0
    assert quantize_max_ac(0.5) == 82
    assert quantize_max_ac(10.0) == 82
    assert quantize_max_ac(0.1) == 16


@pytest.mark.parametrize("cx", range(1, 10))
@pytest.mark.parametrize("cy", range(1, 10))
def test_round_trip_all_component_counts(cx, cy):
    """Decoded coefficients stay within one quantization step of the original."""
    rng = np.random.default_rng(cx * 10 + cy)
    values = rng.uniform(-0.3, 0.3, (cy, cx, 3))
    values[0, 0] = rng.uniform(0.0, 1.0, 3)
    if cx * cy > 1:
        # Pin the largest AC channel so the max digit survives a re-encode
        values.reshape(-1, 3)[1, 0] = 0.3
    grid = CoefficientGrid(cx, cy, values)

    blurhash = grid.to_blurhash()
    assert len(blurhash) == 4 + 2 * cx * cy

    decoded = decode_blurhash(blurhash, 1.0)
    assert decoded.dim == (cx, cy)
    assert encode_dc(decoded.flat[0]) == encode_dc(grid.flat[0])
    if cx * cy > 1:
        max_value = (quantize_max_ac(grid.max_ac) + 1) / 166
        # Widest step sits at the ends of the sign_pow(x, 2) curve: (1 - (8/9)^2) of the range
        step = max_value * (1 - (8 / 9) ** 2)
        assert np.all(np.abs(decoded.acs - grid.acs) <= step + 1e-9)
        assert decoded.to_blurhash() == blurhash


def test_punch_scales_ac_terms():
    base = decode_blurhash(REFERENCE_HASH, 1.0)
    punched = decode_blurhash(REFERENCE_HASH, 2.0)
    flat = decode_blurhash(REFERENCE_HASH, 0.0)
    assert np.allclose(punched.acs, base.acs * 2)
    assert np.allclose(punched.flat[0], base.flat[0])
    assert np.all(flat.acs == 0)


@pytest.mark.parametrize("punch", [-1.0, float('nan'), float('inf')])
def test_invalid_punch(punch):
    with pytest.raises(InvalidPunchError):
        decode_blurhash(REFERENCE_HASH, punch)


@pytest.mark.parametrize("blurhash", [
    "",
    "L",
    REFERENCE_HASH[:-1],
    REFERENCE_HASH + "0",
    REFERENCE_HASH[:-2],
    "00TNl]00",
    "0" + REFERENCE_HASH[1:],
])
def test_invalid_length(blurhash):
    with pytest.raises(InvalidLengthError):
        decode_blurhash(blurhash)


@pytest.mark.parametrize("position", [0, 1, 2, 5, 6, 27])
@pytest.mark.parametrize("char", [" ", "\"", "/", "é", "\x00"])
def test_invalid_character_any_position(position, char):
    blurhash = REFERENCE_HASH[:position] + char + REFERENCE_HASH[position + 1:]
    with pytest.raises(InvalidCharacterError) as excinfo:
        decode_blurhash(blurhash)
    assert excinfo.value.position == position


def test_size_flag_beyond_nine_rows():
    # Digit 81 implies 1x10 components; the length matches but the mode is unsupported
    blurhash = BASE83_ALPHABET[81] + "0" + "0000" + "fQ" * 9
    assert len(blurhash) == expected_length(1, 10)
    with pytest.raises(InvalidComponentCountError):
        decode_blurhash(blurhash)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        decode_blurhash("nope")
