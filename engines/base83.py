"""Base83 integer codec."""

from models.errors import InvalidCharacterError
from utils.constants import BASE83_ALPHABET, BASE83_VALUES, BASE83_RADIX


def encode(value: int, length: int) -> str:
    """Encode a non-negative integer as exactly `length` base83 digits."""
    if length < 1:
        raise ValueError(f"Length must be positive, got {length}")
    value = int(value)
    if value < 0 or value >= BASE83_RADIX ** length:
        raise ValueError(f"Value {value} does not fit in {length} base83 digits")

    digits = []
    for _ in range(length):
        value, digit = divmod(value, BASE83_RADIX)
        digits.append(BASE83_ALPHABET[digit])
    return ''.join(reversed(digits))


def encode_minimal(value: int) -> str:
    """Encode a non-negative integer with as few base83 digits as it needs."""
    value = int(value)
    if value < 0:
        raise ValueError(f"Value must be non-negative, got {value}")
    length = 1
    while value >= BASE83_RADIX ** length:
        length += 1
    return encode(value, length)


def decode(chars: str, offset: int = 0) -> int:
    """Decode base83 digits, most significant first.

    `offset` is only used to report the position of an invalid character
    relative to the enclosing string.
    """
    value = 0
    for position, char in enumerate(chars):
        digit = BASE83_VALUES.get(char)
        if digit is None:
            raise InvalidCharacterError(char, offset + position)
        value = value * BASE83_RADIX + digit
    return value


def validate(chars: str) -> None:
    """Raise InvalidCharacterError on the first character outside the alphabet."""
    for position, char in enumerate(chars):
        if char not in BASE83_VALUES:
            raise InvalidCharacterError(char, position)


def is_valid(chars: str) -> bool:
    return all(char in BASE83_VALUES for char in chars)
