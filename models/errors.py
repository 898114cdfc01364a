"""Errors raised while encoding or parsing BlurHash strings."""

from typing import Optional


class BlurHashError(ValueError):
    """Base class for BlurHash format errors."""


class InvalidLengthError(BlurHashError):
    """Hash length does not match the length implied by its size flag."""

    def __init__(self, actual: int, expected: Optional[int] = None):
        self.actual = actual
        self.expected = expected
        if expected is None:
            message = f"BlurHash of length {actual} is too short"
        else:
            message = f"BlurHash length is {actual}, size flag implies {expected}"
        super().__init__(message)


class InvalidCharacterError(BlurHashError):
    """A character outside the base83 alphabet."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid base83 character {char!r} at position {position}")


class InvalidComponentCountError(BlurHashError):
    """Component counts must be between 1 and 9 inclusive."""

    def __init__(self, components_x: int, components_y: int):
        self.components_x = components_x
        self.components_y = components_y
        super().__init__(
            f"x and y component counts must be between 1 and 9 inclusive, "
            f"got {components_x}x{components_y}"
        )


class InvalidPunchError(BlurHashError):
    """Punch must be a finite, non-negative number."""

    def __init__(self, punch: float):
        self.punch = punch
        super().__init__(f"Punch must be a finite non-negative number, got {punch}")
