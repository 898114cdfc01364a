"""Linear-light RGB color."""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class LinearColor:
    """RGB in linear light. Values are unbounded until clamped for output."""

    r: float
    g: float
    b: float

    def as_linear(self) -> 'LinearColor':
        return self

    def clamped(self) -> 'LinearColor':
        return LinearColor(
            min(max(self.r, 0.0), 1.0),
            min(max(self.g, 0.0), 1.0),
            min(max(self.b, 0.0), 1.0),
        )

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b
