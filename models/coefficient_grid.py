"""DCT coefficient grid."""

from dataclasses import dataclass
from typing import Callable, List, TypeVar

import numpy as np

from models.errors import InvalidComponentCountError
from models.linear_color import LinearColor
from utils.constants import MIN_COMPONENTS, MAX_COMPONENTS

T = TypeVar('T')


@dataclass
class CoefficientGrid:
    """components_y x components_x grid of linear RGB coefficients.

    `values[j, i]` is the coefficient for horizontal frequency i and vertical
    frequency j; `values[0, 0]` is the DC (average color) term. Flattened
    order is row-major, index i + j * components_x.
    """

    components_x: int
    components_y: int
    values: np.ndarray

    def __post_init__(self):
        if not (MIN_COMPONENTS <= self.components_x <= MAX_COMPONENTS
                and MIN_COMPONENTS <= self.components_y <= MAX_COMPONENTS):
            raise InvalidComponentCountError(self.components_x, self.components_y)
        self.values = np.asarray(self.values, dtype=np.float64)
        expected = (self.components_y, self.components_x, 3)
        if self.values.shape != expected:
            raise ValueError(f"Coefficient array must have shape {expected}, got {self.values.shape}")

    @property
    def dim(self) -> tuple:
        return self.components_x, self.components_y

    @property
    def dc(self) -> LinearColor:
        r, g, b = self.values[0, 0]
        return LinearColor(float(r), float(g), float(b))

    @property
    def flat(self) -> np.ndarray:
        """(components_x * components_y, 3), DC first."""
        return self.values.reshape(-1, 3)

    @property
    def acs(self) -> np.ndarray:
        return self.flat[1:]

    @property
    def max_ac(self) -> float:
        """Largest absolute channel value among AC terms (0 if there are none)."""
        acs = self.acs
        return float(np.abs(acs).max()) if acs.size else 0.0

    def to_blurhash(self) -> str:
        from engines.serializer import encode_blurhash
        return encode_blurhash(self)

    def render(self, width: int, height: int, mapper: Callable[[LinearColor], T]) -> List[T]:
        from engines.reconstruction import render
        return render(self, width, height, mapper)

    def render_linear(self, width: int, height: int) -> np.ndarray:
        from engines.reconstruction import render_linear
        return render_linear(self, width, height)

    def render_rgb8(self, width: int, height: int) -> np.ndarray:
        from engines.reconstruction import render_rgb8
        return render_rgb8(self, width, height)

    def render_rgba8(self, width: int, height: int) -> np.ndarray:
        from engines.reconstruction import render_rgba8
        return render_rgba8(self, width, height)

    def render_argb32(self, width: int, height: int) -> np.ndarray:
        from engines.reconstruction import render_argb32
        return render_argb32(self, width, height)
