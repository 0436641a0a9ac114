from typing import Iterable, Iterator, TypeVar

import numpy as np
import numpy.typing as npt

from gamma_bars.models import GRADIENT_STEPS

T = TypeVar("T")


def build_lookup_table(gamma: float) -> npt.NDArray[np.uint8]:
    """Map every 8-bit intensity through out = 255 * (in / 255) ** gamma.

    numpy defines 0 ** 0 as 1, so gamma 0 turns the whole table white.
    The result is read-only; it is rebuilt for every frame.
    """
    if gamma < 0:
        raise ValueError(f"gamma must be non-negative, got {gamma}")

    intensities = np.arange(GRADIENT_STEPS, dtype=np.float64) / 255.0
    corrected = np.rint(255.0 * np.power(intensities, gamma))
    table = np.clip(corrected, 0, 255).astype(np.uint8)
    table.flags.writeable = False
    return table


def repeat_each(values: Iterable[T], width: int) -> Iterator[T]:
    """Yield every value `width` times in a row before moving to the next one"""
    if width < 1:
        raise ValueError(f"repeat width must be at least 1, got {width}")
    for value in values:
        for _ in range(width):
            yield value
