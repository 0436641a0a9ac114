import logging
from enum import Enum

import numpy as np
import numpy.typing as npt

from gamma_bars.lookup import repeat_each
from gamma_bars.models import BAND_COUNT, COLOR_BYTES, GRADIENT_STEPS, Layout

logger = logging.getLogger(__name__)


class Band(Enum):
    """Horizontal bands from top to bottom, with the channels each one lights"""

    GRAY = (0, (1, 1, 1))
    RED = (1, (1, 0, 0))
    GREEN = (2, (0, 1, 0))
    BLUE = (3, (0, 0, 1))

    def __init__(self, index: int, mask: tuple[int, int, int]):
        self.index = index
        self.mask = mask

    def rows(self, band_height: int) -> range:
        start = self.index * band_height
        return range(start, start + band_height)

    def color(self, value):
        """Channel values for an intensity, or per-channel arrays for an array of intensities"""
        r, g, b = self.mask
        return value * r, value * g, value * b


def band_for_row(row: int, band_height: int) -> Band:
    if not 0 <= row < band_height * BAND_COUNT:
        raise IndexError(f"Row {row} is outside of {BAND_COUNT} bands of {band_height}px")
    return list(Band)[row // band_height]


def is_spacing_row(row: int, band_height: int, spacing_height: int) -> bool:
    return row % band_height < spacing_height


def gradient_row(lut: npt.NDArray[np.uint8], layout: Layout) -> npt.NDArray[np.uint8]:
    """Corrected values for one row, each gradient step `bar_pixel_width` columns wide"""
    steps = np.fromiter(
        repeat_each(range(GRADIENT_STEPS), layout.bar_pixel_width),
        dtype=np.intp,
        count=layout.screen_width,
    )
    return lut[steps]


def paint_bands(
    frame: npt.NDArray[np.uint8], lut: npt.NDArray[np.uint8], layout: Layout
) -> tuple[npt.NDArray[np.uint8], npt.NDArray[np.bool_]]:
    """Overwrite every pixel of a (height, width, 3) frame with the four gradient bands.

    Returns the corrected value behind each pixel and a mask of the pixels that
    carry the gradient (spacing rows are painted black and left out of the mask).
    """
    expected = (layout.screen_height, layout.screen_width, COLOR_BYTES)
    if frame.shape != expected:
        raise ValueError(f"Frame shape {frame.shape} does not match layout {expected}")

    row_values = gradient_row(lut, layout)
    values = np.broadcast_to(row_values, (layout.screen_height, layout.screen_width))
    written = np.ones((layout.screen_height, layout.screen_width), dtype=bool)

    band_pixels = {band: np.stack(band.color(row_values), axis=-1) for band in Band}

    for row in range(layout.screen_height):
        if is_spacing_row(row, layout.band_height, layout.spacing_height):
            frame[row] = 0
            written[row] = False
        else:
            frame[row] = band_pixels[band_for_row(row, layout.band_height)]

    logger.debug("Painted %d bands at %dx%d", BAND_COUNT, layout.screen_width, layout.screen_height)
    return values, written
