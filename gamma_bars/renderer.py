import logging
from contextlib import AbstractContextManager
from typing import Protocol

import numpy as np
import numpy.typing as npt

from gamma_bars.bands import paint_bands
from gamma_bars.common import log_errors
from gamma_bars.lookup import build_lookup_table
from gamma_bars.marker import apply_marker
from gamma_bars.models import COLOR_BYTES, GammaState, Layout

logger = logging.getLogger(__name__)


class Surface(Protocol):
    size: tuple[int, int]
    stride: int

    def lock(self) -> AbstractContextManager[memoryview]: ...


class FrameRenderer:
    def __init__(self, layout: Layout):
        self.layout = layout

    def render_array(self, state: GammaState) -> npt.NDArray[np.uint8]:
        """Render a complete (height, width, 3) RGB frame for the given state"""
        lut = build_lookup_table(state.gamma)
        frame = np.empty((self.layout.screen_height, self.layout.screen_width, COLOR_BYTES), dtype=np.uint8)
        values, written = paint_bands(frame, lut, self.layout)
        if state.show_marker:
            apply_marker(frame, values, written, self.layout.marked_height)
        return frame

    @log_errors
    def render_frame(self, surface: Surface, state: GammaState) -> None:
        """Repaint the whole surface.

        The frame is finished before the surface is locked, so a failed lock
        leaves the previous contents untouched instead of half a frame.
        """
        width, height = self.layout.size
        if tuple(surface.size) != (width, height):
            raise ValueError(f"Surface size {surface.size} does not match layout {(width, height)}")

        line_size = width * COLOR_BYTES
        if surface.stride < line_size:
            raise ValueError(f"Surface stride {surface.stride} is shorter than a {line_size} byte row")

        lines = self.render_array(state).reshape(height, line_size)
        # the last row may stop right after its pixels, without padding
        required = surface.stride * (height - 1) + line_size

        with surface.lock() as buffer:
            pixels = np.frombuffer(buffer, dtype=np.uint8)
            if pixels.size < required:
                raise ValueError(f"Locked buffer holds {pixels.size} bytes, {required} needed")
            for row, line in enumerate(lines):
                start = row * surface.stride
                pixels[start : start + line_size] = line

        state.needs_redraw = False
        logger.debug(f"Rendered frame at gamma {state.gamma:.2f}")
