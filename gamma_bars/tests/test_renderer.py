"""Tests for rendering whole frames into a surface."""
from contextlib import contextmanager

import numpy as np
import pytest

from gamma_bars.models import GammaState, Layout, PixelBuffer, SurfaceLockError
from gamma_bars.renderer import FrameRenderer

SMALL = Layout(screen_width=512, screen_height=40, bar_pixel_width=2, band_height=10)


class PaddedSurface:
    """Surface whose rows carry extra padding bytes past the pixels."""

    def __init__(self, width, height, padding):
        self.size = (width, height)
        self.stride = width * 3 + padding
        self.data = bytearray(self.stride * height)

    @contextmanager
    def lock(self):
        yield memoryview(self.data)


class BrokenSurface:
    size = (512, 40)
    stride = 512 * 3

    @contextmanager
    def lock(self):
        raise SurfaceLockError("texture lost")
        yield


def test_render_frame_fills_buffer():
    renderer = FrameRenderer(SMALL)
    buffer = PixelBuffer(*SMALL.size)
    state = GammaState(gamma=1.0, show_marker=False)

    renderer.render_frame(buffer, state)

    pixels = np.frombuffer(bytes(buffer.data), dtype=np.uint8).reshape(40, 512, 3)
    np.testing.assert_array_equal(pixels, renderer.render_array(state))
    assert tuple(pixels[15, 511]) == (255, 0, 0)
    assert not state.needs_redraw


def test_rendering_is_idempotent():
    renderer = FrameRenderer(Layout())
    first = PixelBuffer(1024, 400)
    second = PixelBuffer(1024, 400)
    state = GammaState(gamma=1.65)

    renderer.render_frame(first, state)
    renderer.render_frame(second, state)
    once = bytes(first.data)
    renderer.render_frame(first, state)

    assert once == bytes(second.data)
    assert once == bytes(first.data)


def test_render_respects_stride():
    renderer = FrameRenderer(SMALL)
    surface = PaddedSurface(512, 40, padding=6)
    state = GammaState(gamma=0.8)

    renderer.render_frame(surface, state)

    rows = np.frombuffer(bytes(surface.data), dtype=np.uint8).reshape(40, surface.stride)
    np.testing.assert_array_equal(rows[:, : 512 * 3].reshape(40, 512, 3), renderer.render_array(state))
    assert not rows[:, 512 * 3 :].any()


def test_failed_lock_aborts_the_frame():
    renderer = FrameRenderer(SMALL)
    state = GammaState()

    with pytest.raises(SurfaceLockError):
        renderer.render_frame(BrokenSurface(), state)
    assert state.needs_redraw


def test_locked_buffer_is_left_untouched():
    renderer = FrameRenderer(SMALL)
    buffer = PixelBuffer(*SMALL.size)

    with buffer.lock():
        with pytest.raises(SurfaceLockError):
            renderer.render_frame(buffer, GammaState())

    assert not any(buffer.data)


def test_surface_size_must_match_layout():
    renderer = FrameRenderer(SMALL)
    with pytest.raises(ValueError):
        renderer.render_frame(PixelBuffer(1024, 400), GammaState())


def test_gamma_zero_renders_white_gray_band():
    frame = FrameRenderer(SMALL).render_array(GammaState(gamma=0.0, show_marker=False))
    assert (frame[:10] == 255).all()
    assert (frame[10:20, :, 0] == 255).all()
    assert not frame[10:20, :, 1:].any()


class ShortTailSurface(PaddedSurface):
    """Padded rows, except the last one ends right after its pixels."""

    def __init__(self, width, height, padding):
        super().__init__(width, height, padding)
        self.data = bytearray(self.stride * (height - 1) + width * 3)


def test_render_into_buffer_without_trailing_padding():
    renderer = FrameRenderer(SMALL)
    surface = ShortTailSurface(512, 40, padding=8)
    state = GammaState(gamma=1.2)

    renderer.render_frame(surface, state)

    frame = renderer.render_array(state)
    data = np.frombuffer(bytes(surface.data), dtype=np.uint8)
    last = 39 * surface.stride
    np.testing.assert_array_equal(data[last:], frame[39].reshape(-1))
    np.testing.assert_array_equal(data[: 512 * 3], frame[0].reshape(-1))
    assert not data[512 * 3 : surface.stride].any()


def test_stride_shorter_than_a_row_is_rejected():
    renderer = FrameRenderer(SMALL)
    surface = PaddedSurface(512, 40, padding=0)
    surface.stride = 512 * 3 - 3

    with pytest.raises(ValueError, match="stride"):
        renderer.render_frame(surface, GammaState())
    assert not any(surface.data)


def test_truncated_buffer_is_rejected():
    renderer = FrameRenderer(SMALL)
    surface = PaddedSurface(512, 40, padding=0)
    surface.data = bytearray(len(surface.data) - 1)

    with pytest.raises(ValueError, match="bytes"):
        renderer.render_frame(surface, GammaState())
    assert not any(surface.data)
