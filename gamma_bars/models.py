from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

COLOR_BYTES = 3
GRADIENT_STEPS = 256
BAND_COUNT = 4


class SurfaceLockError(RuntimeError):
    """Raised when a pixel surface cannot hand out its buffer for writing"""


class InputEvent(str, Enum):
    QUIT = "quit"
    ESCAPE = "escape"
    GAMMA_UP = "gamma_up"
    GAMMA_DOWN = "gamma_down"
    TOGGLE_MARKER = "toggle_marker"
    TOGGLE_FPS = "toggle_fps"
    OTHER = "other"


class Layout(BaseModel):
    """Screen geometry of the four gradient bands.

    The gradient must tile a row exactly and the bands must partition the
    height exactly, otherwise validation fails before anything is drawn.
    """

    model_config = ConfigDict(frozen=True)

    screen_width: int = Field(1024, gt=0)
    screen_height: int = Field(400, gt=0)
    bar_pixel_width: int = Field(4, ge=1)
    band_height: int = Field(100, ge=1)
    spacing_height: int = Field(0, ge=0)

    @model_validator(mode="after")
    def check_tiling(self) -> "Layout":
        if self.bar_pixel_width * GRADIENT_STEPS != self.screen_width:
            raise ValueError(
                f"Invalid resolution: bar width {self.bar_pixel_width} x {GRADIENT_STEPS} "
                f"does not tile screen width {self.screen_width}"
            )
        if self.band_height * BAND_COUNT != self.screen_height:
            raise ValueError(
                f"Invalid resolution: band height {self.band_height} x {BAND_COUNT} "
                f"does not match screen height {self.screen_height}"
            )
        if self.spacing_height >= self.band_height:
            raise ValueError(f"Spacing height {self.spacing_height} leaves no room in a {self.band_height}px band")
        return self

    @property
    def size(self) -> tuple[int, int]:
        return self.screen_width, self.screen_height

    @property
    def marked_height(self) -> int:
        return self.band_height * BAND_COUNT


class GammaState(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    gamma: float = Field(1.0, ge=0.0)
    step: float = Field(0.05, gt=0.0)
    show_marker: bool = True
    needs_redraw: bool = True


class PixelBuffer:
    """Caller-owned RGB24 buffer, row-major, 3 bytes per pixel"""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.data = bytearray(width * height * COLOR_BYTES)
        self._locked = False

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def stride(self) -> int:
        return self.width * COLOR_BYTES

    @contextmanager
    def lock(self) -> Iterator[memoryview]:
        """Grant exclusive write access to the raw bytes until the block exits"""
        if self._locked:
            raise SurfaceLockError("Pixel buffer is already locked")
        self._locked = True
        try:
            yield memoryview(self.data)
        finally:
            self._locked = False
