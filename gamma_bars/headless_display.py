import logging
import time
from pathlib import Path

import PIL.Image
from pydantic_settings import BaseSettings

from gamma_bars.common import log_errors
from gamma_bars.models import GammaState, Layout, PixelBuffer
from gamma_bars.performance import PerformanceMonitor
from gamma_bars.renderer import FrameRenderer

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    output_dir: str = "gamma_frames"
    screen_width: int = 1024
    screen_height: int = 400
    bar_pixel_width: int = 4
    band_height: int = 100
    spacing_height: int = 0
    gammas: list[float] = [0.5, 1.0, 1.8, 2.2]
    marker: bool = True

    def layout(self) -> Layout:
        return Layout(
            screen_width=self.screen_width,
            screen_height=self.screen_height,
            bar_pixel_width=self.bar_pixel_width,
            band_height=self.band_height,
            spacing_height=self.spacing_height,
        )


class HeadlessDisplay:
    """Renders frames straight to PNG files instead of a window"""

    def __init__(self, layout: Layout, output_dir: Path):
        self.layout = layout
        self.output_dir = output_dir
        self.buffer = PixelBuffer(layout.screen_width, layout.screen_height)
        self.renderer = FrameRenderer(layout)
        self.performance_monitor = PerformanceMonitor()

    def initialize(self):
        """Initialize output directory"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Headless display initialized - saving to: {self.output_dir}")

    @log_errors
    def save_frame(self, state: GammaState) -> Path:
        started = time.perf_counter()
        self.renderer.render_frame(self.buffer, state)
        render_time = time.perf_counter() - started
        self.performance_monitor.update(render_time, time.perf_counter())

        image = PIL.Image.frombytes("RGB", self.buffer.size, bytes(self.buffer.data))
        marker = "_marker" if state.show_marker else ""
        filepath = self.output_dir / f"gamma_{state.gamma:.2f}{marker}.png"
        image.save(filepath)

        logger.info(f"Saved frame: {filepath.name} (render: {render_time * 1000:.1f}ms)")
        return filepath

    def cleanup(self):
        """Show summary"""
        stats = self.performance_monitor.get_stats()
        logger.info("Headless display finished:")
        logger.info(f"  Total frames: {stats['frame_count']}")
        if "avg_render_time" in stats:
            logger.info(f"  Average render time: {stats['avg_render_time'] * 1000:.1f}ms")
        logger.info(f"  Output directory: {self.output_dir}")


def export_frames(config: Config) -> list[Path]:
    display = HeadlessDisplay(config.layout(), Path(config.output_dir))
    display.initialize()
    try:
        return [display.save_frame(GammaState(gamma=gamma, show_marker=config.marker)) for gamma in config.gammas]
    finally:
        display.cleanup()


def main():
    logging.basicConfig(level=logging.INFO)
    config = Config()
    logger.info(f"Rendering gammas {config.gammas} to: {config.output_dir}")
    export_frames(config)


if __name__ == "__main__":
    main()
