import logging
import os
import time

import pygame
from pydantic_settings import BaseSettings

from gamma_bars.controller import GammaController
from gamma_bars.models import GammaState, InputEvent, Layout, PixelBuffer
from gamma_bars.performance import PerformanceMonitor
from gamma_bars.renderer import FrameRenderer

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    window_name: str = "Gamma Correction Demo"
    screen_width: int = 1024
    screen_height: int = 400
    bar_pixel_width: int = 4
    band_height: int = 100
    spacing_height: int = 0
    gamma: float = 1.0
    gamma_step: float = 0.05
    marker: bool = True
    show_fps: bool = False
    fps: int = 60

    def layout(self) -> Layout:
        return Layout(
            screen_width=self.screen_width,
            screen_height=self.screen_height,
            bar_pixel_width=self.bar_pixel_width,
            band_height=self.band_height,
            spacing_height=self.spacing_height,
        )

    def initial_state(self) -> GammaState:
        return GammaState(gamma=self.gamma, step=self.gamma_step, show_marker=self.marker)


config = Config()

KEY_EVENTS = {
    pygame.K_ESCAPE: InputEvent.ESCAPE,
    pygame.K_UP: InputEvent.GAMMA_UP,
    pygame.K_DOWN: InputEvent.GAMMA_DOWN,
    pygame.K_m: InputEvent.TOGGLE_MARKER,
    pygame.K_f: InputEvent.TOGGLE_FPS,
}


def translate_event(event: pygame.event.Event) -> InputEvent:
    if event.type == pygame.QUIT:
        return InputEvent.QUIT
    if event.type == pygame.KEYDOWN:
        return KEY_EVENTS.get(event.key, InputEvent.OTHER)
    return InputEvent.OTHER


class PygameDisplay:
    def __init__(
        self,
        layout: Layout,
        state: GammaState,
        window_name: str = "Gamma Correction Demo",
        show_fps: bool = False,
        fps: int = 60,
    ):
        self.layout = layout
        self.state = state
        self.window_name = window_name
        self.show_fps = show_fps
        self.fps = fps
        self.buffer = PixelBuffer(layout.screen_width, layout.screen_height)
        self.renderer = FrameRenderer(layout)
        self.controller = GammaController()
        self.performance_monitor = PerformanceMonitor()
        self.screen = None
        self.frame_surface = None
        self.clock = None
        self.font = None
        self.running = False
        self.last_render_time = 0.0

    def initialize(self):
        """Initialize pygame display"""
        pygame.init()

        if "SDL_VIDEODRIVER" not in os.environ:
            for driver in ["x11", "wayland", "fbcon", "dummy"]:
                os.environ["SDL_VIDEODRIVER"] = driver
                try:
                    pygame.display.init()
                    break
                except pygame.error:
                    logger.debug(f"SDL video driver {driver} unavailable")
                    continue

        self.screen = pygame.display.set_mode(self.layout.size)
        pygame.display.set_caption(self.window_name)
        self.clock = pygame.time.Clock()

        try:
            self.font = pygame.font.Font(None, 28)
        except pygame.error:
            self.font = pygame.font.SysFont("monospace", 20)

        self.running = True
        logger.info(f"Pygame display initialized: {self.layout.screen_width}x{self.layout.screen_height}")

    def poll_events(self) -> list[InputEvent]:
        events = [translate_event(event) for event in pygame.event.get()]
        for event in events:
            if event == InputEvent.TOGGLE_FPS:
                self.show_fps = not self.show_fps
                logger.info(f"FPS display: {'ON' if self.show_fps else 'OFF'}")
        return events

    def step(self) -> bool:
        """Run one tick of the frame loop; returns False once the loop should stop"""
        if not self.running:
            return False

        if self.controller.handle_input(self.state, self.poll_events()):
            self.running = False
            return False

        if self.state.needs_redraw or self.frame_surface is None:
            started = time.perf_counter()
            self.renderer.render_frame(self.buffer, self.state)
            self.last_render_time = time.perf_counter() - started
            self.frame_surface = pygame.image.frombuffer(self.buffer.data, self.buffer.size, "RGB")

        self.screen.blit(self.frame_surface, (0, 0))
        if self.show_fps and self.font:
            self._draw_performance_overlay()

        pygame.display.flip()
        self.clock.tick(self.fps)
        self.performance_monitor.update(self.last_render_time, time.perf_counter())
        return True

    def run(self):
        while self.step():
            pass

    def _draw_performance_overlay(self):
        """Draw performance statistics on screen"""
        stats = self.performance_monitor.get_stats()

        overlay_texts = [f"Gamma: {self.state.gamma:.2f}"]
        if "avg_fps" in stats:
            overlay_texts.append(f"FPS: {stats['avg_fps']:.1f}")
        if "avg_render_time" in stats:
            overlay_texts.append(f"Render: {stats['avg_render_time'] * 1000:.1f}ms")

        y_offset = 10
        for text in overlay_texts:
            text_surface = self.font.render(text, True, (0, 255, 0), (0, 0, 0))
            self.screen.blit(text_surface, (10, y_offset))
            y_offset += 26

    def cleanup(self):
        """Cleanup pygame resources"""
        if pygame.get_init():
            pygame.quit()
        self.screen = None
        self.frame_surface = None
        self.running = False
        logger.info("Pygame cleaned up")


def setup_logging():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main():
    setup_logging()
    layout = config.layout()
    display = PygameDisplay(
        layout,
        config.initial_state(),
        window_name=config.window_name,
        show_fps=config.show_fps,
        fps=config.fps,
    )

    logger.info("Press Up/Down to change gamma, M to toggle the curve marker, F for FPS, ESC to quit")
    try:
        display.initialize()
        display.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        display.cleanup()


if __name__ == "__main__":
    main()
