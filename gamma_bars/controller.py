import logging
from typing import Iterable

from gamma_bars.models import GammaState, InputEvent

logger = logging.getLogger(__name__)


class GammaController:
    """Applies keyboard input to a GammaState, keeping gamma at or above zero"""

    def increment(self, state: GammaState) -> float:
        state.gamma = state.gamma + state.step
        state.needs_redraw = True
        logger.info(f"Gamma: {state.gamma:.2f}")
        return state.gamma

    def decrement(self, state: GammaState) -> float:
        state.gamma = max(0.0, state.gamma - state.step)
        state.needs_redraw = True
        logger.info(f"Gamma: {state.gamma:.2f}")
        return state.gamma

    def toggle_marker(self, state: GammaState) -> bool:
        state.show_marker = not state.show_marker
        state.needs_redraw = True
        logger.info(f"Curve marker: {'ON' if state.show_marker else 'OFF'}")
        return state.show_marker

    def handle_input(self, state: GammaState, events: Iterable[InputEvent]) -> bool:
        """Apply a batch of events; returns True once a quit request is seen"""
        for event in events:
            if event in (InputEvent.QUIT, InputEvent.ESCAPE):
                logger.info("Quit requested")
                return True
            elif event == InputEvent.GAMMA_UP:
                self.increment(state)
            elif event == InputEvent.GAMMA_DOWN:
                self.decrement(state)
            elif event == InputEvent.TOGGLE_MARKER:
                self.toggle_marker(state)
        return False
