"""
Horizontal swipe detection on the palm center.
"""
from dataclasses import dataclass
from typing import Optional

from .config import GestureConfig


@dataclass
class SwipeTrackerState:
    """Swipe anchor and cooldown bookkeeping for one session."""
    anchor_x: Optional[float] = None
    anchor_time: float = 0.0
    last_swipe_time: Optional[float] = None

    def clear_anchor(self) -> None:
        self.anchor_x = None


class SwipeDetector:
    """
    Detects a left/right palm swipe inside a bounded time window.

    Feed it the palm x position once per open-hand frame. A swipe fires when
    the palm travels further than the displacement threshold from the anchor
    before the window expires, and at most once per cooldown.

    Returns raw palm-coordinate directions: "left" means x decreased.
    """

    def __init__(self, config: GestureConfig, state: Optional[SwipeTrackerState] = None):
        self._config = config
        self.state = state if state is not None else SwipeTrackerState()

    def update(self, x: float, now: float) -> Optional[str]:
        """
        Process one palm position.

        Args:
            x: Palm center x, normalized 0-1
            now: Monotonic timestamp in seconds

        Returns:
            "left", "right" or None
        """
        state = self.state

        if state.anchor_x is None:
            state.anchor_x = x
            state.anchor_time = now
            return None

        dx = x - state.anchor_x
        dt = now - state.anchor_time

        # Too slow, restart the window from here
        if dt > self._config.swipe_window_ms / 1000.0:
            state.anchor_x = x
            state.anchor_time = now
            return None

        # Cooldown masks detection but keeps the anchor
        if (state.last_swipe_time is not None and
                now - state.last_swipe_time < self._config.swipe_cooldown_ms / 1000.0):
            return None

        if abs(dx) > self._config.swipe_displacement_threshold:
            state.last_swipe_time = now
            state.anchor_x = None
            return "right" if dx > 0 else "left"

        return None

    def reset(self) -> None:
        """Drop the anchor; the cooldown survives."""
        self.state.clear_anchor()
