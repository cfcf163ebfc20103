"""
Gesture state machine.
Combines finger state, swipe detection and debounce timers into one named
classification per frame and raises navigation events.
"""
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple
import logging
import time

from .config import GestureConfig
from .finger_state import FingerStateClassifier
from .landmarks import InvalidFrameError, LandmarkFrame
from .swipe import SwipeDetector, SwipeTrackerState

logger = logging.getLogger(__name__)


class GestureName(Enum):
    """Displayed gesture states."""
    WAITING = auto()      # Not started / stopped
    SCANNING = auto()     # No hand in view
    PAUSED = auto()       # Fist
    READY = auto()        # 1-3 fingers, settled
    STABILIZING = auto()  # 1-3 fingers right after a fist or open hand
    SWIPE_READY = auto()  # Open hand, no swipe this frame
    SWIPE_LEFT = auto()   # Previous page
    SWIPE_RIGHT = auto()  # Next page


class NavigationEvent(Enum):
    """Events routed to the presentation layer."""
    PAUSE = auto()
    PREVIOUS_PAGE = auto()
    NEXT_PAGE = auto()


@dataclass(frozen=True)
class GestureClassification:
    """Per-frame result for display."""
    name: GestureName
    finger_count: int = 0
    confidence: float = 0.0


WAITING = GestureClassification(GestureName.WAITING)
SCANNING = GestureClassification(GestureName.SCANNING)

EventSink = Callable[[NavigationEvent], None]


@dataclass
class DebounceTimers:
    """Last time a fist / open hand was seen (None = never)."""
    last_fist_time: Optional[float] = None
    last_open_time: Optional[float] = None

    def settled(self, now: float, config: GestureConfig) -> bool:
        fist_ok = (self.last_fist_time is None or
                   now - self.last_fist_time > config.fist_release_delay_ms / 1000.0)
        open_ok = (self.last_open_time is None or
                   now - self.last_open_time > config.open_release_delay_ms / 1000.0)
        return fist_ok and open_ok


@dataclass
class SessionState:
    """All mutable state of one classification session."""
    swipe: SwipeTrackerState = field(default_factory=SwipeTrackerState)
    timers: DebounceTimers = field(default_factory=DebounceTimers)

    def copy(self) -> 'SessionState':
        return SessionState(swipe=replace(self.swipe), timers=replace(self.timers))


def classify_frame(
    frame: Optional[LandmarkFrame],
    now: float,
    state: SessionState,
    config: GestureConfig,
    classifier: Optional[FingerStateClassifier] = None,
) -> Tuple[GestureClassification, List[NavigationEvent]]:
    """
    Classify one frame, updating `state` in place.

    Args:
        frame: Landmarks of the first detected hand, or None for no hand
        now: Monotonic timestamp in seconds
        state: Session state owned by the caller
        config: Gesture thresholds
        classifier: Finger classifier to reuse (built from config if None)

    Returns:
        (classification, events) with at most one event.

    Raises:
        InvalidFrameError: If the frame is malformed. `state` is untouched.
    """
    if frame is None:
        state.swipe.clear_anchor()
        return SCANNING, []

    if classifier is None:
        classifier = FingerStateClassifier(config)

    fingers = classifier.classify(frame)
    total = fingers.total
    confidence = frame.clamped_confidence

    # Fist: repeats PAUSE for as long as it is held
    if fingers.non_thumb == 0:
        state.timers.last_fist_time = now
        state.swipe.clear_anchor()
        return GestureClassification(GestureName.PAUSED, total, confidence), [NavigationEvent.PAUSE]

    # Open hand: swipe mode
    if total >= config.open_hand_min_fingers:
        state.timers.last_open_time = now
        direction = SwipeDetector(config, state.swipe).update(frame.palm_center[0], now)

        # Raw palm motion is mirrored relative to the presenter
        if direction == "left":
            return (GestureClassification(GestureName.SWIPE_RIGHT, total, confidence),
                    [NavigationEvent.NEXT_PAGE])
        if direction == "right":
            return (GestureClassification(GestureName.SWIPE_LEFT, total, confidence),
                    [NavigationEvent.PREVIOUS_PAGE])
        return GestureClassification(GestureName.SWIPE_READY, total, confidence), []

    state.swipe.clear_anchor()
    if state.timers.settled(now, config):
        return GestureClassification(GestureName.READY, total, confidence), []
    return GestureClassification(GestureName.STABILIZING, total, confidence), []


class GestureStateMachine:
    """
    Owns one classification session.

    Call process() once per tracker result, from a single thread. Frames
    that fail classification are dropped and the previous classification
    is kept, so the caller never has to handle core errors.
    """

    def __init__(self, config: GestureConfig):
        """
        Initialize gesture state machine.

        Args:
            config: Gesture detection thresholds
        """
        self._config = config
        self._classifier = FingerStateClassifier(config)
        self._state = SessionState()
        self._classification = WAITING
        self._is_active = False

    def start(self) -> None:
        """Begin a fresh session. Stays WAITING until the first frame."""
        if self._is_active:
            return
        self._state = SessionState()
        self._classification = WAITING
        self._is_active = True

    def stop(self) -> None:
        """Discard all timers and swipe state and go back to WAITING."""
        self._is_active = False
        self._state = SessionState()
        self._classification = WAITING

    def process(
        self,
        frame: Optional[LandmarkFrame],
        now: Optional[float] = None,
        sink: Optional[EventSink] = None,
    ) -> Tuple[GestureClassification, List[NavigationEvent]]:
        """
        Classify one frame.

        Args:
            frame: First detected hand, or None when no hand was found
            now: Monotonic timestamp in seconds (defaults to perf_counter)
            sink: Optional callable receiving each emitted event

        Returns:
            (classification, events). Inactive machines and dropped frames
            return the current classification and no events.
        """
        if not self._is_active:
            return self._classification, []

        if now is None:
            now = time.perf_counter()

        working = self._state.copy()
        try:
            classification, events = classify_frame(
                frame, now, working, self._config, self._classifier
            )
        except InvalidFrameError as e:
            logger.warning("Dropping invalid frame: %s", e)
            return self._classification, []
        except Exception:
            logger.exception("Gesture classification failed, dropping frame")
            return self._classification, []

        self._state = working
        if classification.name != self._classification.name:
            logger.debug("Gesture %s -> %s", self._classification.name.name, classification.name.name)
        self._classification = classification

        if sink is not None:
            for event in events:
                try:
                    sink(event)
                except Exception:
                    logger.exception("Event handler failed for %s", event.name)

        return classification, events

    @property
    def classification(self) -> GestureClassification:
        return self._classification

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._is_active
