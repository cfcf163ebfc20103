"""
AirSlide Gesture Module

Finger state, swipe detection and the gesture state machine.
"""
from .config import Config, GestureConfig, load_config
from .landmarks import LandmarkFrame, InvalidFrameError
from .finger_state import FingerState, FingerStateClassifier
from .swipe import SwipeDetector, SwipeTrackerState
from .state_machine import (
    DebounceTimers,
    GestureClassification,
    GestureName,
    GestureStateMachine,
    NavigationEvent,
    SessionState,
    classify_frame,
)

__all__ = [
    'Config',
    'GestureConfig',
    'load_config',
    'LandmarkFrame',
    'InvalidFrameError',
    'FingerState',
    'FingerStateClassifier',
    'SwipeDetector',
    'SwipeTrackerState',
    'DebounceTimers',
    'GestureClassification',
    'GestureName',
    'GestureStateMachine',
    'NavigationEvent',
    'SessionState',
    'classify_frame',
]
