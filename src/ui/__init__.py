"""
AirSlide UI Module

PyQt5 presenter window and gesture indicator.
"""
from .indicator import GestureIndicator, GESTURE_INFO
from .presenter_window import PresenterWindow

__all__ = [
    'GestureIndicator',
    'GESTURE_INFO',
    'PresenterWindow',
]
