"""
AirSlide Webcam Module

Hand tracking with MediaPipe and the background gesture worker.
"""
from .hand_tracker import HandTracker, to_landmark_frame
from .worker import GestureWorker

__all__ = [
    'HandTracker',
    'to_landmark_frame',
    'GestureWorker',
]
