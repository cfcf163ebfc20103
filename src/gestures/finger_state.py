"""
Finger extension heuristics.
Turns one hand's landmarks into a thumb..pinky extended/flexed vector.
"""
from typing import NamedTuple

from .config import GestureConfig
from .landmarks import LandmarkFrame

# (tip, pip) pairs for index, middle, ring, pinky
FINGER_JOINTS = [
    (LandmarkFrame.INDEX_TIP, LandmarkFrame.INDEX_PIP),
    (LandmarkFrame.MIDDLE_TIP, LandmarkFrame.MIDDLE_PIP),
    (LandmarkFrame.RING_TIP, LandmarkFrame.RING_PIP),
    (LandmarkFrame.PINKY_TIP, LandmarkFrame.PINKY_PIP),
]


class FingerState(NamedTuple):
    """Extended flags, thumb first."""
    thumb: bool
    index_finger: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def total(self) -> int:
        return sum(self)

    @property
    def non_thumb(self) -> int:
        return self.index_finger + self.middle + self.ring + self.pinky


class FingerStateClassifier:
    """
    Fixed geometric finger classifier.

    The thumb is judged on the horizontal axis against its IP joint, with
    the direction flipped by handedness; a thumb tucked near the palm
    center is always flexed. The other fingers are extended when the tip
    sits clearly above the PIP joint (image y grows downwards).
    """

    def __init__(self, config: GestureConfig):
        self._config = config

    def classify(self, frame: LandmarkFrame) -> FingerState:
        """
        Classify finger extension for one frame.

        Raises:
            InvalidFrameError: If the frame is malformed.
        """
        frame.validate()

        return FingerState(
            self._thumb_extended(frame),
            *(self._finger_extended(frame, tip, pip) for tip, pip in FINGER_JOINTS)
        )

    def _thumb_extended(self, frame: LandmarkFrame) -> bool:
        tip_x = frame.get(LandmarkFrame.THUMB_TIP)[0]
        ip_x = frame.get(LandmarkFrame.THUMB_IP)[0]
        palm_x = frame.palm_center[0]
        threshold = self._config.thumb_axis_threshold

        # Unlabelled hands take the left-hand branch
        if frame.is_right_hand:
            extended = tip_x < ip_x - threshold
        else:
            extended = tip_x > ip_x + threshold

        # Tucked thumb
        if abs(tip_x - palm_x) < self._config.thumb_palm_proximity:
            extended = False

        return extended

    def _finger_extended(self, frame: LandmarkFrame, tip: int, pip: int) -> bool:
        tip_y = frame.get(tip)[1]
        pip_y = frame.get(pip)[1]
        return (pip_y - tip_y) > self._config.finger_extend_threshold
