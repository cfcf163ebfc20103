"""
Per-frame hand landmark sample handed to the gesture core.
"""
from dataclasses import dataclass
from numbers import Real
import math
from typing import Optional, Sequence, Tuple

Point3 = Tuple[float, float, float]

NUM_LANDMARKS = 21


class InvalidFrameError(ValueError):
    """Raised when a landmark frame cannot be classified."""


@dataclass(frozen=True)
class LandmarkFrame:
    """
    Normalized landmarks for one detected hand.

    Attributes:
        landmarks: 21 (x, y, z) tuples, normalized 0-1 to the image frame
        handedness: 'Left', 'Right' or None when the tracker gave no label
        confidence: Handedness score 0-1 (None when unlabelled)
    """
    landmarks: Sequence[Point3]
    handedness: Optional[str] = None
    confidence: Optional[float] = None

    # MediaPipe landmark indices used by the classifier
    WRIST = 0
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_PIP = 6
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_TIP = 12
    RING_PIP = 14
    RING_TIP = 16
    PINKY_PIP = 18
    PINKY_TIP = 20

    def validate(self) -> None:
        """
        Check the frame has every landmark the classifier reads.

        Raises:
            InvalidFrameError: fewer than 21 points, or a point without
                finite numeric x and y.
        """
        try:
            count = len(self.landmarks)
        except TypeError as e:
            raise InvalidFrameError(f"landmarks is not a sequence: {e}") from e
        if count < NUM_LANDMARKS:
            raise InvalidFrameError(f"expected {NUM_LANDMARKS} landmarks, got {count}")

        for i in range(NUM_LANDMARKS):
            point = self.landmarks[i]
            if point is None or len(point) < 2:
                raise InvalidFrameError(f"landmark {i} is missing coordinates")
            if not all(isinstance(c, Real) for c in point[:2]):
                raise InvalidFrameError(f"landmark {i} has non-numeric coordinates")
            if not all(math.isfinite(c) for c in point[:2]):
                raise InvalidFrameError(f"landmark {i} has non-finite coordinates")

    def get(self, index: int) -> Point3:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def is_right_hand(self) -> bool:
        return self.handedness == "Right"

    @property
    def palm_center(self) -> Point3:
        """Middle finger MCP, the reference point for swipes."""
        return self.landmarks[self.MIDDLE_MCP]

    @property
    def clamped_confidence(self) -> float:
        """Handedness confidence clipped to [0, 1]; 0 when unlabelled."""
        if self.handedness is None or self.confidence is None:
            return 0.0
        return max(0.0, min(1.0, float(self.confidence)))
