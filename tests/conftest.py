import pytest
from src.gestures.config import GestureConfig
from src.gestures.landmarks import LandmarkFrame

FINGER_JOINTS = [(8, 6), (12, 10), (16, 14), (20, 18)]


def build_hand(fingers=(True, True, True, True), thumb="tucked", palm_x=0.5,
               handedness="Right", confidence=0.9):
    """
    Synthetic 21-point hand around a palm center at (palm_x, 0.5).

    thumb: "tucked" (within reach of the palm center), "out_right"
    (extended for a right hand) or "out_left" (extended for a left hand).
    """
    points = [[palm_x, 0.5, 0.0] for _ in range(21)]

    for extended, (tip, pip) in zip(fingers, FINGER_JOINTS):
        points[pip][1] = 0.5
        points[tip][1] = 0.4 if extended else 0.6

    if thumb == "tucked":
        points[3][0] = palm_x + 0.05
        points[4][0] = palm_x + 0.01
    elif thumb == "out_right":
        points[3][0] = palm_x - 0.10
        points[4][0] = palm_x - 0.20
    elif thumb == "out_left":
        points[3][0] = palm_x + 0.10
        points[4][0] = palm_x + 0.20
    else:
        raise ValueError(thumb)

    return LandmarkFrame(
        landmarks=[tuple(p) for p in points],
        handedness=handedness,
        confidence=confidence,
    )


@pytest.fixture
def config():
    return GestureConfig()


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def fist(make_hand):
    return make_hand(fingers=(False, False, False, False))


@pytest.fixture
def open_hand(make_hand):
    def _open(palm_x=0.5):
        return make_hand(fingers=(True, True, True, True), palm_x=palm_x)
    return _open


@pytest.fixture
def two_fingers(make_hand):
    return make_hand(fingers=(True, True, False, False))
