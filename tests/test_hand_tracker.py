from types import SimpleNamespace
import pytest

pytest.importorskip("cv2")
pytest.importorskip("mediapipe")
pytest.importorskip("PyQt5")

from src.webcam.hand_tracker import to_landmark_frame


def _result(hands, handedness):
    landmarks = [
        [SimpleNamespace(x=0.1 * h, y=0.5, z=0.0) for _ in range(21)]
        for h in range(1, hands + 1)
    ]
    return SimpleNamespace(hand_landmarks=landmarks, handedness=handedness)


def test_no_hand_is_none():
    assert to_landmark_frame(_result(0, [])) is None


def test_first_hand_only():
    category = SimpleNamespace(category_name="Left", score=0.8)
    frame = to_landmark_frame(_result(2, [[category], [category]]))
    assert len(frame.landmarks) == 21
    assert frame.landmarks[0][0] == pytest.approx(0.1)
    assert frame.handedness == "Left"
    assert frame.confidence == 0.8


def test_missing_handedness():
    frame = to_landmark_frame(_result(1, []))
    assert frame.handedness is None
    assert frame.clamped_confidence == 0.0


class FakeCapture:
    def __init__(self, device_id):
        self.released = False

    def isOpened(self):
        return True

    def set(self, prop, value):
        return True

    def release(self):
        self.released = True


def test_capture_released_when_landmarker_fails(tmp_path, monkeypatch):
    from src.gestures.config import Config
    from src.webcam import hand_tracker

    captures = []

    def make_capture(device_id):
        captures.append(FakeCapture(device_id))
        return captures[-1]

    def broken_landmarker(options):
        raise RuntimeError("bad model")

    model = tmp_path / "hand_landmarker.task"
    model.write_bytes(b"")
    monkeypatch.setattr(hand_tracker.cv2, "VideoCapture", make_capture)
    monkeypatch.setattr(hand_tracker.HandLandmarker, "create_from_options", broken_landmarker)

    tracker = hand_tracker.HandTracker(Config(), model_path=model)
    with pytest.raises(RuntimeError):
        tracker.start()

    assert captures[0].released
    assert not tracker.is_running
