import pytest

pytest.importorskip("cv2")
pytest.importorskip("mediapipe")
QtCore = pytest.importorskip("PyQt5.QtCore")

from src.gestures.config import Config
from src.gestures.state_machine import GestureName, NavigationEvent
from src.webcam.worker import GestureWorker


@pytest.fixture(scope="module")
def qapp():
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


class FakeTracker:
    """Replays landmark frames, then asks the worker to stop from inside capture."""

    def __init__(self, frames, start_result=True):
        self.frames = list(frames)
        self.start_result = start_result
        self.worker = None
        self.starts = 0
        self.stops = 0

    def start(self):
        self.starts += 1
        if isinstance(self.start_result, Exception):
            raise self.start_result
        return self.start_result

    def stop(self):
        self.stops += 1

    def get_landmarks(self):
        if self.frames:
            return self.frames.pop(0)
        self.worker.stop_process()
        return self.last_frame

    def get_frame_with_landmarks(self, landmarks=None, black_background=False):
        return None


class Recorder:
    def __init__(self, worker):
        self.navigation = []
        self.gestures = []
        self.errors = []
        self.running = []
        self.processed = []
        worker.navigation.connect(self.navigation.append)
        worker.gesture_changed.connect(self.gestures.append)
        worker.error.connect(self.errors.append)
        worker.running_changed.connect(self.running.append)

        process = worker.machine.process

        def counting_process(frame, now=None, sink=None):
            self.processed.append(frame)
            return process(frame, now, sink)

        worker.machine.process = counting_process


def make_worker(tracker):
    worker = GestureWorker(Config(), tracker=tracker)
    tracker.worker = worker
    return worker, Recorder(worker)


def test_swipe_then_stop_from_capture(qapp, open_hand):
    tracker = FakeTracker([open_hand(0.30), open_hand(0.40), open_hand(0.50)])
    tracker.last_frame = open_hand(0.90)
    worker, rec = make_worker(tracker)

    worker.start_process()

    assert rec.navigation == [NavigationEvent.PREVIOUS_PAGE]
    # The frame returned after the stop request is never classified
    assert len(rec.processed) == 3
    assert rec.gestures[0].name == GestureName.WAITING
    assert GestureName.SWIPE_LEFT in [g.name for g in rec.gestures]
    assert rec.gestures[-1].name == GestureName.WAITING
    assert rec.running == [True, False]
    assert tracker.stops == 1
    assert not worker.is_running
    assert not worker.machine.is_active


def test_start_again_after_stop(qapp, open_hand):
    tracker = FakeTracker([open_hand(0.30)])
    tracker.last_frame = open_hand(0.30)
    worker, rec = make_worker(tracker)

    worker.start_process()
    tracker.frames = [open_hand(0.30), open_hand(0.60)]
    worker.start_process()

    assert tracker.starts == 2
    assert tracker.stops == 2
    assert rec.navigation == [NavigationEvent.PREVIOUS_PAGE]
    assert rec.running == [True, False, True, False]
    assert rec.gestures[-1].name == GestureName.WAITING


def test_tracker_start_failure_reports_error(qapp):
    tracker = FakeTracker([], start_result=False)
    worker, rec = make_worker(tracker)

    worker.start_process()

    assert len(rec.errors) == 1
    assert rec.running == [False]
    assert rec.processed == []
    assert not worker.machine.is_active


def test_tracker_start_exception_reports_error(qapp):
    tracker = FakeTracker([], start_result=RuntimeError("no model"))
    worker, rec = make_worker(tracker)

    worker.start_process()

    assert "no model" in rec.errors[0]
    assert rec.running == [False]
    assert tracker.stops == 1
    assert not worker.is_running
