"""
Background worker for MediaPipe hand tracking and gesture classification.
Runs in a separate QThread to avoid blocking the UI.
"""
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot

from .hand_tracker import HandTracker
from ..gestures.state_machine import GestureStateMachine


class GestureWorker(QObject):
    """
    Worker class that feeds tracker results to the gesture state machine,
    one frame at a time. Emits signals for UI updates.

    start_process() may be called again after the loop has ended; each run
    opens the tracker and begins a fresh gesture session.
    """
    # Signals
    gesture_changed = pyqtSignal(object)  # Emits GestureClassification
    navigation = pyqtSignal(object)       # Emits NavigationEvent
    frame_ready = pyqtSignal(object)      # Emits numpy array (BGR frame with landmarks)
    running_changed = pyqtSignal(bool)
    error = pyqtSignal(str)

    PREVIEW_FPS = 5

    def __init__(self, config, parent=None, tracker: Optional[HandTracker] = None):
        super().__init__(parent)
        self._config = config
        self._tracker = tracker
        self._machine = GestureStateMachine(config.gestures)
        self._is_running = False

    @pyqtSlot()
    def start_process(self):
        """Main processing loop. Runs in the worker thread until stopped."""
        if self._is_running:
            return

        if self._tracker is None:
            self._tracker = HandTracker(self._config)

        try:
            started = self._tracker.start()
        except Exception as e:
            self.error.emit(f"Could not start hand tracking: {e}")
            self._tracker.stop()
            self.running_changed.emit(False)
            return

        if not started:
            self.error.emit("Could not start hand tracking (camera or model missing)")
            self.running_changed.emit(False)
            return

        self._is_running = True
        self._machine.start()
        self.running_changed.emit(True)
        last_classification = self._machine.classification
        self.gesture_changed.emit(last_classification)

        last_frame_time = 0.0
        frame_interval = 1.0 / self.PREVIEW_FPS

        try:
            while self._is_running:
                landmarks = self._tracker.get_landmarks()

                # A stop request may have arrived during capture
                if not self._is_running:
                    break

                now = time.perf_counter()
                classification, _ = self._machine.process(
                    landmarks, now, sink=self.navigation.emit
                )

                if classification != last_classification:
                    self.gesture_changed.emit(classification)
                    last_classification = classification

                if self._config.ui.show_preview and now - last_frame_time >= frame_interval:
                    frame = self._tracker.get_frame_with_landmarks(landmarks, black_background=True)
                    if frame is not None:
                        self.frame_ready.emit(frame)
                    last_frame_time = now

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            self._machine.stop()
            self.gesture_changed.emit(self._machine.classification)
            self._tracker.stop()
            self.running_changed.emit(False)

    @pyqtSlot()
    def stop_process(self):
        """Signal the loop to stop; the session resets to WAITING in the worker thread."""
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def machine(self) -> GestureStateMachine:
        return self._machine
