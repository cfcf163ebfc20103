"""
Presenter window - page counter, swipe flash, gesture indicator and preview.
"""
import numpy as np
from PyQt5.QtWidgets import QMainWindow, QWidget, QLabel, QPushButton, QVBoxLayout, QHBoxLayout
from PyQt5.QtCore import Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QImage, QPixmap

from .indicator import GestureIndicator
from ..gestures.state_machine import NavigationEvent
from ..presenter.navigator import PageNavigator


class PresenterWindow(QMainWindow):
    """
    Stand-in for a slide viewer: shows the current page number and flashes
    the swipe direction. Arrow keys navigate like swipes.

    The Start/Stop button emits start_requested or stop_requested; the
    caller wires these to the gesture worker.
    """
    start_requested = pyqtSignal()
    stop_requested = pyqtSignal()

    def __init__(self, navigator: PageNavigator, swipe_indicator_ms: int = 800, parent=None):
        super().__init__(parent)
        self._navigator = navigator
        self._swipe_indicator_ms = swipe_indicator_ms
        self._running = False

        self.setWindowTitle("AirSlide")
        self._setup_ui()

        self._flash_timer = QTimer(self)
        self._flash_timer.setSingleShot(True)
        self._flash_timer.timeout.connect(lambda: self.swipe_label.setText(""))

        self._navigator.add_listener(self._update_page_label)
        self._update_page_label(self._navigator.current_page)

    def _setup_ui(self):
        """Build the UI."""
        central = QWidget()
        layout = QHBoxLayout(central)
        self.setCentralWidget(central)

        page_panel = QVBoxLayout()
        self.page_label = QLabel()
        self.page_label.setAlignment(Qt.AlignCenter)
        self.page_label.setStyleSheet("font-size: 48px;")
        self.swipe_label = QLabel()
        self.swipe_label.setAlignment(Qt.AlignCenter)
        self.swipe_label.setStyleSheet("font-size: 32px; color: #c084fc;")
        page_panel.addWidget(self.page_label, 1)
        page_panel.addWidget(self.swipe_label)
        layout.addLayout(page_panel, 3)

        side_panel = QVBoxLayout()
        self.indicator = GestureIndicator()
        self.webcam_preview = QLabel()
        self.webcam_preview.setFixedSize(320, 180)
        self.webcam_preview.setScaledContents(True)
        self.toggle_button = QPushButton("Start")
        self.toggle_button.clicked.connect(self._on_toggle_clicked)
        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #f87171;")
        side_panel.addWidget(self.indicator)
        side_panel.addWidget(self.toggle_button)
        side_panel.addWidget(self.error_label)
        side_panel.addWidget(self.webcam_preview)
        side_panel.addStretch(1)
        layout.addLayout(side_panel, 1)

    def _update_page_label(self, page: int):
        self.page_label.setText(f"Page {page + 1} / {self._navigator.page_count}")

    def handle_navigation(self, event: NavigationEvent):
        """Apply a navigation event and flash the swipe direction."""
        changed = self._navigator.apply(event)
        if changed is None:
            return
        self.swipe_label.setText("Next →" if event == NavigationEvent.NEXT_PAGE else "← Previous")
        self._flash_timer.start(self._swipe_indicator_ms)

    def _on_toggle_clicked(self):
        # Disabled until the worker reports its new running state
        self.toggle_button.setEnabled(False)
        if self._running:
            self.stop_requested.emit()
        else:
            self.error_label.clear()
            self.start_requested.emit()

    def set_running(self, running: bool):
        """Reflect the worker state on the Start/Stop button."""
        self._running = running
        self.toggle_button.setText("Stop" if running else "Start")
        self.toggle_button.setEnabled(True)

    def show_error(self, message: str):
        self.error_label.setText(message)

    @property
    def is_running(self) -> bool:
        return self._running

    def set_webcam_frame(self, frame: np.ndarray):
        """
        Update the webcam preview.

        Args:
            frame: BGR numpy array from HandTracker
        """
        if frame is None:
            self.webcam_preview.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        qimg = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))

    def keyPressEvent(self, event):
        """Arrow keys navigate like swipes."""
        if event.key() == Qt.Key_Right:
            self.handle_navigation(NavigationEvent.NEXT_PAGE)
        elif event.key() == Qt.Key_Left:
            self.handle_navigation(NavigationEvent.PREVIOUS_PAGE)
        else:
            super().keyPressEvent(event)
