"""
Gesture indicator widget - current gesture, finger count and confidence.
"""
from typing import Dict, Tuple
from PyQt5.QtWidgets import QWidget, QLabel, QVBoxLayout, QHBoxLayout, QProgressBar
from PyQt5.QtCore import Qt

from ..gestures.state_machine import GestureClassification, GestureName

# name -> (label, icon, colour)
GESTURE_INFO: Dict[GestureName, Tuple[str, str, str]] = {
    GestureName.WAITING: ("Waiting", "⏳", "#9ca3af"),
    GestureName.SCANNING: ("Scanning...", "👁️", "#22d3ee"),
    GestureName.PAUSED: ("Paused", "✊", "#f87171"),
    GestureName.SWIPE_READY: ("Swipe Ready", "🖐️", "#4ade80"),
    GestureName.SWIPE_LEFT: ("← Previous", "👈", "#c084fc"),
    GestureName.SWIPE_RIGHT: ("Next →", "👉", "#c084fc"),
    GestureName.READY: ("Ready", "☝️", "#22d3ee"),
    GestureName.STABILIZING: ("Stabilizing...", "⏳", "#facc15"),
}


class GestureIndicator(QWidget):
    """Compact status panel fed by GestureWorker.gesture_changed."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("GestureIndicator")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        row = QHBoxLayout()
        self.icon_label = QLabel()
        self.icon_label.setAlignment(Qt.AlignCenter)
        self.name_label = QLabel()
        row.addWidget(self.icon_label)
        row.addWidget(self.name_label, 1)
        layout.addLayout(row)

        self.fingers_label = QLabel()
        layout.addWidget(self.fingers_label)

        self.confidence_bar = QProgressBar()
        self.confidence_bar.setRange(0, 100)
        self.confidence_bar.setFormat("%p%")
        layout.addWidget(self.confidence_bar)

        self.set_classification(GestureClassification(GestureName.WAITING))

    def set_classification(self, classification: GestureClassification):
        """Show a new per-frame classification."""
        label, icon, colour = GESTURE_INFO.get(
            classification.name, GESTURE_INFO[GestureName.WAITING]
        )
        self.icon_label.setText(icon)
        self.name_label.setText(label)
        self.name_label.setStyleSheet(f"color: {colour}; font-weight: bold;")

        if classification.finger_count > 0:
            self.fingers_label.setText(f"{classification.finger_count} fingers detected")
        else:
            self.fingers_label.setText("")

        self.confidence_bar.setVisible(classification.confidence > 0)
        self.confidence_bar.setValue(round(classification.confidence * 100))
