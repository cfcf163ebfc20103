"""
AirSlide - Hands-free slide navigation with webcam gestures

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AirSlide - Gesture-controlled slide navigation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--pages",
        type=int,
        default=None,
        help="Number of pages in the deck (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run the OpenCV debug window instead of the presenter UI",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser.parse_args()


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks and the
    current gesture. Useful for tuning thresholds.
    """
    import cv2
    from src.webcam import HandTracker
    from src.gestures import GestureStateMachine, GestureName
    from src.presenter import PageNavigator

    tracker = HandTracker(config)
    machine = GestureStateMachine(config.gestures)
    navigator = PageNavigator(config.ui.page_count)

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracking")
        return 1

    machine.start()
    try:
        while True:
            landmarks = tracker.get_landmarks()
            classification, events = machine.process(landmarks, sink=navigator.apply)

            for event in events:
                if event.name != "PAUSE":
                    print(f"[{tracker.frame_count:5d}] {event.name} -> page {navigator.current_page + 1}")

            frame = tracker.get_frame_with_landmarks(landmarks)

            if frame is not None:
                cv2.putText(
                    frame, f"Gesture: {classification.name.name}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )

                info_lines = [
                    f"Fingers: {classification.finger_count}",
                    f"Confidence: {classification.confidence:.2f}",
                    f"Page: {navigator.current_page + 1}/{navigator.page_count}",
                ]
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                if classification.name == GestureName.PAUSED:
                    cv2.putText(
                        frame, "PAUSED", (10, 150),
                        cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 0, 255), 2
                    )

                cv2.imshow("AirSlide Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        machine.stop()
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_presenter(config):
    """Run AirSlide with the presenter window (gesture worker in a QThread)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from src.webcam import GestureWorker
    from src.presenter import PageNavigator
    from src.ui import PresenterWindow

    app = QApplication(sys.argv)

    navigator = PageNavigator(config.ui.page_count)
    window = PresenterWindow(navigator, swipe_indicator_ms=config.ui.swipe_indicator_ms)
    window.resize(1000, 600)
    window.show()

    thread = QThread()
    worker = GestureWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Queued connections keep UI updates on the main thread
    thread.started.connect(worker.start_process)
    worker.gesture_changed.connect(window.indicator.set_classification, Qt.QueuedConnection)
    worker.navigation.connect(window.handle_navigation, Qt.QueuedConnection)
    worker.frame_ready.connect(window.set_webcam_frame, Qt.QueuedConnection)
    worker.running_changed.connect(window.set_running, Qt.QueuedConnection)
    worker.error.connect(window.show_error, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)

    # Start runs in the worker thread; stop only flips a flag, so it must not
    # wait behind the busy loop in the worker's event queue
    window.start_requested.connect(worker.start_process, Qt.QueuedConnection)
    window.stop_requested.connect(worker.stop_process, Qt.DirectConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from src.gestures import load_config
    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 2

    # Apply CLI overrides
    if args.pages is not None:
        if args.pages < 1:
            print("ERROR: --pages must be at least 1")
            return 2
        config.ui.page_count = args.pages

    print("AirSlide starting...")
    print(f"  Pages: {config.ui.page_count}")
    print(f"  Camera: {config.camera.device_id} ({config.camera.width}x{config.camera.height})")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_presenter(config)


if __name__ == "__main__":
    sys.exit(main())
