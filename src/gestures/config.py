"""
Config loader for AirSlide.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30
    # Swipe direction mapping assumes an unflipped feed
    mirror: bool = False


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.6


@dataclass
class GestureConfig:
    # Finger state heuristics (normalized image units)
    thumb_axis_threshold: float = 0.02
    thumb_palm_proximity: float = 0.08
    finger_extend_threshold: float = 0.02
    open_hand_min_fingers: int = 4

    # Swipe detection
    swipe_displacement_threshold: float = 0.15
    swipe_window_ms: int = 500
    swipe_cooldown_ms: int = 600

    # Debounce after a fist / open hand ends
    fist_release_delay_ms: int = 600
    open_release_delay_ms: int = 500

    def __post_init__(self):
        for name in (
            'thumb_axis_threshold',
            'thumb_palm_proximity',
            'finger_extend_threshold',
            'swipe_displacement_threshold',
            'swipe_window_ms',
            'swipe_cooldown_ms',
            'fist_release_delay_ms',
            'open_release_delay_ms',
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"gestures.{name} must be positive, got {getattr(self, name)!r}")
        if not 1 <= self.open_hand_min_fingers <= 5:
            raise ValueError(
                f"gestures.open_hand_min_fingers must be in 1..5, got {self.open_hand_min_fingers!r}"
            )


@dataclass
class UIConfig:
    page_count: int = 10
    show_preview: bool = False
    swipe_indicator_ms: int = 800


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"{cls.__name__} section must be a mapping, got {type(data).__name__}")
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.

    Raises:
        ValueError: If a section is not a mapping or a gesture threshold
            is out of range.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
