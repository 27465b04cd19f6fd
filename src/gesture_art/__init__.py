"""Hand gestures driving the modes and camera of an interactive installation."""

from .classifier import GestureClassifier, detect_gesture
from .config import Config
from .gestures import Gestures
from .mapper import ControlSignal, HandMetrics, InteractionMapper, hand_metrics
from .models import HandLandmark, HandPose, Landmark, MalformedPoseError
from .orchestrator import Orchestrator, TickResult
from .rig import CameraRig
from .state import AppMode, StateMachine
from .watchdog import PresenceWatchdog

__all__ = [
    # Core classes
    "GestureClassifier",
    "StateMachine",
    "InteractionMapper",
    "Orchestrator",
    "TickResult",
    "CameraRig",
    "PresenceWatchdog",
    "detect_gesture",
    "hand_metrics",
    # Models
    "HandLandmark",
    "HandPose",
    "Landmark",
    "MalformedPoseError",
    "HandMetrics",
    "ControlSignal",
    # Enums
    "Gestures",
    "AppMode",
    # Configuration
    "Config",
]
