"""One frame of interaction: classification, mode changes and camera control."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from time import monotonic
from typing import NamedTuple

from .classifier import GestureClassifier, GestureListener, PoseInput
from .config import Config
from .gestures import Gestures
from .mapper import ControlSignal, InteractionMapper
from .models.landmarks import HandPose, MalformedPoseError
from .rig import CameraRig
from .state import AppMode, StateMachine, TransitionListener
from .watchdog import PresenceWatchdog

logger = logging.getLogger("gesture_art.orchestrator")

GESTURES_MODES: dict[Gestures, AppMode] = {
    Gestures.FIST: AppMode.TREE,
    Gestures.OPEN: AppMode.EXPANDED,
    Gestures.PINCH: AppMode.FOCUS,
}

KEY_ALIASES = {"esc": "escape"}


class TickResult(NamedTuple):
    mode: AppMode
    gesture: Gestures  # Committed gesture, held while no hand is seen
    raw_gesture: Gestures | None  # Gesture of this frame only, None without a hand
    hand_present: bool
    rejected: bool  # The sample was not a valid 21 landmarks pose
    control: ControlSignal | None  # Instantaneous camera target computed from the hand
    camera: ControlSignal  # Eased camera values after this frame

    def to_dict(self) -> dict[str, object]:
        return {
            "mode": self.mode.value,
            "gesture": self.gesture.value,
            "raw_gesture": None if self.raw_gesture is None else self.raw_gesture.value,
            "hand_present": self.hand_present,
            "rejected": self.rejected,
            "control": None if self.control is None else self.control.to_dict(),
            "camera": self.camera.to_dict(),
        }


class Orchestrator:
    """Owns the interaction components and runs them once per frame.

    Committed gestures switch modes (fist: tree, open hand: expanded, pinch: focus),
    keyboard keys can force the same transitions, and both are ignored while loading.
    When no hand is seen for ``state.hand_lost_timeout`` seconds, the tree comes back.
    A tick runs entirely under a lock, so ticks and key presses never interleave.
    """

    def __init__(self, config: Config | None = None, clock: Callable[[], float] = monotonic) -> None:
        self.config = config or Config()
        self.clock = clock
        self.classifier = GestureClassifier(self.config.classifier, clock=clock)
        self.state = StateMachine(AppMode.TREE if self.config.state.skip_loading else AppMode.LOADING)
        self.mapper = InteractionMapper(self.config.mapper)
        self.rig = CameraRig(self.config.state)
        self.watchdog = PresenceWatchdog(self.config.state.hand_lost_timeout, now=clock())
        self.key_bindings = self._build_key_bindings()
        self._last_tick: float | None = None
        self._lock = threading.RLock()

        self.classifier.on_gesture(self._on_gesture)

    def _build_key_bindings(self) -> dict[str, AppMode]:
        keys = self.config.keys
        return {
            self.normalize_key(keys.tree): AppMode.TREE,
            self.normalize_key(keys.expanded): AppMode.EXPANDED,
            self.normalize_key(keys.focus): AppMode.FOCUS,
            self.normalize_key(keys.back): AppMode.EXPANDED,
        }

    @staticmethod
    def normalize_key(key: str) -> str:
        key = key.strip().lower()
        return KEY_ALIASES.get(key, key)

    @property
    def mode(self) -> AppMode:
        return self.state.mode

    def on_gesture(self, callback: GestureListener) -> GestureListener:
        return self.classifier.on_gesture(callback)

    def on_transition(self, callback: TransitionListener) -> TransitionListener:
        return self.state.on_transition(callback)

    def ready(self) -> bool:
        """Leave the loading mode for the tree. Does nothing if not loading."""
        with self._lock:
            if self.state.mode is not AppMode.LOADING:
                return False
            return self.state.transition_to(AppMode.TREE)

    def _on_gesture(self, gesture: Gestures) -> None:
        if self.state.mode is AppMode.LOADING:
            logger.debug("Ignoring gesture %s while loading", gesture.name)
            return
        mode = GESTURES_MODES.get(gesture)
        if mode is not None:
            self.state.transition_to(mode)

    def handle_key(self, key: str) -> AppMode | None:
        """Force a mode from a key press. Returns the bound mode, or None if the key was ignored."""
        with self._lock:
            if self.state.mode is AppMode.LOADING:
                return None
            mode = self.key_bindings.get(self.normalize_key(key))
            if mode is None:
                return None
            self.state.transition_to(mode)
            return mode

    def tick(self, pose: PoseInput, now: float | None = None, delta: float | None = None) -> TickResult:
        """Process the hand pose of one frame (``None`` when no hand is detected).

        A malformed pose never raises: it is logged, reported with ``rejected=True`` and
        otherwise handled like a frame without a hand.
        """
        with self._lock:
            if now is None:
                now = self.clock()
            if delta is None:
                delta = 0.0 if self._last_tick is None else max(now - self._last_tick, 0.0)
            self._last_tick = now

            hand: HandPose | None = None
            rejected = False
            if pose is not None and len(pose) > 0:
                try:
                    hand = pose if isinstance(pose, HandPose) else HandPose.from_points(pose)
                except MalformedPoseError as exc:
                    logger.warning("Rejected hand sample: %s", exc)
                    rejected = True

            control: ControlSignal | None = None
            if hand is not None:
                self.classifier.classify(hand, now)
                self.watchdog.seen(now)
                control = self.mapper.update(hand)
                self.rig.apply(control, self.state.mode)
            else:
                self._check_presence(now)

            camera = self.rig.step(delta, self.state.mode)

            return TickResult(
                mode=self.state.mode,
                gesture=self.classifier.gesture,
                raw_gesture=self.classifier.raw if hand is not None else None,
                hand_present=hand is not None,
                rejected=rejected,
                control=control,
                camera=camera,
            )

    def _check_presence(self, now: float) -> None:
        if self.state.mode in (AppMode.TREE, AppMode.LOADING):
            return
        if self.watchdog.expired(now):
            logger.info("No hand for %.1fs, back to the tree", now - self.watchdog.last_seen)
            self.state.transition_to(AppMode.TREE)
            self.watchdog.rearm(now)
