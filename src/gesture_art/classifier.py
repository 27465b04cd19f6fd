"""Frame by frame hand shape classification with temporal smoothing."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from time import monotonic
from typing import TypeAlias

from .config import ClassifierConfig
from .geometry import distance_2d, distance_ratios, distances_from
from .gestures import GESTURES_ORDER, Gestures
from .models.landmarks import HandLandmark, HandPose, LandmarkGroups
from .smoothing import MajorityVoteSmoother

logger = logging.getLogger("gesture_art.classifier")

GestureListener: TypeAlias = Callable[[Gestures], None]
PoseInput: TypeAlias = HandPose | Sequence[Sequence[float]] | None


def is_pinch(pose: HandPose, threshold: float = 0.05) -> bool:
    """Thumb tip and index tip are closer than ``threshold``."""
    return distance_2d(pose[HandLandmark.THUMB_TIP], pose[HandLandmark.INDEX_FINGER_TIP]) < threshold


def count_folded_fingers(pose: HandPose, ratio: float = 1.2) -> int:
    """Number of non-thumb fingers whose tip is not much farther from the wrist than their MCP."""
    ratios = distance_ratios(pose, LandmarkGroups.FINGER_TIPS, LandmarkGroups.FINGER_MCPS)
    return sum(1 for value in ratios if value < ratio)


def count_extended_fingers(pose: HandPose, ratio: float = 1.5) -> int:
    """Number of extended fingers, thumb included (0 to 5)."""
    ratios = distance_ratios(pose, LandmarkGroups.FINGER_TIPS, LandmarkGroups.FINGER_MCPS)
    count = sum(1 for value in ratios if value > ratio)

    # The thumb is compared to its own MCP joint instead of using a ratio
    thumb_tip, thumb_mcp = distances_from(
        pose, HandLandmark.WRIST, (HandLandmark.THUMB_TIP, HandLandmark.THUMB_MCP)
    )
    if thumb_tip > thumb_mcp:
        count += 1
    return count


def is_fist(pose: HandPose, ratio: float = 1.2) -> bool:
    return count_folded_fingers(pose, ratio) >= len(LandmarkGroups.FINGER_TIPS)


def is_open(pose: HandPose, ratio: float = 1.5) -> bool:
    return count_extended_fingers(pose, ratio) >= len(LandmarkGroups.FINGER_TIPS) + 1


def detect_gesture(pose: HandPose, config: ClassifierConfig | None = None) -> Gestures:
    """Raw (unsmoothed) gesture of a single pose. Pinch wins over fist, which wins over open."""
    if config is None:
        config = ClassifierConfig()
    if is_pinch(pose, config.pinch_threshold):
        return Gestures.PINCH
    if is_fist(pose, config.fist_fold_ratio):
        return Gestures.FIST
    if is_open(pose, config.open_extend_ratio):
        return Gestures.OPEN
    return Gestures.NONE


class GestureClassifier:
    """Turns a stream of poses into debounced gesture changes.

    Each present pose adds its raw gesture to a short history. The majority vote of
    this history becomes the committed gesture when it differs from the current one,
    is not ``NONE``, and the cooldown since the previous commit is over. Listeners are
    called, in registration order, on each commit.
    """

    def __init__(self, config: ClassifierConfig | None = None, clock: Callable[[], float] = monotonic) -> None:
        self.config = config or ClassifierConfig()
        self.clock = clock
        self.smoother: MajorityVoteSmoother[Gestures] = MajorityVoteSmoother(
            GESTURES_ORDER, size=self.config.history_size
        )
        self.gesture = Gestures.NONE
        self.last_commit_time = clock()
        self.listeners: list[GestureListener] = []

    def on_gesture(self, callback: GestureListener) -> GestureListener:
        """Register a listener for committed gesture changes. Usable as a decorator."""
        self.listeners.append(callback)
        return callback

    def remove_listener(self, callback: GestureListener) -> None:
        self.listeners.remove(callback)

    @property
    def raw(self) -> Gestures | None:
        """Raw gesture of the last classified pose."""
        return self.smoother.raw

    @property
    def history(self) -> tuple[Gestures, ...]:
        return tuple(self.smoother.history)

    @property
    def vote(self) -> Gestures:
        return self.smoother.vote

    def classify(self, pose: PoseInput, now: float | None = None) -> Gestures:
        """Classify the pose of the current frame and return the committed gesture.

        ``None`` (or an empty sequence) means no hand: ``NONE`` is returned and the history
        is left untouched. Raises ``MalformedPoseError`` for a pose without 21 landmarks.
        """
        if pose is None or len(pose) == 0:
            return Gestures.NONE
        if not isinstance(pose, HandPose):
            pose = HandPose.from_points(pose)

        raw = detect_gesture(pose, self.config)
        vote = self.smoother.update(raw)
        logger.debug("Raw gesture: %s, vote: %s", raw, vote)

        if vote is not self.gesture and vote is not Gestures.NONE:
            if now is None:
                now = self.clock()
            if now - self.last_commit_time > self.config.cooldown:
                self.gesture = vote
                self.last_commit_time = now
                logger.info("Gesture detected: %s", vote.name)
                for listener in list(self.listeners):
                    listener(vote)

        return self.gesture

    def reset(self, now: float | None = None) -> None:
        """Forget the history and the committed gesture."""
        self.smoother.clear()
        self.gesture = Gestures.NONE
        self.last_commit_time = self.clock() if now is None else now
