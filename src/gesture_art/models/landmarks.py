from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import IntEnum
from functools import cached_property
from typing import Any, ClassVar, NamedTuple, TypeAlias

import numpy as np

NB_LANDMARKS = 21


class MalformedPoseError(ValueError):
    """Raised when a hand pose sample does not hold exactly 21 usable landmarks."""


class HandLandmark(IntEnum):
    """MediaPipe hand landmark indices."""

    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


LandmarkGroup: TypeAlias = tuple[HandLandmark, ...]


class LandmarkGroups:
    # Non-thumb fingers, tips and their MCP joints in the same order
    FINGER_TIPS: ClassVar[LandmarkGroup] = (
        HandLandmark.INDEX_FINGER_TIP,
        HandLandmark.MIDDLE_FINGER_TIP,
        HandLandmark.RING_FINGER_TIP,
        HandLandmark.PINKY_TIP,
    )
    FINGER_MCPS: ClassVar[LandmarkGroup] = (
        HandLandmark.INDEX_FINGER_MCP,
        HandLandmark.MIDDLE_FINGER_MCP,
        HandLandmark.RING_FINGER_MCP,
        HandLandmark.PINKY_MCP,
    )


class Landmark(NamedTuple):
    """A landmark in normalized image coordinates.

    Attributes:
        x: X coordinate, 0 to 1 from the left of the unmirrored source image
        y: Y coordinate, 0 to 1 from the top of the source image
        z: Depth relative to the wrist, as estimated by MediaPipe
    """

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_mediapipe(cls, landmark: Any) -> Landmark:
        """Create a Landmark from a MediaPipe ``NormalizedLandmark`` (or anything with x, y and z)."""
        return cls(x=float(landmark.x), y=float(landmark.y), z=float(getattr(landmark, "z", 0.0) or 0.0))

    @property
    def xy(self) -> tuple[float, float]:
        """Get the (x, y) coordinates as a tuple."""
        return self.x, self.y


@dataclass(frozen=True)
class HandPose:
    """The 21 landmarks of one tracked hand for one frame."""

    landmarks: tuple[Landmark, ...]

    def __post_init__(self) -> None:
        if len(self.landmarks) != NB_LANDMARKS:
            raise MalformedPoseError(f"Expected {NB_LANDMARKS} landmarks, got {len(self.landmarks)}")

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> HandPose:
        """Build a pose from ``(x, y)`` or ``(x, y, z)`` items."""
        landmarks = []
        for index, point in enumerate(points):
            if isinstance(point, Landmark):
                landmarks.append(point)
                continue
            try:
                coordinates = tuple(float(value) for value in point)
            except (TypeError, ValueError) as exc:
                raise MalformedPoseError(f"Landmark {index} is not a sequence of numbers: {point!r}") from exc
            if len(coordinates) not in (2, 3):
                raise MalformedPoseError(f"Landmark {index} has {len(coordinates)} coordinates, expected 2 or 3")
            landmarks.append(Landmark(*coordinates))
        return cls(tuple(landmarks))

    @classmethod
    def from_mediapipe(cls, landmarks: Iterable[Any]) -> HandPose:
        """Build a pose from one hand of a MediaPipe ``HandLandmarkerResult``."""
        return cls(tuple(Landmark.from_mediapipe(landmark) for landmark in landmarks))

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)

    def __iter__(self) -> Iterator[Landmark]:
        return iter(self.landmarks)

    @cached_property
    def xy(self) -> np.ndarray[Any, np.dtype[np.float64]]:
        """2D coordinates as a ``(21, 2)`` array."""
        return np.array([(landmark.x, landmark.y) for landmark in self.landmarks], dtype=np.float64)

    def to_list(self) -> list[list[float]]:
        return [[landmark.x, landmark.y, landmark.z] for landmark in self.landmarks]
