"""Stateless distance helpers over hand landmarks.

All distances are computed in 2D on the normalized ``x``/``y`` coordinates, the
depth estimate is ignored.
"""

from __future__ import annotations

from collections.abc import Sequence
from math import hypot, inf
from typing import Any

import numpy as np

from .models.landmarks import HandLandmark, HandPose, Landmark


def distance_2d(a: Landmark, b: Landmark) -> float:
    """Euclidean distance between two landmarks, ignoring z."""
    return hypot(a.x - b.x, a.y - b.y)


def distances_from(
    pose: HandPose, origin: HandLandmark, targets: Sequence[HandLandmark]
) -> np.ndarray[Any, np.dtype[np.float64]]:
    """Distances from one landmark to each of the ``targets``, in the same order."""
    points = pose.xy
    return np.linalg.norm(points[list(targets)] - points[origin], axis=1)  # type: ignore[no-any-return]


def distance_ratios(
    pose: HandPose,
    tips: Sequence[HandLandmark],
    bases: Sequence[HandLandmark],
    origin: HandLandmark = HandLandmark.WRIST,
) -> list[float]:
    """For each (tip, base) pair, ``dist(origin, tip) / dist(origin, base)``.

    A base sitting on the origin gives ``inf`` if the tip is away from it, 1.0 otherwise.
    """
    if len(tips) != len(bases):
        raise ValueError(f"Got {len(tips)} tips for {len(bases)} bases")
    tip_distances = distances_from(pose, origin, tips)
    base_distances = distances_from(pose, origin, bases)
    ratios = []
    for tip_distance, base_distance in zip(tip_distances, base_distances, strict=True):
        if base_distance == 0:
            ratios.append(inf if tip_distance > 0 else 1.0)
        else:
            ratios.append(float(tip_distance / base_distance))
    return ratios


def hand_center(pose: HandPose) -> tuple[float, float]:
    """Mean position of the wrist and the middle fingertip."""
    wrist = pose[HandLandmark.WRIST]
    middle_tip = pose[HandLandmark.MIDDLE_FINGER_TIP]
    return (wrist.x + middle_tip.x) / 2, (wrist.y + middle_tip.y) / 2


def hand_span(pose: HandPose) -> float:
    """Distance between the wrist and the middle fingertip, grows as the hand gets closer."""
    return distance_2d(pose[HandLandmark.WRIST], pose[HandLandmark.MIDDLE_FINGER_TIP])
