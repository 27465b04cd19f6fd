"""Synthetic hand poses for the tests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from gesture_art.models import HandLandmark, HandPose

Point = tuple[float, float]

WRIST: Point = (0.5, 0.9)

# MCP joint of each non-thumb finger, about 0.2 away from the wrist
FINGERS_MCPS: dict[HandLandmark, Point] = {
    HandLandmark.INDEX_FINGER_MCP: (0.44, 0.7),
    HandLandmark.MIDDLE_FINGER_MCP: (0.5, 0.7),
    HandLandmark.RING_FINGER_MCP: (0.56, 0.7),
    HandLandmark.PINKY_MCP: (0.62, 0.72),
}

THUMB_EXTENDED: list[Point] = [(0.42, 0.85), (0.36, 0.8), (0.31, 0.75), (0.27, 0.7)]
THUMB_TUCKED: list[Point] = [(0.42, 0.85), (0.36, 0.8), (0.38, 0.84), (0.40, 0.85)]

FOLDED = 0.7
HALF_BENT = 1.35
EXTENDED = 2.5


def along(base: Point, ratio: float, origin: Point = WRIST) -> Point:
    """Point on the line from ``origin`` through ``base``, at ``ratio`` times the base distance."""
    return origin[0] + (base[0] - origin[0]) * ratio, origin[1] + (base[1] - origin[1]) * ratio


def make_pose(
    ratios: float | Sequence[float] = HALF_BENT,
    thumb: Sequence[Point] = THUMB_EXTENDED,
    overrides: Mapping[int, Point] | None = None,
) -> HandPose:
    """Build a pose whose fingertips are at ``ratio`` times their MCP distance from the wrist.

    ``ratios`` is either one value for the four fingers or one value per finger (index first).
    """
    if isinstance(ratios, (int, float)):
        ratios = [float(ratios)] * 4
    points: list[Point] = [WRIST] + list(thumb)
    for (_mcp, base), ratio in zip(FINGERS_MCPS.items(), ratios, strict=True):
        points += [
            base,
            along(base, (1 + ratio) / 2),
            along(base, (1 + 3 * ratio) / 4),
            along(base, ratio),
        ]
    for index, point in (overrides or {}).items():
        points[index] = point
    return HandPose.from_points(points)


def fist_pose() -> HandPose:
    return make_pose(FOLDED, thumb=THUMB_TUCKED)


def open_pose() -> HandPose:
    return make_pose(EXTENDED)


def pinch_pose() -> HandPose:
    return make_pose(
        EXTENDED,
        overrides={HandLandmark.THUMB_TIP: (0.50, 0.50), HandLandmark.INDEX_FINGER_TIP: (0.52, 0.51)},
    )


def neutral_pose() -> HandPose:
    return make_pose(HALF_BENT)


def span_pose(center: Point = (0.5, 0.5), span: float = 0.275, dx: float = 0.0) -> HandPose:
    """Pose whose wrist and middle fingertip are ``span`` apart around ``center``."""
    wrist = (center[0] - dx / 2, center[1] + span / 2)
    middle_tip = (center[0] + dx / 2, center[1] - span / 2)
    points = [center] * 21
    points[HandLandmark.WRIST] = wrist
    points[HandLandmark.MIDDLE_FINGER_TIP] = middle_tip
    return HandPose.from_points(points)


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class Recorder:
    """Listener keeping every call it receives."""

    def __init__(self, name: str = "", log: list[tuple[str, object]] | None = None) -> None:
        self.name = name
        self.calls: list[object] = []
        self.log = log

    def __call__(self, value: object) -> None:
        self.calls.append(value)
        if self.log is not None:
            self.log.append((self.name, value))
