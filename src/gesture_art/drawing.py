from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import cv2  # type: ignore[import-untyped]

from .models.landmarks import HandLandmark, HandPose

if TYPE_CHECKING:
    from .orchestrator import TickResult
    from .tracker import StreamInfo

# Colors for drawing fingers (BGR format for OpenCV)
FINGER_COLORS = [
    (255, 0, 0),  # Blue - THUMB
    (0, 255, 0),  # Green - INDEX
    (0, 255, 255),  # Yellow - MIDDLE
    (255, 0, 255),  # Magenta - RING
    (255, 255, 0),  # Cyan - PINKY
]

# First landmark of each finger chain, the chain ends 3 indices later
FINGERS_STARTS = [
    HandLandmark.THUMB_CMC,
    HandLandmark.INDEX_FINGER_MCP,
    HandLandmark.MIDDLE_FINGER_MCP,
    HandLandmark.RING_FINGER_MCP,
    HandLandmark.PINKY_MCP,
]

OpenCVImage: TypeAlias = cv2.typing.MatLike  # Type alias for images (numpy arrays)


def to_pixels(pose: HandPose, width: int, height: int, mirroring: bool) -> list[tuple[int, int]]:
    return [
        (int(round(((1 - lm.x) if mirroring else lm.x) * width)), int(round(lm.y * height))) for lm in pose
    ]


def draw_pose(pose: HandPose, image: OpenCVImage, mirroring: bool = False) -> OpenCVImage:
    """Draw the hand skeleton, each finger with its own color."""
    height, width = image.shape[:2]
    points = to_pixels(pose, width, height, mirroring)
    wrist = points[HandLandmark.WRIST]

    for start, color in zip(FINGERS_STARTS, FINGER_COLORS, strict=True):
        chain = [wrist] + points[start : start + 4]
        for a, b in zip(chain, chain[1:]):
            cv2.line(image, a, b, color, 2)
        for point in chain[1:]:
            cv2.circle(image, point, 4, color, -1)

    cv2.circle(image, wrist, 6, (255, 255, 255), -1)
    return image


def draw_tick_info(result: TickResult, stream_info: StreamInfo, image: OpenCVImage) -> OpenCVImage:
    """Write the mode, gestures, camera values and stream metrics on the image."""
    lines = [
        f"Mode: {result.mode.name}",
        f"Gesture: {result.gesture.name}"
        + (f" (raw: {result.raw_gesture.name})" if result.raw_gesture is not None else " (no hand)"),
        f"Camera: yaw={result.camera.yaw:+.2f} pitch={result.camera.pitch:+.2f} zoom={result.camera.zoom:+.2f}",
        f"FPS: {stream_info.frames_fps:.1f} | Tracking: {stream_info.tracking_fps:.1f}"
        f" | Latency: {stream_info.latency * 1000:.0f}ms",
    ]
    for index, line in enumerate(lines):
        cv2.putText(image, line, (10, 30 + index * 25), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2)

    if result.rejected:
        cv2.putText(image, "Rejected sample", (10, 30 + len(lines) * 25), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 255), 2)
    return image
