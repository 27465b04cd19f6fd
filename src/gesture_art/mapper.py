"""Hand position and size to camera control targets."""

from __future__ import annotations

from typing import NamedTuple

from .config import MapperConfig
from .geometry import hand_center, hand_span
from .models.landmarks import HandPose


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class HandMetrics(NamedTuple):
    normalized_x: float  # -1 (hand on the left of the scene) to 1 (right)
    normalized_y: float  # -1 (top) to 1 (bottom)
    normalized_size: float  # 0 (far, small hand) to 1 (close, large hand)


class ControlSignal(NamedTuple):
    yaw: float  # radians
    pitch: float  # radians
    zoom: float  # offset of the content toward the camera

    def to_dict(self) -> dict[str, float]:
        return {"yaw": self.yaw, "pitch": self.pitch, "zoom": self.zoom}


def hand_metrics(pose: HandPose, config: MapperConfig | None = None) -> HandMetrics:
    """Position and closeness of the hand, from the wrist and the middle fingertip.

    The x axis is flipped so that moving the hand to the right of the user (left of the
    unmirrored image) moves toward the right of the scene.
    """
    if config is None:
        config = MapperConfig()
    avg_x, avg_y = hand_center(pose)
    span = clamp(hand_span(pose), config.min_span, config.max_span)
    return HandMetrics(
        normalized_x=clamp((avg_x * 2 - 1) * -1, -1.0, 1.0),
        normalized_y=clamp(avg_y * 2 - 1, -1.0, 1.0),
        normalized_size=(span - config.min_span) / (config.max_span - config.min_span),
    )


class InteractionMapper:
    """Computes instantaneous camera targets from the hand.

    Targets are recomputed on every frame with a hand, whatever the current mode: the
    consumer decides whether to apply them, and eases toward them instead of snapping.
    """

    def __init__(self, config: MapperConfig | None = None) -> None:
        self.config = config or MapperConfig()
        self.last_signal: ControlSignal | None = None

    def map(self, metrics: HandMetrics) -> ControlSignal:
        config = self.config
        # The formula alone goes down to -max_zoom for a far hand, min_zoom is the actual floor
        zoom = (metrics.normalized_size - 0.5) * 2.0 * config.max_zoom
        return ControlSignal(
            yaw=metrics.normalized_x * config.max_yaw,
            pitch=-metrics.normalized_y * config.max_pitch,
            zoom=clamp(zoom, config.min_zoom, config.max_zoom),
        )

    def update(self, pose: HandPose) -> ControlSignal:
        self.last_signal = self.map(hand_metrics(pose, self.config))
        return self.last_signal
