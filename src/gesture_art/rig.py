"""Camera state easing toward the control targets, depending on the mode."""

from __future__ import annotations

from .config import StateConfig
from .mapper import ControlSignal
from .smoothing import LerpSmoother
from .state import AppMode


class CameraRig:
    """Current and target yaw/pitch/zoom of the scene content.

    Targets are only written in ``EXPANDED`` mode. In ``TREE`` mode the content slowly
    rotates on its own, in ``FOCUS`` mode it is brought back to its rest position.
    """

    def __init__(self, config: StateConfig | None = None) -> None:
        self.config = config or StateConfig()
        self.target = ControlSignal(0.0, 0.0, 0.0)
        self.yaw = LerpSmoother()
        self.pitch = LerpSmoother()
        self.zoom = LerpSmoother()

    def apply(self, signal: ControlSignal, mode: AppMode) -> bool:
        """Use ``signal`` as the new target if ``mode`` lets the hand drive the camera."""
        if mode is not AppMode.EXPANDED:
            return False
        self.target = signal
        return True

    def step(self, delta: float, mode: AppMode) -> ControlSignal:
        """Advance the current values by ``delta`` seconds and return them."""
        rate = delta * self.config.ease_rate
        if mode is AppMode.TREE:
            self.target = self.target._replace(yaw=self.target.yaw + delta * self.config.auto_rotate_speed)
            self.yaw.snap(self.target.yaw)
            self.pitch.step(0.0, delta)
            self.zoom.step(0.0, delta)
        elif mode is AppMode.EXPANDED:
            self.yaw.step(self.target.yaw, rate)
            self.pitch.step(self.target.pitch, rate)
            self.zoom.step(self.target.zoom, rate)
        elif mode is AppMode.FOCUS:
            self.yaw.step(0.0, rate)
            self.pitch.step(0.0, rate)
            self.zoom.step(0.0, rate)
        # Nothing moves while loading
        return self.snapshot()

    def snapshot(self) -> ControlSignal:
        return ControlSignal(yaw=self.yaw.value, pitch=self.pitch.value, zoom=self.zoom.value)
