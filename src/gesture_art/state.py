"""Discrete application modes and the machine switching between them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import TypeAlias

logger = logging.getLogger("gesture_art.state")


class AppMode(str, Enum):
    LOADING = "loading"  # Assets still loading, gestures are ignored
    TREE = "tree"  # Idle tree, slowly rotating
    EXPANDED = "expanded"  # Scene exploded, hand position drives the camera
    FOCUS = "focus"  # One item brought in front of the camera

    def __str__(self) -> str:
        return self.value


TransitionListener: TypeAlias = Callable[[AppMode], None]


class StateMachine:
    """Holds the current mode and notifies listeners when it changes.

    Every mode can be reached from every other one: deciding whether a transition is
    allowed (for example ignoring gestures while loading) is left to the caller.
    """

    def __init__(self, initial: AppMode = AppMode.LOADING) -> None:
        self._mode = AppMode(initial)
        self.listeners: list[TransitionListener] = []

    @property
    def mode(self) -> AppMode:
        return self._mode

    def on_transition(self, callback: TransitionListener) -> TransitionListener:
        """Register a listener called with the new mode after each change. Usable as a decorator."""
        self.listeners.append(callback)
        return callback

    def remove_listener(self, callback: TransitionListener) -> None:
        self.listeners.remove(callback)

    def transition_to(self, mode: AppMode | str) -> bool:
        """Switch to ``mode`` and notify listeners. Returns False (and notifies nobody) if already there."""
        mode = AppMode(mode)
        if mode is self._mode:
            return False

        logger.info("State transition: %s -> %s", self._mode.name, mode.name)
        self._mode = mode
        for listener in list(self.listeners):
            listener(mode)
        return True
