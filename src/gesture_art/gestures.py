from __future__ import annotations

from enum import Enum


class Gestures(str, Enum):
    NONE = "none"  # No recognized shape, also the fallback
    FIST = "fist"  # All four fingers folded toward the wrist
    OPEN = "open"  # Four fingers and the thumb extended
    PINCH = "pinch"  # Thumb tip touching the index tip

    def __str__(self) -> str:
        return self.value


# Enumeration order used to break ties in the majority vote (earlier wins)
GESTURES_ORDER: tuple[Gestures, ...] = (
    Gestures.NONE,
    Gestures.FIST,
    Gestures.OPEN,
    Gestures.PINCH,
)
