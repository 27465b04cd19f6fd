from .landmarks import (
    NB_LANDMARKS,
    HandLandmark,
    HandPose,
    Landmark,
    LandmarkGroups,
    MalformedPoseError,
)

__all__ = [
    "NB_LANDMARKS",
    "HandLandmark",
    "HandPose",
    "Landmark",
    "LandmarkGroups",
    "MalformedPoseError",
]
