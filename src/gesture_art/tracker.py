from __future__ import annotations

import logging
import os
import time
import urllib.request
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, NamedTuple, TypeAlias

import cv2  # type: ignore[import-untyped]

from .mediapipe import (
    BaseOptions,
    HandLandmarker,
    HandLandmarkerOptions,
    HandLandmarkerResult,
    RunningMode,
    mp,
)
from .models.landmarks import HandPose, MalformedPoseError

logger = logging.getLogger("gesture_art.tracker")

OpenCVImage: TypeAlias = cv2.typing.MatLike  # Type alias for images (numpy arrays)


@dataclass
class TrackerResult:
    pose: HandPose | None  # First detected hand, None if no hand
    timestamp: float  # Timestamp of the result


class StreamInfo(NamedTuple):
    frames_count: int  # Total number of frames read from the camera
    tracked_frames_count: int  # Number of frames with a new landmarker result
    frames_fps: float
    tracking_fps: float
    latency: float  # Time since the frame of the current result
    width: int
    height: int


class HandTracker:
    """Runs the MediaPipe hand landmarker on a video stream, keeping only the first hand."""

    model_url: ClassVar[str] = (
        "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
    )

    def __init__(self, model_path: str, use_gpu: bool = False) -> None:
        self.last_result: TrackerResult | None = None

        self.check_model(model_path)

        self.landmarker: HandLandmarker | None = HandLandmarker.create_from_options(
            HandLandmarkerOptions(
                base_options=BaseOptions(
                    model_asset_path=model_path,
                    delegate=BaseOptions.Delegate.GPU if use_gpu else BaseOptions.Delegate.CPU,
                ),
                running_mode=RunningMode.LIVE_STREAM,
                num_hands=1,
                min_hand_detection_confidence=0.5,
                min_hand_presence_confidence=0.5,
                min_tracking_confidence=0.5,
                result_callback=self.save_result,
            )
        )

    def check_model(self, model_path: str) -> None:
        if os.path.exists(model_path):
            return
        logger.info("Model file '%s' not found. Downloading...", model_path)
        try:
            urllib.request.urlretrieve(self.model_url, model_path)
        except OSError as exc:
            raise RuntimeError(f"Could not download model from {self.model_url}: {exc}") from exc
        logger.info("Successfully downloaded model to '%s'", model_path)

    def save_result(self, result: HandLandmarkerResult, input_image: mp.Image, timestamp_ms: int) -> None:
        """Save the latest hand landmarker result (called from the MediaPipe thread)."""
        pose = None
        if result.hand_landmarks:
            try:
                pose = HandPose.from_mediapipe(result.hand_landmarks[0])
            except MalformedPoseError as exc:
                logger.warning("Ignoring landmarker result: %s", exc)
        self.last_result = TrackerResult(pose=pose, timestamp=timestamp_ms / 1000)

    def track_image_from_opencv(self, frame: OpenCVImage, timestamp: float) -> mp.Image:
        # OpenCV frames are BGR, MediaPipe wants RGB
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)
        if self.landmarker is None:
            raise RuntimeError("Hand tracker is closed")
        self.landmarker.detect_async(image, int(timestamp * 1000))
        return image

    def close(self) -> None:
        if self.landmarker:
            self.landmarker.close()
            self.landmarker = None

    def __enter__(self) -> HandTracker:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: object) -> None:
        self.close()

    def handle_opencv_capture(self, cap: cv2.VideoCapture) -> Iterator[tuple[OpenCVImage, StreamInfo, TrackerResult]]:
        """Yield each camera frame that comes with a new tracking result."""
        start_time = time.perf_counter()
        last_tracked_timestamp: float = -1
        frames_count = 0
        tracked_frames_count = 0

        while True:
            ret, frame = cap.read()
            if not ret:
                break
            frames_count += 1
            elapsed_time = time.perf_counter() - start_time

            image = self.track_image_from_opencv(frame, elapsed_time)

            result = self.last_result
            if result is None or result.timestamp == last_tracked_timestamp:
                continue
            last_tracked_timestamp = result.timestamp
            tracked_frames_count += 1

            yield (
                frame,
                StreamInfo(
                    frames_count=frames_count,
                    tracked_frames_count=tracked_frames_count,
                    frames_fps=frames_count / elapsed_time if elapsed_time > 0 else 0,
                    tracking_fps=tracked_frames_count / elapsed_time if elapsed_time > 0 else 0,
                    latency=elapsed_time - result.timestamp,
                    width=image.width,
                    height=image.height,
                ),
                result,
            )
