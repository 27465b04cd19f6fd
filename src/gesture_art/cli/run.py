from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from ..config import Config
from ..orchestrator import Orchestrator, TickResult
from ..state import AppMode
from . import options
from .common import app, load_config

if TYPE_CHECKING:
    import cv2  # type: ignore[import-untyped]

logger = logging.getLogger("gesture_art.cli")

# OpenCV key codes that do not map to a printable character
SPECIAL_KEYS = {27: "escape"}
QUIT_KEY = "q"
WINDOW_NAME = "Gesture Art"


def key_name(code: int) -> str | None:
    if code == 0xFF:  # No key pressed
        return None
    if code in SPECIAL_KEYS:
        return SPECIAL_KEYS[code]
    return chr(code).lower()


def init_camera_capture(camera_index: int, desired_size: int) -> cv2.VideoCapture | None:
    """Open the camera, asking for a 16:9 resolution whose largest side is ``desired_size``."""
    import cv2

    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        logger.error("Could not open camera %d", camera_index)
        return None

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, desired_size)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, int(desired_size * 9 / 16))
    cap.set(cv2.CAP_PROP_FOURCC, cv2.VideoWriter.fourcc(*"MJPG"))  # Use MJPEG for better performance
    cap.set(cv2.CAP_PROP_FPS, 30)

    logger.info(
        "Camera %d opened at %dx%d with FPS: %.2f",
        camera_index,
        int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
        int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
        cap.get(cv2.CAP_PROP_FPS),
    )
    return cap


def log_changes(orchestrator: Orchestrator) -> None:
    @orchestrator.on_transition
    def _print_mode(mode: AppMode) -> None:
        typer.echo(f"Mode: {mode.name}")


def run_loop(config: Config, camera_index: int, show_preview: bool, mirror: bool, size: int, use_gpu: bool) -> None:
    """Track the hand on the camera stream and drive the orchestrator until the user quits."""
    # Imported here so the other commands work without OpenCV and MediaPipe
    import cv2

    from ..drawing import draw_pose, draw_tick_info
    from ..tracker import HandTracker

    orchestrator = Orchestrator(config)
    log_changes(orchestrator)

    cap = init_camera_capture(camera_index, size)
    if cap is None:
        raise typer.Exit(1)

    if show_preview:
        cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)

    logger.info("Loading hand landmarker model...")
    try:
        with HandTracker(
            os.getenv("HAND_LANDMARKER_MODEL_PATH", "").strip() or "hand_landmarker.task", use_gpu=use_gpu
        ) as tracker:
            orchestrator.ready()
            if show_preview:
                typer.echo(f"Keys: {', '.join(f'{key}={mode.name}' for key, mode in orchestrator.key_bindings.items())}")
                typer.echo(f"Press '{QUIT_KEY}' to quit")

            for frame, stream_info, tracked in tracker.handle_opencv_capture(cap):
                result: TickResult = orchestrator.tick(tracked.pose)

                if not show_preview:
                    continue

                if mirror:
                    frame = cv2.flip(frame, 1)
                if tracked.pose is not None:
                    frame = draw_pose(tracked.pose, frame, mirroring=mirror)
                frame = draw_tick_info(result, stream_info, frame)
                cv2.imshow(WINDOW_NAME, frame)

                key = key_name(cv2.waitKey(1) & 0xFF)
                if key == QUIT_KEY:
                    break
                if key is not None:
                    orchestrator.handle_key(key)

                # Check if window was closed
                try:
                    if cv2.getWindowProperty(WINDOW_NAME, cv2.WND_PROP_VISIBLE) < 1:
                        break
                except cv2.error:
                    break
    except KeyboardInterrupt:
        typer.echo("\nInterrupted by user")
    finally:
        cap.release()
        if show_preview:
            cv2.destroyAllWindows()


@app.command("run")
def run_cmd(
    camera: int | None = options.camera,
    preview: bool | None = options.preview,
    mirror: bool | None = options.mirror,
    size: int | None = options.size,
    gpu: bool = options.gpu,
    skip_loading: bool | None = options.skip_loading,
    config_path: Path | None = options.config,
    verbose: bool = options.verbose,
) -> None:
    """Run the gesture pipeline on a live camera.

    The default config location is platform-specific and will be shown if the config file is not found.
    """
    config = load_config(config_path, verbose)
    if skip_loading is not None:
        config.state.skip_loading = skip_loading

    # Use config values as defaults, but CLI options take precedence
    run_loop(
        config,
        camera_index=camera if camera is not None else config.cli.camera,
        show_preview=preview if preview is not None else config.cli.preview,
        mirror=mirror if mirror is not None else config.cli.mirror,
        size=size if size is not None else config.cli.size,
        use_gpu=gpu,
    )
