"""Shared CLI option definitions."""

from __future__ import annotations

import typer

from .common import DEFAULT_USER_CONFIG_PATH

config = typer.Option(None, "--config", "-c", help=f"Path to config file. Default: {DEFAULT_USER_CONFIG_PATH}")

verbose = typer.Option(False, "--verbose", "-v", help="Log raw gestures and other debug information")

skip_loading = typer.Option(
    None, "--skip-loading/--no-skip-loading", help="Start in TREE mode (overrides the config file)"
)

camera = typer.Option(None, "--camera", "--cam", help="OpenCV index of the camera (overrides the config file)")

preview = typer.Option(None, "--preview/--no-preview", "-p/-np", help="Show visual preview window")

mirror = typer.Option(None, "--mirror/--no-mirror", "-m/-nm", help="Mirror the preview window")

size = typer.Option(None, "--size", "-s", help="Maximum dimension of the camera capture")

gpu = typer.Option(False, "--gpu/--no-gpu", "-g/-ng", help="Use GPU acceleration for the hand landmarker")
