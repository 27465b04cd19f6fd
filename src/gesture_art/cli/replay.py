from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import typer
from pydantic import BaseModel, Field, ValidationError

from ..orchestrator import Orchestrator
from . import options
from .common import app, load_config

DEFAULT_FRAME_DURATION = 1 / 30


class ReplayFrame(BaseModel):
    """One line of a recording."""

    t: float | None = Field(None, description="Timestamp in seconds, previous one + 1/30 if missing")
    landmarks: list[list[float]] | None = Field(None, description="Landmarks of the hand, null if no hand")
    key: str | None = Field(None, description="Key pressed before this frame")


def read_frames(path: Path) -> Iterator[tuple[int, ReplayFrame]]:
    with path.open() as file:
        for line_number, line in enumerate(file, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                yield line_number, ReplayFrame.model_validate_json(line)
            except ValidationError as exc:
                typer.echo(f"Invalid frame at line {line_number}: {exc}", err=True)
                raise typer.Exit(1) from exc


@app.command("replay")
def replay_cmd(
    recording: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON lines recording of hand poses"),
    ready_at: float = typer.Option(0.0, "--ready-at", help="Time (s) at which loading ends"),
    skip_loading: bool | None = options.skip_loading,
    config_path: Path | None = options.config,
    verbose: bool = options.verbose,
) -> None:
    """Feed a recording through the gesture pipeline, printing one JSON line per frame."""
    config = load_config(config_path, verbose)
    if skip_loading is not None:
        config.state.skip_loading = skip_loading

    orchestrator = Orchestrator(config, clock=lambda: 0.0)

    t = 0.0
    for index, (_line_number, frame) in enumerate(read_frames(recording)):
        if frame.t is not None:
            t = frame.t
        elif index:
            t += DEFAULT_FRAME_DURATION

        if t >= ready_at:
            orchestrator.ready()
        if frame.key is not None:
            orchestrator.handle_key(frame.key)

        result = orchestrator.tick(frame.landmarks, now=t)
        typer.echo(json.dumps({"t": round(t, 6), **result.to_dict()}))
