from __future__ import annotations

import logging
from math import pi
from pathlib import Path

import platformdirs
from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger("gesture_art.config")


class ClassifierConfig(BaseModel):
    history_size: int = Field(6, ge=1, description="Number of raw gestures kept for the majority vote")
    cooldown_ms: float = Field(300.0, ge=0, description="Minimum delay (ms) between two committed gesture changes")
    pinch_threshold: float = Field(
        0.05, gt=0, description="Max thumb tip to index tip distance (normalized) for a pinch"
    )
    fist_fold_ratio: float = Field(
        1.2, gt=0, description="A finger is folded when wrist-to-tip < ratio x wrist-to-MCP"
    )
    open_extend_ratio: float = Field(
        1.5, gt=0, description="A finger is extended when wrist-to-tip > ratio x wrist-to-MCP"
    )

    @property
    def cooldown(self) -> float:
        """Cooldown in seconds."""
        return self.cooldown_ms / 1000


class MapperConfig(BaseModel):
    min_span: float = Field(0.15, gt=0, description="Wrist to middle tip distance of a far hand (normalized)")
    max_span: float = Field(0.4, gt=0, description="Wrist to middle tip distance of a close hand (normalized)")
    max_yaw: float = Field(pi / 1.5, ge=0, description="Yaw (radians) reached with the hand at the frame edge")
    max_pitch: float = Field(pi / 6, ge=0, description="Pitch (radians) reached with the hand at the frame edge")
    min_zoom: float = Field(-2.0, description="Lowest zoom offset (far hand)")
    max_zoom: float = Field(2.5, description="Highest zoom offset (close hand), also the zoom gain")

    @model_validator(mode="after")
    def check_ranges(self) -> MapperConfig:
        if self.min_span >= self.max_span:
            raise ValueError(f"min_span ({self.min_span}) must be lower than max_span ({self.max_span})")
        if self.min_zoom > self.max_zoom:
            raise ValueError(f"min_zoom ({self.min_zoom}) must not exceed max_zoom ({self.max_zoom})")
        return self


class StateConfig(BaseModel):
    skip_loading: bool = Field(False, description="Start directly in TREE mode instead of LOADING")
    hand_lost_timeout: float = Field(10.0, ge=0, description="Seconds without a hand before going back to TREE")
    auto_rotate_speed: float = Field(0.2, description="Yaw speed (radians/s) of the idle rotation in TREE mode")
    ease_rate: float = Field(2.0, ge=0, description="Rate at which the camera eases toward its targets")


class KeyBindings(BaseModel):
    tree: str = Field("f", description="Key forcing TREE mode")
    expanded: str = Field("o", description="Key forcing EXPANDED mode")
    focus: str = Field("p", description="Key forcing FOCUS mode")
    back: str = Field("escape", description="Key going back to EXPANDED mode")


class CLIConfig(BaseModel):
    """Configuration for CLI settings."""

    camera: int = Field(0, ge=0, description="OpenCV index of the camera to open")
    mirror: bool = Field(True, description="Mirror the preview window horizontally")
    size: int = Field(1280, gt=0, description="Maximum dimension for camera capture resolution")
    preview: bool = Field(True, description="Show the preview window")


class Config(BaseModel):
    classifier: ClassifierConfig = Field(
        default_factory=lambda: ClassifierConfig(), description="Gesture classification configuration"
    )
    mapper: MapperConfig = Field(
        default_factory=lambda: MapperConfig(), description="Hand position to camera control configuration"
    )
    state: StateConfig = Field(default_factory=lambda: StateConfig(), description="Application modes configuration")
    keys: KeyBindings = Field(default_factory=lambda: KeyBindings(), description="Keyboard fallback bindings")
    cli: CLIConfig = Field(default_factory=lambda: CLIConfig(), description="CLI configuration")

    @classmethod
    def get_user_path(cls) -> Path:
        app_name = "gesture-art"
        config_dir = Path(platformdirs.user_config_dir(app_name))
        return config_dir / "config.json"

    @classmethod
    def validate_path(cls, path: Path | str | None) -> Path:
        if path is None:
            path = cls.get_user_path()
        elif isinstance(path, str):
            path = Path(path)

        return path.resolve()

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        path = cls.validate_path(path)

        if not path.exists():
            # If the config file does not exist, return a default config
            logger.info("Config file %s does not exist. Using default config.", path)
            return cls()

        if not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        try:
            return cls.model_validate_json(path.read_text(), strict=True)
        except (OSError, ValidationError) as exc:
            logger.error("Error loading config from %s: %s", path, exc)
            logger.warning("Using default config.")
            return cls()

    def save(self, path: Path | str | None = None) -> Path:
        path = self.validate_path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.exists() and not path.is_file():
            raise ValueError(f"Path {path} exists and is not a file.")

        try:
            path.write_text(self.model_dump_json(indent=2))
        except OSError as exc:
            logger.error("Error saving config to %s: %s", path, exc)
            raise
        return path
