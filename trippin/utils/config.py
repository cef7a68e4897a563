"""
Trippin game configuration with Pydantic validation
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator
from pydantic import model_validator

logger = logging.getLogger(__name__)


class TrippinConfig(BaseModel):
    """Simulation configuration, immutable once an engine is built on it"""

    model_config = {"frozen": True}

    # Flyer physics
    GRAVITY: float = Field(default=1800.0, ge=0, description="Gravity in px/s^2")
    FLAP_IMPULSE: float = Field(default=-520.0, description="Flap velocity in px/s (up)")
    TERMINAL_VELOCITY: float = Field(default=900.0, gt=0, description="Max vertical speed")
    BIRD_SIZE: float = Field(default=72.0, gt=0, description="Flyer hitbox side in px")
    FLOOR_PADDING: float = Field(default=28.0, ge=0, description="Ground inset from bottom")

    # Scrolling
    SPEED: float = Field(default=260.0, gt=0, description="Base scroll speed in px/s")
    MAX_SPEED: float = Field(default=320.0, gt=0, description="Maximum scroll speed")
    SPEED_RAMP_PER_SEC: float = Field(default=4.0, ge=0, description="Speed ramp in px/s^2")

    # Pipes
    GAP_HEIGHT: float = Field(default=240.0, gt=0, description="Initial gap height in px")
    MIN_GAP_HEIGHT: float = Field(default=200.0, gt=0, description="Smallest gap height")
    GAP_SHRINK_PER_SEC: float = Field(default=0.0, ge=0, description="Gap shrink in px/s")
    PIPE_SPACING: float = Field(default=320.0, gt=0, description="Distance between pipes")
    PIPE_WIDTH: float = Field(default=72.0, gt=0, description="Pipe width in px")
    SPAWN_OFFSET: float = Field(default=40.0, ge=0, description="Spawn distance past screen")

    # Stamps
    STAMP_CHANCE: float = Field(default=0.35, ge=0, le=1, description="Stamp chance per pipe")

    # Host
    FPS: int = Field(default=60, gt=0, description="Frames per second")

    @field_validator("FLAP_IMPULSE")
    @classmethod
    def validate_flap_impulse(cls, v: float) -> float:
        """A zero impulse would make the flyer uncontrollable"""
        if v == 0:
            raise ValueError("FLAP_IMPULSE must not be zero")
        return v

    @model_validator(mode="after")
    def validate_ranges(self) -> "TrippinConfig":
        """Validate paired minimum/maximum settings"""
        if self.SPEED > self.MAX_SPEED:
            raise ValueError(f"SPEED ({self.SPEED}) must not exceed MAX_SPEED ({self.MAX_SPEED})")
        if self.MIN_GAP_HEIGHT > self.GAP_HEIGHT:
            raise ValueError(
                f"MIN_GAP_HEIGHT ({self.MIN_GAP_HEIGHT}) must not exceed "
                f"GAP_HEIGHT ({self.GAP_HEIGHT})"
            )
        return self

    @property
    def impulse(self) -> float:
        """Upward flap velocity, always negative"""
        return -abs(self.FLAP_IMPULSE)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization"""
        return self.model_dump()

    def save_to_file(self, filepath: str = "trippin_config.json") -> None:
        """Save configuration to a JSON file"""
        with open(Path(filepath), "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str = "trippin_config.json") -> "TrippinConfig":
        """Load configuration from a JSON file"""
        config_path = Path(filepath)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(config_path) as f:
            config_dict = json.load(f)

        return cls(**config_dict)

    @classmethod
    def get_editable_fields(cls) -> dict[str, dict[str, Any]]:
        """Get the fields with their type, description and default"""
        editable = {}
        for field_name, field_info in cls.model_fields.items():
            editable[field_name] = {
                "type": field_info.annotation,
                "description": field_info.description or "",
                "default": field_info.default,
            }
        return editable


def validate_trippin_config(
    config: TrippinConfig, screen_width: float, screen_height: float
) -> list[str]:
    """
    Check a configuration against a screen size.

    The model validators only reject values that are meaningless on their own.
    This looks for combinations that are legal but make the game unplayable.

    Args:
        config: Configuration to check
        screen_width: Visible width in px
        screen_height: Visible height in px

    Returns:
        List of warning messages, empty when everything looks playable
    """
    warnings: list[str] = []

    if screen_width <= 0 or screen_height <= 0:
        warnings.append("Screen dimensions must be positive")
        return warnings

    if config.BIRD_SIZE >= config.MIN_GAP_HEIGHT:
        warnings.append(
            f"BIRD_SIZE ({config.BIRD_SIZE}) does not fit through the smallest gap "
            f"({config.MIN_GAP_HEIGHT})"
        )

    playable_height = screen_height - config.FLOOR_PADDING
    if config.GAP_HEIGHT > playable_height:
        warnings.append(
            f"GAP_HEIGHT ({config.GAP_HEIGHT}) is larger than the playable height "
            f"({playable_height})"
        )

    # Random gap centres are drawn in [0.3h, 0.7h]
    if 0.3 * screen_height - config.GAP_HEIGHT / 2 < 0:
        warnings.append("Gap band may extend above the top of the screen")
    if 0.7 * screen_height + config.GAP_HEIGHT / 2 > playable_height:
        warnings.append("Gap band may extend below the floor")

    if config.PIPE_SPACING <= config.PIPE_WIDTH:
        warnings.append(
            f"PIPE_SPACING ({config.PIPE_SPACING}) leaves no room between pipes "
            f"of width {config.PIPE_WIDTH}"
        )

    if config.BIRD_SIZE >= screen_width * 0.25:
        warnings.append("BIRD_SIZE is too large for the flyer's horizontal position")

    if config.GRAVITY == 0:
        warnings.append("GRAVITY is zero, the flyer will not fall")

    if config.TERMINAL_VELOCITY < abs(config.FLAP_IMPULSE):
        warnings.append(
            f"TERMINAL_VELOCITY ({config.TERMINAL_VELOCITY}) clips the flap impulse "
            f"({abs(config.FLAP_IMPULSE)})"
        )

    return warnings


# Global default configuration
trippin_config = TrippinConfig()


def load_config_from_file(filepath: str = "trippin_config.json") -> TrippinConfig:
    """Load configuration from file, falling back to the defaults"""
    try:
        return TrippinConfig.load_from_file(filepath)
    except FileNotFoundError:
        logger.debug("No configuration file at %s, using defaults", filepath)
    except (ValidationError, ValueError, OSError) as e:
        logger.warning("Error loading config from %s: %s", filepath, e)
    return trippin_config
