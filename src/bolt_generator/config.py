"""Configuration management for the bolt generator.

Uses pydantic-settings for environment variable support with validation.
"""

import math
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class BoltSettings(BaseSettings):
    """Generator configuration with environment variable support."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log format: json or console"
    )

    # Kernel selection
    kernel: Literal["reference", "fusion"] = Field(
        default="reference",
        description="Geometry kernel: reference (in-memory) or fusion (Fusion 360 host)"
    )

    # Expression evaluation
    default_length_unit: Literal["mm", "cm", "m", "in", "ft"] = Field(
        default="cm",
        description="Unit applied to unitless numbers in length expressions"
    )
    default_angle_unit: Literal["deg", "rad"] = Field(
        default="deg",
        description="Unit applied to unitless numbers in angle expressions"
    )

    # Thread data lookup
    thread_match_tolerance: float = Field(
        default=0.005,
        description="Largest diameter mismatch (cm) accepted for a thread recommendation"
    )

    # Default bolt, canonical units (cm, rad)
    default_name: str = Field(default="Bolt", description="Default body name")
    default_head_diameter: float = Field(default=0.75)
    default_body_diameter: float = Field(default=0.5)
    default_head_height: float = Field(default=0.3125)
    default_body_length: float = Field(default=2.0)
    default_cut_angle: float = Field(default=math.radians(30.0))
    default_chamfer_distance: float = Field(default=0.03845)
    default_fillet_radius: float = Field(default=0.02994)

    model_config = {
        "env_prefix": "BOLT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Singleton instance
_config: Optional[BoltSettings] = None


def get_config() -> BoltSettings:
    """Get the configuration singleton."""
    global _config
    if _config is None:
        _config = BoltSettings()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (for testing)."""
    global _config
    _config = None
