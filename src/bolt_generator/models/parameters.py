"""Bolt parameter models.

``BoltParameters`` is the resolved, immutable parameter set consumed by the
builder stages. ``RawBoltInputs`` is what callers hand to the resolver:
every value is either a canonical float or an expression string.
"""

import math
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, model_validator

# Resolution order follows the field order; later fields may reference earlier ones
LENGTH_FIELDS = (
    "head_diameter",
    "body_diameter",
    "head_height",
    "body_length",
    "chamfer_distance",
    "fillet_radius",
)
ANGLE_FIELDS = ("cut_angle",)

RawValue = Union[float, str]


class BoltParameters(BaseModel):
    """Resolved bolt parameters (lengths in cm, angle in radians)."""

    name: str = Field(default="Bolt", min_length=1, description="Body name")
    head_diameter: float = Field(gt=0, description="Across-corners diameter of the hex head")
    body_diameter: float = Field(gt=0, description="Shank diameter")
    head_height: float = Field(gt=0, description="Head height along the bolt axis")
    body_length: float = Field(gt=0, description="Shank length below the head")
    cut_angle: float = Field(description="Under-head taper angle in radians")
    chamfer_distance: float = Field(gt=0, description="Chamfer at the shank end")
    fillet_radius: float = Field(gt=0, description="Fillet where the shank meets the head")

    @model_validator(mode="after")
    def check_proportions(self) -> "BoltParameters":
        """Enforce cross-field invariants."""
        if not 0.0 < self.cut_angle < math.pi / 2:
            raise ValueError("cut_angle must lie strictly between 0 and 90 degrees")
        if self.head_diameter <= self.body_diameter:
            raise ValueError("head_diameter must be larger than body_diameter")
        return self

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "name": "Bolt",
                "head_diameter": 0.75,
                "body_diameter": 0.5,
                "head_height": 0.3125,
                "body_length": 2.0,
                "cut_angle": math.pi / 6,
                "chamfer_distance": 0.03845,
                "fillet_radius": 0.02994,
            }
        }
    }


class RawBoltInputs(BaseModel):
    """Unresolved inputs; ``None`` means use the configured default."""

    name: Optional[str] = None
    head_diameter: Optional[RawValue] = None
    body_diameter: Optional[RawValue] = None
    head_height: Optional[RawValue] = None
    body_length: Optional[RawValue] = None
    cut_angle: Optional[RawValue] = None
    chamfer_distance: Optional[RawValue] = None
    fillet_radius: Optional[RawValue] = None

    # Named expressions usable inside the bolt parameter expressions
    user_parameters: Dict[str, RawValue] = Field(default_factory=dict)
