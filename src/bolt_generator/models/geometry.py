"""Geometry models for the bolt generator.

Defines the value types used to describe sketch geometry. All coordinates
are in the canonical length unit (cm).
"""

from pydantic import BaseModel, Field, computed_field
from typing import Tuple
import math


class Point2D(BaseModel):
    """Point in a sketch plane (coordinates in cm)."""

    x: float = Field(default=0.0, description="First plane coordinate in cm")
    y: float = Field(default=0.0, description="Second plane coordinate in cm")

    model_config = {"frozen": True}

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point2D") -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


class Point3D(BaseModel):
    """3D point in model space (coordinates in cm)."""

    x: float = Field(default=0.0, description="X coordinate in cm")
    y: float = Field(default=0.0, description="Y coordinate in cm")
    z: float = Field(default=0.0, description="Z coordinate in cm")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {"x": 0.375, "y": 0.0, "z": 0.0}
        }
    }

    def to_tuple(self) -> Tuple[float, float, float]:
        """Convert to tuple."""
        return (self.x, self.y, self.z)

    def distance_to(self, other: "Point3D") -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt(
            (self.x - other.x) ** 2 +
            (self.y - other.y) ** 2 +
            (self.z - other.z) ** 2
        )


class Vector3D(BaseModel):
    """3D vector (direction and magnitude)."""

    x: float = Field(default=0.0, description="X component")
    y: float = Field(default=0.0, description="Y component")
    z: float = Field(default=0.0, description="Z component")

    model_config = {"frozen": True}

    @computed_field
    @property
    def magnitude(self) -> float:
        """Calculate vector magnitude/length."""
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)


# Construction planes, keyed by name, with their normals
PLANE_NORMALS = {
    "XY": Vector3D(x=0, y=0, z=1),
    "XZ": Vector3D(x=0, y=1, z=0),
    "YZ": Vector3D(x=1, y=0, z=0),
}

# Construction axes, keyed by name, with their directions
AXIS_DIRECTIONS = {
    "X": Vector3D(x=1, y=0, z=0),
    "Y": Vector3D(x=0, y=1, z=0),
    "Z": Vector3D(x=0, y=0, z=1),
}


def to_plane_coordinates(point: Point3D, plane: str) -> Point2D:
    """Project a model-space point onto a construction plane's 2D coordinates."""
    if plane == "XY":
        return Point2D(x=point.x, y=point.y)
    if plane == "XZ":
        return Point2D(x=point.x, y=point.z)
    if plane == "YZ":
        return Point2D(x=point.y, y=point.z)
    raise ValueError(f"plane must be one of {sorted(PLANE_NORMALS)}")
