"""Pydantic models for the bolt generator."""

from .geometry import (
    Point2D,
    Point3D,
    Vector3D,
    PLANE_NORMALS,
    AXIS_DIRECTIONS,
    to_plane_coordinates,
)
from .parameters import (
    BoltParameters,
    RawBoltInputs,
    LENGTH_FIELDS,
    ANGLE_FIELDS,
)
from .topology import (
    FeatureType,
    FeatureOperation,
    ExtentDirection,
    FaceType,
    EdgeType,
    ComponentRef,
    SketchRef,
    ProfileRef,
    EdgeRef,
    LoopRef,
    FaceRef,
    BodyRef,
    EdgeSelection,
    ExtrudeResult,
    FeatureRecord,
    BodyHandle,
    find_loop,
)
from .thread import ThreadRecommendation, ThreadInfo
from .build import BuildResult

__all__ = [
    # Geometry
    "Point2D", "Point3D", "Vector3D", "PLANE_NORMALS", "AXIS_DIRECTIONS", "to_plane_coordinates",
    # Parameters
    "BoltParameters", "RawBoltInputs", "LENGTH_FIELDS", "ANGLE_FIELDS",
    # Topology
    "FeatureType", "FeatureOperation", "ExtentDirection", "FaceType", "EdgeType",
    "ComponentRef", "SketchRef", "ProfileRef", "EdgeRef", "LoopRef", "FaceRef", "BodyRef",
    "EdgeSelection", "ExtrudeResult", "FeatureRecord", "BodyHandle", "find_loop",
    # Thread
    "ThreadRecommendation", "ThreadInfo",
    # Build
    "BuildResult",
]
