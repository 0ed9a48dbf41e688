"""Topology handle models for the bolt generator.

Kernels hand out immutable handles carrying stable string IDs; the builder
stages never touch kernel-native objects directly.
"""

from pydantic import BaseModel, Field, computed_field
from typing import Callable, List, Optional, Tuple
from enum import Enum


class FeatureType(str, Enum):
    """Types of features in the build timeline."""
    EXTRUDE = "extrude"
    REVOLVE = "revolve"
    FILLET = "fillet"
    CHAMFER = "chamfer"
    THREAD = "thread"


class FeatureOperation(str, Enum):
    """Boolean operation types for features."""
    NEW_BODY = "new_body"
    JOIN = "join"
    CUT = "cut"


class ExtentDirection(str, Enum):
    """Extrusion direction relative to the sketch plane normal."""
    POSITIVE = "positive"
    NEGATIVE = "negative"


class FaceType(str, Enum):
    """Types of faces in B-Rep."""
    PLANAR = "planar"
    CYLINDRICAL = "cylindrical"
    CONICAL = "conical"
    TOROIDAL = "toroidal"
    OTHER = "other"


class EdgeType(str, Enum):
    """Types of edges in B-Rep."""
    LINE = "line"
    CIRCLE = "circle"
    ARC = "arc"
    OTHER = "other"


class ComponentRef(BaseModel):
    """Component that owns the bolt body."""

    id: str = Field(description="Unique component identifier")
    name: str = Field(description="Component display name")

    model_config = {"frozen": True}


class SketchRef(BaseModel):
    """Sketch on a construction plane."""

    id: str = Field(description="Unique sketch identifier")
    plane: str = Field(description="Construction plane: XY, XZ or YZ")

    model_config = {"frozen": True}


class ProfileRef(BaseModel):
    """Closed region discovered in a sketch."""

    id: str = Field(description="Unique profile identifier")
    sketch_id: str = Field(description="Owning sketch ID")
    curve_count: int = Field(default=0, description="Number of curves bounding the profile")
    area: float = Field(default=0.0, description="Enclosed area in cm^2")
    is_clockwise: bool = Field(default=False, description="Winding of the boundary in plane coordinates")

    model_config = {"frozen": True}


class EdgeRef(BaseModel):
    """An edge of a body."""

    id: str = Field(description="Unique edge identifier")
    edge_type: EdgeType = Field(default=EdgeType.OTHER, description="Type of edge geometry")

    model_config = {"frozen": True}


class LoopRef(BaseModel):
    """A closed boundary loop of a face."""

    edges: Tuple[EdgeRef, ...] = Field(default=(), description="Edges in loop order")
    is_outer: bool = Field(default=True, description="Whether this is the outer boundary")

    model_config = {"frozen": True}

    @computed_field
    @property
    def edge_count(self) -> int:
        """Number of edges in the loop."""
        return len(self.edges)


class FaceRef(BaseModel):
    """A face of a body."""

    id: str = Field(description="Unique face identifier")
    face_type: FaceType = Field(default=FaceType.OTHER, description="Type of face geometry")

    model_config = {"frozen": True}


class BodyRef(BaseModel):
    """A solid body."""

    id: str = Field(description="Unique body identifier")

    model_config = {"frozen": True}


class EdgeSelection(BaseModel):
    """Ordered set of edges fed to one chamfer or fillet."""

    edges: Tuple[EdgeRef, ...] = Field(description="Selected edges")

    model_config = {"frozen": True}

    @classmethod
    def from_loops(cls, loops: List[LoopRef]) -> "EdgeSelection":
        """Collect every edge of the given loops, in loop order."""
        return cls(edges=tuple(edge for loop in loops for edge in loop.edges))

    @property
    def ids(self) -> List[str]:
        """Edge IDs in selection order."""
        return [edge.id for edge in self.edges]

    def __len__(self) -> int:
        return len(self.edges)


class ExtrudeResult(BaseModel):
    """Faces produced by an extrusion."""

    feature_id: str = Field(description="Created feature ID")
    body: BodyRef = Field(description="Body created or modified")
    start_faces: List[FaceRef] = Field(default_factory=list, description="Caps on the sketch plane")
    end_faces: List[FaceRef] = Field(default_factory=list, description="Caps at the far end")
    side_faces: List[FaceRef] = Field(default_factory=list, description="Lateral faces")


class FeatureRecord(BaseModel):
    """A feature in the build timeline."""

    id: str = Field(description="Unique feature identifier")
    feature_type: FeatureType = Field(description="Type of feature")
    operation: Optional[FeatureOperation] = Field(default=None, description="Boolean operation, if any")
    body_id: Optional[str] = Field(default=None, description="Body the feature acted on")


class BodyHandle(BaseModel):
    """Summary of the finished bolt body."""

    id: str = Field(description="Unique body identifier")
    name: str = Field(description="Body display name")
    component_id: str = Field(description="Owning component ID")
    faces_count: int = Field(default=0, description="Number of faces")
    edges_count: int = Field(default=0, description="Number of edges")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "body_001",
                "name": "Bolt",
                "component_id": "component_001",
                "faces_count": 17,
                "edges_count": 40,
            }
        }
    }


def find_loop(loops: List[LoopRef], predicate: Callable[[LoopRef], bool]) -> Optional[LoopRef]:
    """Return the first loop matching ``predicate``, or None."""
    for loop in loops:
        if predicate(loop):
            return loop
    return None
