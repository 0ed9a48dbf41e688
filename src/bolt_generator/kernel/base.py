"""Geometry kernel interface.

The builder stages talk to a solid modeler only through this interface.
Every method takes and returns the immutable handles from
``bolt_generator.models``; implementations keep the mapping from handle IDs
to their native objects.

Implementations raise ``GeometryError`` when the modeler rejects an
operation and ``ResourceError`` when the component cannot be created.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import (
    BodyHandle,
    BodyRef,
    ComponentRef,
    EdgeSelection,
    ExtentDirection,
    ExtrudeResult,
    FaceRef,
    FeatureOperation,
    FeatureRecord,
    LoopRef,
    Point3D,
    ProfileRef,
    SketchRef,
    ThreadInfo,
    ThreadRecommendation,
)


class GeometryKernel(ABC):
    """Solid-modeling primitives needed to build a bolt."""

    name: str = "kernel"

    # --- Containers ---

    @abstractmethod
    def create_component(self, name: str) -> ComponentRef:
        """Create a new, empty component to own the bolt body."""

    @abstractmethod
    def create_sketch(self, component: ComponentRef, plane: str) -> SketchRef:
        """Create a sketch on the component's XY, XZ or YZ construction plane."""

    # --- Sketch curves ---

    @abstractmethod
    def add_line(self, sketch: SketchRef, start: Point3D, end: Point3D) -> None:
        """Add a line between two model-space points lying on the sketch plane."""

    @abstractmethod
    def add_circle(self, sketch: SketchRef, center: Point3D, radius: float) -> None:
        """Add a circle centred on a model-space point lying on the sketch plane."""

    @abstractmethod
    def profiles(self, sketch: SketchRef) -> List[ProfileRef]:
        """Closed profiles of the sketch, in discovery order."""

    # --- Features ---

    @abstractmethod
    def extrude(
        self,
        component: ComponentRef,
        profile: ProfileRef,
        distance: float,
        direction: ExtentDirection = ExtentDirection.POSITIVE,
        operation: FeatureOperation = FeatureOperation.NEW_BODY,
    ) -> ExtrudeResult:
        """Extrude a profile along its sketch normal by ``distance``."""

    @abstractmethod
    def revolve(
        self,
        component: ComponentRef,
        profile: ProfileRef,
        axis: str,
        angle: float,
        operation: FeatureOperation = FeatureOperation.CUT,
    ) -> FeatureRecord:
        """Revolve a profile about a construction axis by ``angle`` radians."""

    @abstractmethod
    def chamfer(self, component: ComponentRef, edges: EdgeSelection, distance: float) -> FeatureRecord:
        """Apply one equal-distance chamfer to every selected edge."""

    @abstractmethod
    def fillet(
        self,
        component: ComponentRef,
        edges: EdgeSelection,
        radius: float,
        tangent_chain: bool = True,
    ) -> FeatureRecord:
        """Apply one constant-radius fillet to every selected edge."""

    # --- Threads ---

    @abstractmethod
    def recommend_thread(
        self,
        component: ComponentRef,
        diameter: float,
        internal: bool = False,
    ) -> Optional[ThreadRecommendation]:
        """Recommended thread for a diameter in the default metric family, or None."""

    @abstractmethod
    def apply_thread(self, component: ComponentRef, face: FaceRef, info: ThreadInfo) -> FeatureRecord:
        """Add a thread feature to a cylindrical face."""

    # --- Queries ---

    @abstractmethod
    def rename_body(self, body: BodyRef, name: str) -> None:
        """Set a body's display name."""

    @abstractmethod
    def feature_faces(self, feature_id: str, role: str) -> List[FaceRef]:
        """Current start, end or side faces of an extrude feature.

        Face handles from an earlier ``extrude`` result may no longer match
        the body once later features have modified it; stages re-read the
        faces they finish or thread through this query.
        """

    @abstractmethod
    def face_loops(self, face: FaceRef) -> List[LoopRef]:
        """Boundary loops of a face."""

    @abstractmethod
    def describe_body(self, body: BodyRef) -> BodyHandle:
        """Summary of a body's current state."""
