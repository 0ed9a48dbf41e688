"""Geometry kernel backed by the Fusion 360 API.

Only usable inside Fusion 360, where the ``adsk`` modules are importable.
Native objects are kept in a ``HandleRegistry``; the builder only ever sees
their IDs. Fusion works in cm and radians internally, which matches the
canonical units of ``BoltParameters``, so values pass through unchanged.
"""

from typing import Any, List, Optional

# Fusion 360 API imports
try:
    import adsk.core
    import adsk.fusion
    FUSION_AVAILABLE = True
except ImportError:
    FUSION_AVAILABLE = False

from shared.exceptions import BoltGeneratorError, GeometryError, ResourceError
from .base import GeometryKernel
from .registry import HandleRegistry
from ..logging import get_logger
from ..models import (
    BodyHandle,
    BodyRef,
    ComponentRef,
    EdgeRef,
    EdgeSelection,
    EdgeType,
    ExtentDirection,
    ExtrudeResult,
    FaceRef,
    FaceType,
    FeatureOperation,
    FeatureRecord,
    FeatureType,
    LoopRef,
    Point3D,
    ProfileRef,
    SketchRef,
    ThreadInfo,
    ThreadRecommendation,
)

logger = get_logger(__name__)


# Map operations to Fusion operation types
OPERATION_MAP = {
    FeatureOperation.NEW_BODY: adsk.fusion.FeatureOperations.NewBodyFeatureOperation if FUSION_AVAILABLE else 0,
    FeatureOperation.JOIN: adsk.fusion.FeatureOperations.JoinFeatureOperation if FUSION_AVAILABLE else 1,
    FeatureOperation.CUT: adsk.fusion.FeatureOperations.CutFeatureOperation if FUSION_AVAILABLE else 2,
}

DIRECTION_MAP = {
    ExtentDirection.POSITIVE: adsk.fusion.ExtentDirections.PositiveExtentDirection if FUSION_AVAILABLE else 0,
    ExtentDirection.NEGATIVE: adsk.fusion.ExtentDirections.NegativeExtentDirection if FUSION_AVAILABLE else 1,
}

PLANE_ATTRIBUTES = {
    "XY": "xYConstructionPlane",
    "XZ": "xZConstructionPlane",
    "YZ": "yZConstructionPlane",
}

AXIS_ATTRIBUTES = {
    "X": "xConstructionAxis",
    "Y": "yConstructionAxis",
    "Z": "zConstructionAxis",
}

FACE_ROLE_ATTRIBUTES = {
    "start": "startFaces",
    "end": "endFaces",
    "side": "sideFaces",
}


def _get_active_design() -> Any:
    """Get the active Fusion 360 design."""
    if not FUSION_AVAILABLE:
        raise ResourceError(
            "design",
            "Fusion 360 API not available. Running outside of Fusion 360.",
        )

    app = adsk.core.Application.get()
    if not app:
        raise ResourceError("design", "Cannot get Fusion 360 application instance.")

    design = adsk.fusion.Design.cast(app.activeProduct)
    if not design:
        raise ResourceError("design", "Active product is not a Design.")

    return design


def _face_type(face: Any) -> FaceType:
    surface_type = face.geometry.surfaceType
    surfaces = adsk.core.SurfaceTypes
    return {
        surfaces.PlaneSurfaceType: FaceType.PLANAR,
        surfaces.CylinderSurfaceType: FaceType.CYLINDRICAL,
        surfaces.ConeSurfaceType: FaceType.CONICAL,
        surfaces.TorusSurfaceType: FaceType.TOROIDAL,
    }.get(surface_type, FaceType.OTHER)


def _edge_type(edge: Any) -> EdgeType:
    curve_type = edge.geometry.curveType
    curves = adsk.core.Curve3DTypes
    return {
        curves.Line3DCurveType: EdgeType.LINE,
        curves.Circle3DCurveType: EdgeType.CIRCLE,
        curves.Arc3DCurveType: EdgeType.ARC,
    }.get(curve_type, EdgeType.OTHER)


class FusionKernel(GeometryKernel):
    """Drives the active Fusion 360 design."""

    name = "fusion"

    def __init__(self, registry: Optional[HandleRegistry] = None) -> None:
        self.registry = registry or HandleRegistry()

    # --- Containers ---

    def create_component(self, name: str) -> ComponentRef:
        design = _get_active_design()
        try:
            occurrence = design.rootComponent.occurrences.addNewComponent(adsk.core.Matrix3D.create())
            component = occurrence.component
            component.name = name
        except Exception as e:
            raise ResourceError("component", f"Failed to create component: {str(e)}")

        component_id = self.registry.register("component", component)
        logger.debug("Created component", component_id=component_id, name=name)
        return ComponentRef(id=component_id, name=component.name)

    def create_sketch(self, component: ComponentRef, plane: str) -> SketchRef:
        native = self._get("component", component.id, "sketch")
        plane = plane.upper()
        if plane not in PLANE_ATTRIBUTES:
            raise GeometryError("sketch", f"unknown construction plane '{plane}'")

        try:
            sketch = native.sketches.add(getattr(native, PLANE_ATTRIBUTES[plane]))
        except Exception as e:
            raise GeometryError("sketch", f"Failed to create sketch: {str(e)}", kernel_error=str(e))
        return SketchRef(id=self.registry.register("sketch", sketch), plane=plane)

    # --- Sketch curves ---

    def add_line(self, sketch: SketchRef, start: Point3D, end: Point3D) -> None:
        native = self._get("sketch", sketch.id, "add_line")
        try:
            native.sketchCurves.sketchLines.addByTwoPoints(
                native.modelToSketchSpace(adsk.core.Point3D.create(*start.to_tuple())),
                native.modelToSketchSpace(adsk.core.Point3D.create(*end.to_tuple())),
            )
        except Exception as e:
            raise GeometryError("add_line", f"Failed to add line: {str(e)}", kernel_error=str(e))

    def add_circle(self, sketch: SketchRef, center: Point3D, radius: float) -> None:
        native = self._get("sketch", sketch.id, "add_circle")
        try:
            native.sketchCurves.sketchCircles.addByCenterRadius(
                native.modelToSketchSpace(adsk.core.Point3D.create(*center.to_tuple())),
                radius,
            )
        except Exception as e:
            raise GeometryError("add_circle", f"Failed to add circle: {str(e)}", kernel_error=str(e))

    def profiles(self, sketch: SketchRef) -> List[ProfileRef]:
        native = self._get("sketch", sketch.id, "profiles")
        refs = []
        for i in range(native.profiles.count):
            profile = native.profiles.item(i)
            curve_count = sum(
                profile.profileLoops.item(j).profileCurves.count
                for j in range(profile.profileLoops.count)
            )
            refs.append(ProfileRef(
                id=self.registry.register("profile", profile),
                sketch_id=sketch.id,
                curve_count=curve_count,
                area=profile.areaProperties().area,
            ))
        return refs

    # --- Features ---

    def extrude(
        self,
        component: ComponentRef,
        profile: ProfileRef,
        distance: float,
        direction: ExtentDirection = ExtentDirection.POSITIVE,
        operation: FeatureOperation = FeatureOperation.NEW_BODY,
    ) -> ExtrudeResult:
        native = self._get("component", component.id, "extrude")
        native_profile = self._get("profile", profile.id, "extrude")

        try:
            extrudes = native.features.extrudeFeatures
            extrude_input = extrudes.createInput(native_profile, OPERATION_MAP[operation])
            extent = adsk.fusion.DistanceExtentDefinition.create(adsk.core.ValueInput.createByReal(distance))
            extrude_input.setOneSideExtent(extent, DIRECTION_MAP[direction])
            feature = extrudes.add(extrude_input)

            if not feature:
                raise GeometryError("extrude", "Extrusion operation failed")

            body = feature.bodies.item(0)
            return ExtrudeResult(
                feature_id=self.registry.register("feature", feature),
                body=BodyRef(id=self.registry.register("body", body)),
                start_faces=self._faces(feature.startFaces),
                end_faces=self._faces(feature.endFaces),
                side_faces=self._faces(feature.sideFaces),
            )
        except Exception as e:
            if isinstance(e, BoltGeneratorError):
                raise
            raise GeometryError("extrude", f"Failed to extrude: {str(e)}", kernel_error=str(e))

    def revolve(
        self,
        component: ComponentRef,
        profile: ProfileRef,
        axis: str,
        angle: float,
        operation: FeatureOperation = FeatureOperation.CUT,
    ) -> FeatureRecord:
        native = self._get("component", component.id, "revolve")
        native_profile = self._get("profile", profile.id, "revolve")
        axis = axis.upper()
        if axis not in AXIS_ATTRIBUTES:
            raise GeometryError("revolve", f"unknown construction axis '{axis}'")

        try:
            revolves = native.features.revolveFeatures
            revolve_input = revolves.createInput(
                native_profile,
                getattr(native, AXIS_ATTRIBUTES[axis]),
                OPERATION_MAP[operation],
            )
            revolve_input.setAngleExtent(False, adsk.core.ValueInput.createByReal(angle))
            feature = revolves.add(revolve_input)

            if not feature:
                raise GeometryError("revolve", "Revolve operation failed")

            return self._record(feature, FeatureType.REVOLVE, operation)
        except Exception as e:
            if isinstance(e, BoltGeneratorError):
                raise
            raise GeometryError("revolve", f"Failed to revolve: {str(e)}", kernel_error=str(e))

    def chamfer(self, component: ComponentRef, edges: EdgeSelection, distance: float) -> FeatureRecord:
        native = self._get("component", component.id, "chamfer")
        collection = self._edge_collection(edges, "chamfer")

        try:
            chamfers = native.features.chamferFeatures
            chamfer_input = chamfers.createInput2()
            chamfer_input.chamferType = adsk.fusion.ChamferType.EqualDistanceChamferType
            chamfer_input.setToEqualDistance(collection, adsk.core.ValueInput.createByReal(distance))
            feature = chamfers.add(chamfer_input)

            if not feature:
                raise GeometryError("chamfer", "Chamfer operation failed", affected_entities=edges.ids)

            return self._record(feature, FeatureType.CHAMFER)
        except Exception as e:
            if isinstance(e, BoltGeneratorError):
                raise
            raise GeometryError(
                "chamfer",
                f"Failed to apply chamfer: {str(e)}",
                affected_entities=edges.ids,
                kernel_error=str(e),
            )

    def fillet(
        self,
        component: ComponentRef,
        edges: EdgeSelection,
        radius: float,
        tangent_chain: bool = True,
    ) -> FeatureRecord:
        native = self._get("component", component.id, "fillet")
        collection = self._edge_collection(edges, "fillet")

        try:
            fillets = native.features.filletFeatures
            fillet_input = fillets.createInput()
            fillet_input.addConstantRadiusEdgeSet(
                collection,
                adsk.core.ValueInput.createByReal(radius),
                tangent_chain,
            )
            feature = fillets.add(fillet_input)

            if not feature:
                raise GeometryError("fillet", "Fillet operation failed", affected_entities=edges.ids)

            return self._record(feature, FeatureType.FILLET)
        except Exception as e:
            if isinstance(e, BoltGeneratorError):
                raise
            raise GeometryError(
                "fillet",
                f"Failed to apply fillet: {str(e)}",
                affected_entities=edges.ids,
                kernel_error=str(e),
            )

    # --- Threads ---

    def recommend_thread(
        self,
        component: ComponentRef,
        diameter: float,
        internal: bool = False,
    ) -> Optional[ThreadRecommendation]:
        native = self._get("component", component.id, "thread")
        try:
            query = native.features.threadFeatures.threadDataQuery
            thread_type = query.defaultMetricThreadType
            ok, designation, thread_class = query.recommendThreadData(diameter, internal, thread_type)
        except Exception as e:
            raise GeometryError("thread", f"Thread data query failed: {str(e)}", kernel_error=str(e))

        if not ok:
            return None
        return ThreadRecommendation(thread_type=thread_type, designation=designation, thread_class=thread_class)

    def apply_thread(self, component: ComponentRef, face: FaceRef, info: ThreadInfo) -> FeatureRecord:
        native = self._get("component", component.id, "thread")
        native_face = self._get("face", face.id, "thread")

        try:
            threads = native.features.threadFeatures
            thread_info = threads.createThreadInfo(
                info.is_internal, info.thread_type, info.designation, info.thread_class
            )
            feature = threads.add(threads.createInput(native_face, thread_info))

            if not feature:
                raise GeometryError("thread", "Thread operation failed", affected_entities=[face.id])

            return self._record(feature, FeatureType.THREAD)
        except Exception as e:
            if isinstance(e, BoltGeneratorError):
                raise
            raise GeometryError(
                "thread",
                f"Failed to apply thread: {str(e)}",
                affected_entities=[face.id],
                kernel_error=str(e),
            )

    # --- Queries ---

    def rename_body(self, body: BodyRef, name: str) -> None:
        self._get("body", body.id, "rename").name = name

    def feature_faces(self, feature_id: str, role: str) -> List[FaceRef]:
        feature = self._get("feature", feature_id, "face query")
        if role not in FACE_ROLE_ATTRIBUTES:
            raise GeometryError("face query", f"unknown face role '{role}'", affected_entities=[feature_id])
        try:
            return self._faces(getattr(feature, FACE_ROLE_ATTRIBUTES[role]))
        except Exception as e:
            raise GeometryError(
                "face query",
                f"Failed to read {role} faces: {str(e)}",
                affected_entities=[feature_id],
                kernel_error=str(e),
            )

    def face_loops(self, face: FaceRef) -> List[LoopRef]:
        native = self._get("face", face.id, "face query")
        loops = []
        for i in range(native.loops.count):
            loop = native.loops.item(i)
            edges = tuple(
                EdgeRef(id=self.registry.register("edge", edge), edge_type=_edge_type(edge))
                for edge in (loop.edges.item(j) for j in range(loop.edges.count))
            )
            loops.append(LoopRef(edges=edges, is_outer=loop.isOuter))
        return loops

    def describe_body(self, body: BodyRef) -> BodyHandle:
        native = self._get("body", body.id, "body query")
        return BodyHandle(
            id=body.id,
            name=native.name,
            component_id=self.registry.register("component", native.parentComponent),
            faces_count=native.faces.count,
            edges_count=native.edges.count,
        )

    # --- Internals ---

    def _get(self, kind: str, entity_id: str, operation: str) -> Any:
        entity = self.registry.get(kind, entity_id)
        if entity is None:
            raise GeometryError(
                operation,
                f"{kind} '{entity_id}' is not known to this kernel",
                affected_entities=[entity_id],
            )
        return entity

    def _faces(self, collection: Any) -> List[FaceRef]:
        return [
            FaceRef(id=self.registry.register("face", face), face_type=_face_type(face))
            for face in (collection.item(i) for i in range(collection.count))
        ]

    def _edge_collection(self, edges: EdgeSelection, operation: str) -> Any:
        if not len(edges):
            raise GeometryError(operation, "no edges selected")
        collection = adsk.core.ObjectCollection.create()
        for edge_id in edges.ids:
            collection.add(self._get("edge", edge_id, operation))
        return collection

    def _record(
        self,
        feature: Any,
        feature_type: FeatureType,
        operation: Optional[FeatureOperation] = None,
    ) -> FeatureRecord:
        body_id = None
        if feature.bodies.count:
            body_id = self.registry.register("body", feature.bodies.item(0))
        return FeatureRecord(
            id=self.registry.register("feature", feature),
            feature_type=feature_type,
            operation=operation,
            body_id=body_id,
        )
