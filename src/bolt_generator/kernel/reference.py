"""In-memory reference kernel.

Records every primitive call in order and keeps a simplified boundary
representation, enough to drive and check the bolt pipeline without a CAD
host:

- Solids are stacks of prisms coaxial with the Z axis. Each prism knows its
  axial range and its inscribed and circumscribed radii.
- Faces carry their boundary loops as lists of edge IDs.
- Every edge knows the largest chamfer or fillet its neighbouring faces can
  absorb, so oversize finishing operations fail instead of being trimmed.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from shared.exceptions import GeometryError, ResourceError
from .base import GeometryKernel
from .thread_data import MetricThreadTable
from ..geometry import polygon_area
from ..logging import get_logger
from ..models import (
    AXIS_DIRECTIONS,
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
    PLANE_NORMALS,
    Point2D,
    Point3D,
    ProfileRef,
    SketchRef,
    ThreadInfo,
    ThreadRecommendation,
    to_plane_coordinates,
)

logger = get_logger(__name__)

# Offset used to sample which side of a cap plane holds material
_PROBE = 1e-6


@dataclass
class KernelCall:
    """One primitive call issued against the kernel."""
    operation: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"operation": self.operation, "arguments": dict(self.arguments)}


@dataclass
class _Curve:
    kind: str
    start: Optional[Point2D] = None
    end: Optional[Point2D] = None
    center: Optional[Point2D] = None
    radius: float = 0.0


@dataclass
class _Sketch:
    id: str
    component_id: str
    plane: str
    curves: List[_Curve] = field(default_factory=list)


@dataclass
class _Profile:
    id: str
    sketch_id: str
    plane: str
    kind: str
    points: List[Point2D] = field(default_factory=list)
    radius: float = 0.0
    area: float = 0.0
    is_clockwise: bool = False
    curve_count: int = 0
    consumed: bool = False


@dataclass
class _Edge:
    id: str
    edge_type: EdgeType
    max_finish: float


@dataclass
class _Loop:
    edges: List[str]
    is_outer: bool = True


@dataclass
class _Face:
    id: str
    face_type: FaceType
    body_id: str
    loops: List[_Loop] = field(default_factory=list)
    z: Optional[float] = None
    outward: int = 0
    thread: Optional[ThreadInfo] = None


@dataclass
class _Segment:
    z0: float
    z1: float
    inner_radius: float
    outer_radius: float

    def holds(self, z: float) -> bool:
        return self.z0 < z < self.z1


@dataclass
class _Body:
    id: str
    name: str
    component_id: str
    segments: List[_Segment] = field(default_factory=list)
    faces: List[str] = field(default_factory=list)


@dataclass
class _Component:
    id: str
    name: str
    bodies: List[str] = field(default_factory=list)
    features: List[str] = field(default_factory=list)


class ReferenceKernel(GeometryKernel):
    """Geometry kernel that models coaxial solids in memory.

    Attributes:
        calls: Primitive calls in the order they were issued
        thread_table: Thread-data service answering recommend_thread
    """

    name = "reference"

    def __init__(
        self,
        thread_table: Optional[MetricThreadTable] = None,
        tolerance: float = 1e-9,
    ) -> None:
        self.thread_table = thread_table or MetricThreadTable()
        self.tolerance = tolerance
        self.calls: List[KernelCall] = []

        self._components: Dict[str, _Component] = {}
        self._sketches: Dict[str, _Sketch] = {}
        self._profiles: Dict[str, _Profile] = {}
        self._bodies: Dict[str, _Body] = {}
        self._faces: Dict[str, _Face] = {}
        self._edges: Dict[str, _Edge] = {}
        self._features: Dict[str, FeatureRecord] = {}
        self._extrude_faces: Dict[str, Dict[str, List[str]]] = {}
        self._counters: Dict[str, int] = {}

    # --- Containers ---

    def create_component(self, name: str) -> ComponentRef:
        self._record("create_component", name=name)
        if not name:
            raise ResourceError("component", "component name must not be empty")
        component = _Component(id=self._next_id("component"), name=name)
        self._components[component.id] = component
        return ComponentRef(id=component.id, name=component.name)

    def create_sketch(self, component: ComponentRef, plane: str) -> SketchRef:
        self._record("create_sketch", component_id=component.id, plane=plane)
        self._component(component.id)
        plane = plane.upper()
        if plane not in PLANE_NORMALS:
            raise GeometryError("sketch", f"unknown construction plane '{plane}'")
        sketch = _Sketch(id=self._next_id("sketch"), component_id=component.id, plane=plane)
        self._sketches[sketch.id] = sketch
        return SketchRef(id=sketch.id, plane=plane)

    # --- Sketch curves ---

    def add_line(self, sketch: SketchRef, start: Point3D, end: Point3D) -> None:
        self._record("add_line", sketch_id=sketch.id, start=start.to_tuple(), end=end.to_tuple())
        native = self._sketch(sketch.id)
        native.curves.append(_Curve(
            kind="line",
            start=self._on_plane(native, start),
            end=self._on_plane(native, end),
        ))

    def add_circle(self, sketch: SketchRef, center: Point3D, radius: float) -> None:
        self._record("add_circle", sketch_id=sketch.id, center=center.to_tuple(), radius=radius)
        native = self._sketch(sketch.id)
        native.curves.append(_Curve(kind="circle", center=self._on_plane(native, center), radius=radius))

    def profiles(self, sketch: SketchRef) -> List[ProfileRef]:
        native = self._sketch(sketch.id)
        for profile in self._discover_profiles(native):
            self._profiles[profile.id] = profile
        return [
            ProfileRef(
                id=p.id,
                sketch_id=p.sketch_id,
                curve_count=p.curve_count,
                area=p.area,
                is_clockwise=p.is_clockwise,
            )
            for p in self._profiles.values()
            if p.sketch_id == native.id
        ]

    # --- Features ---

    def extrude(
        self,
        component: ComponentRef,
        profile: ProfileRef,
        distance: float,
        direction: ExtentDirection = ExtentDirection.POSITIVE,
        operation: FeatureOperation = FeatureOperation.NEW_BODY,
    ) -> ExtrudeResult:
        self._record(
            "extrude",
            component_id=component.id,
            profile_id=profile.id,
            distance=distance,
            direction=direction.value,
            operation=operation.value,
        )
        comp = self._component(component.id)
        native = self._consume(profile.id, "extrude")

        if not math.isfinite(distance) or distance <= 0:
            raise GeometryError("extrude", f"distance must be positive, got {distance}")
        if native.plane != "XY":
            raise GeometryError("extrude", "only XY profiles coaxial with the Z axis can be extruded")

        sign = 1.0 if direction == ExtentDirection.POSITIVE else -1.0
        far = sign * distance
        segment = _Segment(
            z0=min(0.0, far),
            z1=max(0.0, far),
            inner_radius=self._inner_radius(native),
            outer_radius=self._outer_radius(native),
        )

        if operation == FeatureOperation.NEW_BODY:
            body = _Body(id=self._next_id("body"), name=f"Body{len(self._bodies) + 1}", component_id=comp.id)
            self._bodies[body.id] = body
            comp.bodies.append(body.id)
        elif operation == FeatureOperation.JOIN:
            body = self._join_target(comp, segment)
        else:
            raise GeometryError("extrude", f"{operation.value} extrusions are not supported by the reference kernel")

        start = self._cap(body, native, segment, z=0.0, outward=-int(sign))
        end = self._cap(body, native, segment, z=far, outward=int(sign))
        sides = self._sides(body, native, segment, start, end)
        if operation == FeatureOperation.JOIN:
            self._merge_caps(body, native, segment, sides)
        body.segments.append(segment)

        feature = self._feature(comp, FeatureType.EXTRUDE, operation, body.id)
        self._extrude_faces[feature.id] = {
            "start": [f.id for f in [start] if f],
            "end": [f.id for f in [end] if f],
            "side": [f.id for f in sides],
        }
        return ExtrudeResult(
            feature_id=feature.id,
            body=BodyRef(id=body.id),
            start_faces=[self._face_ref(f) for f in [start] if f],
            end_faces=[self._face_ref(f) for f in [end] if f],
            side_faces=[self._face_ref(f) for f in sides],
        )

    def revolve(
        self,
        component: ComponentRef,
        profile: ProfileRef,
        axis: str,
        angle: float,
        operation: FeatureOperation = FeatureOperation.CUT,
    ) -> FeatureRecord:
        self._record(
            "revolve",
            component_id=component.id,
            profile_id=profile.id,
            axis=axis,
            angle=angle,
            operation=operation.value,
        )
        comp = self._component(component.id)
        native = self._consume(profile.id, "revolve")

        direction = AXIS_DIRECTIONS.get(axis.upper())
        if direction is None:
            raise GeometryError("revolve", f"unknown construction axis '{axis}'")
        if direction != AXIS_DIRECTIONS["Z"]:
            raise GeometryError("revolve", "only revolves about the Z axis are supported")
        if not 0.0 < angle <= 2 * math.pi + self.tolerance:
            raise GeometryError("revolve", f"angle must be in (0, 2*pi], got {angle}")
        if native.plane not in ("XZ", "YZ") or native.kind != "polygon":
            raise GeometryError("revolve", "profile must be a closed polygon in a plane containing the Z axis")
        if operation != FeatureOperation.CUT:
            raise GeometryError("revolve", f"{operation.value} revolves are not supported by the reference kernel")

        radii = [p.x for p in native.points]
        heights = [p.y for p in native.points]
        if min(radii) < -self.tolerance:
            raise GeometryError("revolve", "profile crosses the revolve axis", affected_entities=[profile.id])

        target = None
        for body_id in comp.bodies:
            body = self._bodies[body_id]
            if any(
                min(heights) < s.z1 - self.tolerance
                and max(heights) > s.z0 + self.tolerance
                and min(radii) < s.outer_radius - self.tolerance
                for s in body.segments
            ):
                target = body
                break
        if target is None:
            raise GeometryError("revolve", "cut does not intersect any body", affected_entities=[profile.id])

        corners = [
            Point2D(x=r, y=z)
            for s in target.segments
            for r in (0.0, s.outer_radius)
            for z in (s.z0, s.z1)
        ]
        if all(self._inside(native.points, corner) for corner in corners):
            raise GeometryError("revolve", "cut would remove the entire body", affected_entities=[target.id])

        cut_face = self._new_face(target, FaceType.CONICAL)
        cut_face.loops = [_Loop(edges=[self._new_edge(EdgeType.CIRCLE, 0.0).id])]
        return self._feature(comp, FeatureType.REVOLVE, operation, target.id)

    def chamfer(self, component: ComponentRef, edges: EdgeSelection, distance: float) -> FeatureRecord:
        self._record("chamfer", component_id=component.id, edge_ids=edges.ids, distance=distance)
        return self._finish_edges("chamfer", FeatureType.CHAMFER, component, edges, distance)

    def fillet(
        self,
        component: ComponentRef,
        edges: EdgeSelection,
        radius: float,
        tangent_chain: bool = True,
    ) -> FeatureRecord:
        self._record(
            "fillet",
            component_id=component.id,
            edge_ids=edges.ids,
            radius=radius,
            tangent_chain=tangent_chain,
        )
        return self._finish_edges("fillet", FeatureType.FILLET, component, edges, radius)

    # --- Threads ---

    def recommend_thread(
        self,
        component: ComponentRef,
        diameter: float,
        internal: bool = False,
    ) -> Optional[ThreadRecommendation]:
        self._record("recommend_thread", component_id=component.id, diameter=diameter, internal=internal)
        self._component(component.id)
        return self.thread_table.recommend(diameter, internal)

    def apply_thread(self, component: ComponentRef, face: FaceRef, info: ThreadInfo) -> FeatureRecord:
        self._record("apply_thread", component_id=component.id, face_id=face.id, **info.model_dump())
        comp = self._component(component.id)
        native = self._face(face.id, "thread")
        if native.face_type != FaceType.CYLINDRICAL:
            raise GeometryError(
                "thread",
                f"threads need a cylindrical face, '{face.id}' is {native.face_type.value}",
                affected_entities=[face.id],
            )
        native.thread = info
        return self._feature(comp, FeatureType.THREAD, None, native.body_id)

    # --- Queries ---

    def rename_body(self, body: BodyRef, name: str) -> None:
        self._record("rename_body", body_id=body.id, name=name)
        self._body(body.id).name = name

    def feature_faces(self, feature_id: str, role: str) -> List[FaceRef]:
        roles = self._extrude_faces.get(feature_id)
        if roles is None:
            raise GeometryError(
                "face query",
                f"extrude feature '{feature_id}' does not exist",
                affected_entities=[feature_id],
            )
        if role not in roles:
            raise GeometryError("face query", f"unknown face role '{role}'", affected_entities=[feature_id])
        return [self._face_ref(self._faces[f]) for f in roles[role] if f in self._faces]

    def face_loops(self, face: FaceRef) -> List[LoopRef]:
        native = self._face(face.id, "face query")
        return [
            LoopRef(
                edges=tuple(EdgeRef(id=e, edge_type=self._edges[e].edge_type) for e in loop.edges),
                is_outer=loop.is_outer,
            )
            for loop in native.loops
        ]

    def describe_body(self, body: BodyRef) -> BodyHandle:
        native = self._body(body.id)
        edge_ids = {e for f in native.faces for loop in self._faces[f].loops for e in loop.edges}
        return BodyHandle(
            id=native.id,
            name=native.name,
            component_id=native.component_id,
            faces_count=len(native.faces),
            edges_count=len(edge_ids),
        )

    def threaded_faces(self, body: BodyRef) -> List[FaceRef]:
        """Faces of a body carrying a thread feature."""
        native = self._body(body.id)
        return [self._face_ref(self._faces[f]) for f in native.faces if self._faces[f].thread]

    # --- Internals: bookkeeping ---

    def _record(self, call_name: str, **arguments: Any) -> None:
        self.calls.append(KernelCall(operation=call_name, arguments=arguments))
        logger.debug("Kernel call", kernel=self.name, call=call_name)

    def _next_id(self, kind: str) -> str:
        self._counters[kind] = self._counters.get(kind, 0) + 1
        return f"{kind}_{self._counters[kind]:03d}"

    def _component(self, component_id: str) -> _Component:
        component = self._components.get(component_id)
        if component is None:
            raise ResourceError("component", f"component '{component_id}' does not exist")
        return component

    def _sketch(self, sketch_id: str) -> _Sketch:
        sketch = self._sketches.get(sketch_id)
        if sketch is None:
            raise GeometryError("sketch", f"sketch '{sketch_id}' does not exist")
        return sketch

    def _body(self, body_id: str) -> _Body:
        body = self._bodies.get(body_id)
        if body is None:
            raise GeometryError("body lookup", f"body '{body_id}' does not exist")
        return body

    def _face(self, face_id: str, operation: str) -> _Face:
        face = self._faces.get(face_id)
        if face is None:
            raise GeometryError(operation, f"face '{face_id}' does not exist", affected_entities=[face_id])
        return face

    def _consume(self, profile_id: str, operation: str) -> _Profile:
        profile = self._profiles.get(profile_id)
        if profile is None:
            raise GeometryError(operation, f"profile '{profile_id}' does not exist")
        if profile.consumed:
            raise GeometryError(operation, f"profile '{profile_id}' was already used by another feature")
        profile.consumed = True
        return profile

    def _feature(
        self,
        component: _Component,
        feature_type: FeatureType,
        operation: Optional[FeatureOperation],
        body_id: str,
    ) -> FeatureRecord:
        feature = FeatureRecord(
            id=self._next_id("feature"),
            feature_type=feature_type,
            operation=operation,
            body_id=body_id,
        )
        self._features[feature.id] = feature
        component.features.append(feature.id)
        return feature

    def _new_face(self, body: _Body, face_type: FaceType, z: Optional[float] = None, outward: int = 0) -> _Face:
        face = _Face(id=self._next_id("face"), face_type=face_type, body_id=body.id, z=z, outward=outward)
        self._faces[face.id] = face
        body.faces.append(face.id)
        return face

    def _new_edge(self, edge_type: EdgeType, max_finish: float) -> _Edge:
        edge = _Edge(id=self._next_id("edge"), edge_type=edge_type, max_finish=max_finish)
        self._edges[edge.id] = edge
        return edge

    def _face_ref(self, face: _Face) -> FaceRef:
        return FaceRef(id=face.id, face_type=face.face_type)

    # --- Internals: sketches ---

    def _on_plane(self, sketch: _Sketch, point: Point3D) -> Point2D:
        normal = PLANE_NORMALS[sketch.plane]
        offset = point.x * normal.x + point.y * normal.y + point.z * normal.z
        if abs(offset) > self.tolerance:
            raise GeometryError(
                "sketch",
                f"point {point.to_tuple()} does not lie on the {sketch.plane} plane",
                affected_entities=[sketch.id],
            )
        return to_plane_coordinates(point, sketch.plane)

    def _coincident(self, a: Point2D, b: Point2D) -> bool:
        return a.distance_to(b) <= self.tolerance * 1000

    def _discover_profiles(self, sketch: _Sketch) -> List[_Profile]:
        """Find profiles in a sketch that have not been discovered yet."""
        if any(p.sketch_id == sketch.id for p in self._profiles.values()):
            return []

        found: List[_Profile] = []
        for curve in sketch.curves:
            if curve.kind == "circle" and curve.radius > self.tolerance:
                found.append(_Profile(
                    id=self._next_id("profile"),
                    sketch_id=sketch.id,
                    plane=sketch.plane,
                    kind="circle",
                    points=[curve.center],
                    radius=curve.radius,
                    area=math.pi * curve.radius ** 2,
                    curve_count=1,
                ))

        for lines, points in self._chain_lines([c for c in sketch.curves if c.kind == "line"]):
            area = polygon_area(points)
            if abs(area) <= self.tolerance:
                continue
            found.append(_Profile(
                id=self._next_id("profile"),
                sketch_id=sketch.id,
                plane=sketch.plane,
                kind="polygon",
                points=points,
                area=abs(area),
                is_clockwise=area < 0,
                curve_count=len(lines),
            ))
        return found

    def _chain_lines(self, lines: List[_Curve]) -> List[Tuple[List[_Curve], List[Point2D]]]:
        """Group lines into closed loops, following each line's direction where possible."""
        loops = []
        remaining = list(lines)
        while remaining:
            first = remaining.pop(0)
            chain = [first]
            points = [first.start, first.end]
            while not self._coincident(points[-1], points[0]):
                tail = points[-1]
                for index, line in enumerate(remaining):
                    if self._coincident(line.start, tail):
                        points.append(line.end)
                        break
                    if self._coincident(line.end, tail):
                        points.append(line.start)
                        break
                else:
                    break
                chain.append(remaining.pop(index))
            if len(chain) >= 3 and self._coincident(points[-1], points[0]):
                loops.append((chain, points[:-1]))
        return loops

    # --- Internals: solids ---

    def _outer_radius(self, profile: _Profile) -> float:
        if profile.kind == "circle":
            center = profile.points[0]
            return math.hypot(center.x, center.y) + profile.radius
        return max(math.hypot(p.x, p.y) for p in profile.points)

    def _inner_radius(self, profile: _Profile) -> float:
        if profile.kind == "circle":
            center = profile.points[0]
            return max(profile.radius - math.hypot(center.x, center.y), 0.0)
        distances = []
        for i, a in enumerate(profile.points):
            b = profile.points[(i + 1) % len(profile.points)]
            length = a.distance_to(b)
            distances.append(abs(a.x * b.y - b.x * a.y) / length)
        return min(distances)

    def _material_at(self, body: _Body, z: float, radius: float) -> bool:
        return any(s.holds(z) and s.outer_radius >= radius - self.tolerance for s in body.segments)

    def _join_target(self, component: _Component, segment: _Segment) -> _Body:
        for body_id in component.bodies:
            body = self._bodies[body_id]
            if any(
                s.z0 <= segment.z1 + self.tolerance and segment.z0 <= s.z1 + self.tolerance
                for s in body.segments
            ):
                return body
        raise GeometryError("extrude", "join extrusion does not touch any body")

    def _cap_edges(self, profile: _Profile, segment: _Segment) -> List[_Edge]:
        height = segment.z1 - segment.z0
        if profile.kind == "circle":
            return [self._new_edge(EdgeType.CIRCLE, min(profile.radius, height))]
        edges = []
        for i, a in enumerate(profile.points):
            b = profile.points[(i + 1) % len(profile.points)]
            edges.append(self._new_edge(EdgeType.LINE, min(a.distance_to(b) / 2, height)))
        return edges

    def _cap(self, body: _Body, profile: _Profile, segment: _Segment, z: float, outward: int) -> Optional[_Face]:
        """Create a planar cap unless existing material on its outer side absorbs it."""
        if self._material_at(body, z + outward * _PROBE, segment.outer_radius):
            return None
        face = self._new_face(body, FaceType.PLANAR, z=z, outward=outward)
        face.loops = [_Loop(edges=[e.id for e in self._cap_edges(profile, segment)])]
        return face

    def _sides(
        self,
        body: _Body,
        profile: _Profile,
        segment: _Segment,
        start: Optional[_Face],
        end: Optional[_Face],
    ) -> List[_Face]:
        cap_loops = [face.loops[0].edges for face in (start, end) if face]
        if profile.kind == "circle":
            face = self._new_face(body, FaceType.CYLINDRICAL)
            face.loops = [_Loop(edges=list(edges), is_outer=i == 0) for i, edges in enumerate(cap_loops)]
            return [face]

        height = segment.z1 - segment.z0
        count = len(profile.points)
        verticals = [self._new_edge(EdgeType.LINE, height / 2) for _ in range(count)]
        sides = []
        for i in range(count):
            face = self._new_face(body, FaceType.PLANAR)
            edges = [verticals[i].id, verticals[(i + 1) % count].id]
            edges.extend(loop[i] for loop in cap_loops)
            face.loops = [_Loop(edges=edges)]
            sides.append(face)
        return sides

    def _merge_caps(self, body: _Body, profile: _Profile, segment: _Segment, sides: List[_Face]) -> None:
        """Update the existing caps that the joined prism passes through."""
        for face_id in list(body.faces):
            face = self._faces[face_id]
            if face.z is None or not segment.holds(face.z + face.outward * _PROBE):
                continue

            cap_segment = next(
                (s for s in body.segments if s.z0 - self.tolerance <= face.z <= s.z1 + self.tolerance),
                None,
            )
            if cap_segment is None:
                continue

            if segment.inner_radius >= cap_segment.outer_radius - self.tolerance:
                # Joined prism covers the whole cap
                body.faces.remove(face_id)
                continue

            junction = self._cap_edges(profile, segment)
            if segment.outer_radius < cap_segment.inner_radius - self.tolerance:
                clearance = cap_segment.inner_radius - segment.outer_radius
                for edge in junction:
                    edge.max_finish = min(edge.max_finish, clearance)
                face.loops.append(_Loop(edges=[e.id for e in junction], is_outer=False))
            else:
                # Outline crosses the cap boundary; both merge into one outer loop
                face.loops[0].edges.extend(e.id for e in junction)

            if profile.kind == "circle":
                sides[0].loops.append(_Loop(edges=[e.id for e in junction], is_outer=False))
            else:
                for side, edge in zip(sides, junction):
                    side.loops[0].edges.append(edge.id)

    def _finish_edges(
        self,
        operation: str,
        feature_type: FeatureType,
        component: ComponentRef,
        edges: EdgeSelection,
        size: float,
    ) -> FeatureRecord:
        comp = self._component(component.id)
        if not math.isfinite(size) or size <= 0:
            raise GeometryError(operation, f"size must be positive, got {size}")
        if not len(edges):
            raise GeometryError(operation, "no edges selected")

        natives = []
        for ref in edges.edges:
            edge = self._edges.get(ref.id)
            if edge is None:
                raise GeometryError(operation, f"edge '{ref.id}' does not exist", affected_entities=[ref.id])
            if size >= edge.max_finish - self.tolerance:
                raise GeometryError(
                    operation,
                    f"size {size:g} does not fit the {edge.max_finish:g} available next to edge '{edge.id}'",
                    affected_entities=[edge.id],
                )
            natives.append(edge)

        adjacent = [
            face for face in self._faces.values()
            if any(edge.id in loop.edges for loop in face.loops for edge in natives)
        ]
        body = self._bodies[adjacent[0].body_id] if adjacent else None
        if body is None or body.component_id != comp.id:
            raise GeometryError(operation, "selected edges do not belong to a body of this component")

        for edge in natives:
            new_loops = []
            for face in adjacent:
                for loop in face.loops:
                    if edge.id in loop.edges:
                        replacement = self._new_edge(edge.edge_type, edge.max_finish - size)
                        loop.edges[loop.edges.index(edge.id)] = replacement.id
                        new_loops.append(_Loop(edges=[replacement.id], is_outer=not new_loops))
            if edge.edge_type == EdgeType.CIRCLE:
                face_type = FaceType.CONICAL if feature_type == FeatureType.CHAMFER else FaceType.TOROIDAL
            else:
                face_type = FaceType.PLANAR if feature_type == FeatureType.CHAMFER else FaceType.CYLINDRICAL
            self._new_face(body, face_type).loops = new_loops

        return self._feature(comp, feature_type, None, body.id)

    def _inside(self, polygon: List[Point2D], point: Point2D) -> bool:
        """Point-in-polygon test that counts the boundary as inside."""
        inside = False
        for i, a in enumerate(polygon):
            b = polygon[(i + 1) % len(polygon)]
            cross = (b.x - a.x) * (point.y - a.y) - (b.y - a.y) * (point.x - a.x)
            if abs(cross) <= self.tolerance and \
                    min(a.x, b.x) - self.tolerance <= point.x <= max(a.x, b.x) + self.tolerance and \
                    min(a.y, b.y) - self.tolerance <= point.y <= max(a.y, b.y) + self.tolerance:
                return True
            if (a.y > point.y) != (b.y > point.y):
                x = a.x + (point.y - a.y) * (b.x - a.x) / (b.y - a.y)
                if point.x < x:
                    inside = not inside
        return inside
