"""Edge-finish stage: shank-end chamfer and head junction fillet."""

from shared.exceptions import GeometryError
from .context import BuildContext
from ..models import EdgeSelection, find_loop


def chamfer_shank_end(ctx: BuildContext) -> None:
    """Chamfer every edge bounding the shank's end cap in one feature."""
    kernel = ctx.kernel
    shank = ctx.require_shank()
    end_faces = kernel.feature_faces(shank.feature_id, "end")
    if not end_faces:
        raise GeometryError("chamfer", "shank has no end face", affected_entities=[shank.feature_id])
    end_face = end_faces[0]

    edges = EdgeSelection.from_loops(kernel.face_loops(end_face))
    ctx.record(kernel.chamfer(ctx.component, edges, ctx.parameters.chamfer_distance))
    ctx.logger.info("Shank end chamfered", edges=len(edges))


def fillet_head_junction(ctx: BuildContext) -> None:
    """Fillet the single circular edge where the shank meets the head.

    The head face at the junction has two boundary loops: the six hexagon
    edges and the one circle left by the shank. The fillet goes on the
    one-edge loop.

    Raises:
        GeometryError: If the face has no loop made of a single edge
    """
    kernel = ctx.kernel
    head = ctx.require_head()
    start_faces = kernel.feature_faces(head.feature_id, "start")
    if not start_faces:
        raise GeometryError("fillet", "head has no face at the shank junction", affected_entities=[head.feature_id])
    face = start_faces[0]

    loops = kernel.face_loops(face)
    loop = find_loop(loops, lambda candidate: candidate.edge_count == 1)
    if loop is None:
        raise GeometryError(
            "fillet",
            f"no single-edge loop on head face '{face.id}' (loop sizes: {[candidate.edge_count for candidate in loops]})",
            affected_entities=[face.id],
        )

    edges = EdgeSelection(edges=loop.edges)
    ctx.record(kernel.fillet(ctx.component, edges, ctx.parameters.fillet_radius, tangent_chain=True))
    ctx.logger.info("Head junction filleted", edge_id=edges.ids[0])
