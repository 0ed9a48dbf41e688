"""Thread stage."""

from shared.exceptions import GeometryError
from .context import BuildContext
from ..models import ThreadInfo


def apply_recommended_thread(ctx: BuildContext) -> None:
    """Thread the shank's side face with the recommended metric thread.

    Skipped without error when the thread-data service has no
    recommendation for the body diameter.
    """
    kernel = ctx.kernel
    shank = ctx.require_shank()
    diameter = ctx.parameters.body_diameter

    recommendation = kernel.recommend_thread(ctx.component, diameter, internal=False)
    if recommendation is None:
        ctx.logger.info("No thread recommendation, skipping thread", body_diameter=diameter)
        return

    info = ThreadInfo.from_recommendation(recommendation, is_internal=False)
    side_faces = kernel.feature_faces(shank.feature_id, "side")
    if not side_faces:
        raise GeometryError("thread", "shank has no side face", affected_entities=[shank.feature_id])
    ctx.record(kernel.apply_thread(ctx.component, side_faces[0], info))
    ctx.thread = info
    ctx.logger.info("Thread applied", designation=info.designation, thread_class=info.thread_class)
