"""Cylindrical shank stage."""

from shared.exceptions import GeometryError
from .context import BuildContext
from ..models import ExtentDirection, FeatureOperation, FeatureRecord, FeatureType


def build_shank(ctx: BuildContext) -> None:
    """Extrude the body circle away from the head and join it to the head body.

    The shank runs opposite the head's extrusion direction, so it starts at
    the head's base plane. Sets ``ctx.shank``.
    """
    params = ctx.parameters
    kernel = ctx.kernel
    head = ctx.require_head()

    sketch = kernel.create_sketch(ctx.component, "XY")
    kernel.add_circle(sketch, ctx.center, params.body_diameter / 2)

    profiles = kernel.profiles(sketch)
    if not profiles:
        raise GeometryError("shank extrude", "body sketch has no closed profile", affected_entities=[sketch.id])

    ctx.shank = kernel.extrude(
        ctx.component,
        profiles[0],
        params.body_length,
        direction=ExtentDirection.NEGATIVE,
        operation=FeatureOperation.JOIN,
    )
    if not ctx.shank.end_faces or not ctx.shank.side_faces:
        raise GeometryError(
            "shank extrude",
            "joined shank exposes no end or side face",
            affected_entities=[ctx.shank.feature_id],
        )

    ctx.record(FeatureRecord(
        id=ctx.shank.feature_id,
        feature_type=FeatureType.EXTRUDE,
        operation=FeatureOperation.JOIN,
        body_id=head.body.id,
    ))
    ctx.logger.info("Shank joined", body_length=params.body_length)
