"""Hexagon head stage."""

from shared.exceptions import GeometryError
from .context import BuildContext
from ..geometry import hexagon_segments, hexagon_vertices
from ..models import ExtentDirection, FeatureOperation, FeatureRecord, FeatureType


def build_hexagon_head(ctx: BuildContext) -> None:
    """Sketch the hexagon on XY and extrude it into a new body of head height.

    The new body is renamed to the bolt's name. Sets ``ctx.head``.

    Raises:
        GeometryError: If the sketch yields no closed profile
    """
    params = ctx.parameters
    kernel = ctx.kernel

    sketch = kernel.create_sketch(ctx.component, "XY")
    for start, end in hexagon_segments(hexagon_vertices(ctx.center, params.head_diameter)):
        kernel.add_line(sketch, start, end)

    profiles = kernel.profiles(sketch)
    if not profiles:
        raise GeometryError(
            "head extrude",
            "hexagon sketch has no closed profile",
            affected_entities=[sketch.id],
        )

    ctx.head = kernel.extrude(
        ctx.component,
        profiles[0],
        params.head_height,
        direction=ExtentDirection.POSITIVE,
        operation=FeatureOperation.NEW_BODY,
    )
    kernel.rename_body(ctx.head.body, params.name)
    ctx.record(FeatureRecord(
        id=ctx.head.feature_id,
        feature_type=FeatureType.EXTRUDE,
        operation=FeatureOperation.NEW_BODY,
        body_id=ctx.head.body.id,
    ))
    ctx.logger.info(
        "Hexagon head built",
        body_id=ctx.head.body.id,
        is_clockwise=profiles[0].is_clockwise,
    )
