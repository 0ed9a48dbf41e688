"""Under-head chamfer stage."""

import math

from shared.exceptions import GeometryError
from .context import BuildContext
from ..geometry import triangle_segments, under_head_profiles
from ..models import FeatureOperation


def cut_under_head_chamfers(ctx: BuildContext) -> None:
    """Revolve-cut the two taper triangles about the bolt axis.

    The base triangle is cut first, then the one at head height. Each
    triangle gets its own XZ sketch so its profile is consumed exactly once.
    """
    kernel = ctx.kernel

    for index, triangle in enumerate(under_head_profiles(ctx.parameters), start=1):
        sketch = kernel.create_sketch(ctx.component, "XZ")
        for start, end in triangle_segments(triangle, ctx.center):
            kernel.add_line(sketch, start, end)

        profiles = kernel.profiles(sketch)
        if not profiles:
            raise GeometryError(
                "revolve",
                f"under-head triangle {index} has no closed profile",
                affected_entities=[sketch.id],
            )

        ctx.record(kernel.revolve(ctx.component, profiles[0], "Z", 2 * math.pi, operation=FeatureOperation.CUT))
        ctx.logger.debug("Under-head cut", index=index, area=profiles[0].area)
    ctx.logger.info("Under-head chamfers cut")
