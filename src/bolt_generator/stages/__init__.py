"""Pipeline stages of the bolt build, in execution order."""

from .context import BuildContext
from .head import build_hexagon_head
from .shank import build_shank
from .finish import chamfer_shank_end, fillet_head_junction
from .under_head import cut_under_head_chamfers
from .thread import apply_recommended_thread

PIPELINE = (
    build_hexagon_head,
    build_shank,
    chamfer_shank_end,
    fillet_head_junction,
    cut_under_head_chamfers,
    apply_recommended_thread,
)

__all__ = [
    "BuildContext",
    "PIPELINE",
    "build_hexagon_head",
    "build_shank",
    "chamfer_shank_end",
    "fillet_head_junction",
    "cut_under_head_chamfers",
    "apply_recommended_thread",
]
