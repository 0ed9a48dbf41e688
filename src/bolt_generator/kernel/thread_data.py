"""Thread data for the reference kernel.

A fixed ISO 261 coarse-pitch table standing in for a host's thread-data
service. A diameter only gets a recommendation when it is within tolerance
of a nominal size.
"""

from typing import Optional, Sequence, Tuple

from ..models import ThreadRecommendation
from ..units import cm_to_mm

# (nominal diameter mm, coarse pitch mm)
ISO_METRIC_COARSE: Tuple[Tuple[float, float], ...] = (
    (1.0, 0.25),
    (1.2, 0.25),
    (1.6, 0.35),
    (2.0, 0.4),
    (2.5, 0.45),
    (3.0, 0.5),
    (4.0, 0.7),
    (5.0, 0.8),
    (6.0, 1.0),
    (8.0, 1.25),
    (10.0, 1.5),
    (12.0, 1.75),
    (14.0, 2.0),
    (16.0, 2.0),
    (20.0, 2.5),
    (24.0, 3.0),
    (30.0, 3.5),
    (36.0, 4.0),
    (42.0, 4.5),
    (48.0, 5.0),
    (56.0, 5.5),
    (64.0, 6.0),
)


class MetricThreadTable:
    """Recommends ISO metric coarse threads by nominal diameter."""

    thread_type = "ISO Metric profile"
    external_class = "6g"
    internal_class = "6H"

    def __init__(
        self,
        sizes: Sequence[Tuple[float, float]] = ISO_METRIC_COARSE,
        tolerance: float = 0.005,
    ) -> None:
        """Initialize the table.

        Args:
            sizes: (nominal diameter mm, pitch mm) pairs
            tolerance: Largest accepted diameter mismatch in cm
        """
        self.sizes = tuple(sizes)
        self.tolerance = tolerance

    def recommend(self, diameter: float, internal: bool = False) -> Optional[ThreadRecommendation]:
        """Recommend a thread for a diameter given in cm, or None if no size matches."""
        diameter_mm = cm_to_mm(diameter)
        tolerance_mm = cm_to_mm(self.tolerance)

        best = min(self.sizes, key=lambda size: abs(size[0] - diameter_mm), default=None)
        if best is None or abs(best[0] - diameter_mm) > tolerance_mm:
            return None

        nominal, pitch = best
        return ThreadRecommendation(
            thread_type=self.thread_type,
            designation=f"M{nominal:g}x{pitch:g}",
            thread_class=self.internal_class if internal else self.external_class,
        )
