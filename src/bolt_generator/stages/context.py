"""Build context threaded through the pipeline stages."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..kernel import GeometryKernel
from ..models import BoltParameters, ComponentRef, ExtrudeResult, FeatureRecord, Point3D, ThreadInfo


@dataclass
class BuildContext:
    """State of one bolt build.

    Each stage reads the handles earlier stages left here and adds its own.
    A context is owned by a single build and discarded afterwards.
    """
    kernel: GeometryKernel
    parameters: BoltParameters
    component: ComponentRef
    logger: Any
    center: Point3D = field(default_factory=lambda: Point3D(x=0.0, y=0.0, z=0.0))
    head: Optional[ExtrudeResult] = None
    shank: Optional[ExtrudeResult] = None
    features: List[FeatureRecord] = field(default_factory=list)
    thread: Optional[ThreadInfo] = None

    def record(self, feature: FeatureRecord) -> FeatureRecord:
        """Append a feature to the build timeline."""
        self.features.append(feature)
        self.logger.debug(
            "Feature created",
            feature_id=feature.id,
            feature_type=feature.feature_type.value,
        )
        return feature

    def require_head(self) -> ExtrudeResult:
        if self.head is None:
            raise RuntimeError("hexagon head has not been built yet")
        return self.head

    def require_shank(self) -> ExtrudeResult:
        if self.shank is None:
            raise RuntimeError("shank has not been built yet")
        return self.shank
