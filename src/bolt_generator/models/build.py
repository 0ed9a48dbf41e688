"""Build result model."""

from pydantic import BaseModel, Field, computed_field
from typing import List, Optional

from .parameters import BoltParameters
from .thread import ThreadInfo
from .topology import BodyHandle, ComponentRef, FeatureRecord


class BuildResult(BaseModel):
    """Outcome of one bolt build."""

    build_id: str = Field(description="Correlation ID of the build")
    parameters: BoltParameters = Field(description="Parameters the bolt was built from")
    component: ComponentRef = Field(description="Component owning the body")
    body: BodyHandle = Field(description="The finished bolt body")
    features: List[FeatureRecord] = Field(default_factory=list, description="Features in creation order")
    thread: Optional[ThreadInfo] = Field(default=None, description="Applied thread, if any")

    @computed_field
    @property
    def thread_applied(self) -> bool:
        """Whether a thread feature was added."""
        return self.thread is not None
