"""Geometry kernels the bolt builder can drive."""

from typing import Optional

from .base import GeometryKernel
from .fusion import FUSION_AVAILABLE, FusionKernel
from .reference import KernelCall, ReferenceKernel
from .registry import HandleRegistry
from .thread_data import ISO_METRIC_COARSE, MetricThreadTable
from ..config import get_config


def get_kernel(name: Optional[str] = None) -> GeometryKernel:
    """Create the kernel named ``name``, or the configured one.

    Raises:
        ValueError: If the name is not a known kernel
    """
    config = get_config()
    name = name or config.kernel
    if name == "reference":
        return ReferenceKernel(thread_table=MetricThreadTable(tolerance=config.thread_match_tolerance))
    if name == "fusion":
        return FusionKernel()
    raise ValueError(f"Unknown kernel '{name}'. Valid kernels: reference, fusion")


__all__ = [
    "GeometryKernel",
    "ReferenceKernel",
    "KernelCall",
    "FusionKernel",
    "FUSION_AVAILABLE",
    "HandleRegistry",
    "MetricThreadTable",
    "ISO_METRIC_COARSE",
    "get_kernel",
]
