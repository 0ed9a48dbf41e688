"""Parametric hexagon-head bolt generator.

Resolves bolt parameters (numbers or unit expressions), then drives a
geometry kernel through the head, shank, edge-finish, under-head cut and
thread stages.
"""

from .builder import BoltBuilder, build_bolt
from .config import BoltSettings, get_config
from .kernel import FusionKernel, GeometryKernel, ReferenceKernel, get_kernel
from .models import BoltParameters, BuildResult, RawBoltInputs
from .resolver import ParameterResolver, resolve_parameters

__version__ = "0.1.0"

__all__ = [
    "BoltBuilder",
    "build_bolt",
    "BoltSettings",
    "get_config",
    "GeometryKernel",
    "ReferenceKernel",
    "FusionKernel",
    "get_kernel",
    "BoltParameters",
    "RawBoltInputs",
    "BuildResult",
    "ParameterResolver",
    "resolve_parameters",
]
