"""Bolt builder.

Runs the pipeline stages against a geometry kernel, in order, inside one
logging context. The first failing stage aborts the build; nothing is rolled
back.
"""

from typing import Any, Optional, Union

from shared.exceptions import BoltGeneratorError
from .kernel import GeometryKernel, get_kernel
from .logging import LogContext, get_logger
from .models import BoltParameters, BuildResult, RawBoltInputs
from .resolver import ParameterResolver
from .stages import PIPELINE, BuildContext

logger = get_logger(__name__)


class BoltBuilder:
    """Builds hexagon-head bolts on a geometry kernel.

    The builder holds no per-build state: every ``build`` call creates a new
    component and body.
    """

    def __init__(
        self,
        kernel: Optional[GeometryKernel] = None,
        resolver: Optional[ParameterResolver] = None,
    ) -> None:
        self.kernel = kernel or get_kernel()
        self.resolver = resolver or ParameterResolver()

    def build(self, parameters: BoltParameters) -> BuildResult:
        """Build one bolt.

        Args:
            parameters: Resolved bolt parameters

        Returns:
            BuildResult describing the finished body and its features

        Raises:
            ValidationError: If the parameters break an invariant (no kernel call is made)
            ResourceError: If the component cannot be created
            GeometryError: If the kernel rejects any stage
        """
        parameters = self.resolver.validate(parameters)

        with LogContext() as log_context:
            build_id = log_context.correlation_id
            log = logger.bind(kernel=self.kernel.name, bolt=parameters.name)
            log.info("Bolt build started")

            try:
                component = self.kernel.create_component(parameters.name)
                ctx = BuildContext(
                    kernel=self.kernel,
                    parameters=parameters,
                    component=component,
                    logger=log,
                )

                for stage in PIPELINE:
                    log.debug("Stage started", stage=stage.__name__)
                    stage(ctx)

                body = self.kernel.describe_body(ctx.require_head().body)
            except BoltGeneratorError as e:
                e.correlation_id = build_id
                log.error(
                    "Bolt build failed",
                    error_type=e.error_type,
                    error=e.message,
                )
                raise

            log.info(
                "Bolt build finished",
                body_id=body.id,
                faces=body.faces_count,
                features=len(ctx.features),
                thread=ctx.thread.designation if ctx.thread else None,
            )
            return BuildResult(
                build_id=build_id,
                parameters=parameters,
                component=component,
                body=body,
                features=ctx.features,
                thread=ctx.thread,
            )


def build_bolt(
    parameters: Union[BoltParameters, RawBoltInputs, None] = None,
    kernel: Optional[GeometryKernel] = None,
    **overrides: Any,
) -> BuildResult:
    """Resolve parameters if needed and build one bolt.

    Args:
        parameters: Resolved parameters, raw inputs, or None for the defaults
        kernel: Kernel to build on; defaults to the configured one
        **overrides: Raw field values applied on top of ``parameters``
    """
    resolver = ParameterResolver()
    if isinstance(parameters, BoltParameters):
        if overrides:
            parameters = resolver.resolve(RawBoltInputs(**parameters.model_dump()), **overrides)
    else:
        parameters = resolver.resolve(parameters, **overrides)
    return BoltBuilder(kernel=kernel, resolver=resolver).build(parameters)
