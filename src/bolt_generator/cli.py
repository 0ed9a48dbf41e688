"""Command-line entry point for the bolt generator."""

import argparse
import json
import sys
from typing import Dict, List, Optional

from shared.exceptions import BoltGeneratorError
from .builder import BoltBuilder
from .config import get_config
from .kernel import get_kernel
from .logging import get_logger, setup_logging
from .models import RawBoltInputs
from .resolver import ParameterResolver

# (flag, field) pairs for the bolt dimensions
DIMENSION_FLAGS = (
    ("--head-diameter", "head_diameter"),
    ("--body-diameter", "body_diameter"),
    ("--head-height", "head_height"),
    ("--body-length", "body_length"),
    ("--cut-angle", "cut_angle"),
    ("--chamfer-distance", "chamfer_distance"),
    ("--fillet-radius", "fillet_radius"),
)


def _parse_user_parameter(text: str) -> List[str]:
    name, sep, expression = text.partition("=")
    if not sep or not name.strip() or not expression.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=EXPR, got '{text}'")
    return [name.strip(), expression.strip()]


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bolt-generator",
        description="Generate a parametric hexagon-head bolt",
    )
    parser.add_argument("--name", type=str, help="Body name (default from config)")
    for flag, field in DIMENSION_FLAGS:
        parser.add_argument(
            flag,
            dest=field,
            type=str,
            metavar="EXPR",
            help=f"{field.replace('_', ' ')}, a number or an expression such as '3/8 in'",
        )
    parser.add_argument(
        "--param",
        dest="user_parameters",
        type=_parse_user_parameter,
        action="append",
        default=[],
        metavar="NAME=EXPR",
        help="User parameter usable in the dimension expressions (repeatable)",
    )
    parser.add_argument(
        "--kernel",
        type=str,
        choices=["reference", "fusion"],
        help="Geometry kernel (overrides config)",
    )
    parser.add_argument(
        "--show-calls",
        action="store_true",
        help="Include the recorded kernel calls in the output (reference kernel only)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging()
    logger = get_logger(__name__)
    config = get_config()

    user_parameters: Dict[str, str] = dict(args.user_parameters)
    raw = RawBoltInputs(
        name=args.name,
        user_parameters=user_parameters,
        **{field: getattr(args, field) for _, field in DIMENSION_FLAGS},
    )

    kernel = get_kernel(args.kernel or config.kernel)
    logger.info("Starting bolt generator", kernel=kernel.name)

    try:
        resolver = ParameterResolver(config)
        parameters = resolver.resolve(raw)
        result = BoltBuilder(kernel=kernel, resolver=resolver).build(parameters)
    except BoltGeneratorError as e:
        print(json.dumps(e.to_dict(), indent=2, default=str))
        return 1

    output = {"success": True, "result": result.model_dump(mode="json")}
    if args.show_calls and hasattr(kernel, "calls"):
        output["calls"] = [call.to_dict() for call in kernel.calls]
    print(json.dumps(output, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
