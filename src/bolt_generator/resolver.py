"""Parameter resolution for the bolt generator.

Turns raw inputs (canonical floats or expression strings, possibly referring
to each other or to user parameters) into a validated, immutable
``BoltParameters``. Resolution is pure: nothing here touches a kernel.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Set

from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import ValidationError
from .config import BoltSettings, get_config
from .logging import get_logger
from .models import ANGLE_FIELDS, LENGTH_FIELDS, BoltParameters, RawBoltInputs
from .units import ANGLE, LENGTH, Quantity, evaluate, referenced_names, resolve_angle, resolve_length

logger = get_logger(__name__)


class ParameterResolver:
    """Resolves and validates bolt parameters."""

    def __init__(self, config: Optional[BoltSettings] = None) -> None:
        self.config = config or get_config()

    def defaults(self) -> Dict[str, Any]:
        """Configured default value for every bolt parameter."""
        return {
            "name": self.config.default_name,
            "head_diameter": self.config.default_head_diameter,
            "body_diameter": self.config.default_body_diameter,
            "head_height": self.config.default_head_height,
            "body_length": self.config.default_body_length,
            "cut_angle": self.config.default_cut_angle,
            "chamfer_distance": self.config.default_chamfer_distance,
            "fillet_radius": self.config.default_fillet_radius,
        }

    def resolve(self, raw: Optional[RawBoltInputs] = None, **overrides: Any) -> BoltParameters:
        """Resolve raw inputs into validated parameters.

        Args:
            raw: Raw inputs; missing values fall back to configured defaults
            **overrides: Field values that take precedence over ``raw``

        Returns:
            Validated BoltParameters (lengths in cm, angle in radians)

        Raises:
            ValidationError: If any value cannot be evaluated or breaks an invariant
        """
        raw = raw or RawBoltInputs()
        if overrides:
            raw = raw.model_copy(update=overrides)

        values = self.defaults()
        values.update({k: v for k, v in raw.model_dump(exclude={"user_parameters"}).items() if v is not None})

        name = str(values.pop("name")).strip()
        if not name:
            raise ValidationError("name", name, reason="body name must not be empty")

        resolved = self._resolve_symbols(values, raw.user_parameters)
        fields = {key: resolved[key].value for key in LENGTH_FIELDS + ANGLE_FIELDS}

        self._check_invariants(fields)
        parameters = self._construct(name=name, **fields)

        logger.debug(
            "Resolved bolt parameters",
            name=parameters.name,
            head_diameter=parameters.head_diameter,
            body_diameter=parameters.body_diameter,
            cut_angle_deg=math.degrees(parameters.cut_angle),
        )
        return parameters

    def validate(self, parameters: BoltParameters) -> BoltParameters:
        """Re-check a parameter set, including ones built without validation.

        Raises:
            ValidationError: If any invariant is violated
        """
        fields = parameters.model_dump()
        name = fields.pop("name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("name", name, reason="body name must not be empty")
        self._check_invariants(fields)
        return self._construct(name=name, **fields)

    def _resolve_symbols(
        self,
        values: Mapping[str, Any],
        user_parameters: Mapping[str, Any],
    ) -> Dict[str, Quantity]:
        """Evaluate bolt and user parameters in dependency order."""
        symbols: Dict[str, Any] = dict(user_parameters)
        for key in LENGTH_FIELDS + ANGLE_FIELDS:
            if key in symbols:
                raise ValidationError(key, symbols[key], reason="user parameter shadows a bolt parameter")
            symbols[key] = values[key]

        dependencies: Dict[str, Set[str]] = {}
        for key, raw in symbols.items():
            names = referenced_names(raw, key) if isinstance(raw, str) and raw.strip() else set()
            dependencies[key] = names & set(symbols)

        resolved: Dict[str, Quantity] = {}
        pending: List[str] = list(symbols)
        while pending:
            ready = [key for key in pending if dependencies[key] <= set(resolved)]
            if not ready:
                raise ValidationError(
                    pending[0],
                    symbols[pending[0]],
                    reason=f"circular reference between {', '.join(sorted(pending))}",
                )
            for key in ready:
                resolved[key] = self._resolve_one(key, symbols[key], resolved)
                pending.remove(key)
        return resolved

    def _resolve_one(self, key: str, raw: Any, variables: Mapping[str, Quantity]) -> Quantity:
        if key in LENGTH_FIELDS:
            return Quantity(resolve_length(raw, key, variables), LENGTH)
        if key in ANGLE_FIELDS:
            return Quantity(resolve_angle(raw, key, variables), ANGLE)
        if isinstance(raw, str):
            return evaluate(raw, key, variables)
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return Quantity(float(raw))
        raise ValidationError(key, raw, reason="user parameter must be a number or an expression")

    def _check_invariants(self, fields: Mapping[str, float]) -> None:
        for key in LENGTH_FIELDS:
            value = fields[key]
            if not math.isfinite(value) or value <= 0:
                raise ValidationError(key, value, min_value=0.0)

        cut_angle = fields["cut_angle"]
        if not 0.0 < cut_angle < math.pi / 2:
            raise ValidationError(
                "cut_angle",
                math.degrees(cut_angle),
                min_value=0.0,
                max_value=90.0,
                reason=f"must lie strictly between 0 and 90 degrees, got {math.degrees(cut_angle):g}",
            )

        if fields["head_diameter"] <= fields["body_diameter"]:
            raise ValidationError(
                "head_diameter",
                fields["head_diameter"],
                min_value=fields["body_diameter"],
                reason=(
                    f"head_diameter ({fields['head_diameter']:g}) must be larger than "
                    f"body_diameter ({fields['body_diameter']:g})"
                ),
            )

    def _construct(self, **fields: Any) -> BoltParameters:
        try:
            return BoltParameters(**fields)
        except PydanticValidationError as e:
            error = e.errors()[0]
            location = ".".join(str(part) for part in error.get("loc", ())) or "parameters"
            raise ValidationError(location, error.get("input"), reason=error.get("msg", str(e)))


def resolve_parameters(raw: Optional[RawBoltInputs] = None, **overrides: Any) -> BoltParameters:
    """Resolve raw inputs with the default resolver."""
    return ParameterResolver().resolve(raw, **overrides)
