"""Unit handling and expression evaluation for bolt parameters.

The geometry kernel works in centimetres (cm) for every linear dimension and
radians for every angle, the same internal units Fusion 360 uses. This module
turns user input into those canonical values:

    resolve_length("3/8 in")            -> 0.9525
    resolve_length("2 * 5 mm")          -> 1.0
    resolve_angle("30")                 -> 0.5235987755982988
    resolve_length("1.5 * body_diameter", variables={...})

Expressions support ``+ - * /``, unary minus, parentheses, the constant ``pi``,
unit suffixes (``mm cm m in ft`` and ``deg rad``) and names bound through
``variables``. A number without a unit takes the configured default unit for
the dimension being resolved.
"""

import math
from typing import Dict, Mapping, NamedTuple, Optional, Set, Union

from parsimonious import Grammar, NodeVisitor
from parsimonious.exceptions import ParseError

from shared.exceptions import ValidationError
from .config import get_config


LENGTH = "length"
ANGLE = "angle"

# Factor converting one unit to the canonical unit of its dimension
LENGTH_UNITS: Dict[str, float] = {
    "mm": 0.1,
    "cm": 1.0,
    "m": 100.0,
    "in": 2.54,
    "ft": 30.48,
}
ANGLE_UNITS: Dict[str, float] = {
    "deg": math.pi / 180.0,
    "rad": 1.0,
}

CONSTANTS: Dict[str, float] = {"pi": math.pi}


class Quantity(NamedTuple):
    """Evaluated value in canonical units with its dimension (None for a plain number)."""
    value: float
    dimension: Optional[str] = None


def cm_to_mm(value: float) -> float:
    """Convert centimetres to millimetres, rounded to 6 decimal places."""
    return round(value * 10.0, 6)


def unit_factor(unit: str) -> Quantity:
    """Return the canonical factor and dimension of a unit string.

    Raises:
        KeyError: If the unit is not known
    """
    unit = unit.lower()
    if unit in LENGTH_UNITS:
        return Quantity(LENGTH_UNITS[unit], LENGTH)
    if unit in ANGLE_UNITS:
        return Quantity(ANGLE_UNITS[unit], ANGLE)
    raise KeyError(unit)


EXPRESSION_GRAMMAR = Grammar(
    r"""
    expression      = _ sum _

    sum             = product (_ add_op _ product)*
    product         = unary (_ mul_op _ unary)*
    unary           = negation / atom
    negation        = "-" _ unary
    atom            = quantity / group / name

    # "3/8 in" reads as three eighths of an inch, not 3 divided by 8 inches
    quantity        = (fraction / number) unit_suffix?
    fraction        = number _ "/" _ number
    group           = "(" _ sum _ ")" unit_suffix?
    unit_suffix     = _ unit

    add_op          = "+" / "-"
    mul_op          = "*" / "/"

    number          = ~r"(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?"
    unit            = ~r"(mm|cm|m|in|ft|deg|rad)\b"
    name            = ~r"[A-Za-z_][A-Za-z0-9_]*"
    _               = ~r"\s*"
    """
)


def _repeated(visited: object) -> list:
    """Children of a ``*`` or ``?`` term; an empty match visits to the bare node."""
    return visited if isinstance(visited, list) else []


# noinspection PyMethodMayBeStatic
class ExpressionVisitor(NodeVisitor):
    """Evaluates a parsed expression tree to a Quantity."""

    unwrapped_exceptions = (ValidationError,)

    def __init__(
        self,
        parameter_name: str,
        expression: str,
        variables: Optional[Mapping[str, Quantity]] = None,
        default_units: Optional[Mapping[str, str]] = None,
    ):
        self.parameter_name = parameter_name
        self.expression = expression
        self.variables = variables or {}
        self.default_units = default_units or {}

    def _fail(self, reason: str) -> ValidationError:
        return ValidationError(self.parameter_name, self.expression, reason=reason)

    def _with_default_unit(self, quantity: Quantity, dimension: str) -> Quantity:
        unit = self.default_units.get(dimension)
        if quantity.dimension is not None or unit is None:
            return quantity
        return Quantity(quantity.value * unit_factor(unit).value, dimension)

    def visit_expression(self, node, visited_children):
        _, value, _ = visited_children
        return value

    def visit_sum(self, node, visited_children):
        total, rest = visited_children
        for _, op, _, operand in _repeated(rest):
            if total.dimension != operand.dimension:
                # A bare number next to a measured value takes the default unit
                if total.dimension is None:
                    total = self._with_default_unit(total, operand.dimension)
                elif operand.dimension is None:
                    operand = self._with_default_unit(operand, total.dimension)
                if total.dimension != operand.dimension:
                    raise self._fail(
                        f"cannot combine {total.dimension or 'number'} and "
                        f"{operand.dimension or 'number'} with '{op}'"
                    )
            value = total.value + operand.value if op == "+" else total.value - operand.value
            total = Quantity(value, total.dimension)
        return total

    def visit_product(self, node, visited_children):
        result, rest = visited_children
        for _, op, _, operand in _repeated(rest):
            if op == "*":
                if result.dimension and operand.dimension:
                    raise self._fail("cannot multiply two measured quantities")
                result = Quantity(result.value * operand.value, result.dimension or operand.dimension)
                continue

            if operand.value == 0:
                raise self._fail("division by zero")
            if operand.dimension is None:
                dimension = result.dimension
            elif operand.dimension == result.dimension:
                dimension = None
            else:
                raise self._fail(
                    f"cannot divide {result.dimension or 'number'} by {operand.dimension}"
                )
            result = Quantity(result.value / operand.value, dimension)
        return result

    def visit_unary(self, node, visited_children):
        return visited_children[0]

    def visit_negation(self, node, visited_children):
        _, _, operand = visited_children
        return Quantity(-operand.value, operand.dimension)

    def visit_atom(self, node, visited_children):
        return visited_children[0]

    def visit_quantity(self, node, visited_children):
        value_choice, suffix = visited_children
        value = value_choice[0]
        return self._apply_unit(Quantity(value), suffix)

    def visit_fraction(self, node, visited_children):
        numerator, _, _, _, denominator = visited_children
        if denominator == 0:
            raise self._fail("division by zero")
        return numerator / denominator

    def visit_group(self, node, visited_children):
        _, _, inner, _, _, suffix = visited_children
        return self._apply_unit(inner, suffix)

    def visit_unit_suffix(self, node, visited_children):
        return visited_children[1]

    def visit_add_op(self, node, visited_children):
        return node.text

    def visit_mul_op(self, node, visited_children):
        return node.text

    def visit_number(self, node, visited_children):
        return float(node.text)

    def visit_unit(self, node, visited_children):
        return node.text

    def visit_name(self, node, visited_children):
        name = node.text
        if name in self.variables:
            return self.variables[name]
        if name in CONSTANTS:
            return Quantity(CONSTANTS[name])
        raise self._fail(f"unknown name '{name}'")

    def _apply_unit(self, quantity: Quantity, suffix: object) -> Quantity:
        units = _repeated(suffix)
        if not units:
            return quantity
        if quantity.dimension is not None:
            raise self._fail(f"unit '{units[0]}' applied to a value that already has a unit")
        factor = unit_factor(units[0])
        return Quantity(quantity.value * factor.value, factor.dimension)

    def generic_visit(self, node, visited_children):
        """ The generic visit method. """
        return visited_children or node


def _parse(expression: str, parameter_name: str):
    try:
        return EXPRESSION_GRAMMAR.parse(expression)
    except ParseError as e:
        raise ValidationError(
            parameter_name,
            expression,
            reason=f"cannot parse expression at position {e.pos}",
        )


def referenced_names(expression: str, parameter_name: str = "expression") -> Set[str]:
    """Return the names an expression refers to, excluding built-in constants."""
    names: Set[str] = set()
    stack = [_parse(expression, parameter_name)]
    while stack:
        node = stack.pop()
        if node.expr_name == "name":
            names.add(node.text)
        stack.extend(node.children)
    return names - set(CONSTANTS)


def evaluate(
    expression: str,
    parameter_name: str = "expression",
    variables: Optional[Mapping[str, Quantity]] = None,
) -> Quantity:
    """Evaluate an expression to a canonical Quantity.

    Bare numbers stay dimensionless; use resolve_length/resolve_angle to apply
    default units for a specific dimension.

    Raises:
        ValidationError: If the expression is malformed or dimensionally inconsistent
    """
    config = get_config()
    visitor = ExpressionVisitor(
        parameter_name,
        expression,
        variables=variables,
        default_units={LENGTH: config.default_length_unit, ANGLE: config.default_angle_unit},
    )
    result = visitor.visit(_parse(expression, parameter_name))
    if not math.isfinite(result.value):
        raise ValidationError(parameter_name, expression, reason="expression does not evaluate to a finite number")
    return result


def _resolve(
    raw: Union[float, int, str],
    dimension: str,
    default_unit: str,
    parameter_name: str,
    variables: Optional[Mapping[str, Quantity]],
) -> float:
    if isinstance(raw, bool):
        raise ValidationError(parameter_name, raw, reason=f"expected a {dimension}, got a boolean")
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw):
            raise ValidationError(parameter_name, raw, reason="value must be a finite number")
        return float(raw)
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(parameter_name, raw, reason=f"expected a number or a {dimension} expression")

    quantity = evaluate(raw, parameter_name, variables)
    if quantity.dimension is None:
        return quantity.value * unit_factor(default_unit).value
    if quantity.dimension != dimension:
        raise ValidationError(
            parameter_name,
            raw,
            reason=f"expected a {dimension}, got a {quantity.dimension}",
        )
    return quantity.value


def resolve_length(
    raw: Union[float, int, str],
    parameter_name: str = "length",
    variables: Optional[Mapping[str, Quantity]] = None,
) -> float:
    """Resolve a raw length to centimetres.

    Floats are taken as already canonical; strings are evaluated as expressions.
    """
    return _resolve(raw, LENGTH, get_config().default_length_unit, parameter_name, variables)


def resolve_angle(
    raw: Union[float, int, str],
    parameter_name: str = "angle",
    variables: Optional[Mapping[str, Quantity]] = None,
) -> float:
    """Resolve a raw angle to radians.

    Floats are taken as already canonical; strings are evaluated as expressions.
    """
    return _resolve(raw, ANGLE, get_config().default_angle_unit, parameter_name, variables)
