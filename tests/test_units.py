"""Unit tests for unit conversion and expression evaluation."""

import math

import pytest

from shared.exceptions import ValidationError
from bolt_generator.config import reset_config
from bolt_generator.units import (
    ANGLE,
    LENGTH,
    Quantity,
    cm_to_mm,
    evaluate,
    referenced_names,
    resolve_angle,
    resolve_length,
    unit_factor,
)


class TestConversions:
    """Tests for unit conversion helpers."""

    def test_cm_to_mm(self):
        """Test centimetre to millimetre conversion."""
        assert cm_to_mm(0.5) == 5.0

    def test_unit_factor(self):
        """Test canonical factors for length and angle units."""
        assert unit_factor("in") == Quantity(2.54, LENGTH)
        assert unit_factor("DEG") == Quantity(math.pi / 180, ANGLE)

    def test_unit_factor_unknown(self):
        """Test unknown unit raises KeyError."""
        with pytest.raises(KeyError):
            unit_factor("furlong")


class TestResolveLength:
    """Tests for resolving lengths to centimetres."""

    def test_float_is_canonical(self):
        """Test that floats pass through unchanged."""
        assert resolve_length(0.5) == 0.5

    def test_fraction_with_unit(self):
        """Test fractional inches."""
        assert resolve_length("3/8 in") == pytest.approx(0.9525)

    def test_product_with_unit(self):
        """Test a number times a measured value."""
        assert resolve_length("2 * 5 mm") == pytest.approx(1.0)

    def test_bare_number_uses_default_unit(self):
        """Test a plain number string is read in the default length unit (cm)."""
        assert resolve_length("0.5") == pytest.approx(0.5)

    def test_bare_number_in_sum_takes_default_unit(self):
        """Test a plain number added to a measured value uses the default unit."""
        assert resolve_length("1 in + 2") == pytest.approx(4.54)

    def test_variable_reference(self):
        """Test names resolve through the variables mapping."""
        variables = {"body_diameter": Quantity(0.5, LENGTH)}
        assert resolve_length("1.5 * body_diameter", variables=variables) == pytest.approx(0.75)

    def test_group_with_unit(self):
        """Test a parenthesised group followed by a unit."""
        assert resolve_length("(1 + 1) mm") == pytest.approx(0.2)

    def test_negation(self):
        """Test unary minus."""
        assert resolve_length("-(2 mm)") == pytest.approx(-0.2)

    def test_configured_default_unit(self, monkeypatch):
        """Test the default length unit comes from configuration."""
        monkeypatch.setenv("BOLT_DEFAULT_LENGTH_UNIT", "mm")
        reset_config()
        assert resolve_length("5") == pytest.approx(0.5)

    def test_angle_rejected(self):
        """Test an angle expression is not accepted as a length."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_length("30 deg", "body_length")
        assert exc_info.value.parameter_name == "body_length"
        assert "expected a length" in exc_info.value.message

    def test_product_of_lengths_rejected(self):
        """Test multiplying two lengths raises."""
        with pytest.raises(ValidationError):
            resolve_length("5 mm * 2 mm")

    def test_boolean_rejected(self):
        """Test booleans are not numbers here."""
        with pytest.raises(ValidationError):
            resolve_length(True)

    def test_non_finite_rejected(self):
        """Test infinite floats raise."""
        with pytest.raises(ValidationError):
            resolve_length(float("inf"))

    def test_empty_string_rejected(self):
        """Test blank input raises."""
        with pytest.raises(ValidationError):
            resolve_length("  ")


class TestResolveAngle:
    """Tests for resolving angles to radians."""

    def test_bare_number_in_degrees(self):
        """Test a plain number string is read in degrees."""
        assert resolve_angle("30") == pytest.approx(math.pi / 6)

    def test_explicit_radians(self):
        """Test a radian expression using pi."""
        assert resolve_angle("(pi / 6) rad") == pytest.approx(math.pi / 6)

    def test_float_is_canonical(self):
        """Test floats are already radians."""
        assert resolve_angle(0.5) == 0.5

    def test_length_rejected(self):
        """Test a length is not accepted as an angle."""
        with pytest.raises(ValidationError):
            resolve_angle("5 mm", "cut_angle")


class TestEvaluate:
    """Tests for raw expression evaluation."""

    def test_dimensionless(self):
        """Test plain arithmetic stays dimensionless."""
        assert evaluate("2 * (3 + 4)") == Quantity(14.0, None)

    def test_ratio_of_lengths(self):
        """Test dividing two lengths gives a plain number."""
        result = evaluate("1 in / 1 cm")
        assert result.dimension is None
        assert result.value == pytest.approx(2.54)

    def test_parse_error(self):
        """Test malformed expressions raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            evaluate("2 +", "head_height")
        assert "cannot parse" in exc_info.value.message

    def test_division_by_zero(self):
        """Test division by zero raises ValidationError."""
        with pytest.raises(ValidationError):
            evaluate("1 / 0")

    def test_unknown_name(self):
        """Test unknown names raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            evaluate("2 * thickness")
        assert "unknown name 'thickness'" in exc_info.value.message


class TestReferencedNames:
    """Tests for name extraction."""

    def test_names_without_constants(self):
        """Test that pi is not reported as a reference."""
        assert referenced_names("2 * a + pi * b") == {"a", "b"}

    def test_units_are_not_names(self):
        """Test unit suffixes are not reported."""
        assert referenced_names("3/8 in + 2 mm") == set()
