"""Unit tests for the parameter resolver."""

import math

import pytest

from shared.exceptions import ValidationError
from bolt_generator.config import BoltSettings
from bolt_generator.models import BoltParameters, RawBoltInputs
from bolt_generator.resolver import ParameterResolver, resolve_parameters


@pytest.fixture
def resolver():
    """Create a resolver with default settings."""
    return ParameterResolver(BoltSettings())


class TestDefaults:
    """Tests for default resolution."""

    def test_defaults(self, resolver):
        """Test that no input gives the reference bolt."""
        params = resolver.resolve()
        assert params.name == "Bolt"
        assert params.head_diameter == 0.75
        assert params.body_diameter == 0.5
        assert params.head_height == 0.3125
        assert params.body_length == 2.0
        assert params.cut_angle == pytest.approx(math.pi / 6)
        assert params.chamfer_distance == 0.03845
        assert params.fillet_radius == 0.02994

    def test_configured_defaults(self):
        """Test defaults come from settings."""
        resolver = ParameterResolver(BoltSettings(default_name="M5", default_body_length=3.0))
        params = resolver.resolve()
        assert params.name == "M5"
        assert params.body_length == 3.0

    def test_module_function(self):
        """Test resolve_parameters uses the default resolver."""
        assert resolve_parameters(body_length="25 mm").body_length == pytest.approx(2.5)


class TestExpressions:
    """Tests for expression inputs."""

    def test_overrides(self, resolver):
        """Test keyword overrides take precedence over raw inputs."""
        raw = RawBoltInputs(head_diameter=1.0)
        params = resolver.resolve(raw, head_diameter="3/8 in")
        assert params.head_diameter == pytest.approx(0.9525)

    def test_reference_to_other_field(self, resolver):
        """Test a field may refer to another bolt field."""
        params = resolver.resolve(body_diameter="4 mm", head_diameter="1.5 * body_diameter")
        assert params.head_diameter == pytest.approx(0.6)

    def test_reference_to_later_field(self, resolver):
        """Test references resolve regardless of field order."""
        params = resolver.resolve(chamfer_distance="fillet_radius * 2", fillet_radius="0.2 mm")
        assert params.chamfer_distance == pytest.approx(0.04)

    def test_user_parameters(self, resolver):
        """Test user parameters feed bolt expressions."""
        raw = RawBoltInputs(
            body_diameter="d",
            head_diameter="1.5 * d",
            user_parameters={"d": "5 mm"},
        )
        params = resolver.resolve(raw)
        assert params.body_diameter == pytest.approx(0.5)
        assert params.head_diameter == pytest.approx(0.75)

    def test_circular_reference(self, resolver):
        """Test cycles between parameters are rejected."""
        raw = RawBoltInputs(user_parameters={"a": "2 * b", "b": "a + 1"})
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve(raw)
        assert "circular reference between a, b" in exc_info.value.message

    def test_user_parameter_shadowing_field(self, resolver):
        """Test user parameters may not reuse bolt field names."""
        raw = RawBoltInputs(user_parameters={"body_diameter": 1.0})
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve(raw)
        assert exc_info.value.parameter_name == "body_diameter"


class TestInvariants:
    """Tests for invariant rejection."""

    def test_head_not_larger_than_body(self, resolver):
        """Test head diameter 0.4 with body diameter 0.5 is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve(head_diameter=0.4, body_diameter=0.5)
        assert exc_info.value.parameter_name == "head_diameter"

    def test_equal_diameters(self, resolver):
        """Test equal diameters are rejected."""
        with pytest.raises(ValidationError):
            resolver.resolve(head_diameter=0.5, body_diameter=0.5)

    @pytest.mark.parametrize("angle", ["0", "90", "-10", "120"])
    def test_cut_angle_bounds(self, resolver, angle):
        """Test cut angles outside (0, 90) degrees are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve(cut_angle=angle)
        assert exc_info.value.parameter_name == "cut_angle"

    @pytest.mark.parametrize("field", ["head_height", "body_length", "chamfer_distance", "fillet_radius"])
    def test_non_positive_lengths(self, resolver, field):
        """Test zero and negative lengths are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve(**{field: "-1 mm"})
        assert exc_info.value.parameter_name == field

    def test_empty_name(self, resolver):
        """Test a blank name is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve(name="   ")
        assert exc_info.value.parameter_name == "name"


class TestValidate:
    """Tests for re-validating parameter sets."""

    def test_valid_parameters_pass(self, resolver, default_params):
        """Test valid parameters come back equal."""
        assert resolver.validate(default_params) == default_params

    def test_unvalidated_parameters_rejected(self, resolver):
        """Test parameters built without validation are still checked."""
        params = BoltParameters.model_construct(
            name="Bolt",
            head_diameter=0.4,
            body_diameter=0.5,
            head_height=0.3125,
            body_length=2.0,
            cut_angle=math.pi / 6,
            chamfer_distance=0.03845,
            fillet_radius=0.02994,
        )
        with pytest.raises(ValidationError):
            resolver.validate(params)


class TestBoltParametersModel:
    """Tests for the BoltParameters model itself."""

    def test_frozen(self, default_params):
        """Test resolved parameters are immutable."""
        with pytest.raises(Exception):
            default_params.head_diameter = 1.0

    def test_model_validator(self):
        """Test the model rejects a head narrower than the body."""
        with pytest.raises(Exception):
            BoltParameters(
                head_diameter=0.4,
                body_diameter=0.5,
                head_height=0.3125,
                body_length=2.0,
                cut_angle=math.pi / 6,
                chamfer_distance=0.03845,
                fillet_radius=0.02994,
            )
