"""Tests for configuration and logging setup."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from bolt_generator.config import BoltSettings, get_config, reset_config
from bolt_generator.kernel import FusionKernel, ReferenceKernel, get_kernel
from bolt_generator.logging import LogContext, add_build_id, current_build_id


class TestBoltSettings:
    """Tests for BoltSettings."""

    def test_defaults(self):
        """Test default settings."""
        config = BoltSettings()
        assert config.kernel == "reference"
        assert config.default_length_unit == "cm"
        assert config.default_angle_unit == "deg"
        assert config.log_format == "json"

    def test_environment_override(self, monkeypatch):
        """Test BOLT_ environment variables override defaults."""
        monkeypatch.setenv("BOLT_KERNEL", "fusion")
        monkeypatch.setenv("BOLT_DEFAULT_BODY_LENGTH", "3.5")
        config = BoltSettings()
        assert config.kernel == "fusion"
        assert config.default_body_length == 3.5

    def test_invalid_unit(self):
        """Test unknown default units are rejected."""
        with pytest.raises(PydanticValidationError):
            BoltSettings(default_length_unit="furlong")

    def test_singleton(self):
        """Test get_config caches until reset."""
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first


class TestGetKernel:
    """Tests for kernel selection."""

    def test_configured_kernel(self):
        """Test the reference kernel is the default."""
        assert isinstance(get_kernel(), ReferenceKernel)

    def test_named_kernel(self):
        """Test selecting the Fusion adapter by name."""
        assert isinstance(get_kernel("fusion"), FusionKernel)

    def test_thread_tolerance_from_config(self, monkeypatch):
        """Test the reference kernel's thread table uses the configured tolerance."""
        monkeypatch.setenv("BOLT_THREAD_MATCH_TOLERANCE", "0.05")
        reset_config()
        assert get_kernel().thread_table.tolerance == 0.05

    def test_unknown_kernel(self):
        """Test unknown names raise ValueError."""
        with pytest.raises(ValueError):
            get_kernel("occ")


class TestLogContext:
    """Tests for build id scoping."""

    def test_generates_id(self):
        """Test a fresh build id is set inside the context."""
        with LogContext() as context:
            assert context.correlation_id
            assert current_build_id() == context.correlation_id

    def test_no_id_outside_build(self):
        """Test no build id is set outside a context."""
        assert current_build_id() is None
        assert add_build_id(None, "info", {"event": "idle"}) == {"event": "idle"}

    def test_nested_contexts_restore(self):
        """Test the enclosing build id is restored on exit."""
        with LogContext("outer123"):
            with LogContext("inner123"):
                assert current_build_id() == "inner123"
            assert current_build_id() == "outer123"
        assert current_build_id() is None

    def test_processor_stamps_build_id(self):
        """Test events logged inside a build carry its id."""
        with LogContext("abc12345"):
            event = add_build_id(None, "info", {"event": "Stage started"})
        assert event["build_id"] == "abc12345"
