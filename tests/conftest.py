"""
Pytest configuration for bolt generator tests.

Puts the project root (for the ``shared`` package) and ``src`` (for
``bolt_generator``) on sys.path so the tests run from a plain checkout.
"""
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from bolt_generator.config import reset_config  # noqa: E402
from bolt_generator.kernel import ReferenceKernel  # noqa: E402
from bolt_generator.resolver import ParameterResolver  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate every test from BOLT_* environment variables and cached config."""
    for key in ("BOLT_KERNEL", "BOLT_DEFAULT_LENGTH_UNIT", "BOLT_DEFAULT_ANGLE_UNIT", "BOLT_LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def kernel():
    """Create an empty reference kernel."""
    return ReferenceKernel()


@pytest.fixture
def default_params():
    """Resolved default bolt parameters."""
    return ParameterResolver().resolve()
