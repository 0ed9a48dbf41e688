"""Tests for the command-line entry point."""

import json

import pytest

from bolt_generator import cli


def _run(capsys, argv):
    code = cli.main(argv)
    return code, json.loads(capsys.readouterr().out)


class TestCli:
    """Tests for bolt-generator main()."""

    def test_default_build(self, capsys):
        """Test a default run prints the build result."""
        code, output = _run(capsys, [])
        assert code == 0
        assert output["success"] is True
        assert output["result"]["body"]["name"] == "Bolt"
        assert output["result"]["thread_applied"] is True
        assert "calls" not in output

    def test_expressions_and_user_parameters(self, capsys):
        """Test dimension flags accept expressions and user parameters."""
        code, output = _run(capsys, [
            "--name", "M6",
            "--param", "d=6 mm",
            "--body-diameter", "d",
            "--head-diameter", "1.6 * d",
            "--cut-angle", "30 deg",
        ])
        assert code == 0
        parameters = output["result"]["parameters"]
        assert parameters["body_diameter"] == pytest.approx(0.6)
        assert parameters["head_diameter"] == pytest.approx(0.96)
        assert output["result"]["thread"]["designation"] == "M6x1"

    def test_show_calls(self, capsys):
        """Test --show-calls includes the kernel call log."""
        code, output = _run(capsys, ["--show-calls"])
        assert code == 0
        assert output["calls"][0] == {"operation": "create_component", "arguments": {"name": "Bolt"}}
        assert output["calls"][-1]["operation"] == "apply_thread"

    def test_validation_error_exit_code(self, capsys):
        """Test invalid parameters print the structured error and exit 1."""
        code, output = _run(capsys, ["--head-diameter", "0.4", "--body-diameter", "0.5"])
        assert code == 1
        assert output["success"] is False
        assert output["error"]["type"] == "ValidationError"
        assert output["error"]["context"]["requested_id"] == "head_diameter"

    def test_geometry_error_exit_code(self, capsys):
        """Test kernel failures carry the build's correlation ID."""
        code, output = _run(capsys, ["--body-diameter", "7 mm"])
        assert code == 1
        assert output["error"]["type"] == "GeometryError"
        assert output["error"]["correlation_id"]

    def test_bad_user_parameter(self):
        """Test --param without '=' is a usage error."""
        with pytest.raises(SystemExit):
            cli.main(["--param", "oops"])
