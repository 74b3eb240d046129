"""Unit tests for selffork.cli."""

import runpy
from unittest.mock import patch

import pytest

from selffork import __version__
from selffork.cli import describe_target, entrypoint, main


class TestDescribeTarget:
    def test_function_target(self):
        assert describe_target("fork_target:worker") == ["worker(a: int, b: string)"]

    def test_module_target_lists_registered_functions(self):
        lines = describe_target("fork_target")
        assert "worker: worker(a: int, b: string)" in lines
        assert "exit_with: exit_with(code: int)" in lines

    def test_missing_attribute_raises(self):
        with pytest.raises(AttributeError):
            describe_target("fork_target:nothing")


class TestMain:
    def test_prints_signatures(self, capsys):
        assert main(["describe", "fork_target:worker", "fork_target:sleep"]) == 0

        out = capsys.readouterr().out.splitlines()
        assert out == ["worker(a: int, b: string)", "sleep(seconds: int|float)"]

    def test_import_error_returns_one(self, capsys):
        assert main(["describe", "no_such_module_here:fn"]) == 1
        assert "Error: no_such_module_here:fn" in capsys.readouterr().err

    def test_debug_flag_configures_logging(self):
        with patch("selffork.cli.logging.basicConfig") as mock_config:
            main(["-d", "describe", "fork_target:worker"])
        assert mock_config.call_args.kwargs["level"] == 10

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2


def test_entrypoint_raises_system_exit_with_exit_code() -> None:
    with patch("selffork.cli.main", return_value=0):
        with pytest.raises(SystemExit) as exc_info:
            entrypoint()
    assert exc_info.value.code == 0


def test_python_dash_m_exits_with_describe_status() -> None:
    with patch("selffork.cli.main", return_value=1) as mock_main:
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("selffork", run_name="__main__")

    assert exc_info.value.code == 1
    mock_main.assert_called_once_with()
