"""
Tests for the process runner.
"""

import os
import sys

import pytest

from gitsdk.exceptions import ProcessError
from gitsdk.process import build_environment, run_process


@pytest.mark.integration
def test_zero_exit_returns_completed_process():
    result = run_process(sys.executable, ["-c", "pass"])
    assert result.returncode == 0


@pytest.mark.integration
def test_nonzero_exit_raises_with_exit_code():
    with pytest.raises(ProcessError) as exc_info:
        run_process(sys.executable, ["-c", "import sys; sys.exit(3)"], description="probe")

    assert exc_info.value.exit_code == 3
    assert str(exc_info.value) == "probe: exited with code 3"
    assert exc_info.value.command == [sys.executable, "-c", "import sys; sys.exit(3)"]


@pytest.mark.integration
def test_environment_is_passed_to_child():
    env = build_environment({"GITSDK_PROBE": "42"})
    run_process(
        sys.executable,
        ["-c", "import os, sys; sys.exit(0 if os.environ['GITSDK_PROBE'] == '42' else 1)"],
        env=env,
    )


@pytest.mark.integration
def test_missing_executable_raises_without_exit_code(tmp_path):
    missing = str(tmp_path / "no-such-tool")

    with pytest.raises(ProcessError) as exc_info:
        run_process(missing, ["--version"])

    assert exc_info.value.exit_code is None
    assert "no-such-tool: failed to start" in str(exc_info.value)


@pytest.mark.unit
def test_default_description_is_executable_name(mocker):
    mocker.patch(
        "gitsdk.process.subprocess.run", return_value=mocker.Mock(returncode=128)
    )

    with pytest.raises(ProcessError, match=r"^git\.exe: exited with code 128$"):
        run_process("C:/Program Files/Git/cmd/git.exe", ["status"])


@pytest.mark.unit
def test_stdin_closed_and_output_inherited(mocker):
    run = mocker.patch("gitsdk.process.subprocess.run", return_value=mocker.Mock(returncode=0))

    run_process("tar", ["-xzf", "a.tar.gz"], env={"A": "1"})

    _, kwargs = run.call_args
    assert kwargs["stdin"] is not None
    assert "stdout" not in kwargs
    assert "stderr" not in kwargs
    assert "timeout" not in kwargs
    assert kwargs["env"] == {"A": "1"}


@pytest.mark.unit
def test_build_environment_does_not_mutate_base(monkeypatch):
    monkeypatch.setenv("GITSDK_AMBIENT", "yes")
    before = dict(os.environ)

    env = build_environment({"GIT_CONFIG_PARAMETERS": "'checkout.workers=56'"})

    assert env["GITSDK_AMBIENT"] == "yes"
    assert env["GIT_CONFIG_PARAMETERS"] == "'checkout.workers=56'"
    assert dict(os.environ) == before


@pytest.mark.unit
def test_build_environment_with_explicit_base():
    base = {"PATH": "/bin"}
    env = build_environment({"X": "1"}, base)

    assert env == {"PATH": "/bin", "X": "1"}
    assert base == {"PATH": "/bin"}
    assert build_environment(None, base) is not base
