import pytest

from gitsdk.git import Git

pytestmark = pytest.mark.unit


@pytest.fixture
def run(mocker):
    return mocker.patch("gitsdk.git.run_process")


def test_clone_command_line(toolchain, run):
    Git(toolchain).clone("https://github.com/o/r", "dest", extra_options=["--bare"])

    args, kwargs = run.call_args
    assert args == (
        "/fake/git/cmd/git.exe",
        [
            "clone",
            "--depth=1",
            "--single-branch",
            "--branch=main",
            "--bare",
            "https://github.com/o/r",
            "dest",
        ],
    )
    assert kwargs["description"] == "git clone"
    assert kwargs["env"]["GIT_CONFIG_PARAMETERS"] == "'checkout.workers=56'"


def test_verbose_clone_logs(toolchain, run, mocker):
    info = mocker.patch("gitsdk.git.logger.info")

    Git(toolchain).clone("https://github.com/o/r", "dest", verbose=True)

    info.assert_called_once_with("Cloning https://github.com/o/r to dest")


def test_quiet_clone_does_not_log(toolchain, run, mocker):
    info = mocker.patch("gitsdk.git.logger.info")

    Git(toolchain).clone("https://github.com/o/r", "dest")

    info.assert_not_called()


def test_update_ref(toolchain, run):
    Git(toolchain).update_ref(".tmp", "HEAD", "abc")

    assert run.call_args[0][1] == ["--git-dir", ".tmp", "update-ref", "HEAD", "abc"]


def test_worktree_add(toolchain, run):
    Git(toolchain).worktree_add(".tmp", "C:/sdk", "abc")

    assert run.call_args[0][1] == ["--git-dir=.tmp", "worktree", "add", "C:/sdk", "abc"]


def test_checkout_workers_follow_toolchain(run):
    from gitsdk.environment import GitToolchain

    Git(GitToolchain.from_root("/g", checkout_workers=12)).update_ref("x", "HEAD", "y")

    assert run.call_args[1]["env"]["GIT_CONFIG_PARAMETERS"] == "'checkout.workers=12'"
