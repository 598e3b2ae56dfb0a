import logging

import platformdirs
import pytest
import requests

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock requests.* or Session.request."
)


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG` indicating that network access is blocked during tests.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    """
    Register the markers used to categorize tests.
    """
    config.addinivalue_line("markers", "unit: fast tests without external processes")
    config.addinivalue_line(
        "markers", "integration: tests that spawn real processes or touch the filesystem"
    )


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point platformdirs at temporary directories and clear environment variables
    that change behavior (tokens, GitHub Actions detection, log level, build agent).
    """
    base = tmp_path_factory.mktemp("gitsdk")
    config_dir = base / "config"
    log_dir = base / "log"
    for path in (config_dir, log_dir):
        path.mkdir(parents=True, exist_ok=True)

    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    monkeypatch.setattr(
        platformdirs, "user_log_dir", lambda *_args, **_kwargs: str(log_dir)
    )

    for var in (
        "GITHUB_TOKEN",
        "GITHUB_ACTIONS",
        "GIT_SDK_FETCH_LOG_LEVEL",
        "AGENT_HOMEDIRECTORY",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_log_level():
    """
    Undo log level changes made by CLI tests.
    """
    from gitsdk.log_utils import logger

    level = logger.level
    handler_levels = [(h, h.level) for h in logger.handlers]
    yield
    logger.setLevel(level)
    for handler, handler_level in handler_levels:
        handler.setLevel(handler_level)
    for handler in logger.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()


def pytest_runtest_setup():
    """
    Prevent real network requests during tests by replacing requests entry points with blocking callables.
    """
    requests.get = _block_network
    requests.post = _block_network
    requests.head = _block_network
    requests.Session.request = _block_network


@pytest.fixture
def toolchain():
    """
    A Git for Windows toolchain rooted at a fake location.
    """
    from gitsdk.environment import GitToolchain

    return GitToolchain.from_root("/fake/git")
