"""
Tests for the git-sdk-fetch command line.
"""

import json

import pytest

from gitsdk import cli
from gitsdk.config import Settings
from gitsdk.download import ArtifactDownloader, ResolvedArtifact
from gitsdk.exceptions import InvalidArchitectureError, ProcessError

pytestmark = pytest.mark.unit


@pytest.fixture
def downloader(mocker):
    return mocker.Mock(spec=ArtifactDownloader)


@pytest.fixture
def resolve(mocker, downloader):
    return mocker.patch(
        "gitsdk.cli.resolve_artifact",
        return_value=ResolvedArtifact(
            artifact_name="git-sdk-64-full", id="git-sdk-64-full-abc", downloader=downloader
        ),
    )


def test_resolve_prints_name_and_id(resolve, capsys):
    assert cli.main(["resolve", "--flavor", "full", "--architecture", "x86_64"]) == 0

    out = capsys.readouterr().out
    assert "artifact_name=git-sdk-64-full" in out
    assert "id=git-sdk-64-full-abc" in out
    resolve.assert_called_once_with("full", "x86_64", None, settings=Settings())


def test_resolve_json(resolve, capsys):
    assert cli.main(["resolve", "--flavor", "full", "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == {
        "artifact_name": "git-sdk-64-full",
        "id": "git-sdk-64-full-abc",
    }


def test_download(resolve, downloader, tmp_path):
    out = str(tmp_path / "sdk")

    code = cli.main(
        ["download", "--flavor", "full", "--output", out, "-vv", "--github-token", "tok"]
    )

    assert code == 0
    resolve.assert_called_once_with("full", "x86_64", "tok", settings=Settings())
    downloader.download.assert_called_once_with(out, 2)


def test_download_failure_exits_1(resolve, downloader, tmp_path):
    downloader.download.side_effect = ProcessError("git clone: exited with code 128", exit_code=128)

    assert cli.main(["download", "--output", str(tmp_path / "sdk")]) == 1


def test_existing_output_directory_exits_1(resolve, downloader, tmp_path):
    downloader.download.side_effect = FileExistsError("exists")

    assert cli.main(["download", "--output", str(tmp_path)]) == 1


def test_resolution_failure_exits_1(mocker):
    mocker.patch("gitsdk.cli.resolve_artifact", side_effect=InvalidArchitectureError("armv7"))

    assert cli.main(["resolve"]) == 1


def test_unknown_architecture_is_a_usage_error(resolve):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["resolve", "--architecture", "armv7"])

    assert exc_info.value.code == 2
    resolve.assert_not_called()


def test_config_file_is_used(resolve, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("owner: my-fork\n")

    assert cli.main(["--config", str(config), "resolve"]) == 0

    assert resolve.call_args[1]["settings"].owner == "my-fork"


def test_bad_config_exits_1(resolve, tmp_path):
    assert cli.main(["--config", str(tmp_path / "missing.yaml"), "resolve"]) == 1
    resolve.assert_not_called()


def test_log_level_and_log_dir(resolve, tmp_path):
    from gitsdk.log_utils import logger

    code = cli.main(
        ["--log-level", "DEBUG", "--log-dir", str(tmp_path / "logs"), "resolve"]
    )

    assert code == 0
    assert logger.level == 10
    assert (tmp_path / "logs" / "git-sdk-fetch.log").exists()
