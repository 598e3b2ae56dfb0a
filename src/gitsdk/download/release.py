"""
Release-based acquisition of the minimal SDK flavor.

The minimal flavor is prebuilt by CI and published as a `.tar.gz` asset on the
`ci-artifacts` release of each SDK repository; it only needs downloading and
unpacking.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from gitsdk.constants import (
    CI_ARTIFACTS_ID_PREFIX,
    CI_ARTIFACTS_TAG,
    TAR_GZ_EXTENSION,
)
from gitsdk.environment import tar_executable
from gitsdk.exceptions import AssetNotFoundError, ReleaseNotFoundError
from gitsdk.github import GitHubClient, ReleaseAsset, download_file
from gitsdk.log_utils import logger
from gitsdk.process import run_process

from .base import ArtifactDownloader, Pathish, ResolvedArtifact


@dataclass
class ReleaseDownloader(ArtifactDownloader):
    asset: ReleaseAsset
    github_token: Optional[str] = None
    tar_exe: str = field(default_factory=tar_executable)

    @property
    def temp_file(self) -> str:
        return os.path.join(tempfile.gettempdir(), self.asset.name)

    def request_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/octet-stream"}
        if self.github_token:
            headers["Authorization"] = f"Bearer {self.github_token}"
        return headers

    def download(self, output_directory: Pathish, verbose: Union[bool, int] = False) -> None:
        """
        Download the asset to the temp directory and unpack it.

        `output_directory` must not exist yet; its parent must. On success the
        downloaded archive is removed again. If extraction fails the archive
        stays in the temp directory.

        Raises:
            DownloadHTTPError / NetworkError: The asset could not be fetched.
            FileExistsError: `output_directory` already exists.
            ProcessError: tar exited with a nonzero code.
        """
        tmp_file = self.temp_file
        out = os.fspath(output_directory)
        url = self.asset.browser_download_url

        logger.info(f"Downloading {url} to {tmp_file}...")
        download_file(url, tmp_file, headers=self.request_headers())

        logger.info(f"Extracting {tmp_file} to {out}...")
        os.mkdir(out)
        run_process(
            self.tar_exe,
            [f"-xz{'v' if verbose else ''}f", tmp_file, "-C", out],
            description="tar -xzf",
        )

        logger.info("Finished extracting archive.")
        os.remove(tmp_file)


def resolve_minimal_flavor(
    owner: str,
    repo: str,
    artifact_name: str,
    client: GitHubClient,
    github_token: Optional[str] = None,
    tag: str = CI_ARTIFACTS_TAG,
) -> ResolvedArtifact:
    """
    Resolve the minimal flavor from the `ci-artifacts` release.

    The id is derived from the asset's upload timestamp, so it changes
    exactly when CI publishes a new archive.

    Returns:
        ResolvedArtifact: The artifact with a `ReleaseDownloader`.

    Raises:
        ReleaseNotFoundError: The release lookup did not return 200.
        AssetNotFoundError: The release has no `.tar.gz` asset.
    """
    response = client.get_release_by_tag(owner, repo, tag)
    if response.status != 200:
        raise ReleaseNotFoundError(
            f"Failed to get {tag} release from the {owner}/{repo} repo: {response.status}",
            status_code=response.status,
        )

    tar_gz_asset = next(
        (a for a in response.assets if a.name.endswith(TAR_GZ_EXTENSION)), None
    )
    if tar_gz_asset is None:
        raise AssetNotFoundError(
            f"Failed to find a tar.gz artifact in the {tag} release of the {owner}/{repo} repo"
        )

    return ResolvedArtifact(
        artifact_name=artifact_name,
        id=f"{CI_ARTIFACTS_ID_PREFIX}{tar_gz_asset.updated_at}",
        downloader=ReleaseDownloader(asset=tar_gz_asset, github_token=github_token),
    )
