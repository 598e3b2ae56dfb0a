"""
Clone-based acquisition of SDK artifacts.

The SDK repository is cloned bare and pinned to the commit the resolver saw.
The `full` flavor is then checked out as a worktree; every other flavor is
packaged by build-extra's `please.sh create-sdk-artifact`.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from typing import Union

from gitsdk.constants import (
    BUILD_EXTRA_REPO,
    DEFAULT_BRANCH,
    DEFAULT_CLONE_DIR,
    FULL_FLAVOR,
    GITHUB_BASE_URL,
    PACKAGING_COMMAND,
    PACKAGING_SCRIPT,
)
from gitsdk.environment import GitToolchain
from gitsdk.git import Git
from gitsdk.log_utils import log_group, logger
from gitsdk.process import run_process

from .base import ArtifactDownloader, Pathish


@dataclass
class CloneDownloader(ArtifactDownloader):
    owner: str
    repo: str
    flavor: str
    architecture: str
    head_sha: str
    clone_dir: str = DEFAULT_CLONE_DIR
    branch: str = DEFAULT_BRANCH
    toolchain: GitToolchain = field(default_factory=GitToolchain.detect)

    @property
    def repo_url(self) -> str:
        return f"{GITHUB_BASE_URL}/{self.owner}/{self.repo}"

    @property
    def build_extra_dir(self) -> str:
        return f"{self.clone_dir}/{BUILD_EXTRA_REPO}"

    def download(self, output_directory: Pathish, verbose: Union[bool, int] = False) -> None:
        """
        Clone, pin and materialize the artifact into `output_directory`.

        On success the temporary clone is removed. On failure the
        `ProcessError` of the failing stage propagates and the clone is left
        behind for inspection; callers must expect leftovers after a failed
        run.
        """
        git = Git(self.toolchain)
        out = os.fspath(output_directory)
        is_full = self.flavor == FULL_FLAVOR

        with log_group(f"Cloning {self.repo}"):
            # Partial clone: please.sh only fetches the blobs it packages
            partial_clone_arg = [] if is_full else ["--filter=blob:none"]
            git.clone(
                self.repo_url,
                self.clone_dir,
                verbose,
                ["--bare", *partial_clone_arg],
                branch=self.branch,
            )

        if is_full:
            with log_group(f"Checking out {self.repo}"):
                git.worktree_add(self.clone_dir, out, self.head_sha)
        else:
            # No checkout will move HEAD for us, and please.sh reads HEAD
            git.update_ref(self.clone_dir, "HEAD", self.head_sha)
            with log_group(f"Cloning {BUILD_EXTRA_REPO}"):
                git.clone(
                    f"{GITHUB_BASE_URL}/{self.owner}/{BUILD_EXTRA_REPO}",
                    self.build_extra_dir,
                    verbose,
                )
            with log_group(f"Creating {self.flavor} artifact"):
                self._create_artifact(out, verbose)

        shutil.rmtree(self.clone_dir)
        logger.debug(f"Removed temporary clone {self.clone_dir}")

    def _create_artifact(self, output_directory: str, verbose: Union[bool, int]) -> None:
        trace_arg = ["-x"] if verbose else []
        run_process(
            self.toolchain.bash_exe,
            [
                *trace_arg,
                f"{self.build_extra_dir}/{PACKAGING_SCRIPT}",
                PACKAGING_COMMAND,
                f"--architecture={self.architecture}",
                f"--out={output_directory}",
                f"--sdk={self.clone_dir}",
                self.flavor,
            ],
            env=self.toolchain.packaging_environment(),
            description=PACKAGING_SCRIPT,
        )
