"""
The three git operations the clone strategy needs.
"""

from __future__ import annotations

from typing import Optional, Sequence

from gitsdk.constants import DEFAULT_BRANCH
from gitsdk.environment import GitToolchain
from gitsdk.log_utils import logger
from gitsdk.process import run_process


class Git:
    """Runs git commands through one toolchain."""

    def __init__(self, toolchain: GitToolchain):
        self.toolchain = toolchain

    def _run(self, args: Sequence[str], description: str) -> None:
        run_process(
            self.toolchain.git_exe,
            args,
            env=self.toolchain.git_environment(),
            description=description,
        )

    def clone(
        self,
        url: str,
        destination: str,
        verbose: bool | int = False,
        extra_options: Optional[Sequence[str]] = None,
        branch: str = DEFAULT_BRANCH,
    ) -> None:
        """Shallow, single-branch clone of `branch`."""
        if verbose:
            logger.info(f"Cloning {url} to {destination}")
        self._run(
            [
                "clone",
                "--depth=1",
                "--single-branch",
                f"--branch={branch}",
                *(extra_options or []),
                url,
                destination,
            ],
            "git clone",
        )

    def update_ref(self, git_dir: str, ref: str, sha: str) -> None:
        self._run(["--git-dir", git_dir, "update-ref", ref, sha], "git update-ref")

    def worktree_add(self, git_dir: str, destination: str, commit: str) -> None:
        self._run(
            [f"--git-dir={git_dir}", "worktree", "add", destination, commit],
            "git worktree add",
        )
