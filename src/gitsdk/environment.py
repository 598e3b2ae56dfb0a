"""
Git for Windows toolchain discovery and subprocess environments.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from gitsdk.constants import (
    AGENT_HOME_ENV_VAR,
    DEFAULT_CHECKOUT_WORKERS,
    GIT_FOR_WINDOWS_BIN_DIRS,
    GIT_FOR_WINDOWS_ROOT,
    MSYSTEM,
)
from gitsdk.log_utils import logger
from gitsdk.process import build_environment


def git_config_parameters(checkout_workers: int = DEFAULT_CHECKOUT_WORKERS) -> str:
    return f"'checkout.workers={checkout_workers}'"


def is_windows() -> bool:
    return os.name == "nt"


@dataclass(frozen=True)
class GitToolchain:
    """Executables and search paths of one Git installation."""

    root: Optional[str]
    """Git for Windows root, or None when falling back to tools on PATH"""

    bin_paths: Tuple[str, ...]
    """Directories prepended to PATH for the packaging script"""

    git_exe: str
    """git executable"""

    bash_exe: str
    """POSIX shell running the packaging script"""

    checkout_workers: int = DEFAULT_CHECKOUT_WORKERS

    @property
    def usr_bin_path(self) -> Optional[str]:
        return self.bin_paths[-1] if self.bin_paths else None

    @classmethod
    def from_root(
        cls, root: str, checkout_workers: int = DEFAULT_CHECKOUT_WORKERS
    ) -> "GitToolchain":
        bin_paths = tuple(f"{root}/{p}/bin" for p in GIT_FOR_WINDOWS_BIN_DIRS)
        return cls(
            root=root,
            bin_paths=bin_paths,
            git_exe=f"{root}/cmd/git.exe",
            bash_exe=f"{bin_paths[-1]}/bash.exe",
            checkout_workers=checkout_workers,
        )

    @classmethod
    def detect(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        git_root: Optional[str] = None,
        checkout_workers: int = DEFAULT_CHECKOUT_WORKERS,
    ) -> "GitToolchain":
        """
        Locate the Git installation to use.

        An explicit `git_root` wins. Otherwise the build agent's own copy of
        Git (`$AGENT_HOMEDIRECTORY/externals/git`) is preferred when present,
        then the default Git for Windows location. On hosts without a Git for
        Windows installation, `git` and `bash` are taken from PATH.
        """
        env = os.environ if environ is None else environ
        if git_root:
            return cls.from_root(git_root, checkout_workers)

        agent_home = env.get(AGENT_HOME_ENV_VAR)
        if agent_home:
            externals_git_dir = f"{agent_home}/externals/git"
            if os.path.isdir(externals_git_dir):
                logger.debug(f"Using build agent's Git at {externals_git_dir}")
                return cls.from_root(externals_git_dir, checkout_workers)

        if is_windows() or os.path.isdir(GIT_FOR_WINDOWS_ROOT):
            return cls.from_root(GIT_FOR_WINDOWS_ROOT, checkout_workers)

        logger.debug("No Git for Windows installation found; using tools from PATH")
        return cls(
            root=None,
            bin_paths=(),
            git_exe=shutil.which("git") or "git",
            bash_exe=shutil.which("bash") or "bash",
            checkout_workers=checkout_workers,
        )

    def git_environment(self, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Environment for every git invocation."""
        return build_environment(
            {"GIT_CONFIG_PARAMETERS": git_config_parameters(self.checkout_workers)},
            base,
        )

    def packaging_environment(
        self, base: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]:
        """
        Environment of an MSYS2 login-less bash running the packaging script.

        The toolchain's bin directories go in front of the ambient PATH, the
        locale is pinned to C.UTF-8 and CHERE_INVOKING keeps bash in the
        current directory.
        """
        ambient = os.environ if base is None else base
        windir = ambient.get("WINDIR", "C:\\Windows")
        path_entries = [*self.bin_paths, ambient.get("PATH", "")]
        return build_environment(
            {
                "GIT_CONFIG_PARAMETERS": git_config_parameters(self.checkout_workers),
                "COMSPEC": ambient.get("COMSPEC") or f"{windir}\\system32\\cmd.exe",
                "LC_CTYPE": "C.UTF-8",
                "CHERE_INVOKING": "1",
                "MSYSTEM": MSYSTEM,
                "PATH": os.pathsep.join(p for p in path_entries if p),
            },
            ambient,
        )


def tar_executable(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the tar to extract archives with.

    On Windows this is the OS-native bsdtar in system32 rather than whatever
    MSYS2 tar happens to be first on PATH.
    """
    env = os.environ if environ is None else environ
    if is_windows():
        windir = env.get("WINDIR", "C:\\Windows")
        return f"{windir}\\system32\\tar.exe"
    return shutil.which("tar") or "tar"
