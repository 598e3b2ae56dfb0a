"""
Artifact resolution

Maps a (flavor, architecture) request onto an SDK repository, decides how the
artifact is acquired and computes its id before anything heavy happens.
"""

from dataclasses import dataclass
from typing import Optional

from gitsdk.config import Settings
from gitsdk.constants import (
    ARCHITECTURE_REPOS,
    MINIMAL_FLAVOR,
    RETAGGED_COMMIT_SHA,
    RETAGGED_ID_SUFFIX,
)
from gitsdk.download import CloneDownloader, ResolvedArtifact, resolve_minimal_flavor
from gitsdk.environment import GitToolchain
from gitsdk.exceptions import InvalidArchitectureError
from gitsdk.github import GitHubClient
from gitsdk.log_utils import logger

__all__ = [
    "ArtifactMetadata",
    "ResolvedArtifact",
    "clone_artifact_id",
    "get_artifact_metadata",
    "resolve_artifact",
]


@dataclass(frozen=True)
class ArtifactMetadata:
    repo: str
    artifact_name: str


def get_artifact_metadata(flavor: str, architecture: str) -> ArtifactMetadata:
    """
    Return the SDK repository and artifact name for a request.

    Raises:
        InvalidArchitectureError: `architecture` is not one of i686, x86_64
            or aarch64.
    """
    repo = ARCHITECTURE_REPOS.get(architecture)
    if repo is None:
        raise InvalidArchitectureError(architecture)
    return ArtifactMetadata(repo=repo, artifact_name=f"{repo}-{flavor}")


def clone_artifact_id(artifact_name: str, head_sha: str) -> str:
    suffix = RETAGGED_ID_SUFFIX if head_sha == RETAGGED_COMMIT_SHA else ""
    return f"{artifact_name}-{head_sha}{suffix}"


def resolve_artifact(
    flavor: str,
    architecture: str,
    github_token: Optional[str] = None,
    *,
    client: Optional[GitHubClient] = None,
    settings: Optional[Settings] = None,
) -> ResolvedArtifact:
    """
    Resolve an SDK artifact without downloading it.

    The `minimal` flavor is resolved through the `ci-artifacts` release of the
    SDK repository. Every other flavor is pinned to the current tip of the
    SDK repository's main branch and built from a clone.

    Parameters:
        flavor (str): `minimal`, `full`, or any flavor please.sh can package.
        architecture (str): `i686`, `x86_64` or `aarch64`.
        github_token (str | None): Token for the API and for asset downloads.
        client (GitHubClient | None): API client; created when omitted.
        settings (Settings | None): Configuration; defaults when omitted.

    Returns:
        ResolvedArtifact: Name, id and the deferred download.

    Raises:
        InvalidArchitectureError: Before any network access.
        APIError: The branch or release could not be resolved.
    """
    settings = settings or Settings()
    metadata = get_artifact_metadata(flavor, architecture)
    repo = metadata.repo

    if client is None:
        client = GitHubClient(
            github_token,
            allow_env_token=settings.allow_env_token,
            timeout=settings.api_timeout,
        )

    if flavor == MINIMAL_FLAVOR:
        return resolve_minimal_flavor(
            settings.owner,
            repo,
            metadata.artifact_name,
            client,
            github_token,
            tag=settings.release_tag,
        )

    head_sha = client.get_branch(settings.owner, repo, settings.branch)
    logger.info(f"Got commit {head_sha} for {repo}")

    return ResolvedArtifact(
        artifact_name=metadata.artifact_name,
        id=clone_artifact_id(metadata.artifact_name, head_sha),
        downloader=CloneDownloader(
            owner=settings.owner,
            repo=repo,
            flavor=flavor,
            architecture=architecture,
            head_sha=head_sha,
            clone_dir=settings.clone_dir,
            branch=settings.branch,
            toolchain=GitToolchain.detect(
                git_root=settings.git_root,
                checkout_workers=settings.checkout_workers,
            ),
        ),
    )
