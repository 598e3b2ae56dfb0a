"""
Core interface shared by the download strategies.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Union

Pathish = Union[str, Path]


class ArtifactDownloader(ABC):
    """
    A deferred download of one resolved artifact.

    Instances carry everything the resolver found out (commit, asset, ...)
    so that the download itself needs no further lookups. Treat an instance
    as single-use: both strategies work with fixed temporary paths.
    """

    @abstractmethod
    def download(self, output_directory: Pathish, verbose: Union[bool, int] = False) -> None:
        """
        Materialize the artifact into `output_directory`.

        Raises:
            GitSdkError: A stage of the pipeline failed. Temporary state is
                only removed on success.
        """


@dataclass
class ResolvedArtifact:
    """An artifact whose identity is known but which is not downloaded yet."""

    artifact_name: str
    """`<repo>-<flavor>`, e.g. `git-sdk-64-full`"""

    id: str
    """Cache key; changes only when the artifact's content would change"""

    downloader: ArtifactDownloader
    """Strategy that materializes the artifact"""

    def download(self, output_directory: Pathish, verbose: Union[bool, int] = False) -> None:
        self.downloader.download(output_directory, verbose)
