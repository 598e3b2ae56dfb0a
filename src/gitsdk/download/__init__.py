"""
Download strategies for SDK artifacts.
"""

from .base import ArtifactDownloader, ResolvedArtifact
from .clone import CloneDownloader
from .release import ReleaseDownloader, resolve_minimal_flavor

__all__ = [
    "ArtifactDownloader",
    "CloneDownloader",
    "ReleaseDownloader",
    "ResolvedArtifact",
    "resolve_minimal_flavor",
]
