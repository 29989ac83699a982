"""Release-hosting API interface (GitHub releases)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ReleaseAsset:
    """A downloadable file attached to a release."""

    name: str
    download_url: str


@dataclass(frozen=True)
class Release:
    """Metadata of a published release."""

    tag: str
    assets: tuple[ReleaseAsset, ...]


class Releases(ABC):
    """Abstract interface for querying releases and downloading assets."""

    @abstractmethod
    def latest_release(self, repo: str) -> Release:
        """Fetch metadata of the latest release of `repo` (OWNER/NAME).

        Raises:
            RuntimeError: If the API cannot be reached or returns garbage
        """
        ...

    @abstractmethod
    def download(self, asset: ReleaseAsset, destination: Path) -> Path:
        """Download an asset to `destination` and return the path written."""
        ...
