"""No-op wrapper for release downloads."""

from pathlib import Path

from base_tooling.cli.output import user_output
from base_tooling.integrations.releases.abc import Release, ReleaseAsset, Releases


class DryRunReleases(Releases):
    """Queries release metadata for real, prints downloads."""

    def __init__(self, wrapped: Releases) -> None:
        self._wrapped = wrapped

    def latest_release(self, repo: str) -> Release:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.latest_release(repo)

    def download(self, asset: ReleaseAsset, destination: Path) -> Path:
        """Print instead of downloading."""
        user_output(f"[dry-run] would download {asset.download_url} to {destination}")
        return destination
