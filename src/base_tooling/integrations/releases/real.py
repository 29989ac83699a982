"""Production releases client for the GitHub REST API."""

import json
import logging
import os
import shutil
import urllib.error
import urllib.request
from pathlib import Path

from base_tooling.integrations.releases.abc import Release, ReleaseAsset, Releases

logger = logging.getLogger(__name__)

API_ROOT = "https://api.github.com"
USER_AGENT = "base-tooling"


def parse_release(payload: str) -> Release:
    """Parse the JSON body of `GET /repos/{repo}/releases/latest`.

    Raises:
        RuntimeError: If the payload is not a release document
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Release API returned invalid JSON: {e}") from e

    if not isinstance(data, dict) or "tag_name" not in data:
        raise RuntimeError("Release API response has no tag_name")

    assets = tuple(
        ReleaseAsset(name=asset["name"], download_url=asset["browser_download_url"])
        for asset in data.get("assets", [])
        if "name" in asset and "browser_download_url" in asset
    )
    return Release(tag=data["tag_name"], assets=assets)


class RealReleases(Releases):
    """Talks to api.github.com with urllib."""

    def latest_release(self, repo: str) -> Release:
        url = f"{API_ROOT}/repos/{repo}/releases/latest"
        logger.debug("Querying %s", url)
        request = urllib.request.Request(
            url,
            headers={"Accept": "application/vnd.github+json", "User-Agent": USER_AGENT},
        )
        try:
            with urllib.request.urlopen(request) as response:
                payload = response.read().decode("utf-8")
        except urllib.error.URLError as e:
            raise RuntimeError(f"Failed to query latest release of {repo}: {e}") from e
        return parse_release(payload)

    def download(self, asset: ReleaseAsset, destination: Path) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(f"{destination.name}.partial")
        request = urllib.request.Request(asset.download_url, headers={"User-Agent": USER_AGENT})
        try:
            with urllib.request.urlopen(request) as response, partial.open("wb") as handle:
                shutil.copyfileobj(response, handle)
            os.replace(partial, destination)
        except urllib.error.URLError as e:
            partial.unlink(missing_ok=True)
            raise RuntimeError(f"Failed to download {asset.name}: {e}") from e
        return destination
