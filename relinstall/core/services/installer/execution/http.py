"""
L4 Execution — Release lookup and file download.

Plain ``urllib.request``: one GET for the release metadata, one
streamed GET per artifact.  No retry, no resume.  ``timeout=None``
leaves the transport default in place.
"""

from __future__ import annotations

import json
import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

from relinstall import __version__
from relinstall.core.models.package import PackageIdentity
from relinstall.core.models.release import ReleaseTag
from relinstall.core.services.installer.errors import DownloadFailed, ReleaseLookupFailed

logger = logging.getLogger(__name__)

_USER_AGENT = f"relinstall/{__version__}"
_CHUNK = 64 * 1024


def _open(url: str, *, timeout: float | None = None, accept: str = "*/*") -> Any:
    req = urllib.request.Request(
        url,
        headers={"Accept": accept, "User-Agent": _USER_AGENT},
    )
    if timeout is None:
        return urllib.request.urlopen(req)
    return urllib.request.urlopen(req, timeout=timeout)


def latest_release_url(package: PackageIdentity, api_base: str) -> str:
    return f"{api_base.rstrip('/')}/repos/{package.owner}/{package.repo}/releases/latest"


def fetch_latest_tag(
    package: PackageIdentity,
    api_base: str,
    *,
    timeout: float | None = None,
) -> ReleaseTag:
    """Ask the releases API for the newest published tag.

    Raises:
        ReleaseLookupFailed: On transport errors, a non-JSON body, or a
            response without ``tag_name``.
    """
    url = latest_release_url(package, api_base)
    logger.info("Looking up latest release: %s", url)

    try:
        with _open(url, timeout=timeout, accept="application/vnd.github+json") as resp:
            body = resp.read()
    except urllib.error.HTTPError as e:
        raise ReleaseLookupFailed(
            f"Could not fetch latest release info for {package.slug} (HTTP {e.code})."
        ) from e
    except (urllib.error.URLError, OSError, ValueError) as e:
        raise ReleaseLookupFailed(
            f"Could not fetch latest release info for {package.slug}: {e}"
        ) from e

    try:
        data = json.loads(body)
    except ValueError as e:
        raise ReleaseLookupFailed(f"Release index returned invalid JSON: {e}") from e

    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not isinstance(tag, str) or not tag.strip():
        raise ReleaseLookupFailed(
            "Could not determine latest release tag. "
            f"Check https://github.com/{package.slug}/releases"
        )

    try:
        release = ReleaseTag(tag=tag.strip())
    except ValueError as e:
        raise ReleaseLookupFailed(
            f"Release index returned an unusable tag {tag.strip()!r}. "
            f"Check https://github.com/{package.slug}/releases"
        ) from e

    logger.info("Latest release of %s is %s", package.slug, release)
    return release


def download_file(url: str, dest: Path, *, timeout: float | None = None) -> int:
    """Stream ``url`` into ``dest`` and return the number of bytes written.

    A partial file is removed before the error propagates.

    Raises:
        DownloadFailed: On any transport, HTTP or local write error.
    """
    logger.debug("Downloading %s → %s", url, dest)
    try:
        with _open(url, timeout=timeout) as resp, open(dest, "wb") as fh:
            shutil.copyfileobj(resp, fh, _CHUNK)
    except urllib.error.HTTPError as e:
        dest.unlink(missing_ok=True)
        raise DownloadFailed(f"Download failed: {url} (HTTP {e.code})", url=url) from e
    except (urllib.error.URLError, OSError, ValueError) as e:
        dest.unlink(missing_ok=True)
        raise DownloadFailed(f"Download failed: {url} ({e})", url=url) from e

    size = dest.stat().st_size
    logger.debug("Downloaded %d bytes from %s", size, url)
    return size
