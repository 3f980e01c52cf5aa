"""
L4 Execution — Release archive download and extraction.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
import tempfile
import urllib.error
import urllib.request
from pathlib import Path

logger = logging.getLogger(__name__)


class DownloadError(Exception):
    """Raised when an archive cannot be fetched or unpacked."""


def download_file(url: str, dest: Path, *, timeout: int = 60) -> Path:
    """Stream ``url`` into ``dest``.

    Raises:
        DownloadError: HTTP or network failure.
    """
    logger.info("Downloading %s", url)
    req = urllib.request.Request(url, headers={"User-Agent": "hookstrap"})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp, open(dest, "wb") as out:
            shutil.copyfileobj(resp, out)
    except urllib.error.HTTPError as e:
        raise DownloadError(f"Download failed ({e.code}): {url}") from e
    except (urllib.error.URLError, OSError) as e:
        raise DownloadError(f"Download failed: {url}: {e}") from e
    return dest


def extract_tarball(archive: Path, dest_dir: Path) -> list[str]:
    """Extract a ``.tar.gz`` into ``dest_dir`` with the ``data`` filter.

    Returns:
        Names of the extracted members.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive, "r:gz") as tar:
            names = tar.getnames()
            tar.extractall(dest_dir, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise DownloadError(f"Cannot extract {archive.name}: {e}") from e
    return names


def fetch_and_extract(url: str, dest_dir: Path) -> list[str]:
    """Download a tarball to a temp dir and extract it into ``dest_dir``."""
    with tempfile.TemporaryDirectory(prefix="hookstrap-") as tmp:
        archive = Path(tmp) / url.rsplit("/", 1)[-1]
        download_file(url, archive)
        return extract_tarball(archive, dest_dir)
