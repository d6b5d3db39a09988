"""
Conditional download of the raw storm dataset into the local cache.
"""
from __future__ import annotations

from pathlib import Path

import requests

from storm_report.config import (
    RAW_FOLDER, DATA_URL, DATA_FILENAME, DOWNLOAD_TIMEOUT, DOWNLOAD_CHUNK_SIZE,
)


def dataset_path(raw_dir: Path = RAW_FOLDER) -> Path:
    """Location of the cached compressed CSV."""
    return raw_dir / DATA_FILENAME


def is_cached(dest: Path) -> bool:
    return dest.exists() and dest.stat().st_size > 0


def fetch_dataset(
    url: str = DATA_URL,
    dest: Path | None = None,
    force: bool = False,
) -> Path:
    """Download the dataset to dest unless a cached copy already exists.

    The body is streamed into ``<dest>.part`` and renamed on success, so an
    interrupted transfer never leaves a truncated cache file behind.
    """
    dest = Path(dest) if dest is not None else dataset_path()
    if is_cached(dest) and not force:
        print(f"  Using cached dataset: {dest} ({dest.stat().st_size:,} bytes)")
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    part = dest.with_name(dest.name + ".part")

    print(f"  Downloading: {url}")
    try:
        with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as response:
            response.raise_for_status()
            total_size = int(response.headers.get("content-length", 0))

            downloaded = 0
            with open(part, "wb") as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if not chunk:
                        continue
                    f.write(chunk)
                    downloaded += len(chunk)
                    if total_size > 0:
                        pct = downloaded / total_size * 100
                        print(f"\r  Progress: {pct:.1f}% ({downloaded / 1024 / 1024:.1f} MB)", end="")
            print()
    except BaseException:
        part.unlink(missing_ok=True)
        raise

    part.replace(dest)
    print(f"  Saved to: {dest} ({downloaded:,} bytes)")
    return dest
