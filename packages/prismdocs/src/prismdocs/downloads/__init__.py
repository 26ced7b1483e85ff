"""NuGet download counter shown on the docs home page."""

from .cache import CACHE_KEY_PREFIX, DownloadCache, cache_key
from .nuget import (
    DEFAULT_OWNER,
    DownloadsError,
    fetch_total_downloads,
    format_downloads_in_millions,
    round_down_to_million,
)

__all__ = [
    "CACHE_KEY_PREFIX",
    "DEFAULT_OWNER",
    "DownloadCache",
    "DownloadsError",
    "cache_key",
    "fetch_total_downloads",
    "format_downloads_in_millions",
    "round_down_to_million",
]
