"""Fetch the latest reflectivity snapshot published by NOAA MRMS."""
from __future__ import annotations

from dataclasses import dataclass

import requests

from radar_api.data_sources.base import DatasetFactory, FetchResult, SnapshotSource, fallback_result
from radar_api.domain import FailureKind
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="mrms_client")

session = requests.Session()

MRMS_BASE_URL = "https://mrms.ncep.noaa.gov/2D/ReflectivityAtLowestAltitude/"
MRMS_LATEST_FILE = "MRMS_ReflectivityAtLowestAltitude.latest.grib2.gz"
DEFAULT_TIMEOUT_SECONDS = 15.0

# MRMS rejects some non-browser user agents.
REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "application/gzip, application/octet-stream, */*",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}


def fetch_latest_snapshot(url: str, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> bytes:
    """Download the snapshot at `url`; raises requests exceptions on failure."""
    logger.info("Fetching latest MRMS file", extra={"url": url})
    resp = session.get(url, headers=REQUEST_HEADERS, timeout=timeout)
    resp.raise_for_status()
    # requests leaves 3xx responses it did not follow (300, 304) unraised.
    if not 200 <= resp.status_code < 300:
        raise requests.HTTPError(f"Unexpected status {resp.status_code} for {url}", response=resp)
    data = resp.content
    logger.info(
        "Fetched latest MRMS file",
        extra={"url": url, "bytes": len(data), "content_length": resp.headers.get("content-length", "unknown")},
    )
    return data


@dataclass
class MrmsSnapshotSource(SnapshotSource):
    """Single-attempt MRMS download; substitutes the fallback on any HTTP failure."""

    fallback: DatasetFactory
    url: str = MRMS_BASE_URL + MRMS_LATEST_FILE
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def fetch_latest(self) -> FetchResult:
        try:
            data = fetch_latest_snapshot(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning(
                "Error fetching latest MRMS data; using generated sample",
                extra={"url": self.url, "error": str(exc)},
            )
            return fallback_result(self.fallback, FailureKind.ACQUISITION)
        return FetchResult(url=self.url, data=data)
