"""Download and upload throughput probes over plain HTTP."""

from __future__ import annotations

import logging
import math
import time
from typing import Optional

import requests

from ..config import ProbeConfig

LOGGER = logging.getLogger(__name__)

BITS_PER_BYTE = 8
MEGABIT = 1024 * 1024


def megabits_per_second(num_bytes, elapsed_seconds: float) -> Optional[float]:
    """Convert a transfer into Mbps (1024-based). Returns None for unusable inputs."""
    try:
        speed = (float(num_bytes) * BITS_PER_BYTE) / elapsed_seconds / MEGABIT
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    if elapsed_seconds <= 0 or speed < 0 or not math.isfinite(speed):
        return None
    return speed


def _content_length(response: requests.Response) -> Optional[int]:
    raw = response.headers.get("Content-Length")
    if raw is None:
        return None
    value = raw.strip()
    if not (value.isascii() and value.isdigit()):
        LOGGER.debug("Unusable Content-Length header: %r", raw)
        return None
    return int(value)


class DownloadProbe:
    """Times a GET of the configured resource."""

    def __init__(self, config: ProbeConfig):
        self.url = config.download_url
        self.timeout = config.http_timeout

    def run(self) -> Optional[float]:
        if not self.url:
            LOGGER.warning("Download test skipped: no download URL configured")
            return None
        try:
            start = time.perf_counter()
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            elapsed = time.perf_counter() - start
        except requests.RequestException as exc:
            LOGGER.error("Download test failed: %s", exc)
            return None

        size = _content_length(response)
        if size is None:
            LOGGER.error("Download test failed: response has no usable Content-Length")
            return None

        speed = megabits_per_second(size, elapsed)
        if speed is None:
            LOGGER.error("Download test failed: could not derive speed from %s bytes in %.3fs", size, elapsed)
        return speed


class UploadProbe:
    """Times a POST of a fixed filler payload."""

    def __init__(self, config: ProbeConfig):
        self.url = config.upload_url
        self.timeout = config.http_timeout
        self.payload_size = config.upload_size_bytes

    def build_payload(self) -> bytes:
        return b"0" * self.payload_size

    def run(self) -> Optional[float]:
        if not self.url:
            LOGGER.warning("Upload test skipped: no upload URL configured")
            return None
        payload = self.build_payload()
        try:
            start = time.perf_counter()
            response = requests.post(
                self.url,
                data=payload,
                headers={"Content-Type": "application/octet-stream"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            elapsed = time.perf_counter() - start
        except requests.RequestException as exc:
            LOGGER.error("Upload test failed: %s", exc)
            return None

        speed = megabits_per_second(len(payload), elapsed)
        if speed is None:
            LOGGER.error("Upload test failed: could not derive speed from %.3fs", elapsed)
        return speed
