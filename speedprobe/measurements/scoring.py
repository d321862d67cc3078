"""Composite score from download, upload and latency."""

from __future__ import annotations

from typing import Optional

DOWNLOAD_WEIGHT = 0.5
UPLOAD_WEIGHT = 0.3
PING_WEIGHT = 0.2


def calculate_overall_speed(
    download_mbps: Optional[float],
    upload_mbps: Optional[float],
    ping_ms: Optional[float],
) -> Optional[float]:
    """Weighted average of both throughputs and inverse latency.

    Returns None when any input is missing or the latency is not positive.
    """
    if download_mbps is None or upload_mbps is None or ping_ms is None:
        return None
    if ping_ms <= 0:
        return None

    total_weight = DOWNLOAD_WEIGHT + UPLOAD_WEIGHT + PING_WEIGHT
    weighted = (
        download_mbps * DOWNLOAD_WEIGHT
        + upload_mbps * UPLOAD_WEIGHT
        + (1 / ping_ms) * PING_WEIGHT
    )
    return weighted / total_weight
