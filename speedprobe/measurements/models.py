"""Shared dataclasses for measurements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LatencyStats:
    ping_ms: Optional[float]
    jitter_ms: Optional[float]
    samples: List[float] = field(default_factory=list)

    @classmethod
    def failed(cls) -> "LatencyStats":
        return cls(ping_ms=None, jitter_ms=None)


@dataclass
class SpeedTestReport:
    """Result of one ``POST /speedtest`` run. Absent values mean the probe failed."""

    overall_speed: Optional[float] = None
    download_mbps: Optional[float] = None
    upload_mbps: Optional[float] = None
    ping_ms: Optional[float] = None
    jitter_ms: Optional[float] = None
    region: Optional[str] = None
    ip_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallSpeed": self.overall_speed,
            "downloadSpeed": self.download_mbps,
            "uploadSpeed": self.upload_mbps,
            "pingTime": self.ping_ms,
            "jitter": self.jitter_ms,
            "region": self.region,
            "ipAddress": self.ip_address,
        }
