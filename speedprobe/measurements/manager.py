"""Measurement orchestration for a single speed test request."""

from __future__ import annotations

import logging

from ..config import AppConfig
from .address import AddressLookup
from .latency import LatencyProbe
from .models import SpeedTestReport
from .region import RegionLookup
from .scoring import calculate_overall_speed
from .throughput import DownloadProbe, UploadProbe

LOGGER = logging.getLogger(__name__)


def _fmt(value, unit: str = "") -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f} {unit}".rstrip()


class MeasurementManager:
    """Runs every probe in order and assembles the report.

    Probes are executed strictly one after another so that the bandwidth
    and latency measurements never compete for the same link.
    """

    def __init__(self, config: AppConfig):
        self.config = config
        probes = config.probes
        self.download = DownloadProbe(probes)
        self.upload = UploadProbe(probes)
        self.latency = LatencyProbe(probes)
        self.region = RegionLookup(probes)
        self.address = AddressLookup()

    def run_speedtest(self) -> SpeedTestReport:
        download_mbps = self.download.run()
        upload_mbps = self.upload.run()
        latency = self.latency.run()
        region = self.region.run()
        ip_address = self.address.run()

        report = SpeedTestReport(
            overall_speed=calculate_overall_speed(download_mbps, upload_mbps, latency.ping_ms),
            download_mbps=download_mbps,
            upload_mbps=upload_mbps,
            ping_ms=latency.ping_ms,
            jitter_ms=latency.jitter_ms,
            region=region,
            ip_address=ip_address,
        )
        LOGGER.info(
            "Speed test finished: down %s / up %s / ping %s / jitter %s / score %s",
            _fmt(report.download_mbps, "Mbps"),
            _fmt(report.upload_mbps, "Mbps"),
            _fmt(report.ping_ms, "ms"),
            _fmt(report.jitter_ms, "ms"),
            _fmt(report.overall_speed),
        )
        return report
