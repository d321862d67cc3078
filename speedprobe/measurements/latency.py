"""Round-trip latency and jitter using the system ping binary."""

from __future__ import annotations

import logging
import math
import platform
import re
import statistics
import subprocess
from typing import List, Tuple

from ..config import ProbeConfig
from .models import LatencyStats

LOGGER = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"time[=<]\s*(\d+(?:\.\d+)?)\s*ms", re.IGNORECASE)


class PingError(RuntimeError):
    """A single echo probe did not produce a round-trip time."""


# macOS and FreeBSD ping take -W in milliseconds; iputils on Linux takes seconds.
_MILLISECOND_WAIT_SYSTEMS = ("darwin", "freebsd")


def build_ping_command(host: str, timeout: float) -> List[str]:
    system = platform.system().lower()
    wait_ms = str(max(1, int(timeout * 1000)))
    if system.startswith("win"):
        return ["ping", "-n", "1", "-w", wait_ms, host]
    if system in _MILLISECOND_WAIT_SYSTEMS:
        return ["ping", "-c", "1", "-W", wait_ms, host]
    return ["ping", "-c", "1", "-W", str(max(1, math.ceil(timeout))), host]


def parse_ping_time(output: str) -> float:
    match = _TIME_PATTERN.search(output)
    if not match:
        raise PingError("no round-trip time in ping output")
    return float(match.group(1))


def summarize_latency(samples: List[float]) -> Tuple[float, float]:
    """Mean RTT and population standard deviation of the samples."""
    mean = statistics.fmean(samples)
    jitter = statistics.pstdev(samples, mu=mean)
    return mean, jitter


class LatencyProbe:
    """Sends ``ping_count`` echo requests one after another and summarizes them.

    Any failed echo aborts the whole measurement; partial sample sets are
    never summarized.
    """

    def __init__(self, config: ProbeConfig):
        self.host = config.ping_host
        self.count = config.ping_count
        self.timeout = config.ping_timeout

    def ping_once(self) -> float:
        cmd = build_ping_command(self.host, self.timeout)
        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout + 2,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise PingError(f"ping to {self.host} timed out") from exc
        except OSError as exc:
            raise PingError(f"cannot run ping: {exc}") from exc

        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise PingError(f"ping to {self.host} failed (exit {completed.returncode}): {detail}")
        return parse_ping_time(completed.stdout or "")

    def run(self) -> LatencyStats:
        if not self.host:
            LOGGER.warning("Ping test skipped: no ping host configured")
            return LatencyStats.failed()

        samples: List[float] = []
        try:
            for _ in range(self.count):
                samples.append(self.ping_once())
        except PingError as exc:
            LOGGER.error("Ping test failed: %s", exc)
            return LatencyStats.failed()

        ping_ms, jitter_ms = summarize_latency(samples)
        return LatencyStats(ping_ms=ping_ms, jitter_ms=jitter_ms, samples=samples)
