"""Region lookup against an external JSON service."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from ..config import ProbeConfig

LOGGER = logging.getLogger(__name__)


class RegionLookup:
    def __init__(self, config: ProbeConfig):
        self.url = config.region_url
        self.timeout = config.http_timeout

    def run(self) -> Optional[str]:
        if not self.url:
            LOGGER.warning("Region lookup skipped: no region URL configured")
            return None
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            LOGGER.error("Failed to fetch region: %s", exc)
            return None

        if not isinstance(payload, dict):
            LOGGER.error("Failed to fetch region: unexpected payload type %s", type(payload).__name__)
            return None
        region = payload.get("region")
        if region is None:
            LOGGER.error("Failed to fetch region: response has no 'region' field")
            return None
        return str(region)
