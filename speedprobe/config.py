"""Configuration loading helpers for the speed test service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os
import yaml


@dataclass
class PathsConfig:
    logs_dir: Path


@dataclass
class WebConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origin: str = "*"
    reverse_proxy_headers: bool = False


@dataclass
class ProbeConfig:
    download_url: Optional[str] = None
    upload_url: Optional[str] = None
    ping_host: Optional[str] = None
    region_url: Optional[str] = None
    ping_count: int = 10
    upload_size_bytes: int = 1024 * 1024
    http_timeout: float = 30.0
    ping_timeout: float = 2.0


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    root_dir: Path
    paths: PathsConfig
    web: WebConfig
    probes: ProbeConfig
    logging: LoggingConfig


SECTIONS = ("paths", "web", "probes", "logging")

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "PORT": ("web", "port"),
    "DOWNLOAD_TEST_URL": ("probes", "download_url"),
    "UPLOAD_TEST_URL": ("probes", "upload_url"),
    "HOST": ("probes", "ping_host"),
    "REGION_URL": ("probes", "region_url"),
    "LOG_LEVEL": ("logging", "level"),
}


def _as_path(base: Path, maybe_path: Optional[str]) -> Path:
    if not maybe_path:
        raise ValueError("Path configuration entries cannot be empty")
    path = (base / maybe_path).resolve()
    path.mkdir(parents=True, exist_ok=True)
    return path


def _normalize_sections(data) -> dict:
    if not isinstance(data, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")
    for section in SECTIONS:
        value = data.get(section) or {}
        if not isinstance(value, dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping")
        data[section] = value
    return data


def _apply_env(data: dict, environ: Mapping[str, str]) -> None:
    for name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(name)
        if value is None or value == "":
            continue
        data[section][key] = value


def _parse_port(raw) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid port value: {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range: {port}")
    return port


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Load configuration from an optional YAML file, then apply environment overrides."""

    environ = os.environ if environ is None else environ
    root_dir = Path(path).resolve().parent if path else Path.cwd()
    source_path = Path(path) if path else root_dir / "config.yaml"

    data: dict = {}
    if source_path.exists():
        with source_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    elif path:
        raise FileNotFoundError(f"Missing configuration file at {source_path}")

    data = _normalize_sections(data)
    _apply_env(data, environ)

    paths_data = data["paths"]
    paths = PathsConfig(
        logs_dir=_as_path(root_dir, paths_data.get("logs_dir", "logs")),
    )

    web = WebConfig(**data["web"])
    web.port = _parse_port(web.port)

    probes = ProbeConfig(**data["probes"])
    if probes.ping_count < 1:
        raise ValueError("probes.ping_count must be at least 1")

    return AppConfig(
        root_dir=root_dir,
        paths=paths,
        web=web,
        probes=probes,
        logging=LoggingConfig(**data["logging"]),
    )
