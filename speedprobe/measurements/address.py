"""Local interface enumeration and external IPv4 selection."""

from __future__ import annotations

import ipaddress
import logging
import platform
import re
import subprocess
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterfaceAddress:
    interface: str
    family: str  # 'IPv4' or 'IPv6'
    address: str
    internal: bool


def _make_entry(interface: str, raw_address: str) -> Optional[InterfaceAddress]:
    address = raw_address.split("%", 1)[0]
    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        return None
    family = "IPv4" if parsed.version == 4 else "IPv6"
    return InterfaceAddress(interface=interface, family=family, address=address, internal=parsed.is_loopback)


_IP_ADDR_LINE = re.compile(r"^\d+:\s+(?P<name>\S+)\s+inet6?\s+(?P<address>[^\s/]+)")


def parse_ip_addr(output: str) -> List[InterfaceAddress]:
    """Parse ``ip -o addr show`` (one address per line)."""
    entries = []
    for line in output.splitlines():
        match = _IP_ADDR_LINE.match(line)
        if not match:
            continue
        entry = _make_entry(match.group("name"), match.group("address"))
        if entry:
            entries.append(entry)
    return entries


_IFCONFIG_HEADER = re.compile(r"^(?P<name>[^\s:]+):?\s")
_IFCONFIG_INET = re.compile(r"^\s+inet6?\s+(?:addr:\s*)?(?P<address>[0-9A-Za-z.:%]+)")


def parse_ifconfig(output: str) -> List[InterfaceAddress]:
    """Parse BSD/macOS and net-tools ``ifconfig`` output."""
    entries = []
    current = ""
    for line in output.splitlines():
        if not line.strip():
            continue
        if not line[0].isspace():
            header = _IFCONFIG_HEADER.match(line)
            current = header.group("name") if header else ""
            continue
        match = _IFCONFIG_INET.match(line)
        if match and current:
            entry = _make_entry(current, match.group("address"))
            if entry:
                entries.append(entry)
    return entries


_IPCONFIG_ADAPTER = re.compile(r"^\S.*adapter (?P<name>.+?):\s*$")
_IPCONFIG_ADDRESS = re.compile(r"^\s+.*IPv[46] Address[ .]*:\s*(?P<address>[0-9A-Fa-f.:%]+)")


def parse_ipconfig(output: str) -> List[InterfaceAddress]:
    """Parse Windows ``ipconfig`` output."""
    entries = []
    current = ""
    for line in output.splitlines():
        adapter = _IPCONFIG_ADAPTER.match(line)
        if adapter:
            current = adapter.group("name")
            continue
        match = _IPCONFIG_ADDRESS.match(line)
        if match and current:
            entry = _make_entry(current, match.group("address"))
            if entry:
                entries.append(entry)
    return entries


Parser = Callable[[str], List[InterfaceAddress]]


def _listing_commands() -> List[Tuple[List[str], Parser]]:
    system = platform.system()
    if system == "Windows":
        return [(["ipconfig"], parse_ipconfig)]
    if system == "Linux":
        return [(["ip", "-o", "addr", "show"], parse_ip_addr), (["ifconfig", "-a"], parse_ifconfig)]
    return [(["ifconfig", "-a"], parse_ifconfig)]


def list_interface_addresses() -> List[InterfaceAddress]:
    """Enumerate addresses bound to local interfaces, in listing order."""
    for cmd, parser in _listing_commands():
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=10, check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            LOGGER.debug("Interface listing via %s unavailable: %s", cmd[0], exc)
            continue
        if result.returncode != 0:
            LOGGER.debug("Interface listing via %s exited with %s", cmd[0], result.returncode)
            continue
        return parser(result.stdout or "")
    LOGGER.warning("Could not enumerate network interfaces")
    return []


def first_external_ipv4(entries: Iterable[InterfaceAddress]) -> Optional[str]:
    for entry in entries:
        if entry.family == "IPv4" and not entry.internal:
            return entry.address
    return None


class AddressLookup:
    def __init__(self, lister: Callable[[], List[InterfaceAddress]] = list_interface_addresses):
        self._lister = lister

    def run(self) -> Optional[str]:
        address = first_external_ipv4(self._lister())
        if address is None:
            LOGGER.info("No external IPv4 address found on local interfaces")
        return address
