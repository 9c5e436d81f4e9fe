"""ipify-backed public IP resolver."""

import ipaddress
import logging

import httpx

from cfdnsupdate.errors import IPResolutionError
from cfdnsupdate.providers.ip.base import IPResolver

logger = logging.getLogger(__name__)


class IpifyResolver(IPResolver):
    """Ask an address-echo service that answers with `{"ip": "..."}`."""

    DEFAULT_URL = "https://api.ipify.org?format=json"

    def __init__(self, url: str = DEFAULT_URL, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def current_public_address(self) -> str:
        """Fetch and validate the current public address."""
        try:
            response = httpx.get(self.url, timeout=self.timeout)
        except httpx.RequestError as e:
            raise IPResolutionError(f"get ip from {self.url}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise IPResolutionError(f"get ip from {self.url}: HTTP {response.status_code}")

        try:
            ip = response.json()["ip"]
        except (ValueError, KeyError, TypeError) as e:
            raise IPResolutionError(f"decode ip: {e!r}") from e

        if not isinstance(ip, str):
            raise IPResolutionError(f"decode ip: {ip!r} is not an IPv4 address")
        try:
            ipaddress.IPv4Address(ip)
        except ValueError as e:
            raise IPResolutionError(f"decode ip: {ip!r} is not an IPv4 address") from e

        logger.debug("public address is %s", ip)
        return ip
