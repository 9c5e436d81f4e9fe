"""Public IP address resolvers."""

from cfdnsupdate.providers.ip.base import IPResolver
from cfdnsupdate.providers.ip.ipify import IpifyResolver

__all__ = ["IPResolver", "IpifyResolver"]
