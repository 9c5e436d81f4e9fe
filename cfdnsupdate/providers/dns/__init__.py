"""DNS provider implementations."""

from cfdnsupdate.providers.dns.base import DNSProvider, DNSRecord
from cfdnsupdate.providers.dns.cloudflare import CloudflareProvider

__all__ = ["CloudflareProvider", "DNSProvider", "DNSRecord"]
