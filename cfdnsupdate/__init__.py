"""cf-dns-update - keep Cloudflare DNS records pointed where they should be."""

__version__ = "0.1.0"
