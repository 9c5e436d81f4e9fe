"""
cf-dns-update exception hierarchy.

Everything raised on purpose inherits from :class:`CFDNSUpdateError` so the
CLI can turn it into a diagnostic and a non-zero exit status.
"""


# ── Base ──────────────────────────────────────────────────────────────
class CFDNSUpdateError(Exception):
    """Root exception for all cf-dns-update errors."""


# ── Configuration ────────────────────────────────────────────────────
class ConfigError(CFDNSUpdateError):
    """Base exception for configuration problems."""


class MalformedSpecError(ConfigError):
    """Record declaration does not split into the five required parts."""


class InvalidPoolSizeError(ConfigError):
    """Address pool size is not an integer of at least 1."""


class UnsupportedRecordTypeError(CFDNSUpdateError):
    """Record type is neither A nor CNAME."""


# ── Provider / network ───────────────────────────────────────────────
class AuthError(CFDNSUpdateError):
    """Provider credentials are missing or were rejected."""


class ZoneNotFoundError(CFDNSUpdateError):
    """Zone name could not be resolved to a zone ID."""


class IPResolutionError(CFDNSUpdateError):
    """Current public address could not be determined."""


class ProviderError(CFDNSUpdateError):
    """Base exception for DNS record operations."""


class RecordListError(ProviderError):
    """Listing records failed."""


class CreateError(ProviderError):
    """Creating a record failed."""


class UpdateError(ProviderError):
    """Updating a record failed."""


class DeleteError(ProviderError):
    """Deleting a record failed."""
