"""Cloudflare DNS provider implementation."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from cfdnsupdate.errors import (
    AuthError,
    CFDNSUpdateError,
    CreateError,
    DeleteError,
    ProviderError,
    RecordListError,
    UpdateError,
    ZoneNotFoundError,
)
from cfdnsupdate.providers.dns.base import DNSProvider, DNSRecord

logger = logging.getLogger(__name__)


def _error_messages(body: dict[str, Any]) -> str:
    """Flatten the errors array of a Cloudflare response envelope."""
    errors = body.get("errors") or []
    messages = [f"{e.get('code', '?')}: {e.get('message', '')}" for e in errors]
    return "; ".join(messages) or "unknown error"


class CloudflareProvider(DNSProvider):
    """DNS provider implementation for Cloudflare."""

    BASE_URL = "https://api.cloudflare.com/client/v4"
    PER_PAGE = 100

    def __init__(
        self,
        email: str | None = None,
        key: str | None = None,
        api_token: str | None = None,
        timeout: float = 30.0,
    ):
        """Initialize Cloudflare provider.

        Args:
            email: Account email for global API key authentication
            key: Global API key
            api_token: Scoped API token, used instead of email/key when given
            timeout: Per-request timeout in seconds

        Raises:
            AuthError: Neither a token nor an email/key pair was supplied.
        """
        if api_token:
            auth_headers = {"Authorization": f"Bearer {api_token}"}
        elif email and key:
            auth_headers = {"X-Auth-Email": email, "X-Auth-Key": key}
        else:
            raise AuthError(
                "Cloudflare credentials not configured: "
                "set X_AUTH_EMAIL and X_AUTH_KEY, or CF_API_TOKEN"
            )

        self.client = httpx.Client(
            base_url=self.BASE_URL,
            headers={
                **auth_headers,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    def _request(
        self,
        method: str,
        path: str,
        error_cls: type[CFDNSUpdateError],
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send a request and unwrap the response envelope."""
        logger.debug("%s %s %s", method, path, kwargs.get("params") or "")
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise error_cls(f"{method} {path}: {e}") from e

        if response.status_code in (401, 403):
            raise AuthError(f"{method} {path}: credentials rejected (HTTP {response.status_code})")

        try:
            body = response.json()
        except ValueError as e:
            raise error_cls(f"{method} {path}: undecodable response (HTTP {response.status_code})") from e

        if response.status_code >= 400 or not body.get("success", False):
            raise error_cls(f"{method} {path}: {_error_messages(body)}")

        return body

    def _record(self, data: Any, error_cls: type[ProviderError]) -> DNSRecord:
        try:
            return DNSRecord.model_validate(data)
        except ValidationError as e:
            raise error_cls(f"unexpected record payload: {e}") from e

    def resolve_zone(self, name: str) -> str:
        """Resolve a zone name to its ID."""
        body = self._request("GET", "/zones", ZoneNotFoundError, params={"name": name})
        zones = body.get("result") or []
        if not zones:
            raise ZoneNotFoundError(f"zone {name} not found")
        return zones[0]["id"]

    def list_records(self, zone_id: str, record_type: str, name: str) -> list[DNSRecord]:
        """List records of one type and name, following every result page."""
        records: list[DNSRecord] = []
        page = 1

        while True:
            body = self._request(
                "GET",
                f"/zones/{zone_id}/dns_records",
                RecordListError,
                params={
                    "type": record_type,
                    "name": name,
                    "page": page,
                    "per_page": self.PER_PAGE,
                },
            )
            for item in body.get("result") or []:
                records.append(self._record(item, RecordListError))

            total_pages = (body.get("result_info") or {}).get("total_pages", 1)
            if page >= total_pages:
                break
            page += 1

        return records

    def create_record(
        self,
        zone_id: str,
        *,
        record_type: str,
        name: str,
        content: str,
        proxied: bool,
    ) -> DNSRecord:
        """Create a record."""
        body = self._request(
            "POST",
            f"/zones/{zone_id}/dns_records",
            CreateError,
            json={
                "type": record_type,
                "name": name,
                "content": content,
                "proxied": proxied,
            },
        )
        return self._record(body.get("result"), CreateError)

    def update_record(
        self,
        zone_id: str,
        record_id: str,
        *,
        record_type: str,
        name: str,
        content: str,
        proxied: bool,
    ) -> None:
        """Replace an existing record."""
        self._request(
            "PUT",
            f"/zones/{zone_id}/dns_records/{record_id}",
            UpdateError,
            json={
                "type": record_type,
                "name": name,
                "content": content,
                "proxied": proxied,
            },
        )

    def delete_record(self, zone_id: str, record_id: str) -> None:
        """Delete a record.

        A rejected delete, including HTTP 401/403, raises DeleteError so
        trimming can skip it.
        """
        path = f"/zones/{zone_id}/dns_records/{record_id}"
        try:
            self._request("DELETE", path, DeleteError)
        except AuthError as e:
            raise DeleteError(str(e)) from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()
