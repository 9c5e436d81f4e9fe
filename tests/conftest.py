"""Shared test fixtures for cf-dns-update tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from cfdnsupdate.config import Settings
from cfdnsupdate.errors import CreateError, DeleteError, UpdateError, ZoneNotFoundError
from cfdnsupdate.providers.dns.base import DNSProvider, DNSRecord
from cfdnsupdate.providers.ip.base import IPResolver

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
PUBLIC_IP = "203.0.113.7"


# ============================================================================
# Provider Test Double
# ============================================================================


class FakeProvider(DNSProvider):
    """In-memory DNS provider that records every call."""

    def __init__(self, records=None, zones=None):
        self.zones = zones if zones is not None else {"example.com": "zone-1"}
        self.records: list[DNSRecord] = list(records or [])
        self.calls: list[tuple] = []
        self.fail_deletes: set[str] = set()
        self.fail_update = False
        self.fail_create = False
        self.closed = False
        self._clock = max((r.modified_on for r in self.records), default=BASE_TIME)
        self._next_id = 100

    def _tick(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    @property
    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("create", "update", "delete")]

    def resolve_zone(self, name: str) -> str:
        self.calls.append(("resolve_zone", name))
        if name not in self.zones:
            raise ZoneNotFoundError(f"zone {name} not found")
        return self.zones[name]

    def list_records(self, zone_id: str, record_type: str, name: str) -> list[DNSRecord]:
        self.calls.append(("list", zone_id, record_type, name))
        return [r for r in self.records if r.type == record_type and r.name == name]

    def create_record(self, zone_id, *, record_type, name, content, proxied) -> DNSRecord:
        self.calls.append(("create", content, proxied))
        if self.fail_create:
            raise CreateError("create rejected")
        self._next_id += 1
        record = DNSRecord(
            id=f"rec-{self._next_id}",
            type=record_type,
            name=name,
            content=content,
            proxied=proxied,
            modified_on=self._tick(),
        )
        self.records.append(record)
        return record

    def update_record(self, zone_id, record_id, *, record_type, name, content, proxied) -> None:
        self.calls.append(("update", record_id, content, proxied))
        if self.fail_update:
            raise UpdateError("update rejected")
        self.records = [
            r.model_copy(update={"content": content, "proxied": proxied, "modified_on": self._tick()})
            if r.id == record_id
            else r
            for r in self.records
        ]

    def delete_record(self, zone_id, record_id) -> None:
        self.calls.append(("delete", record_id))
        if record_id in self.fail_deletes:
            raise DeleteError(f"delete {record_id} rejected")
        self.records = [r for r in self.records if r.id != record_id]

    def close(self) -> None:
        self.closed = True


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


# ============================================================================
# Record / Provider Fixtures
# ============================================================================


@pytest.fixture
def make_record():
    """Build DNSRecords whose age is set by minutes after BASE_TIME."""

    def _make(
        record_id: str,
        content: str,
        minutes: int = 0,
        record_type: str = "A",
        name: str = "home.example.com",
        proxied: bool = True,
    ) -> DNSRecord:
        return DNSRecord(
            id=record_id,
            type=record_type,
            name=name,
            content=content,
            proxied=proxied,
            modified_on=BASE_TIME + timedelta(minutes=minutes),
        )

    return _make


@pytest.fixture
def ip_resolver() -> MagicMock:
    """Mock IP resolver returning PUBLIC_IP."""
    resolver = MagicMock(spec=IPResolver)
    resolver.current_public_address.return_value = PUBLIC_IP
    return resolver


# ============================================================================
# Mock Fixtures - Environment Settings
# ============================================================================


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


@pytest.fixture
def make_settings():
    """Build Settings without reading a .env file."""
    return _settings


@pytest.fixture
def mock_settings():
    """Mock settings with an A record declaration and key credentials."""
    settings = _settings(
        record="example.com:proxy:home:A:1",
        x_auth_email="admin@example.com",
        x_auth_key="test-key",
    )
    with patch("cfdnsupdate.commands.update.load_settings", return_value=settings):
        with patch("cfdnsupdate.commands.records.load_settings", return_value=settings):
            yield settings


@pytest.fixture
def mock_settings_missing_credentials():
    """Mock settings with a declaration but no credentials."""
    settings = _settings(
        record="example.com:proxy:home:A:1",
        x_auth_email=None,
        x_auth_key=None,
        cf_api_token=None,
    )
    with patch("cfdnsupdate.commands.update.load_settings", return_value=settings):
        with patch("cfdnsupdate.commands.records.load_settings", return_value=settings):
            yield settings


@pytest.fixture
def mock_settings_missing_record():
    """Mock settings with credentials but no declaration."""
    settings = _settings(record=None, x_auth_email="admin@example.com", x_auth_key="test-key")
    with patch("cfdnsupdate.commands.update.load_settings", return_value=settings):
        with patch("cfdnsupdate.commands.records.load_settings", return_value=settings):
            yield settings
