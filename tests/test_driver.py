"""Tests for the one-shot driver."""

from unittest.mock import MagicMock

import pytest

from cfdnsupdate import driver
from cfdnsupdate.config import AliasTarget, DesiredState, RunConfig, load_run_config
from cfdnsupdate.errors import RecordListError, UnsupportedRecordTypeError, ZoneNotFoundError
from tests.conftest import PUBLIC_IP, FakeProvider


@pytest.fixture
def a_config(make_settings) -> RunConfig:
    return load_run_config(make_settings(record="example.com:proxy:home:A:1"))


class TestSnapshot:
    """Tests for driver.snapshot()."""

    def test_filters_and_sorts(self, a_config, make_record):
        """Test only matching records are returned, oldest first."""
        provider = FakeProvider(
            [
                make_record("new", "10.0.0.2", 20),
                make_record("other", "10.0.0.9", 0, name="other.example.com"),
                make_record("cname", "x.example.com", 0, record_type="CNAME"),
                make_record("old", "10.0.0.1", 5),
            ]
        )

        zone_id, records = driver.snapshot(a_config, provider)

        assert zone_id == "zone-1"
        assert [r.id for r in records] == ["old", "new"]
        assert ("list", "zone-1", "A", "home.example.com") in provider.calls

    def test_zone_not_found(self, make_settings):
        """Test an unknown zone stops the run before listing."""
        config = load_run_config(make_settings(record="missing.org:proxy:home:A:1"))
        provider = FakeProvider()

        with pytest.raises(ZoneNotFoundError):
            driver.snapshot(config, provider)

        assert [c[0] for c in provider.calls] == ["resolve_zone"]


class TestRun:
    """Tests for driver.run()."""

    def test_sequence(self, a_config, make_record, ip_resolver):
        """Test zone lookup and listing happen before any mutation."""
        provider = FakeProvider([make_record("r1", "10.0.0.1")])

        outcome = driver.run(a_config, provider, ip_resolver)

        assert [c[0] for c in provider.calls] == ["resolve_zone", "list", "update"]
        assert outcome.message == "A record updated"
        assert provider.records[0].content == PUBLIC_IP

    def test_already_exists(self, a_config, make_record, ip_resolver):
        """Test a converged record reports that it already exists."""
        provider = FakeProvider([make_record("r1", PUBLIC_IP)])

        outcome = driver.run(a_config, provider, ip_resolver)

        assert outcome.message == "record already exists"
        assert provider.mutations == []

    def test_alias(self, make_settings, make_record, ip_resolver):
        """Test a CNAME declaration is created when absent."""
        config = load_run_config(
            make_settings(record="example.com:noproxy:www:CNAME:home.example.com")
        )
        provider = FakeProvider()

        outcome = driver.run(config, provider, ip_resolver)

        assert outcome.message == "CNAME record added"
        assert provider.mutations == [("create", "home.example.com", False)]

    def test_unsupported_type_makes_no_provider_calls(self, make_settings, ip_resolver):
        """Test an MX desired state is rejected before touching the provider."""
        desired = DesiredState(
            zone="example.com",
            record_name="mail.example.com",
            record_type="MX",
            target=AliasTarget(content="mx.example.com"),
        )
        config = RunConfig(desired=desired, settings=make_settings())
        provider = MagicMock()

        with pytest.raises(UnsupportedRecordTypeError):
            driver.run(config, provider, ip_resolver)

        assert provider.method_calls == []

    def test_list_failure_is_fatal(self, a_config, ip_resolver):
        """Test a failed listing stops the run."""
        provider = MagicMock()
        provider.resolve_zone.return_value = "zone-1"
        provider.list_records.side_effect = RecordListError("boom")

        with pytest.raises(RecordListError):
            driver.run(a_config, provider, ip_resolver)

        provider.update_record.assert_not_called()
        provider.create_record.assert_not_called()

    def test_dry_run(self, a_config, make_record, ip_resolver):
        """Test a dry run reads but never writes."""
        provider = FakeProvider([make_record("r1", "10.0.0.1")])

        outcome = driver.run(a_config, provider, ip_resolver, dry_run=True)

        assert outcome.dry_run is True
        assert outcome.plan.update.record.id == "r1"
        assert provider.mutations == []
