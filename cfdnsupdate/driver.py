"""One-shot orchestration of a reconciliation run."""

import logging

from cfdnsupdate.config import SUPPORTED_RECORD_TYPES, RunConfig
from cfdnsupdate.errors import UnsupportedRecordTypeError
from cfdnsupdate.providers.dns.base import DNSProvider, DNSRecord
from cfdnsupdate.providers.ip.base import IPResolver
from cfdnsupdate.reconcile import Outcome, Reconciler, oldest_first

logger = logging.getLogger(__name__)


def snapshot(config: RunConfig, provider: DNSProvider) -> tuple[str, list[DNSRecord]]:
    """Resolve the zone and fetch its matching records, oldest first."""
    desired = config.desired

    zone_id = provider.resolve_zone(desired.zone)
    logger.debug("zone %s has id %s", desired.zone, zone_id)

    records = provider.list_records(zone_id, desired.record_type, desired.record_name)
    logger.info(
        "found %d %s record(s) for %s", len(records), desired.record_type, desired.record_name
    )
    return zone_id, oldest_first(records)


def run(
    config: RunConfig,
    provider: DNSProvider,
    ip_resolver: IPResolver,
    dry_run: bool = False,
) -> Outcome:
    """Run one reconciliation for the configured record.

    Raises:
        CFDNSUpdateError: Any fatal error; see cfdnsupdate.errors.
    """
    desired = config.desired
    if desired.record_type not in SUPPORTED_RECORD_TYPES:
        raise UnsupportedRecordTypeError(f"unimplemented record type: {desired.record_type}")

    zone_id, records = snapshot(config, provider)
    reconciler = Reconciler(provider, ip_resolver)
    return reconciler.reconcile(zone_id, records, desired, dry_run=dry_run)
