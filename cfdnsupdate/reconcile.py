"""Record-set reconciliation.

A run reads one snapshot of the records for a (zone, name, type), turns it
into a :class:`ReconciliationPlan` and executes that plan without re-reading.
The ``plan_*`` functions are pure; only :meth:`Reconciler.apply` talks to the
provider.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from cfdnsupdate.config import (
    ADDRESS_RECORD,
    ALIAS_RECORD,
    AddressPoolTarget,
    AliasTarget,
    DesiredState,
)
from cfdnsupdate.errors import ConfigError, DeleteError, UnsupportedRecordTypeError
from cfdnsupdate.providers.dns.base import DNSProvider, DNSRecord
from cfdnsupdate.providers.ip.base import IPResolver

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "record already exists"


@dataclass(frozen=True)
class Delete:
    record: DNSRecord


@dataclass(frozen=True)
class Update:
    record: DNSRecord
    content: str


@dataclass(frozen=True)
class Create:
    content: str


Operation = Delete | Update | Create


@dataclass
class ReconciliationPlan:
    """Operations that take one snapshot to the desired state."""

    message: str
    deletes: list[Delete] = field(default_factory=list)
    update: Update | None = None
    create: Create | None = None

    def operations(self) -> list[Operation]:
        """Return the operations in execution order."""
        ops: list[Operation] = list(self.deletes)
        if self.update is not None:
            ops.append(self.update)
        if self.create is not None:
            ops.append(self.create)
        return ops

    def has_changes(self) -> bool:
        return bool(self.operations())


@dataclass
class Outcome:
    """What a run did (or, for a dry run, would do)."""

    message: str
    plan: ReconciliationPlan
    created: int = 0
    updated: int = 0
    deleted: int = 0
    failed_deletes: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.created or self.updated or self.deleted)


def oldest_first(records: Iterable[DNSRecord]) -> list[DNSRecord]:
    """Sort records by modification time, oldest first."""
    return sorted(records, key=lambda r: r.modified_on)


def plan_address_pool(
    records: Iterable[DNSRecord], target: AddressPoolTarget, address: str
) -> ReconciliationPlan:
    """Plan one step towards `target.size` A records pointing at `address`.

    The oldest records are the first to go when the pool shrinks, and the
    oldest survivor is the one rewritten. Any record already holding the
    address ends the run without trimming. Growth adds one record per run.
    """
    ordered = oldest_first(records)

    if any(r.content == address for r in ordered):
        return ReconciliationPlan(message=ALREADY_EXISTS)

    if len(ordered) < target.size:
        return ReconciliationPlan(
            message=f"{ADDRESS_RECORD} record added",
            create=Create(content=address),
        )

    excess = len(ordered) - target.size
    deletes = [Delete(record=r) for r in ordered[:excess]]
    survivor = ordered[excess]
    return ReconciliationPlan(
        message=f"{ADDRESS_RECORD} record updated",
        deletes=deletes,
        update=Update(record=survivor, content=address),
    )


def plan_alias(records: Iterable[DNSRecord], target: AliasTarget) -> ReconciliationPlan:
    """Plan convergence of the oldest CNAME record onto `target.content`.

    Records beyond the oldest are left alone.
    """
    ordered = oldest_first(records)

    if not ordered:
        return ReconciliationPlan(
            message=f"{ALIAS_RECORD} record added",
            create=Create(content=target.content),
        )

    current = ordered[0]
    if current.content == target.content:
        return ReconciliationPlan(message=ALREADY_EXISTS)

    return ReconciliationPlan(
        message=f"{ALIAS_RECORD} record updated",
        update=Update(record=current, content=target.content),
    )


class Reconciler:
    """Plans and applies record changes against a DNS provider."""

    def __init__(self, provider: DNSProvider, ip_resolver: IPResolver):
        self.provider = provider
        self.ip_resolver = ip_resolver

    def plan(self, records: list[DNSRecord], desired: DesiredState) -> ReconciliationPlan:
        """Build the plan for a snapshot.

        Raises:
            UnsupportedRecordTypeError: The record type is not A or CNAME.
            IPResolutionError: The public address is needed but unavailable.
        """
        target = desired.target

        if desired.record_type == ADDRESS_RECORD:
            if not isinstance(target, AddressPoolTarget):
                raise ConfigError(f"{ADDRESS_RECORD} records need a pool size target")
            address = self.ip_resolver.current_public_address()
            logger.info("current public address is %s", address)
            plan = plan_address_pool(records, target, address)
        elif desired.record_type == ALIAS_RECORD:
            if not isinstance(target, AliasTarget):
                raise ConfigError(f"{ALIAS_RECORD} records need an alias target")
            plan = plan_alias(records, target)
        else:
            raise UnsupportedRecordTypeError(
                f"unimplemented record type: {desired.record_type}"
            )

        logger.info(
            "plan for %s %s: %d delete(s), %s, %s",
            desired.record_type,
            desired.record_name,
            len(plan.deletes),
            "update" if plan.update else "no update",
            "create" if plan.create else "no create",
        )
        return plan

    def apply(self, zone_id: str, plan: ReconciliationPlan, desired: DesiredState) -> Outcome:
        """Execute a plan.

        A failed delete is logged and the next one is tried. Update and
        create failures propagate; nothing already applied is rolled back.
        """
        outcome = Outcome(message=plan.message, plan=plan)

        for op in plan.deletes:
            try:
                self.provider.delete_record(zone_id, op.record.id)
            except DeleteError as e:
                logger.warning("delete %s record %s: %s", desired.record_type, op.record.id, e)
                outcome.failed_deletes.append(op.record.id)
            else:
                outcome.deleted += 1

        if plan.update is not None:
            self.provider.update_record(
                zone_id,
                plan.update.record.id,
                record_type=desired.record_type,
                name=desired.record_name,
                content=plan.update.content,
                proxied=desired.proxied,
            )
            outcome.updated += 1

        if plan.create is not None:
            self.provider.create_record(
                zone_id,
                record_type=desired.record_type,
                name=desired.record_name,
                content=plan.create.content,
                proxied=desired.proxied,
            )
            outcome.created += 1

        return outcome

    def reconcile(
        self,
        zone_id: str,
        records: list[DNSRecord],
        desired: DesiredState,
        dry_run: bool = False,
    ) -> Outcome:
        """Plan against `records` and apply the plan unless `dry_run`."""
        plan = self.plan(records, desired)
        if dry_run:
            return Outcome(message=plan.message, plan=plan, dry_run=True)
        return self.apply(zone_id, plan, desired)
