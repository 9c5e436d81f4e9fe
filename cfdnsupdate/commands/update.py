"""Reconcile the declared record against Cloudflare."""

import typer
from rich.console import Console
from rich.table import Table

from cfdnsupdate import driver
from cfdnsupdate.config import DesiredState, RunConfig, Settings, load_run_config, load_settings
from cfdnsupdate.errors import AuthError, CFDNSUpdateError
from cfdnsupdate.providers.dns import CloudflareProvider
from cfdnsupdate.providers.ip import IpifyResolver
from cfdnsupdate.reconcile import Create, Delete, ReconciliationPlan, Update

console = Console()


def load_config_or_exit(settings: Settings, record: str | None = None) -> RunConfig:
    """Build the run configuration, exiting on a bad declaration."""
    try:
        return load_run_config(settings, record)
    except CFDNSUpdateError as e:
        console.print(f"[red]✗[/red] Invalid record declaration: {e}")
        raise typer.Exit(1)


def get_dns_provider(settings: Settings) -> CloudflareProvider:
    """Get the Cloudflare provider for the configured credentials."""
    try:
        return CloudflareProvider(
            email=settings.x_auth_email,
            key=settings.x_auth_key,
            api_token=settings.cf_api_token,
        )
    except AuthError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)


def get_ip_resolver(settings: Settings) -> IpifyResolver:
    """Get the public IP resolver."""
    return IpifyResolver(url=settings.ip_service_url)


def print_plan(plan: ReconciliationPlan, desired: DesiredState) -> None:
    """Print the operations of a plan as a table."""
    table = Table(title=f"{desired.record_type} {desired.record_name}")
    table.add_column("Action")
    table.add_column("Record ID")
    table.add_column("Content")

    for op in plan.operations():
        if isinstance(op, Delete):
            table.add_row("[red]delete[/red]", op.record.id, op.record.content)
        elif isinstance(op, Update):
            table.add_row(
                "[yellow]update[/yellow]", op.record.id, f"{op.record.content} → {op.content}"
            )
        elif isinstance(op, Create):
            table.add_row("[green]create[/green]", "-", op.content)

    console.print(table)


def execute(record: str | None = None, dry_run: bool = False) -> None:
    """Run one reconciliation and print its outcome line."""
    settings = load_settings()
    config = load_config_or_exit(settings, record)
    provider = get_dns_provider(settings)
    desired = config.desired

    try:
        outcome = driver.run(config, provider, get_ip_resolver(settings), dry_run=dry_run)
    except CFDNSUpdateError as e:
        console.print(
            f"[red]✗[/red] Failed to reconcile {desired.record_type} {desired.record_name}: {e}"
        )
        raise typer.Exit(1)
    finally:
        provider.close()

    if outcome.dry_run:
        print_plan(outcome.plan, desired)
        console.print(f"[dim]dry run:[/dim] {outcome.message}")
        return

    if outcome.failed_deletes:
        console.print(
            f"[yellow]![/yellow] Could not delete {len(outcome.failed_deletes)} record(s): "
            + ", ".join(outcome.failed_deletes)
        )
    console.print(outcome.message, highlight=False)


def run(
    record: str | None = typer.Option(
        None, "--record", "-r", help="Declaration zone:proxy-mode:subdomain:type:arg (overrides RECORD)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the plan without changing anything"),
) -> None:
    """Bring the declared record in line with Cloudflare."""
    execute(record=record, dry_run=dry_run)
