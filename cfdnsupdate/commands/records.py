"""Show the records currently held for the declared name."""

import typer
from rich.console import Console
from rich.table import Table

from cfdnsupdate import driver
from cfdnsupdate.commands.update import get_dns_provider, load_config_or_exit
from cfdnsupdate.config import load_settings
from cfdnsupdate.errors import CFDNSUpdateError

console = Console()


def show(
    record: str | None = typer.Option(
        None, "--record", "-r", help="Declaration zone:proxy-mode:subdomain:type:arg (overrides RECORD)"
    ),
) -> None:
    """List the records for the declared name and type, oldest first."""
    settings = load_settings()
    config = load_config_or_exit(settings, record)
    provider = get_dns_provider(settings)
    desired = config.desired

    try:
        _, records = driver.snapshot(config, provider)
    except CFDNSUpdateError as e:
        console.print(f"[red]✗[/red] Failed to list records: {e}")
        raise typer.Exit(1)
    finally:
        provider.close()

    console.print(f"[bold]{desired.record_type} records for {desired.record_name}[/bold]")

    table = Table()
    table.add_column("ID")
    table.add_column("Content")
    table.add_column("Proxied")
    table.add_column("TTL")
    table.add_column("Modified")

    for r in records:
        table.add_row(
            r.id,
            r.content,
            "yes" if r.proxied else "no",
            "auto" if r.ttl == 1 else str(r.ttl),
            r.modified_on.isoformat(),
        )

    console.print(table)
