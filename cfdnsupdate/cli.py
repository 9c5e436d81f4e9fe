"""CLI entry point for cf-dns-update."""

import typer
from rich.console import Console

from cfdnsupdate import __version__
from cfdnsupdate.commands import records, update
from cfdnsupdate.log import configure_logging

app = typer.Typer(
    name="cf-dns-update",
    help="Keep Cloudflare A and CNAME records in their declared state.",
)
console = Console()

app.command(name="update")(update.run)
app.command(name="records")(records.show)


@app.command()
def version() -> None:
    """Show the cf-dns-update version."""
    console.print(f"cf-dns-update v{__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING", "--log-level", envvar="LOG_LEVEL", help="Logging level for stderr output"
    ),
) -> None:
    """cf-dns-update - reconcile Cloudflare DNS records from the RECORD declaration.

    Without a sub-command, runs `update`.
    """
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        update.execute()


if __name__ == "__main__":
    app()
