"""CLI commands for cf-dns-update."""
