"""CLI entrypoint using typer."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from rcache_core.config.settings import RedisConfig
from rcache_core.constants import VERSION
from rcache_infra.clients.redis_client import RedisClient
from rcache_infra.observability import bind_server_context, configure_logging

app = typer.Typer(
    name="rcache",
    help="Inspect and edit a Redis-backed cache",
)
console = Console()

HostOption = typer.Option(None, "--host", help="Redis address (default from config)")
PortOption = typer.Option(None, "--port", help="Redis port (default from config)")


@contextmanager
def _client(host: str | None, port: int | None) -> Iterator[RedisClient]:
    """Build a connected client for one command and close it afterwards."""
    overrides: dict[str, Any] = {}
    if host:
        overrides["ip"] = host
    if port:
        overrides["port"] = port
    config = RedisConfig(**overrides)

    configure_logging(config)
    bind_server_context(config.ip, config.port)

    client = RedisClient(config)
    if not client.connect():
        console.print(f"[red]Error:[/red] Redis unreachable at {config.ip}:{config.port}")
        raise typer.Exit(code=1)
    try:
        yield client
    finally:
        client.close()


def _render(value: Any) -> str:  # noqa: ANN401
    """Format a decoded value for terminal output."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


@app.command()
def get(
    key: str = typer.Argument(..., help="Key to read"),
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Print the value stored under KEY."""
    with _client(host, port) as client:
        value = client.get(key)

    if value is None:
        console.print(f"[yellow]Key not found:[/yellow] {key}")
        raise typer.Exit(code=1)
    console.print(_render(value), markup=False, highlight=False)


@app.command(name="set")
def set_(
    key: str = typer.Argument(..., help="Key to write"),
    value: str = typer.Argument(..., help="Value to store"),
    ttl: int | None = typer.Option(None, "--ttl", help="Lifetime in seconds (default from config)"),
    as_json: bool = typer.Option(False, "--json", help="Parse VALUE as JSON before storing"),
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Store VALUE under KEY."""
    payload: Any = value
    if as_json:
        try:
            payload = json.loads(value)
        except json.JSONDecodeError as exc:
            console.print(f"[red]Error:[/red] VALUE is not valid JSON: {exc}")
            raise typer.Exit(code=1) from exc

    with _client(host, port) as client:
        stored = client.set(key, payload, ttl)

    if not stored:
        console.print(f"[red]Error:[/red] Redis rejected the write for {key}")
        raise typer.Exit(code=1)
    console.print(f"[green]Stored[/green] {key}")


@app.command()
def delete(
    keys: list[str] = typer.Argument(..., help="Keys to delete"),
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Delete one or more keys."""
    with _client(host, port) as client:
        client.delete(keys)
    console.print(f"[green]Deleted[/green] {len(keys)} key(s)")


@app.command()
def exists(
    key: str = typer.Argument(..., help="Key to check"),
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Exit 0 if KEY exists, 1 otherwise."""
    with _client(host, port) as client:
        found = client.exists(key)
    console.print("true" if found else "false")
    if not found:
        raise typer.Exit(code=1)


@app.command()
def ttl(
    key: str = typer.Argument(..., help="Key to inspect"),
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Print the seconds KEY has left (0 if missing, -1 if it never expires)."""
    with _client(host, port) as client:
        remaining = client.remaining_lifetime(key)
    console.print(str(remaining))


@app.command()
def count(
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Print the number of keys in the database."""
    with _client(host, port) as client:
        total = client.count()
    console.print(str(total))


@app.command(name="list")
def list_(
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Show every key with its value (full scan, small databases only)."""
    with _client(host, port) as client:
        items = client.get_all()

    table = Table(title=f"{len(items)} key(s)")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key in sorted(items):
        table.add_row(key, _render(items[key]))
    console.print(table)


@app.command()
def purge(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
    host: str | None = HostOption,
    port: int | None = PortOption,
) -> None:
    """Flush every key in the database."""
    if not yes:
        typer.confirm("Flush every key in the database?", abort=True)

    with _client(host, port) as client:
        purged = client.purge()

    if not purged:
        console.print("[red]Error:[/red] purge failed")
        raise typer.Exit(code=1)
    console.print("[green]Purged[/green]")


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"rcache v{VERSION}")


if __name__ == "__main__":
    app()
