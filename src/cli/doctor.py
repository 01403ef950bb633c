"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.https_service import HttpsService
from core.config import ENV_PREFIX, AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import ConstructionError, ServiceFailure

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_https(target: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        service = HttpsService(target, settings=settings)
        response = await service.head("/")
        return True, f"HTTP {response.status_code}"
    except ServiceFailure as exc:
        # Any HTTP status means the host is reachable.
        return True, exc.message
    except (ConstructionError, httpx.TransportError) as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run(
    target: str = typer.Argument("httpbin.org", help="Host or https URI used for the connectivity check."),
) -> None:
    """Run baseline diagnostics."""

    settings = AppSettings()

    table = Table(title="https-service Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Default port", "OK", str(settings.default_port))
    table.add_row(
        "TLS verification",
        "OK" if settings.verify_tls else "WARN",
        "enabled" if settings.verify_tls else "disabled (HTTPS_SERVICE_VERIFY_TLS=false)",
    )
    table.add_row("User-Agent", "OK", settings.user_agent or "httpx default")
    table.add_row("User config", "OK", str(get_user_env_file()))

    ok_https, detail_https = asyncio.run(_check_https(target, settings))
    table.add_row(f"HTTPS {target}", "OK" if ok_https else "FAIL", detail_https)

    _console.print(table)

    if not ok_https:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores values in the user config .env)."""

    settings = AppSettings()

    default_port = typer.prompt("Default port", default=settings.default_port, type=int)
    verify_tls = typer.confirm("Verify TLS certificates?", default=settings.verify_tls)
    user_agent = typer.prompt("User-Agent (blank for httpx default)", default=settings.user_agent or "",
                              show_default=False).strip()
    log_level = typer.prompt("Log level", default=settings.log_level).strip().upper()

    if not 1 <= default_port <= 65535:
        raise typer.BadParameter("port must be between 1 and 65535")

    env_path = write_user_env_vars(
        {
            f"{ENV_PREFIX}DEFAULT_PORT": str(default_port),
            f"{ENV_PREFIX}VERIFY_TLS": "true" if verify_tls else "false",
            f"{ENV_PREFIX}USER_AGENT": user_agent or None,
            f"{ENV_PREFIX}LOG_LEVEL": log_level,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
