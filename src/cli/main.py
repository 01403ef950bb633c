"""CLI entry point (Typer).

Each verb command builds an `HttpsService`, sends one request and renders
the decoded response with Rich (or as JSON with `--raw`).
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.https_service import HttpsService
from adapters.json_exporter import dump_response_json, export_response_json
from cli import doctor
from cli.ui_components import build_body_panel, build_response_table, print_banner, print_failure
from core.config import AppSettings
from core.domain.errors import ConstructionError, ServiceFailure
from core.domain.models import InboundResponse
from core.services.request_encoder import append_query

app = typer.Typer(no_args_is_help=True, help="Single-host HTTPS client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_HostArg = typer.Argument(..., help="Hostname (example.com) or https URI (https://example.com:8443).")
_PathArg = typer.Argument("/", help="Request path, e.g. /get.")
_QueryOpt = typer.Option(None, "--query", "-q", help="Query pair key=value (repeatable).")
_HeaderOpt = typer.Option(None, "--header", "-H", help="Header 'Name: value' (repeatable).")
_RawOpt = typer.Option(False, "--raw", help="Print the response as JSON, no tables.")
_OutputOpt = typer.Option(None, "--output", "-o", help="Also write the response JSON to this file.")
_VerboseOpt = typer.Option(False, "--verbose", "-v", help="Debug logging of the transport.")
_DataOpt = typer.Option(..., "--data", "-d", help="Request body (text, or JSON with --json).")
_JsonOpt = typer.Option(False, "--json", help="Parse --data as JSON and send it as structured data.")
_TypeOpt = typer.Option(None, "--content-type", "-t", help="Content-type override.")


def configure_logging(settings: AppSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def parse_pairs(pairs: list[str] | None) -> dict[str, str]:
    """`["a=1", "b=2"]` -> `{"a": "1", "b": "2"}`."""

    result: dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise typer.BadParameter(f"expected key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        result[key] = value
    return result


def parse_headers(lines: list[str] | None) -> dict[str, str]:
    """`["Accept: text/plain"]` -> `{"Accept": "text/plain"}`."""

    result: dict[str, str] = {}
    for line in lines or []:
        if ":" not in line:
            raise typer.BadParameter(f"expected 'Name: value', got {line!r}")
        name, value = line.split(":", 1)
        result[name.strip()] = value.strip()
    return result


def parse_data(data: str, as_json: bool) -> Any:
    if not as_json:
        return data
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"--data is not valid JSON ({exc})") from exc


def _render(response: InboundResponse, *, raw: bool, output: Path | None) -> None:
    if output is not None:
        export_response_json(response=response, output_path=output)
    if raw:
        typer.echo(dump_response_json(response))
        return
    print_banner(_console)
    _console.print(build_response_table(response))
    _console.print(build_body_panel(response))
    if output is not None:
        _console.print(f"[green]Saved response to:[/green] {output}")


def _execute(
    target: str,
    method: str,
    path: str,
    *,
    headers: dict[str, str] | None = None,
    data: Any = None,
    query: dict[str, str] | None = None,
    raw: bool = False,
    output: Path | None = None,
    verbose: bool = False,
) -> None:
    settings = AppSettings()
    configure_logging(settings, verbose)

    try:
        service = HttpsService(target, settings=settings)
        path = append_query(path, query)
        response = asyncio.run(service.request(method, path, headers, data))
    except ConstructionError as exc:
        print_failure(_console, str(exc))
        raise typer.Exit(code=2) from exc
    except ServiceFailure as exc:
        print_failure(_console, exc.message)
        raise typer.Exit(code=1) from exc
    except httpx.TransportError as exc:
        print_failure(_console, f"transport error: {exc!r}")
        raise typer.Exit(code=1) from exc

    _render(response, raw=raw, output=output)


@app.command()
def get(
    target: str = _HostArg,
    path: str = _PathArg,
    query: Optional[list[str]] = _QueryOpt,
    header: Optional[list[str]] = _HeaderOpt,
    raw: bool = _RawOpt,
    output: Optional[Path] = _OutputOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Send a GET request."""

    _execute(target, "GET", path, headers=parse_headers(header), query=parse_pairs(query),
             raw=raw, output=output, verbose=verbose)


@app.command()
def head(
    target: str = _HostArg,
    path: str = _PathArg,
    query: Optional[list[str]] = _QueryOpt,
    header: Optional[list[str]] = _HeaderOpt,
    raw: bool = _RawOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Send a HEAD request (no body is decoded)."""

    _execute(target, "HEAD", path, headers=parse_headers(header), query=parse_pairs(query),
             raw=raw, verbose=verbose)


@app.command()
def delete(
    target: str = _HostArg,
    path: str = _PathArg,
    header: Optional[list[str]] = _HeaderOpt,
    raw: bool = _RawOpt,
    output: Optional[Path] = _OutputOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Send a DELETE request."""

    _execute(target, "DELETE", path, headers=parse_headers(header), raw=raw, output=output,
             verbose=verbose)


def _send_with_body(
    method: str,
    target: str,
    path: str,
    data: str,
    as_json: bool,
    content_type: str | None,
    header: list[str] | None,
    raw: bool,
    output: Path | None,
    verbose: bool,
) -> None:
    headers = parse_headers(header)
    if content_type:
        headers["content-type"] = content_type
    _execute(target, method, path, headers=headers, data=parse_data(data, as_json), raw=raw,
             output=output, verbose=verbose)


@app.command()
def post(
    target: str = _HostArg,
    path: str = _PathArg,
    data: str = _DataOpt,
    as_json: bool = _JsonOpt,
    content_type: Optional[str] = _TypeOpt,
    header: Optional[list[str]] = _HeaderOpt,
    raw: bool = _RawOpt,
    output: Optional[Path] = _OutputOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Send a POST request."""

    _send_with_body("POST", target, path, data, as_json, content_type, header, raw, output, verbose)


@app.command()
def put(
    target: str = _HostArg,
    path: str = _PathArg,
    data: str = _DataOpt,
    as_json: bool = _JsonOpt,
    content_type: Optional[str] = _TypeOpt,
    header: Optional[list[str]] = _HeaderOpt,
    raw: bool = _RawOpt,
    output: Optional[Path] = _OutputOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Send a PUT request."""

    _send_with_body("PUT", target, path, data, as_json, content_type, header, raw, output, verbose)


@app.command()
def patch(
    target: str = _HostArg,
    path: str = _PathArg,
    data: str = _DataOpt,
    as_json: bool = _JsonOpt,
    content_type: Optional[str] = _TypeOpt,
    header: Optional[list[str]] = _HeaderOpt,
    raw: bool = _RawOpt,
    output: Optional[Path] = _OutputOpt,
    verbose: bool = _VerboseOpt,
) -> None:
    """Send a PATCH request."""

    _send_with_body("PATCH", target, path, data, as_json, content_type, header, raw, output, verbose)


def run() -> None:
    app()
