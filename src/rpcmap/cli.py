from __future__ import annotations

import importlib
import json
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rpcmap.config import ClientConfig, configure_logging
from rpcmap.contract.declare import contract_for, declared_methods
from rpcmap.domain.errors import ArgumentBindingError, MalformedTemplateError, MappingError
from rpcmap.domain.models import type_label
from rpcmap.mapping.assembler import CallAssembler
from rpcmap.mapping.response import resolve_response_type
from rpcmap.mapping.routes import resolve_path_template
from rpcmap.mapping.verbs import resolve_http_method


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()


@app.callback()
def main_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log contract building and resolution"),
) -> None:
    ctx.obj = {"verbose": verbose}
    if verbose:
        configure_logging("DEBUG")


def _load_client(target: str) -> type:
    # "package.module:ClassName"
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise typer.BadParameter(f"Expected module:Class, got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import {module_name!r}: {e}") from e
    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise typer.BadParameter(f"{module_name!r} has no attribute {attr!r}")
    if not isinstance(obj, type):
        raise typer.BadParameter(f"{target!r} is not a class")
    return obj


def _parse_args(pairs: List[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected name=value, got {pair!r}")
        out[name.strip()] = value
    return out


@app.command()
def routes(
    target: str = typer.Argument(..., help="Client class as module:Class"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    client = _load_client(target)

    rows = []
    for name in declared_methods(client):
        try:
            c = contract_for(client, name)
            path = resolve_path_template(c.type_route, c.method_route, method_name=c.name)
        except MappingError as e:
            console.print(f"[yellow]skipping[/yellow] {name}: {escape(str(e))}", soft_wrap=True)
            continue
        rows.append(
            {
                "method": resolve_http_method(c.method_route),
                "path": path,
                "handler": name,
                "response": type_label(resolve_response_type(c.response_type)),
                "response_body": c.response_body,
            }
        )

    if format.lower() == "json":
        typer.echo(json.dumps(rows, indent=2))
        return

    console.print(f"[bold]Client:[/bold] {target}")
    console.print(f"[bold]Routes:[/bold] {len(rows)}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("HANDLER")
    table.add_column("RESPONSE")

    for r in rows:
        handler = r["handler"] if r["response_body"] else f"{r['handler']} (no body)"
        table.add_row(r["method"], r["path"], handler, r["response"])

    console.print(table)


@app.command()
def resolve(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Client class as module:Class"),
    method: str = typer.Argument(..., help="Method name on the client"),
    arg: List[str] = typer.Option([], "--arg", "-a", help="Argument as name=value (repeatable)"),
    base_url: Optional[str] = typer.Option(None, help="Base URL (default: $RPCMAP_BASE_URL)"),
) -> None:
    client = _load_client(target)
    kwargs = _parse_args(arg)

    try:
        config = ClientConfig.from_env(base_url=base_url)
    except ValidationError as e:
        raise typer.BadParameter(f"Invalid configuration: {e}") from e
    if not (ctx.obj or {}).get("verbose"):
        configure_logging(config.log_level)

    assembler = CallAssembler.from_config(config)
    try:
        descriptor = assembler.describe(client, method, **kwargs)
    except ArgumentBindingError as e:
        # wrong/missing --arg names
        raise typer.BadParameter(str(e)) from e
    except (MappingError, MalformedTemplateError) as e:
        console.print(f"[bold red]error[/bold red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(descriptor.summary(), indent=2, default=str))


@app.command()
def ping() -> None:
    console.print("pong")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
