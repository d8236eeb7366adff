"""CLI entry point for mbrao."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.table import Table

from mbrao.config import MbraoConfig, load_config
from mbrao.config.loader import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE
from mbrao.content import Content
from mbrao.exceptions import MbraoError
from mbrao.parser import Parser
from mbrao.version import VERSION

app = typer.Typer(
    name="mbrao",
    help="Parse posts with embedded metadata and render them to HTML.",
)

config_app = typer.Typer(help="Manage mbrao configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: MbraoConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(cfg: MbraoConfig) -> None:
    handler = logging.StreamHandler()
    if cfg.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("mbrao")
    root.handlers[:] = [handler]
    root.setLevel(_LOG_LEVELS[cfg.log_level])


def _get_config() -> MbraoConfig:
    if _config is None:
        return load_config()
    return _config


def _get_parser() -> Parser:
    return Parser(_get_config())


def _read_source(file: str) -> str:
    path = Path(file)
    if not path.is_file():
        rprint(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to mbrao.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config)


def _display_content(content: Content, locale: str | None) -> None:
    """Display a parsed record as a Rich panel."""
    try:
        title = content.get_title(locale)
    except MbraoError:
        title = content.title
    author = content.author.name if content.author and content.author.name else "-"
    lines = [
        f"[bold]{title or '(untitled)'}[/bold]",
        "",
        f"[dim]UID:[/dim]       {content.uid or '-'}",
        f"[dim]Author:[/dim]    {author}",
        f"[dim]Date:[/dim]      {content.date.isoformat() if content.date else '-'}",
        f"[dim]Published:[/dim] {content.published}",
        f"[dim]Tags:[/dim]      {', '.join(content.tags) if content.tags else '-'}",
        f"[dim]Locales:[/dim]   {', '.join(content.available_locales) or 'all'}",
    ]
    if content.metadata:
        lines.append(f"[dim]Metadata:[/dim]  {', '.join(sorted(content.metadata))}")
    rprint(Panel("\n".join(lines), title="Content", border_style="blue"))


@app.command()
def parse(
    file: str = typer.Argument(..., help="Path to the post source"),
    engine: str | None = typer.Option(None, "--engine", "-e", help="Parsing engine"),
    locale: str | None = typer.Option(None, "--locale", "-l", help="Locale for display"),
    metadata: bool = typer.Option(True, "--metadata/--no-metadata", help="Extract metadata"),
    content: bool = typer.Option(True, "--content/--no-content", help="Keep the body"),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON"),
) -> None:
    """Parse a post and show its normalized record."""
    raw = _read_source(file)
    parser = _get_parser()

    try:
        result = parser.parse(raw, {"engine": engine, "metadata": metadata, "content": content})
    except MbraoError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        _display_content(result, locale or parser.locale)


@app.command()
def render(
    file: str = typer.Argument(..., help="Path to the post source"),
    parsing_engine: str | None = typer.Option(None, "--parser", "-p", help="Parsing engine"),
    engine: str | None = typer.Option(None, "--engine", "-e", help="Rendering engine"),
    locale: list[str] | None = typer.Option(None, "--locale", "-l", help="Locale(s) to render"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write HTML to file"),
) -> None:
    """Parse a post and render its body."""
    raw = _read_source(file)
    parser = _get_parser()

    # Unset options fall back to the parser config.
    options: dict = {"engine": engine, "locales": locale}

    try:
        parsed = parser.parse(raw, {"engine": parsing_engine})
        html = parser.render(parsed, options, parsed.metadata)
    except MbraoError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if output:
        Path(output).write_text(html, encoding="utf-8")
        rprint(f"[green]Written to[/green] {output}")
    else:
        typer.echo(html)


@app.command()
def engines() -> None:
    """List available parsing and rendering engines."""
    parser = _get_parser()
    found = parser.registry.discover()

    table = Table(title="Engines")
    table.add_column("Role", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Default", justify="center")
    defaults = {"parsing": parser.parsing_engine, "rendering": parser.rendering_engine}
    for role, names in found.items():
        for name in names:
            table.add_row(role, name, "*" if defaults.get(role) == name else "")
    rprint(table)


@app.command()
def version() -> None:
    """Print the mbrao version."""
    typer.echo(VERSION)


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Write a default mbrao.yaml in the current directory."""
    path = Path(CONFIG_FILENAME)
    if path.exists() and not force:
        rprint(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    path.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {path}")


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration as YAML."""
    cfg = _get_config()
    typer.echo(yaml.safe_dump(cfg.model_dump(), sort_keys=False).rstrip())
