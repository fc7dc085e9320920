"""tokenrule CLI — Typer application with init, commit, and list commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from tokenrule import __version__

app = typer.Typer(
    name="tokenrule",
    help="Configure and validate token-matching rules for NLP pipelines.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load(config: Optional[str], format: Optional[str], verbose: bool):
    """Load config, apply CLI overrides and set up logging. Exit 2 on failure."""
    from tokenrule.config.loader import ConfigError, load_config
    from tokenrule.log import setup_logging

    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    setup_logging("DEBUG" if verbose else cfg.logging.level)
    return cfg


# ── commit ────────────────────────────────────────────────────────────────────


@app.command()
def commit(
    node_id: str = typer.Argument(..., help="Identifier of the owning pipeline node"),
    pattern: str = typer.Argument(..., help="Regular expression or literal text"),
    literal: bool = typer.Option(False, "--literal", help="Match the pattern as literal text"),
    case: Optional[str] = typer.Option(None, "--case", help="Case sensitivity: match | ignore | match-unicode"),
    range_from: Optional[int] = typer.Option(None, "--from", help="Token range start (enables the range)"),
    range_to: Optional[int] = typer.Option(None, "--to", help="Token range end (enables the range)"),
    canonical_eq: Optional[bool] = typer.Option(None, "--canonical-eq/--no-canonical-eq", help="CANON_EQ"),
    dot_all: Optional[bool] = typer.Option(None, "--dot-all/--no-dot-all", help="DOTALL"),
    multiline: Optional[bool] = typer.Option(None, "--multiline/--no-multiline", help="MULTILINE"),
    unix_lines: Optional[bool] = typer.Option(None, "--unix-lines/--no-unix-lines", help="UNIX_LINES"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tokenrule.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Validate a rule for NODE_ID and save it to the rule store."""
    from tokenrule.output import json_report, terminal
    from tokenrule.rules import ConfiguratorError, ExpressionType, Modifier, PanelVisibility, RuleConfigurator
    from tokenrule.store import RuleStore, StoreError

    cfg = _load(config, format, verbose)
    store = RuleStore(Path(cfg.store.path))
    visibility = PanelVisibility()

    try:
        session = RuleConfigurator(node_id, store, visibility, initial=cfg.draft.as_initial())
    except ConfiguratorError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Apply edits in panel order ---
    try:
        session.set_expression_type(ExpressionType.LITERAL if literal else ExpressionType.REGULAR)
        if case is not None:
            session.set_case_sensitivity(case)
    except ValueError:
        console.print(f"[bold red]Invalid case sensitivity:[/bold red] {case}")
        raise typer.Exit(code=2)

    if range_from is not None or range_to is not None:
        session.set_token_range_enabled(True)
        if range_from is not None:
            session.set_token_range_bound("from", range_from)
        if range_to is not None:
            session.set_token_range_bound("to", range_to)

    requested = {
        Modifier.CANONICAL_EQUIVALENCE: canonical_eq,
        Modifier.DOT_ALL: dot_all,
        Modifier.MULTILINE: multiline,
        Modifier.UNIX_LINES: unix_lines,
    }
    for modifier, value in requested.items():
        if value is None:
            continue
        if not session.set_modifier(modifier, value) and getattr(session.draft, modifier.value) != value:
            console.print(f"[yellow]⚠[/yellow]  {modifier.flag_name} is locked in this mode; ignored")

    session.set_pattern(pattern)

    # --- Commit ---
    try:
        result = session.commit()
    except StoreError as exc:
        console.print(f"[bold red]Store error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if cfg.output.format == "json":
        print(json_report.render(result))
    else:
        # A closed editor only needs the verdict, not the draft it was built from.
        show_summary = cfg.output.show_summary and visibility.visible
        terminal.render_result(result, session.draft, show_summary=show_summary)

    if not result.ok:
        raise typer.Exit(code=1)


# ── list ──────────────────────────────────────────────────────────────────────


@app.command("list")
def list_rules(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .tokenrule.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
) -> None:
    """Show the rules saved in the rule store."""
    from tokenrule.output import json_report, terminal
    from tokenrule.store import RuleStore, StoreError

    cfg = _load(config, format, verbose=False)
    try:
        rules = RuleStore(Path(cfg.store.path)).load()
    except StoreError as exc:
        console.print(f"[bold red]Store error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if cfg.output.format == "json":
        print(json_report.render_rules(rules))
    else:
        terminal.render_rules(rules)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    full: bool = typer.Option(False, "--full", help="Include all config options with comments"),
) -> None:
    """Generate a starter .tokenrule.toml in the current directory."""
    from tokenrule.config.defaults import DEFAULT_TOML, FULL_TOML
    from tokenrule.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    template = FULL_TOML if full else DEFAULT_TOML
    config_path.write_text(template, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"tokenrule {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """tokenrule — validate and commit token-matching rules."""
