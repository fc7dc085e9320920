"""Rich terminal reporter — draft state, commit verdict, stored rules."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tokenrule.rules.draft import locked_modifiers
from tokenrule.rules.models import Draft, Modifier, ValidatedRule
from tokenrule.rules.validation import CommitResult


def _flag_cell(value: bool, locked: bool) -> Text:
    text = Text("on" if value else "off", style="green" if value else "dim")
    if locked:
        text.append(" (locked)", style="yellow")
    return text


def _token_range_text(enabled: bool, start: int, end: int) -> str:
    return f"{start}–{end} tokens" if enabled else "-"


def render_draft(draft: Draft, console: Optional[Console] = None) -> None:
    """Print every Draft field, marking modifiers the user cannot change."""
    console = console or Console(stderr=True)
    locked = locked_modifiers(draft)

    table = Table(title="Rule Draft", show_header=False, border_style="dim", title_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Pattern", Text(draft.pattern) if draft.pattern else Text("(empty)", style="dim"))
    table.add_row("Match expression as", draft.expression_type.value)
    table.add_row("Case sensitivity", draft.case_sensitivity.label)
    tr = draft.token_range
    table.add_row("Token range", _token_range_text(tr.enabled, tr.start, tr.end))
    for modifier in Modifier:
        table.add_row(
            f"{modifier.label} ({modifier.flag_name})",
            _flag_cell(getattr(draft, modifier.value), modifier in locked),
        )
    console.print(table)

    if draft.error_message:
        console.print(f"[bold red]✗ {draft.error_message}[/bold red]")


def render_result(
    result: CommitResult,
    draft: Draft,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the commit verdict, preceded by the draft when *show_summary*."""
    console = console or Console(stderr=True)
    if show_summary:
        render_draft(draft, console)
        console.print()
    if result.rule is not None:
        console.print(Text(f"✓ Rule committed for node {result.rule.node_id}", style="bold green"))
    elif not show_summary:
        console.print(f"[bold red]✗ {draft.error_message}[/bold red]")


def render_rules(rules: Sequence[ValidatedRule], console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    if not rules:
        console.print("[dim]No rules stored.[/dim]")
        return

    table = Table(title="Stored Rules", show_lines=True, title_style="bold", border_style="dim")
    table.add_column("Node", style="magenta")
    table.add_column("Pattern", style="cyan", min_width=15)
    table.add_column("Type")
    table.add_column("Case")
    table.add_column("Tokens", justify="right", style="green")
    table.add_column("Flags")

    for rule in rules:
        flags = [m.flag_name for m in Modifier if getattr(rule, m.value)]
        tr = rule.token_range
        table.add_row(
            Text(rule.node_id),
            Text(rule.pattern),
            rule.expression_type.value,
            rule.case_sensitivity.label,
            _token_range_text(tr.enabled, tr.start, tr.end),
            ", ".join(flags) or "-",
        )
    console.print(table)
