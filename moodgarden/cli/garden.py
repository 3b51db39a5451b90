"""Garden commands for MoodGarden CLI.

Handles planting moods, the garden grid, entry history and
(re)requesting garden wisdom.
"""

from datetime import datetime
from typing import Optional, Sequence

import click
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from moodgarden.growth import compute_growth
from moodgarden.models import MOOD_PLANTS, GrownEntry, MoodEntry, MoodType, new_entry

console = Console()

MOOD_CHOICES = [m.value for m in MoodType]
SHORT_ID_LENGTH = 8


def _get_config() -> dict:
    """Lazily load configuration."""
    from moodgarden.config import load_config

    return load_config()


def _get_store(config: dict):
    """Get an initialized garden store."""
    from moodgarden.config import open_store

    return open_store(config)


def _get_wisdom_agent(config: dict):
    """Create the wisdom agent (imports the AI SDK)."""
    from moodgarden.agents.base import get_model
    from moodgarden.agents.gardener import GardenWisdomAgent

    return GardenWisdomAgent(model=get_model(config))


def _has_api_key() -> bool:
    from moodgarden.agents.base import get_api_key

    return bool(get_api_key())


def _error_panel(message: str, error: Exception) -> None:
    console.print(Panel(
        f"[red]{message}[/red]\n\n{str(error)}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def resolve_entry_id(entries: Sequence[MoodEntry], id_or_prefix: str) -> Optional[str]:
    """Resolve a full entry ID or a unique ID prefix.

    Args:
        entries: Entries to search.
        id_or_prefix: Full ID or the start of one.

    Returns:
        The matching entry ID, or None if nothing matches.

    Raises:
        click.ClickException: If the prefix is empty or matches several entries.
    """
    if not id_or_prefix.strip():
        raise click.ClickException("Entry ID must not be empty")

    for entry in entries:
        if entry.id == id_or_prefix:
            return entry.id

    matches = [e.id for e in entries if e.id.startswith(id_or_prefix)]
    if len(matches) > 1:
        raise click.ClickException(
            f"ID prefix '{id_or_prefix}' matches {len(matches)} entries; use more characters"
        )
    return matches[0] if matches else None


def stage_badge(grown: GrownEntry) -> str:
    """Short badge for a plant: its plant type at full bloom, else its level."""
    if grown.growth.is_max_tier:
        return MOOD_PLANTS[grown.entry.mood].type
    return f"Level {grown.growth.tier_level}"


def _format_day(ts: datetime) -> str:
    return ts.astimezone().strftime("%b %d")


def _format_time(ts: datetime) -> str:
    return ts.astimezone().strftime("%H:%M")


def _plant_card(grown: GrownEntry) -> Panel:
    entry, growth = grown.entry, grown.growth
    dots = "●" * growth.tier_level + "○" * (4 - growth.tier_level)
    border = "green" if growth.is_max_tier else "dim"
    badge = f"[bold white on green] {stage_badge(grown)} [/]" if growth.is_max_tier else stage_badge(grown)
    return Panel(
        f"[bold]{growth.icon}[/bold]  [dim]{dots}[/dim]\n"
        f"{_format_day(entry.timestamp)}\n"
        f"{badge}\n"
        f"[dim]{entry.mood.value} Entry #{growth.occurrence_rank}[/dim]",
        border_style=border,
        width=24,
    )


@click.command("plant")
@click.argument("mood", type=click.Choice(MOOD_CHOICES, case_sensitive=False))
@click.option("--note", "-n", default=None, help="Optional note about how you feel.")
@click.option(
    "--date", "on_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day the mood applies to (YYYY-MM-DD). Defaults to today.",
)
@click.option("--no-wisdom", is_flag=True, default=False, help="Skip AI garden wisdom.")
def plant(mood: str, note: Optional[str], on_date: Optional[datetime], no_wisdom: bool) -> None:
    """Plant a mood in your garden.

    MOOD is one of: Happy, Calm, Sad, Angry, Anxious, Excited, Tired.

    \b
    Examples:
      moodgarden plant happy
      moodgarden plant sad --note "Rainy day"
      moodgarden plant calm --date 2025-01-14
    """
    try:
        config = _get_config()
        store = _get_store(config)

        entry = new_entry(MoodType(mood), note, on_date.date() if on_date else None)
        store.add(entry)

        insight = None
        wisdom_deferred = False
        if not no_wisdom:
            if _has_api_key():
                from moodgarden.agents.gardener import request_insight

                insight = request_insight(store, entry.id, _get_wisdom_agent(config))
            else:
                wisdom_deferred = True

        grown = next(g for g in compute_growth(store.list()) if g.entry.id == entry.id)
        plant_info = MOOD_PLANTS[entry.mood]

        lines = [
            f"[bold green]{grown.growth.icon} {entry.mood.value} planted[/bold green]\n",
            f"ID:     {entry.id[:SHORT_ID_LENGTH]}",
            f"Date:   {entry.timestamp.astimezone().strftime('%Y-%m-%d %H:%M')}",
            f"Stage:  {grown.growth.tier_label} ({entry.mood.value} #{grown.growth.occurrence_rank})",
        ]
        if grown.growth.is_max_tier:
            lines.append(f"Bloom:  {plant_info.emoji} {plant_info.type} - {plant_info.description}")
        if entry.note:
            lines.append(f"Note:   {entry.note}")
        if insight:
            lines.append(f"\n[italic green]\"{insight}\"[/italic green]")
        elif wisdom_deferred:
            lines.append(
                "\n[dim]Set OPENAI_API_KEY, then run "
                f"'moodgarden wisdom {entry.id[:SHORT_ID_LENGTH]}' for garden wisdom[/dim]"
            )

        console.print(Panel(
            "\n".join(lines),
            title="[bold]New Plant[/bold]",
            border_style="green",
        ))

    except Exception as e:
        _error_panel("Failed to plant mood:", e)
        raise SystemExit(1)


@click.command("garden")
@click.option(
    "--limit", "-l",
    type=click.IntRange(min=1),
    default=None,
    help="Number of most recent plants to show (default from config, 20).",
)
def garden(limit: Optional[int]) -> None:
    """Show your living garden.

    Each plant is one logged mood. Plants grow as you log the same
    mood again: Seedling, Sprout, Young Plant, then Full Bloom.
    """
    try:
        config = _get_config()
        store = _get_store(config)
        grown = compute_growth(store.list())

        if not grown:
            console.print(Panel(
                "[dim]The soil is ready... Record your first mood with "
                "'moodgarden plant MOOD' to watch your garden grow.[/dim]",
                title="[bold]My Living Garden[/bold]",
                border_style="dim",
            ))
            return

        display_limit = limit or config.get("garden", {}).get("display_limit", 20)
        shown = grown[:display_limit]

        console.print("[bold]My Living Garden[/bold]")
        console.print(Columns([_plant_card(g) for g in shown]))
        if len(grown) > len(shown):
            console.print(f"\n[dim]Showing {len(shown)} of {len(grown)} plants[/dim]")

    except Exception as e:
        _error_panel("Failed to show garden:", e)
        raise SystemExit(1)


@click.command("history")
@click.option(
    "--remove", "remove_id",
    default=None,
    help="Remove the entry with this ID (or unique ID prefix).",
)
def history(remove_id: Optional[str]) -> None:
    """Browse or prune your mood history.

    \b
    Examples:
      moodgarden history                  # List all entries
      moodgarden history --remove 3f2a91  # Remove an entry
    """
    try:
        store = _get_store(_get_config())
        entries = store.list()

        if remove_id is not None:
            entry_id = resolve_entry_id(entries, remove_id)
            if entry_id is None:
                console.print(f"[yellow]Entry {remove_id} not found[/yellow]")
                return

            entry = store.get(entry_id)
            store.delete(entry_id)
            console.print(
                f"[green]✓ Removed {entry.mood.value} entry from "
                f"{entry.timestamp.astimezone().strftime('%Y-%m-%d')} ({entry_id[:SHORT_ID_LENGTH]})[/green]"
            )
            return

        if not entries:
            console.print(Panel(
                "[dim]No memories yet... Your logged moods will appear here over time.[/dim]",
                title="[bold]History[/bold]",
                border_style="dim",
            ))
            return

        table = Table(
            title="Mood History",
            show_header=True,
            header_style="bold cyan",
        )

        table.add_column("ID", style="dim", width=SHORT_ID_LENGTH)
        table.add_column("Date", style="dim")
        table.add_column("Mood", style="bold")
        table.add_column("Stage")
        table.add_column("Note")
        table.add_column("Wisdom", style="italic green")

        for grown in compute_growth(entries):
            entry = grown.entry
            table.add_row(
                entry.id[:SHORT_ID_LENGTH],
                f"{_format_day(entry.timestamp)} {_format_time(entry.timestamp)}",
                entry.mood.value,
                f"{grown.growth.icon} {grown.growth.tier_label}",
                entry.note or "",
                entry.insight or "",
            )

        console.print(table)
        console.print(f"\n[dim]Total: {len(entries)} entries[/dim]")
        console.print("[dim]Use 'moodgarden history --remove ID' to delete an entry[/dim]")

    except click.ClickException:
        raise
    except Exception as e:
        _error_panel("Failed to show history:", e)
        raise SystemExit(1)


@click.command("wisdom")
@click.argument("entry_id")
def wisdom(entry_id: str) -> None:
    """Ask for garden wisdom on an entry that has none yet.

    ENTRY_ID is the entry's ID or a unique prefix of it.
    """
    try:
        config = _get_config()
        store = _get_store(config)

        resolved = resolve_entry_id(store.list(), entry_id)
        if resolved is None:
            console.print(f"[yellow]Entry {entry_id} not found[/yellow]")
            return

        if store.get(resolved).insight:
            console.print("[yellow]This entry already carries garden wisdom[/yellow]")
            return

        if not _has_api_key():
            console.print("[yellow]Set OPENAI_API_KEY to ask the garden for wisdom[/yellow]")
            return

        from moodgarden.agents.gardener import request_insight

        text = request_insight(store, resolved, _get_wisdom_agent(config))
        if text:
            console.print(f"[italic green]\"{text}\"[/italic green]")
        else:
            console.print("[yellow]No wisdom was attached[/yellow]")

    except click.ClickException:
        raise
    except Exception as e:
        _error_panel("Failed to get wisdom:", e)
        raise SystemExit(1)
