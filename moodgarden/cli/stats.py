"""Stats command for MoodGarden CLI.

Shows the mood landscape, planting consistency over the last week and
summary tiles.
"""

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from moodgarden.growth import garden_stats
from moodgarden.models import MOOD_PLANTS

console = Console()

BAR_WIDTH = 24


def _get_store():
    """Get an initialized garden store."""
    from moodgarden.config import open_store

    return open_store()


def bar(value: int, maximum: int, width: int = BAR_WIDTH) -> str:
    """Render a horizontal bar proportional to ``value / maximum``."""
    if maximum <= 0 or value <= 0:
        return ""
    return "█" * max(1, round(value / maximum * width))


@click.command("stats")
def stats() -> None:
    """Show statistics about your garden."""
    try:
        store = _get_store()
        result = garden_stats(store.list())

        if result.total_entries == 0:
            console.print(Panel(
                "[dim]Growth data will appear here once you start tracking.[/dim]",
                title="[bold]Garden Stats[/bold]",
                border_style="dim",
            ))
            return

        landscape = Table(title="Mood Landscape", show_header=True, header_style="bold cyan")
        landscape.add_column("Mood", style="bold")
        landscape.add_column("Plant")
        landscape.add_column("Count", justify="right")
        landscape.add_column("")

        top_count = max(result.mood_counts.values())
        for mood, count in result.mood_counts.items():
            plant = MOOD_PLANTS[mood]
            landscape.add_row(
                mood.value,
                f"{plant.emoji} {plant.type}",
                str(count),
                f"[{plant.color}]{bar(count, top_count)}[/]",
            )
        console.print(landscape)

        consistency = Table(title="Planting Consistency", show_header=True, header_style="bold cyan")
        consistency.add_column("Day")
        consistency.add_column("Plants", justify="right")
        consistency.add_column("")

        busiest = max(d.count for d in result.daily_counts)
        for day in result.daily_counts:
            consistency.add_row(
                day.day.strftime("%a %d"),
                str(day.count),
                f"[green]{bar(day.count, busiest)}[/green]",
            )
        console.print(consistency)

        top = result.top_mood.value if result.top_mood else "N/A"
        console.print(Panel(
            f"Total Blooms:  [bold]{result.total_entries}[/bold]\n"
            f"Top Mood:      [bold green]{top}[/bold green]\n"
            f"Streak:        [bold green]{result.streak_days} days[/bold green]\n"
            f"Full Blooms:   [bold]{result.bloom_count}[/bold]\n"
            f"Wisdom Count:  [bold]{result.wisdom_count}[/bold]",
            title="[bold]Summary[/bold]",
            border_style="green",
        ))

    except Exception as e:
        console.print(Panel(
            f"[red]Failed to compute stats:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)
