"""Guardian chat command for MoodGarden CLI."""

import click
from rich.console import Console
from rich.panel import Panel

console = Console()

EXIT_WORDS = {"exit", "quit", "bye"}


@click.command("chat")
def chat() -> None:
    """Talk with the Guardian Spirit of your garden.

    The guardian knows your most recent moods. Type 'exit' to leave.
    """
    from moodgarden.agents.base import get_api_key, get_model
    from moodgarden.agents.gardener import GardenGuardianChat
    from moodgarden.config import load_config, open_store

    try:
        config = load_config()
        store = open_store(config)
        guardian = GardenGuardianChat(store.list(), model=get_model(config))
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to start chat:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    if not get_api_key():
        console.print("[yellow]OPENAI_API_KEY is not set; the guardian may not answer.[/yellow]")

    console.print(Panel(
        "Welcome to the garden. How is your heart growing today?",
        title="[bold green]Guardian Spirit[/bold green]",
        border_style="green",
    ))

    while True:
        try:
            message = click.prompt("You", prompt_suffix=" > ")
        except click.Abort:
            break

        if message.strip().lower() in EXIT_WORDS:
            break
        if not message.strip():
            continue

        with console.status("[dim]The guardian is listening...[/dim]"):
            answer = guardian.reply(message)
        console.print(f"[green]Guardian[/green] > {answer}")

    console.print("[dim]May your garden keep growing.[/dim]")
