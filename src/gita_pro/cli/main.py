"""Main entry point for the gita CLI.

Provides a Typer-based CLI for revealing Bhagavad Gita verses, tracking
reveal progress, and managing saved lessons.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from gita_pro import __version__
from gita_pro.cli import lessons as lesson_commands
from gita_pro.config import GitaConfig, ensure_config_exists, get_config_path
from gita_pro.db.lesson_client import LessonClient
from gita_pro.db.models import Lesson
from gita_pro.db.state_client import StateClient
from gita_pro.logging_config import get_logger, setup_logging
from gita_pro.services.gita_api import GitaApiClient, Verse
from gita_pro.services.reveal import RetriesExhaustedError, VerseRevealService

console = Console()
logger = get_logger("cli")

app = typer.Typer(
    name="gita",
    help="Gita Pro - reveal a new Bhagavad Gita verse",
    rich_markup_mode="rich",
)

app.add_typer(lesson_commands.app, name="lessons", help="Saved lessons")

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config file",
)


def load_config(config_path: Optional[Path] = None) -> GitaConfig:
    """Load config (creating a default file if needed) and start session logging.

    Args:
        config_path: Path to config file (defaults to standard location)

    Returns:
        GitaConfig instance
    """
    config = ensure_config_exists(config_path)
    setup_logging(config.log_dir)
    return config


def get_reveal_service(config: GitaConfig, online: bool = True) -> VerseRevealService:
    """Build a reveal service from config.

    Args:
        config: Gita configuration
        online: Whether the service needs the verse API. Commands that only
            read reveal progress pass False and don't need an API key.

    Returns:
        VerseRevealService instance. Callers close ``service.store`` when done.

    Raises:
        ValueError: If online and GITA_RAPIDAPI_KEY is not set
    """
    source = None
    if online:
        source = GitaApiClient(
            base_url=config.api_url,
            api_host=config.api_host,
            timeout=config.api_timeout,
        )

    return VerseRevealService(
        source=source,
        store=StateClient(config.db_path),
        max_attempts=config.max_attempts,
        chapter_count=config.chapter_count,
        max_verse_index=config.max_verse_index,
        total_verses=config.total_verses,
    )


def render_verse(verse: Verse, badge: str) -> Panel:
    """Build the panel shown for a revealed verse.

    Verse fields are appended as plain text so brackets in API text are
    never parsed as markup.
    """
    body = Text()
    body.append(verse.sanskrit_text, style="italic")
    body.append(f"\n\n{verse.transliteration}\n\n{verse.translation}\n\n")
    body.append("Word Meanings:\n", style="bold")
    body.append(verse.word_meanings, style="dim")
    return Panel(
        body,
        title=Text(f"Verse {verse.verse_number}", style="bold"),
        subtitle=badge,
        border_style="blue",
    )


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"gita version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """gita: reveal a new Bhagavad Gita verse.

    ## Commands

    * [bold cyan]reveal[/bold cyan] - Reveal a verse you haven't seen
    * [bold cyan]progress[/bold cyan] - Show how many verses you've revealed
    * [bold cyan]lessons[/bold cyan] - Browse verses saved as lessons

    ## Getting Started

    1. Set your RapidAPI key:
       [dim]$ export GITA_RAPIDAPI_KEY=...[/dim]

    2. Reveal your first verse:
       [dim]$ gita reveal[/dim]
    """
    pass


@app.command()
def reveal(
    save: bool = typer.Option(
        False,
        "--save",
        "-s",
        help="Save the revealed verse as a lesson",
    ),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Reveal a verse you haven't seen before."""
    config = load_config(config_path)

    try:
        service = get_reveal_service(config)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    try:
        with console.status("Revealing verse..."):
            try:
                verse = service.fetch_unrevealed_verse()
            except RetriesExhaustedError as e:
                logger.error(f"Reveal failed: {e}")
                console.print(f"[red]Failed to fetch verse. Please try again. Error: {e}[/red]")
                raise typer.Exit(1)
        badge = service.progress().label
    finally:
        service.store.close()

    console.print(render_verse(verse, badge))

    if save:
        with LessonClient(config.db_path) as client:
            lesson = client.save_lesson(Lesson.from_verse(verse))
        console.print(f"[green]Saved lesson {lesson.id}[/green]")


@app.command()
def progress(config_path: Path = CONFIG_OPTION) -> None:
    """Show how many verses have been revealed."""
    config = load_config(config_path)
    service = get_reveal_service(config, online=False)
    try:
        current = service.progress()
    finally:
        service.store.close()

    console.print("[bold]Progress[/bold]")
    console.print(ProgressBar(total=current.total, completed=current.revealed, width=40))
    console.print(f"{current.revealed} out of {current.total} verses revealed")


@app.command()
def check(
    verse_number: str = typer.Argument(..., help="Verse number (e.g., 2.47)"),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Check whether a verse has been revealed."""
    config = load_config(config_path)
    service = get_reveal_service(config, online=False)
    try:
        revealed = service.is_revealed(verse_number)
    finally:
        service.store.close()

    if revealed:
        console.print(f"[green]Verse {verse_number} has been revealed[/green]")
    else:
        console.print(f"[yellow]Verse {verse_number} has not been revealed yet[/yellow]")


@app.command()
def reset(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt",
    ),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Forget every revealed verse."""
    config = load_config(config_path)
    service = get_reveal_service(config, online=False)
    try:
        if not yes:
            confirmed = typer.confirm(
                f"Forget all {service.revealed_count()} revealed verses?", default=False
            )
            if not confirmed:
                console.print("[yellow]Reset cancelled[/yellow]")
                raise typer.Exit(0)

        service.reset()
    finally:
        service.store.close()

    console.print("[green]Reveal progress reset[/green]")


@app.command()
def donate(
    amount: str = typer.Argument(..., help="Donation amount in USD"),
) -> None:
    """Support Gita Pro (no payment is taken)."""
    try:
        value = float(amount)
    except ValueError:
        value = 0.0

    if not value > 0:
        console.print("[red]Please enter a valid donation amount.[/red]")
        raise typer.Exit(1)

    logger.info(f"Donation pledged: ${value:.2f}")
    console.print(
        Panel.fit(
            f"Your donation of ${value:.2f} to Gita Pro Foundation is greatly appreciated.\n"
            "Your support helps us continue our important work.",
            title="Thank You!",
            border_style="green",
        )
    )


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action to perform (show, set, path)",
    ),
    key: str = typer.Argument(
        None,
        help="Configuration key (for set action)",
    ),
    value: str = typer.Argument(
        None,
        help="Configuration value (for set action)",
    ),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Manage configuration.

    Examples:
        gita config show                 # Show all configuration
        gita config set max_attempts 5
        gita config path                 # Show config file path
    """
    if action == "show":
        cfg = ensure_config_exists(config_path)
        console.print(
            Panel.fit(
                f"[cyan]API URL:[/cyan] {cfg.api_url}\n"
                f"[cyan]API Host:[/cyan] {cfg.api_host}\n"
                f"[cyan]API Timeout:[/cyan] {cfg.api_timeout}s\n"
                f"[cyan]Max Attempts:[/cyan] {cfg.max_attempts}\n"
                f"[cyan]Chapters:[/cyan] {cfg.chapter_count}\n"
                f"[cyan]Max Verse Index:[/cyan] {cfg.max_verse_index}\n"
                f"[cyan]Total Verses:[/cyan] {cfg.total_verses}\n"
                f"[cyan]Database Path:[/cyan] {cfg.db_path}\n"
                f"[cyan]Log Directory:[/cyan] {cfg.log_dir}",
                title="Configuration",
                border_style="green",
            )
        )

    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage: gita config set <key> <value>[/red]")
            raise typer.Exit(1)

        try:
            cfg = ensure_config_exists(config_path)
            cfg.set(key, value)
            cfg.save(config_path)
            console.print(f"[green]Set {key} = {value}[/green]")
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    elif action == "path":
        typer.echo(str(config_path or get_config_path()))

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Valid actions: show, set, path")
        raise typer.Exit(1)


def cli_entry() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli_entry()
