"""Lesson commands for the gita CLI.

Lists, shows and deletes verses saved with `gita reveal --save`.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gita_pro.config import ensure_config_exists
from gita_pro.db.lesson_client import LessonClient

console = Console()
app = typer.Typer(help="Saved lessons")

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config file",
)


def get_lesson_client(config_path: Path = None) -> LessonClient:
    """Get a lesson client for the configured database."""
    config = ensure_config_exists(config_path)
    return LessonClient(config.db_path)


@app.command("list")
def list_lessons(
    limit: int = typer.Option(
        None,
        "--limit",
        "-n",
        help="Maximum number of lessons to show",
    ),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """List saved lessons, newest first."""
    with get_lesson_client(config_path) as client:
        lessons = client.list_lessons(limit=limit)

    if not lessons:
        console.print("[yellow]No saved lessons yet[/yellow]")
        return

    table = Table(title="Saved Lessons")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Saved", style="dim")

    for lesson in lessons:
        table.add_row(lesson.id, Text(lesson.title), lesson.display_date)

    console.print(table)


@app.command("show")
def show_lesson(
    lesson_id: str = typer.Argument(..., help="Lesson ID"),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Show a saved lesson."""
    with get_lesson_client(config_path) as client:
        lesson = client.get_lesson(lesson_id)

    if lesson is None:
        console.print(f"[red]Lesson not found: {lesson_id}[/red]")
        raise typer.Exit(1)

    body = Text()
    body.append("Sanskrit\n", style="bold")
    body.append(lesson.content, style="italic")
    body.append(f"\n{lesson.transliteration}\n\n")
    body.append("Translation\n", style="bold")
    body.append(f"{lesson.translation}\n\n")
    body.append("Application\n", style="bold")
    body.append(lesson.application)

    console.print(
        Panel(
            body,
            title=Text(lesson.title),
            subtitle=lesson.display_date,
            border_style="blue",
        )
    )


@app.command("delete")
def delete_lesson(
    lesson_id: str = typer.Argument(..., help="Lesson ID"),
    config_path: Path = CONFIG_OPTION,
) -> None:
    """Delete a saved lesson."""
    with get_lesson_client(config_path) as client:
        deleted = client.delete_lesson(lesson_id)

    if not deleted:
        console.print(f"[red]Lesson not found: {lesson_id}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Deleted lesson {lesson_id}[/green]")
