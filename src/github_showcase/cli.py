"""CLI interface for GitHub Showcase."""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from github_showcase import __version__
from github_showcase.config import get_config
from github_showcase.exceptions import IdentityNotSetError
from github_showcase.models.project import ALL_LANGUAGES, Category, SortDirection, SortKey
from github_showcase.output.console import Console as OutputConsole
from github_showcase.output.json_writer import build_report, write_json_report
from github_showcase.sdk import GitHubShowcase
from github_showcase.session import ViewSession, ViewStatus
from github_showcase.storage.bookmarks import BookmarkSet
from github_showcase.storage.store import JsonFileStore, clear_identity, load_identity, save_identity

app = typer.Typer(
    name="showcase",
    help="Portfolio dashboard for a GitHub account",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"github-showcase version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
):
    """GitHub Showcase - repositories and activity of a GitHub account."""
    setup_logging(verbose)


def _store() -> JsonFileStore:
    return JsonFileStore(get_config().state_path)


def _run(coro) -> None:
    """Run a command coroutine, turning expected errors into exit codes."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)
    except IdentityNotSetError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _render(session: ViewSession, output: OutputConsole, render: Callable[[Any], None]) -> None:
    if session.status == ViewStatus.READY:
        render(session.data)
        return
    if session.error is not None:
        output.print_failure(session.error)
    raise typer.Exit(1)


USERNAME_ARGUMENT = typer.Argument(None, help="GitHub username (defaults to the remembered one)")


@app.command()
def use(username: str = typer.Argument(..., help="GitHub username to remember")):
    """Remember the account shown by default."""
    try:
        saved = save_identity(_store(), username)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Showing[/green] {saved}")


@app.command()
def reset():
    """Forget the remembered account."""
    clear_identity(_store())
    console.print("Account selection cleared")


@app.command()
def whoami():
    """Print the remembered account."""
    identity = load_identity(_store())
    if identity is None:
        console.print("[yellow]No account selected[/yellow]")
        raise typer.Exit(1)
    console.print(identity)


@app.command()
def bookmark(repo_id: int = typer.Argument(..., help="Repository ID (see 'showcase projects')")):
    """Toggle a bookmark on a repository."""
    bookmarks = BookmarkSet.load(_store())
    if bookmarks.toggle(repo_id):
        console.print(f"[green]Bookmarked[/green] {repo_id}")
    else:
        console.print(f"Removed bookmark {repo_id}")


@app.command()
def profile(username: Optional[str] = USERNAME_ARGUMENT):
    """Show profile details and repository statistics."""
    _run(_show_profile(username))


async def _show_profile(username: Optional[str]):
    output = OutputConsole()
    async with GitHubShowcase() as showcase:
        with output.create_progress() as progress:
            progress.add_task("Loading profile...", total=None)
            await showcase.load_profile(username)
        _render(showcase.profile_view, output, output.print_profile)


@app.command()
def activity(username: Optional[str] = USERNAME_ARGUMENT):
    """Show the last 30 days of public activity."""
    _run(_show_activity(username))


async def _show_activity(username: Optional[str]):
    output = OutputConsole()
    async with GitHubShowcase() as showcase:
        with output.create_progress() as progress:
            progress.add_task("Loading activity...", total=None)
            await showcase.load_activity(username)
        _render(showcase.activity_view, output, output.print_activity)


@app.command()
def projects(
    username: Optional[str] = USERNAME_ARGUMENT,
    search: str = typer.Option("", "--search", "-s", help="Match name or description"),
    category: Category = typer.Option(Category.ALL, "--category", "-c", help="Project tab"),
    language: str = typer.Option(ALL_LANGUAGES, "--language", "-l", help="Primary language"),
    sort: SortKey = typer.Option(SortKey.UPDATED, "--sort", help="Sort key"),
    direction: SortDirection = typer.Option(SortDirection.DESC, "--direction", "-d", help="Sort direction"),
    list_languages: bool = typer.Option(False, "--languages", help="List language filter options and exit"),
):
    """List repositories with search, filters and sorting.

    Examples:
        showcase projects octocat --sort stars
        showcase projects --category bookmarked
        showcase projects -s cli -l Python --sort name -d asc
    """
    _run(
        _show_projects(
            username,
            filters={
                "search": search,
                "category": category,
                "language": language,
                "sort_key": sort,
                "direction": direction,
            },
            list_languages=list_languages,
        )
    )


async def _show_projects(username: Optional[str], filters: dict[str, Any], list_languages: bool):
    output = OutputConsole()
    async with GitHubShowcase() as showcase:
        with output.create_progress() as progress:
            progress.add_task("Loading projects...", total=None)
            await showcase.load_projects(username)

        if list_languages:
            _render(showcase.projects_view, output, lambda _: output.print("\n".join(showcase.languages())))
            return

        state = showcase.update_filters(**filters)
        _render(
            showcase.projects_view,
            output,
            lambda _: output.print_projects(showcase.query_projects(), state, showcase.bookmarks),
        )


@app.command()
def export(
    username: Optional[str] = USERNAME_ARGUMENT,
    output_path: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON file path",
    ),
):
    """Load every view and write them to a JSON file."""
    _run(_export(username, output_path))


async def _export(username: Optional[str], output_path: Optional[Path]):
    output = OutputConsole()
    async with GitHubShowcase() as showcase:
        with output.create_progress() as progress:
            progress.add_task("Loading all views...", total=None)
            await showcase.refresh(username)

        errors = {s.name: str(s.error) for s in showcase.sessions if s.error is not None}
        for session in showcase.sessions:
            if session.error is not None:
                output.print_failure(session.error)

        identity = showcase.profile_view.identity or ""
        report = build_report(
            username=identity,
            profile=showcase.profile_view.data if showcase.profile_view.is_ready else None,
            activity=showcase.activity_view.data if showcase.activity_view.is_ready else None,
            projects=showcase.query_projects() if showcase.projects_view.is_ready else None,
            filters=showcase.filters,
            bookmarks=showcase.bookmarks.ids,
            errors=errors,
        )
        path = write_json_report(report, output_path, identity)
        output.print_output_path(str(path))

        if errors:
            raise typer.Exit(1)


if __name__ == "__main__":
    app()
