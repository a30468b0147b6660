"""Rich console output for the dashboard views."""

from collections.abc import Collection

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from github_showcase.exceptions import FetchFailure
from github_showcase.models.activity import ActivitySeries, event_label
from github_showcase.models.project import ProjectFilterState, ProjectQueryResult
from github_showcase.models.views import ProfileView

BAR_WIDTH = 30


def _bar(count: int, peak: int) -> str:
    if peak <= 0 or count <= 0:
        return ""
    return "█" * max(1, round(count / peak * BAR_WIDTH))


class Console:
    """Wrapper for rich console output."""

    def __init__(self, console: RichConsole | None = None):
        self.console = console or RichConsole()

    def print(self, *args, **kwargs):
        self.console.print(*args, **kwargs)

    def print_error(self, message: str):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {message}")

    def create_progress(self) -> Progress:
        """Create a spinner for view loading."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        )

    def print_failure(self, failure: FetchFailure):
        """Print a failed view load."""
        if failure.not_found:
            detail = f"GitHub account '{failure.identity}' was not found."
        elif failure.rate_limited:
            detail = "GitHub rate limit reached. Try again later."
        else:
            detail = str(failure.cause)
        self.print_error(f"Failed to load {failure.view} data. {detail}")

    def print_profile(self, view: ProfileView):
        """Print profile header and repository statistics."""
        profile = view.profile
        stats = view.stats

        header = f"[bold blue]{profile.display_name}[/bold blue] [dim]@{profile.username}[/dim]"
        if profile.bio:
            header += f"\n{profile.bio}"
        self.console.print(Panel(header, expand=False))

        table = Table(title="Profile", show_header=False, expand=False)
        table.add_column("Field", style="dim")
        table.add_column("Value")

        table.add_row("Location", profile.location or "-")
        table.add_row("Company", profile.company or "-")
        table.add_row("Website", profile.blog or "-")
        table.add_row("Public Repos", str(profile.public_repos))
        table.add_row("Followers", str(profile.followers))
        table.add_row("Following", str(profile.following))
        if profile.created_at:
            table.add_row("Joined", profile.created_at.strftime("%B %d, %Y"))
        table.add_row("Total Stars", str(stats.total_stars))
        table.add_row("Total Forks", str(stats.total_forks))
        table.add_row("Total Watchers", str(stats.total_watchers))

        self.console.print(table)
        self.console.print()

        if stats.repo_count == 0:
            self.console.print("[dim]No public repositories.[/dim]")
            return

        top_langs = stats.top_languages(5)
        if top_langs:
            lang_table = Table(title="Top Languages", expand=False)
            lang_table.add_column("Language")
            lang_table.add_column("Repos", justify="right")
            for language, count in top_langs:
                lang_table.add_row(language, str(count))
            self.console.print(lang_table)
            self.console.print()

        star_table = Table(title="Most Starred", expand=False)
        star_table.add_column("Repository")
        star_table.add_column("Stars", justify="right")
        for repo in stats.top_starred(3):
            star_table.add_row(repo.name, str(repo.stars))
        self.console.print(star_table)
        self.console.print()

    def print_activity(self, series: ActivitySeries):
        """Print the daily activity chart and top event types."""
        if series.total_events == 0:
            self.console.print("[dim]No recent public activity.[/dim]")
            return

        peak = max(series.counts)
        chart = Table(title=f"Activity (last {len(series.days)} days)", expand=False)
        chart.add_column("Day", style="dim")
        chart.add_column("Events", justify="right")
        chart.add_column("")
        for day in series.days:
            chart.add_row(day.label, str(day.count), f"[blue]{_bar(day.count, peak)}[/blue]")
        self.console.print(chart)
        self.console.print()

        types = Table(title="Event Types", expand=False)
        types.add_column("Type")
        types.add_column("Count", justify="right")
        for event_type, count in series.top_event_types(4):
            types.add_row(event_label(event_type), str(count))
        self.console.print(types)
        self.console.print(
            f"[dim]{series.total_events} events fetched, {series.window_total} in the chart window[/dim]"
        )

    def print_projects(
        self,
        result: ProjectQueryResult,
        state: ProjectFilterState,
        bookmarks: Collection[int] = (),
    ):
        """Print the filtered project list."""
        if result.total == 0:
            self.console.print("[dim]No public repositories.[/dim]")
            return
        if result.is_empty:
            self.console.print("[yellow]No projects found.[/yellow] Try adjusting your search or filter criteria.")
            return

        table = Table(
            title=f"Projects ({state.category.value}, by {state.sort_key.value} {state.direction.value})",
            expand=False,
        )
        table.add_column("", width=1)
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Name")
        table.add_column("Language")
        table.add_column("Stars", justify="right")
        table.add_column("Forks", justify="right")
        table.add_column("Updated")
        table.add_column("Description", overflow="ellipsis", max_width=50)

        for repo in result.projects:
            name = repo.name
            if repo.is_fork:
                name += " [dim](fork)[/dim]"
            if repo.is_archived:
                name += " [yellow](archived)[/yellow]"
            table.add_row(
                "★" if repo.id in bookmarks else "",
                str(repo.id),
                name,
                repo.language or "-",
                str(repo.stargazers_count),
                str(repo.forks_count),
                repo.updated_at.strftime("%b %d, %Y") if repo.updated_at else "-",
                repo.description or "",
            )

        self.console.print(table)
        self.console.print(f"[dim]Showing {result.shown} of {result.total} repositories[/dim]")

    def print_output_path(self, path: str):
        """Print output file path."""
        self.console.print(f"\n[green]Report saved to:[/green] {path}")
