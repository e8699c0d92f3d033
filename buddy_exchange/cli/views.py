"""CLI commands rendering the buddy exchange views."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import BuddyExchangeConfig, load_config
from ..engine import BuddyExchangeEngine
from ..errors import ConfigurationError, FetchError, TransientFetchError
from ..github_client.models import CodecheckerProfile, GitHubIssue
from ..github_client.search import (
    all_closed_issues_url,
    all_labelled_issues_url,
    in_progress_issues_url,
    new_issue_url,
)
from ..stats.availability import excerpt
from ..stats.identifiers import suggested_title
from ..stats.models import BuddyReport, Leaderboard, NextIdentifier
from ..utils.logging import configure_logging
from .options import (
    AUTHOR_NAME_OPTION,
    GITHUB_USER_OPTION,
    JSON_OPTION,
    LIMIT_OPTION,
    OWNER_OPTION,
    REPO_OPTION,
    VERBOSE_OPTION,
    WITH_METADATA_OPTION,
)

logger = logging.getLogger(__name__)

console = Console()

T = TypeVar("T")


def _engine(owner: str | None, repo: str | None, verbose: bool) -> BuddyExchangeEngine:
    configure_logging(verbose)
    try:
        config = load_config(owner=owner, repo=repo)
    except ConfigurationError as e:
        console.print(f"❌ [red]{e}[/red]")
        raise typer.Exit(1)
    return BuddyExchangeEngine(config)


def _fetch_error_message(error: FetchError) -> str:
    if isinstance(error, TransientFetchError) and error.is_rate_limited:
        message = "GitHub API rate limit exceeded."
        if error.reset_at:
            message += f" Resets at {error.reset_at.strftime('%Y-%m-%d %H:%M:%S %Z')}."
        return message
    if error.status:
        return f"GitHub API error: {error.status}. Please try again later."
    return f"{error}. Please try again later."


def _run(coroutine: Coroutine[Any, Any, T], what: str) -> T:
    try:
        return asyncio.run(coroutine)
    except FetchError as e:
        message = _fetch_error_message(e)
        console.print(f"❌ [red]Failed to load {what}. {message}[/red]")
        raise typer.Exit(1)


def _limit(limit: int | None, default: int) -> int:
    return limit if limit is not None and limit > 0 else default


async def _with_author_name(
    coroutine: Coroutine[Any, Any, T],
    engine: BuddyExchangeEngine,
    author_name: str | None,
    github_user: str | None,
) -> tuple[T, str | None]:
    """Await a query, looking up the author's profile name alongside it."""
    if author_name or not github_user:
        return await coroutine, author_name
    result, name = await asyncio.gather(
        coroutine, engine.lookup_display_name(github_user)
    )
    if name is None:
        logger.warning("No profile name found for GitHub user %s", github_user)
    return result, name


async def _buddies_with_profiles(
    engine: BuddyExchangeEngine, with_metadata: bool
) -> tuple[BuddyReport, dict[str, CodecheckerProfile] | None]:
    if not with_metadata:
        return await engine.build_buddy_report(), None
    report, profiles = await asyncio.gather(
        engine.build_buddy_report(), engine.fetch_codechecker_profiles()
    )
    return report, profiles


def render_available(
    issues: list[GitHubIssue], config: BuddyExchangeConfig, limit: int
) -> None:
    if not issues:
        console.print("✅ No available issues right now.")
        return

    table = Table(title=f"Available issues ({len(issues)})")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Created")
    table.add_column("Excerpt", style="dim")
    for issue in issues[:limit]:
        table.add_row(
            str(issue.number),
            f"[link={issue.html_url}]{escape(issue.title)}[/link]",
            issue.user.login,
            issue.created_at.strftime("%Y-%m-%d"),
            excerpt(issue.body, config.excerpt_length),
        )
    console.print(table)

    if len(issues) > limit:
        remaining = len(issues) - limit
        url = all_labelled_issues_url(
            config.repository.full_name, config.labels.buddy_exchange
        )
        console.print(
            f"Showing {limit} of {len(issues)} available issues. "
            f"{remaining} more issue{'s' if remaining != 1 else ''} available: {url}"
        )


def render_leaderboard(
    leaderboard: Leaderboard, config: BuddyExchangeConfig, limit: int
) -> None:
    table = Table(title="Codechecker leaderboard")
    table.add_column("Rank", style="cyan", justify="right")
    table.add_column("Codechecker", style="bold")
    table.add_column("Completed", style="green", justify="right")
    table.add_column("Last completed")
    for rank, entry in enumerate(leaderboard.entries[:limit], start=1):
        last = entry.last_completed_at
        table.add_row(
            str(rank),
            entry.user.login,
            str(entry.completed_count),
            last.strftime("%Y-%m-%d") if last else "-",
        )
    console.print(table)

    if len(leaderboard.entries) > limit:
        remaining = len(leaderboard.entries) - limit
        console.print(
            f"Showing top {limit} contributors. {remaining} more "
            f"contributor{'s' if remaining != 1 else ''} with completed CODECHECKs."
        )
    console.print(
        f"Completed exchanges: {leaderboard.total_completed} · "
        f"Active contributors: {leaderboard.active_contributors}"
    )
    repository = config.repository.full_name
    label = config.labels.buddy_exchange
    console.print(f"All completed: {all_closed_issues_url(repository, label)}")
    console.print(
        "In progress: "
        f"{in_progress_issues_url(repository, label, config.labels.needs_codechecker)}"
    )


def render_buddies(
    report: BuddyReport,
    limit: int,
    profiles: dict[str, CodecheckerProfile] | None = None,
) -> None:
    table = Table(title="Find a buddy")
    table.add_column("User", style="bold")
    table.add_column("Received", justify="right")
    table.add_column("Conducted", justify="right")
    table.add_column("Ratio", style="yellow", justify="right")
    table.add_column("Deficit", justify="right")
    if profiles is not None:
        table.add_column("Fields")
        table.add_column("Languages")
    for entry in report.entries[:limit]:
        row = [
            entry.user.login,
            str(entry.received_checks),
            str(entry.conducted_checks),
            f"{entry.ratio:.2f}",
            str(entry.deficit),
        ]
        if profiles is not None:
            profile = profiles.get(entry.user.login)
            row.extend([profile.fields, profile.languages] if profile else ["", ""])
        table.add_row(*row)
    console.print(table)
    console.print(
        f"Users: {report.total_users} · Issues analysed: {report.total_issues}"
    )


def render_next_identifier(
    identifier: NextIdentifier, config: BuddyExchangeConfig, author_name: str | None
) -> None:
    title = suggested_title(identifier.formatted, author_name)
    console.print(
        "🎫 Next certificate identifier: "
        f"[bold green]{identifier.formatted}[/bold green]"
    )
    console.print(f"Suggested title: {escape(title)}")
    url = new_issue_url(
        config.repository.full_name,
        title,
        [config.labels.buddy_exchange, config.labels.identifier_assigned],
    )
    console.print(f"Open request: {url}")


def available(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    limit: int | None = LIMIT_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List open buddy exchange issues that still need a codechecker."""
    engine = _engine(owner, repo, verbose)
    issues = _run(engine.list_available_issues(), "buddy exchange issues")
    if as_json:
        console.print_json(data=[issue.model_dump(mode="json") for issue in issues])
        return
    render_available(
        issues, engine.config, _limit(limit, engine.config.max_issues_displayed)
    )


def leaderboard(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    limit: int | None = LIMIT_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Rank codecheckers by completed buddy exchanges."""
    engine = _engine(owner, repo, verbose)
    result = _run(engine.build_leaderboard(), "leaderboard data")
    if as_json:
        console.print_json(result.model_dump_json())
        return
    render_leaderboard(
        result, engine.config, _limit(limit, engine.config.leaderboard_length)
    )


def buddies(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    limit: int | None = LIMIT_OPTION,
    with_metadata: bool = WITH_METADATA_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show who received checks without conducting as many in return."""
    engine = _engine(owner, repo, verbose)
    report, profiles = _run(
        _buddies_with_profiles(engine, with_metadata), "buddy report"
    )
    if as_json:
        if profiles is None:
            console.print_json(report.model_dump_json())
            return
        data = report.model_dump(mode="json")
        data["profiles"] = {
            entry.user.login: profiles[entry.user.login].model_dump()
            for entry in report.entries
            if entry.user.login in profiles
        }
        console.print_json(data=data)
        return
    render_buddies(
        report, _limit(limit, engine.config.leaderboard_length), profiles
    )


def next_id(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    author_name: str | None = AUTHOR_NAME_OPTION,
    github_user: str | None = GITHUB_USER_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Allocate the lowest unused certificate identifier."""
    engine = _engine(owner, repo, verbose)
    identifier, name = _run(
        _with_author_name(
            engine.allocate_next_identifier(), engine, author_name, github_user
        ),
        "next identifier",
    )
    if as_json:
        data = identifier.model_dump(mode="json")
        data["suggested_title"] = suggested_title(identifier.formatted, name)
        console.print_json(data=data)
        return
    render_next_identifier(identifier, engine.config, name)


def rate_limit(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show remaining anonymous GitHub API requests."""
    engine = _engine(owner, repo, verbose)
    status = _run(engine.check_rate_limit(), "rate limit")
    if as_json:
        console.print_json(
            data={
                "limit": status.limit,
                "remaining": status.remaining,
                "reset": status.reset_epoch,
            }
        )
        return
    style = (
        "red"
        if status.remaining < engine.config.rate_limit.warning_threshold
        else "green"
    )
    console.print(
        f"GitHub API rate limit: [{style}]{status.remaining}[/{style}]/{status.limit} "
        f"requests remaining, resets at {status.reset_at.isoformat()}"
    )


def report(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    limit: int | None = LIMIT_OPTION,
    author_name: str | None = AUTHOR_NAME_OPTION,
    github_user: str | None = GITHUB_USER_OPTION,
    as_json: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Fetch everything concurrently and show all views."""
    engine = _engine(owner, repo, verbose)
    result, name = _run(
        _with_author_name(engine.build_report(), engine, author_name, github_user),
        "buddy exchange report",
    )
    if as_json:
        data = result.model_dump(mode="json")
        data["suggested_title"] = suggested_title(
            result.next_identifier.formatted, name
        )
        console.print_json(data=data)
        return
    config = engine.config
    render_available(
        result.available, config, _limit(limit, config.max_issues_displayed)
    )
    render_leaderboard(
        result.leaderboard, config, _limit(limit, config.leaderboard_length)
    )
    render_buddies(result.buddies, _limit(limit, config.leaderboard_length))
    render_next_identifier(result.next_identifier, config, name)
