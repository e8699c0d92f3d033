"""Standardized CLI option definitions shared by all commands."""

import typer

OWNER_OPTION = typer.Option(
    None,
    "--owner",
    "-o",
    help="Repository owner (defaults to BUDDY_EXCHANGE_OWNER or codecheckers)",
)

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Repository name (defaults to BUDDY_EXCHANGE_REPO or testing-dev-register)",
)

JSON_OPTION = typer.Option(False, "--json", help="Print results as JSON")

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

LIMIT_OPTION = typer.Option(
    None, "--limit", "-n", help="Maximum rows to display (defaults to config)"
)

WITH_METADATA_OPTION = typer.Option(
    False,
    "--with-metadata/--no-metadata",
    help="Add fields and languages from the codecheckers registry",
)

AUTHOR_NAME_OPTION = typer.Option(
    None, "--author-name", "-a", help="Author name for the suggested issue title"
)

GITHUB_USER_OPTION = typer.Option(
    None,
    "--github-user",
    "-u",
    help="GitHub login whose profile name fills the title when --author-name is unset",
)
