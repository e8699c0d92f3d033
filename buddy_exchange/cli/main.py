"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .views import available, buddies, leaderboard, next_id, rate_limit, report

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="buddy-exchange",
    help="CODECHECK buddy exchange issues, leaderboard and buddy finder",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="available", context_settings={"help_option_names": ["-h", "--help"]})(
    available
)
app.command(
    name="leaderboard", context_settings={"help_option_names": ["-h", "--help"]}
)(leaderboard)
app.command(name="buddies", context_settings={"help_option_names": ["-h", "--help"]})(
    buddies
)
app.command(name="next-id", context_settings={"help_option_names": ["-h", "--help"]})(
    next_id
)
app.command(
    name="rate-limit", context_settings={"help_option_names": ["-h", "--help"]}
)(rate_limit)
app.command(name="report", context_settings={"help_option_names": ["-h", "--help"]})(
    report
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from buddy_exchange import __version__

    console.print(f"Buddy Exchange v{__version__}")


if __name__ == "__main__":
    app()
