"""
Root entrypoint for the notes client CLI.

    notes-client run [--verbose]

Resolves the Supabase settings from the environment (and `.env`), then
starts the interactive session defined in notes_client/cli/session.py.
A missing URL or key is reported with a clear diagnostic and exit code 1
before any network call is attempted.
"""

import asyncio

import typer

from notes_client.cli import session
from notes_client.config import load_config
from notes_client.errors import ConfigError
from notes_client.logging_utils import log_error, log_verbose

# ---------------------------------------------------------------------------
# Root CLI application
# ---------------------------------------------------------------------------
cli = typer.Typer(
    help=(
        "Single-page notes client backed by Supabase.\n\n"
        "Requires SUPABASE_URL and SUPABASE_KEY in the environment or a .env "
        "file. Start a session with:\n\n"
        "    notes-client run"
    )
)


@cli.callback()
def main() -> None:
    """Notes client command-line interface."""


# ---------------------------------------------------------------------------
# Command: notes-client run
# ---------------------------------------------------------------------------
@cli.command("run")
def run_command(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show progress for each request and ignored command.",
    ),
) -> None:
    """Start an interactive notes session."""
    try:
        config = load_config()
    except ConfigError as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    log_verbose(f"Connecting to {config.url} (table: {config.table})", verbose)
    try:
        asyncio.run(session.run_session(config, typer.get_text_stream("stdin"), verbose=verbose))
    except ConfigError as e:
        log_error(str(e))
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Entry point for `python -m notes_client.cli.main`
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cli()
