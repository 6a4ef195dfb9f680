"""
logging_utils.py

Logging helpers shared by the controller and the terminal shell.

Output goes through Typer's echo so it behaves the same in a real terminal
and under typer.testing.CliRunner. Verbose messages are short, plain
progress lines ("Loading notes...", "Deleting note 3..."); errors go to
stderr.
"""

import typer


def log_verbose(message: str, verbose: bool) -> None:
    """
    Print a high-level progress message when verbose mode is enabled.

    Parameters
    ----------
    message : str
        The human-readable message to display.
    verbose : bool
        Whether verbose mode is active. When False, this function does
        nothing.
    """
    if verbose:
        typer.echo(message)


def log_error(message: str) -> None:
    """Print a diagnostic to stderr."""
    typer.echo(message, err=True)
