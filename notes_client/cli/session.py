"""
notes_client/cli/session.py

Interactive terminal session for the notes client.

The session is the rendering layer's host: it turns one typed command per
line into one controller trigger, then prints the latest snapshot emitted by
the controller. It adds no behavior of its own.

Commands
--------
    open <n>        view the note at position n in the list
    new             start a new note
    edit            edit the note being viewed
    title <text>    set the form title (truncated to 100 characters)
    content <text>  set the form content
    save            submit the form
    cancel          leave the form without saving
    delete          delete the note being viewed
    back            return to the list
    reload          fetch notes again
    help            show this list
    quit            end the session
"""

from typing import Awaitable, Callable, Dict, Optional, TextIO

import typer

from notes_client.config import NotesConfig
from notes_client.controller import NotesController
from notes_client.errors import ConfigError
from notes_client.gateway import NotesGateway
from notes_client.logging_utils import log_verbose
from notes_client.render import render_snapshot
from notes_client.types import NotesGatewayInterface, NotesSnapshot

HELP_TEXT = (
    "Commands: open <n>, new, edit, title <text>, content <text>, save, "
    "cancel, delete, back, reload, help, quit"
)

QUIT_COMMANDS = {"quit", "exit", "q"}


async def build_gateway(config: NotesConfig) -> NotesGatewayInterface:
    """Construct the production gateway. Tests replace this with a fake."""
    return await NotesGateway.from_config(config)


async def _dispatch(controller: NotesController, snapshot: NotesSnapshot, line: str) -> None:
    command, _, argument = line.strip().partition(" ")
    command = command.lower()

    # Field commands keep their argument verbatim, including inner spaces.
    if command == "title":
        controller.set_title(argument)
        return
    if command == "content":
        controller.set_content(argument)
        return

    if command == "open":
        try:
            position = int(argument)
        except ValueError:
            typer.echo("Usage: open <n>")
            return
        if not 1 <= position <= len(snapshot.notes):
            typer.echo(f"No note at position {position}.")
            return
        controller.select(snapshot.notes[position - 1].get("id"))
        return

    simple: Dict[str, Callable[[], bool]] = {
        "new": controller.new,
        "edit": controller.edit,
        "cancel": controller.cancel,
        "back": controller.back,
    }
    asynchronous: Dict[str, Callable[[], Awaitable[bool]]] = {
        "save": controller.submit,
        "delete": controller.delete,
        "reload": controller.load,
    }

    if command in simple:
        simple[command]()
    elif command in asynchronous:
        await asynchronous[command]()
    else:
        typer.echo(HELP_TEXT)


async def run_session(
    config: NotesConfig,
    stdin: TextIO,
    verbose: bool = False,
) -> None:
    """
    Run the interactive loop until `quit` or end of input.

    The gateway is built only after configuration has been resolved, so a
    missing URL or key never reaches the network layer. A client that cannot
    be constructed from the settings raises ConfigError.
    """
    try:
        gateway = await build_gateway(config)
    except Exception as e:
        raise ConfigError(f"Could not create the Supabase client: {e}") from e
    controller = NotesController(gateway, verbose=verbose)

    latest: Optional[NotesSnapshot] = None

    def remember(snapshot: NotesSnapshot) -> None:
        nonlocal latest
        latest = snapshot

    unsubscribe = controller.subscribe(remember)
    try:
        await controller.start()
        typer.echo(render_snapshot(latest or controller.snapshot))

        for raw in stdin:
            line = raw.strip()
            if not line:
                continue
            if line.lower() in QUIT_COMMANDS:
                break
            if line.lower() == "help":
                typer.echo(HELP_TEXT)
                continue

            await _dispatch(controller, latest or controller.snapshot, line)
            typer.echo(render_snapshot(latest or controller.snapshot))
    finally:
        unsubscribe()

    log_verbose("Session ended.", verbose)
