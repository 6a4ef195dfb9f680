"""
notes_client/render.py

Terminal rendering of a NotesSnapshot.

render_snapshot() is a pure function: the same snapshot (and timezone)
always produces the same text. The layout mirrors a single-page notes app:

    header       "Notes" plus a loading marker
    error line   only when the snapshot carries an error
    side panel   numbered note titles with their last-updated time
    main panel   the viewed note, the form, or a hint
"""

from datetime import tzinfo
from typing import List, Optional

from notes_client.cache import parse_timestamp
from notes_client.types import NotesSnapshot, ViewMode

RULE = "-" * 40
EMPTY_HINT = "Select a note or create a new one."
NO_NOTES = "No notes yet."
LOADING = "Loading..."


def format_date(value: Optional[str], tz: Optional[tzinfo] = None) -> str:
    """
    Format a timestamp as e.g. "Mar 4, 09:05".

    Converts to `tz` (the local timezone when None). Returns an empty string
    for missing or unparseable values.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    local = parsed.astimezone(tz)
    return f"{local:%b} {local.day}, {local:%H:%M}"


def _side_panel(snapshot: NotesSnapshot, tz: Optional[tzinfo]) -> List[str]:
    if not snapshot.notes:
        return [LOADING if snapshot.loading else NO_NOTES]

    lines = []
    for position, note in enumerate(snapshot.notes, start=1):
        marker = ">" if note.get("id") == snapshot.view.note_id else " "
        updated = format_date(note.get("updated_at"), tz)
        lines.append(f"{marker} {position:>2}. {note.get('title', '')}  {updated}".rstrip())
    return lines


def _main_panel(snapshot: NotesSnapshot, tz: Optional[tzinfo]) -> List[str]:
    mode = snapshot.view.mode

    if mode is ViewMode.VIEWING and snapshot.selected is not None:
        note = snapshot.selected
        lines = [note.get("title", ""), f"Last updated: {format_date(note.get('updated_at'), tz)}"]
        lines.append("")
        lines.append(note.get("content") or "(no content)")
        return lines

    if mode in (ViewMode.CREATING, ViewMode.EDITING) and snapshot.form is not None:
        heading = "New note" if mode is ViewMode.CREATING else "Edit note"
        return [
            heading,
            f"Title:   {snapshot.form.title}",
            f"Content: {snapshot.form.content}",
        ]

    return [EMPTY_HINT]


def render_snapshot(snapshot: NotesSnapshot, tz: Optional[tzinfo] = None) -> str:
    """Render the whole screen for `snapshot` as plain text."""
    header = "Notes" + (f"  [{LOADING}]" if snapshot.loading else "")
    lines = [header, RULE]
    if snapshot.error:
        lines.append(f"! {snapshot.error}")
        lines.append(RULE)
    lines.extend(_side_panel(snapshot, tz))
    lines.append(RULE)
    lines.extend(_main_panel(snapshot, tz))
    return "\n".join(lines)
