"""
Unit tests for the pure terminal renderer.
"""

from datetime import timezone

from notes_client.render import EMPTY_HINT, LOADING, NO_NOTES, format_date, render_snapshot
from notes_client.types import FormBuffer, NotesSnapshot, ViewState

NOTES = (
    {"id": 2, "title": "Groceries", "content": "milk", "updated_at": "2024-03-04T09:05:00+00:00"},
    {"id": 1, "title": "A", "content": "", "updated_at": "2024-03-01T18:30:00+00:00"},
)


def snapshot(**overrides) -> NotesSnapshot:
    fields = dict(notes=NOTES, view=ViewState.list(), selected=None, form=None, loading=False, error=None)
    fields.update(overrides)
    return NotesSnapshot(**fields)


def test_format_date() -> None:
    assert format_date("2024-03-04T09:05:00+00:00", tz=timezone.utc) == "Mar 4, 09:05"
    assert format_date("2024-03-04T09:05:00Z", tz=timezone.utc) == "Mar 4, 09:05"
    assert format_date(None) == ""
    assert format_date("yesterday") == ""


def test_list_view_shows_numbered_notes_and_hint() -> None:
    text = render_snapshot(snapshot(), tz=timezone.utc)

    assert "1. Groceries  Mar 4, 09:05" in text
    assert "2. A  Mar 1, 18:30" in text
    assert text.rstrip().endswith(EMPTY_HINT)


def test_viewing_marks_selection_and_shows_content() -> None:
    text = render_snapshot(
        snapshot(view=ViewState.viewing(2), selected=dict(NOTES[0])), tz=timezone.utc
    )

    assert ">  1. Groceries" in text
    assert "Last updated: Mar 4, 09:05" in text
    assert text.rstrip().endswith("milk")


def test_empty_content_placeholder() -> None:
    text = render_snapshot(snapshot(view=ViewState.viewing(1), selected=dict(NOTES[1])))

    assert "(no content)" in text


def test_form_views() -> None:
    creating = render_snapshot(snapshot(view=ViewState.creating(), form=FormBuffer("Draft", "")))
    editing = render_snapshot(snapshot(view=ViewState.editing(1), form=FormBuffer("A", "body")))

    assert "New note" in creating and "Title:   Draft" in creating
    assert "Edit note" in editing and "Content: body" in editing


def test_error_and_loading_markers() -> None:
    text = render_snapshot(snapshot(notes=(), loading=True, error="Failed to load notes."))

    assert f"Notes  [{LOADING}]" in text
    assert "! Failed to load notes." in text


def test_empty_cache_message() -> None:
    assert NO_NOTES in render_snapshot(snapshot(notes=()))


def test_render_is_pure() -> None:
    snap = snapshot(view=ViewState.viewing(2), selected=dict(NOTES[0]))

    assert render_snapshot(snap, tz=timezone.utc) == render_snapshot(snap, tz=timezone.utc)
