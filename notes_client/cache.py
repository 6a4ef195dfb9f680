"""
notes_client/cache.py

Pure functions over the ordered note cache.

The controller never splices its cache in place. Every confirmed server
response goes through one of these helpers, which return a new list that
keeps two invariants:

    • identifiers are unique
    • ordering is descending by `updated_at` (freshest first)
"""

import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional, cast

from notes_client.types import NoteId, NoteRecord

# Rows without a parseable timestamp sort after everything else.
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

# PostgREST trims trailing zeros from fractional seconds; older
# datetime.fromisoformat only accepts 3 or 6 digits.
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def _pad_fraction(match: "re.Match[str]") -> str:
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a Supabase ISO-8601 timestamp into an aware datetime.

    Fractional seconds of any length are accepted (truncated to
    microseconds). Naive timestamps are treated as UTC. Returns None for
    empty or unparseable input.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_pad_fraction, text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _sort_key(note: NoteRecord) -> datetime:
    return parse_timestamp(note.get("updated_at")) or _OLDEST


def sort_notes(notes: Iterable[NoteRecord]) -> List[NoteRecord]:
    """Return the notes ordered freshest first. The sort is stable."""
    return sorted(notes, key=_sort_key, reverse=True)


def find_note(cache: Iterable[NoteRecord], note_id: NoteId) -> Optional[NoteRecord]:
    for note in cache:
        if note.get("id") == note_id:
            return note
    return None


def apply_write(cache: List[NoteRecord], result: NoteRecord) -> List[NoteRecord]:
    """
    Apply a confirmed create/update response to the cache.

    The server's returned row replaces any cached row with the same `id`
    (or is added if none exists), so server-assigned fields are always the
    post-write source of truth. The input list is not modified.

    Parameters
    ----------
    cache : list[NoteRecord]
        The current cache, ordered freshest first.
    result : NoteRecord
        The row returned by the gateway after a successful write.

    Returns
    -------
    list[NoteRecord]
        A new cache containing `result` exactly once.
    """
    note_id = result.get("id")
    # The written row goes first so it stays at the head when timestamps tie.
    patched = [cast(NoteRecord, dict(result))] + [note for note in cache if note.get("id") != note_id]
    return sort_notes(patched)


def remove_note(cache: List[NoteRecord], note_id: NoteId) -> List[NoteRecord]:
    """Return a new cache without the note identified by `note_id`."""
    return [note for note in cache if note.get("id") != note_id]


def replace_all(rows: Iterable[NoteRecord]) -> List[NoteRecord]:
    """
    Build a fresh cache from a full listing.

    The gateway already orders by `updated_at`, but duplicates are dropped
    (first occurrence wins) and the order is re-established locally so the
    cache invariants hold regardless of what the server returned.
    """
    seen = set()
    unique: List[NoteRecord] = []
    for row in rows:
        note_id = row.get("id")
        if note_id in seen:
            continue
        seen.add(note_id)
        unique.append(dict(row))  # type: ignore[arg-type]
    return sort_notes(unique)
