"""
notes_client/gateway.py

Async gateway over the Supabase `notes` table.

This wrapper exposes the four operations the controller needs:

    • list()                       → rows ordered by updated_at, freshest first
    • create(title, content)       → the inserted row
    • update(note_id, title, content) → the updated row
    • delete(note_id)              → None

It is intentionally thin. Each call issues exactly one request, never
retries, and reports a single pass/fail outcome: the returned row(s) or a
FetchError / WriteError carrying a human-readable message.

The client is injected rather than held as a module-level singleton, so
tests can pass an in-memory double with the same method chain:

    await client.table(name).select("*").order("updated_at", desc=True).execute()
"""

from typing import Any, List, cast

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from notes_client.config import DEFAULT_TABLE, NotesConfig
from notes_client.errors import FetchError, WriteError
from notes_client.types import NoteId, NoteRecord, RowList

# Failures the SDK (or a test double) surfaces for a single request.
# RuntimeError covers error payloads normalized by _extract_data.
_REQUEST_ERRORS = (APIError, httpx.HTTPError, httpx.InvalidURL, RuntimeError)


# ---------------------------------------------------------------------------
# Helper: normalize Supabase responses
# ---------------------------------------------------------------------------


def _extract_data(resp: Any) -> RowList:
    """
    Normalize Supabase responses across:
        • real SDK objects (APIResponse with `.data`)
        • dict-style responses from test doubles

    Always returns a list of row dictionaries.
    Raises RuntimeError on any error payload.
    """
    if isinstance(resp, dict):
        status = resp.get("status", 200)
        if status >= 400 or resp.get("error"):
            raise RuntimeError(f"Supabase error: {resp.get('error') or resp}")
        data = resp.get("data", [])
    else:
        error = getattr(resp, "error", None)
        if error:
            raise RuntimeError(f"Supabase error: {error}")
        data = getattr(resp, "data", None)

    if data is None:
        return []
    if isinstance(data, list):
        return cast(RowList, data)
    return cast(RowList, [data])


def _single_row(rows: RowList, what: str) -> NoteRecord:
    if not rows:
        raise WriteError(f"{what} returned no rows")
    return cast(NoteRecord, rows[0])


# ---------------------------------------------------------------------------
# Main gateway class
# ---------------------------------------------------------------------------


class NotesGateway:
    """
    A dependency-injected async wrapper around a Supabase-compatible client.

    Accepts `client: Any` because the real AsyncClient's query builder is
    dynamic and our test doubles vary in structure.
    """

    def __init__(self, client: Any, table: str = DEFAULT_TABLE) -> None:
        self.client = client
        self.table_name = table

    @classmethod
    async def from_config(cls, config: NotesConfig) -> "NotesGateway":
        """
        Build a gateway backed by a real Supabase AsyncClient.

        Configuration is resolved by the caller (see load_config) so that a
        missing URL or key fails before this is ever reached.
        """
        client: AsyncClient = await acreate_client(config.url, config.key)
        return cls(client, table=config.table)

    def _table(self) -> Any:
        return self.client.table(self.table_name)

    # -----------------------------------------------------------------------
    # list
    # -----------------------------------------------------------------------

    async def list(self) -> List[NoteRecord]:
        """
        Fetch every note, freshest first.

        Raises
        ------
        FetchError
            On any transport, auth, or API failure.
        """
        try:
            resp = await self._table().select("*").order("updated_at", desc=True).execute()
            rows = _extract_data(resp)
        except _REQUEST_ERRORS as e:
            raise FetchError(f"Could not list notes: {e}") from e
        return cast(List[NoteRecord], rows)

    # -----------------------------------------------------------------------
    # create
    # -----------------------------------------------------------------------

    async def create(self, title: str, content: str) -> NoteRecord:
        """
        Insert a note. The server assigns `id` and the timestamps.

        Raises
        ------
        WriteError
            If the title is blank, the backend rejects the insert, or the
            insert returns no row.
        """
        if not title or not title.strip():
            raise WriteError("Title must not be empty")

        try:
            resp = await self._table().insert({"title": title, "content": content}).execute()
            rows = _extract_data(resp)
        except _REQUEST_ERRORS as e:
            raise WriteError(f"Could not create note: {e}") from e
        return _single_row(rows, "Insert")

    # -----------------------------------------------------------------------
    # update
    # -----------------------------------------------------------------------

    async def update(self, note_id: NoteId, title: str, content: str) -> NoteRecord:
        """
        Replace the title and content of an existing note.

        The `updated_at` column is refreshed server-side (trigger or default);
        the returned row is authoritative.

        Raises
        ------
        WriteError
            If no row has `note_id` or the backend rejects the update.
        """
        try:
            resp = (
                await self._table()
                .update({"title": title, "content": content})
                .eq("id", note_id)
                .execute()
            )
            rows = _extract_data(resp)
        except _REQUEST_ERRORS as e:
            raise WriteError(f"Could not update note {note_id!r}: {e}") from e
        return _single_row(rows, f"Update of note {note_id!r}")

    # -----------------------------------------------------------------------
    # delete
    # -----------------------------------------------------------------------

    async def delete(self, note_id: NoteId) -> None:
        """
        Delete a note.

        Raises
        ------
        WriteError
            If no row has `note_id` or the backend rejects the delete.
        """
        try:
            resp = await self._table().delete().eq("id", note_id).execute()
            rows = _extract_data(resp)
        except _REQUEST_ERRORS as e:
            raise WriteError(f"Could not delete note {note_id!r}: {e}") from e
        if not rows:
            raise WriteError(f"Delete of note {note_id!r} matched no rows")
