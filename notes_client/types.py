"""
notes_client/types.py

Centralized type definitions for the notes client.

This module defines the note row schema, the controller's view state, the
immutable snapshot handed to the rendering layer, and the Protocols the
controller and gateway depend on. Keeping these in one place gives the
controller, the gateway, the renderer, and the test doubles a single
contract to agree on.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Protocol, Tuple, TypedDict

# Identifiers are opaque: Supabase may hand back integers or UUID strings.
NoteId = Any

# Titles are truncated to this length at entry time.
TITLE_MAX_LENGTH = 100


# ---------------------------------------------------------------------------
# NoteRecord
# ---------------------------------------------------------------------------
# A single row of the `notes` table as returned by Supabase.
#
# total=False because the server owns `id`, `created_at`, and `updated_at`;
# records built locally before a write only carry title and content.
# ---------------------------------------------------------------------------
class NoteRecord(TypedDict, total=False):
    id: NoteId
    title: str
    content: str
    created_at: Optional[str]
    updated_at: Optional[str]


# ---------------------------------------------------------------------------
# ViewMode / ViewState
# ---------------------------------------------------------------------------
class ViewMode(str, Enum):
    LIST = "list"
    VIEWING = "viewing"
    CREATING = "creating"
    EDITING = "editing"


class ViewState(NamedTuple):
    """
    Tagged view state. `note_id` is set for VIEWING and EDITING and is None
    for LIST and CREATING.
    """

    mode: ViewMode
    note_id: NoteId = None

    @classmethod
    def list(cls) -> "ViewState":
        return cls(ViewMode.LIST)

    @classmethod
    def viewing(cls, note_id: NoteId) -> "ViewState":
        return cls(ViewMode.VIEWING, note_id)

    @classmethod
    def creating(cls) -> "ViewState":
        return cls(ViewMode.CREATING)

    @classmethod
    def editing(cls, note_id: NoteId) -> "ViewState":
        return cls(ViewMode.EDITING, note_id)


class FormBuffer(NamedTuple):
    """Transient title/content pair held only while creating or editing."""

    title: str = ""
    content: str = ""


# ---------------------------------------------------------------------------
# NotesSnapshot
# ---------------------------------------------------------------------------
# Read-only state emitted after every controller transition. The rendering
# layer is a pure function of the latest snapshot.
# ---------------------------------------------------------------------------
class NotesSnapshot(NamedTuple):
    notes: Tuple[NoteRecord, ...]
    view: ViewState
    selected: Optional[NoteRecord]
    form: Optional[FormBuffer]
    loading: bool
    error: Optional[str]


SnapshotListener = Callable[[NotesSnapshot], None]


# ---------------------------------------------------------------------------
# NotesGatewayInterface
# ---------------------------------------------------------------------------
# Structural contract the controller depends on. NotesGateway implements it
# against Supabase; tests inject an in-memory fake.
# ---------------------------------------------------------------------------
class NotesGatewayInterface(Protocol):
    async def list(self) -> List[NoteRecord]: ...

    async def create(self, title: str, content: str) -> NoteRecord: ...

    async def update(self, note_id: NoteId, title: str, content: str) -> NoteRecord: ...

    async def delete(self, note_id: NoteId) -> None: ...


# ---------------------------------------------------------------------------
# Supabase response shapes
# ---------------------------------------------------------------------------
# Dict-style responses returned by test doubles. SDK responses expose the
# same fields as attributes.
# ---------------------------------------------------------------------------
class SupabaseExecuteResponse(TypedDict, total=False):
    status: int
    data: Any
    error: Optional[Any]


RowList = List[Dict[str, Any]]
