"""
notes_client/controller.py

View state controller for the notes client.

The controller is the single owner of client-side state:

    • the note cache (ordered freshest first)
    • the view state (List / Viewing(id) / Creating / Editing(id))
    • the form buffer (only while Creating or Editing)
    • the loading flag and the current error message

Every user action is a trigger method. Triggers that are not valid from the
current view, and write-class triggers issued while a gateway call is in
flight, are ignored and return False. After every transition the controller
emits an immutable NotesSnapshot to its listeners; the rendering layer never
reads controller internals.

Gateway results are applied through the pure helpers in notes_client.cache.
A result always lands in the cache, but it only moves the view if the user
has not navigated since the call was issued. The loading flag is cleared
after every gateway call, including one that raises an unexpected error;
such errors are not swallowed.
"""

from typing import Callable, List, Optional

from notes_client import cache
from notes_client.errors import FetchError, ValidationError, WriteError
from notes_client.logging_utils import log_verbose
from notes_client.types import (
    TITLE_MAX_LENGTH,
    FormBuffer,
    NoteId,
    NoteRecord,
    NotesGatewayInterface,
    NotesSnapshot,
    SnapshotListener,
    ViewMode,
    ViewState,
)

# User-facing messages.
LOAD_FAILED = "Failed to load notes."
CREATE_FAILED = "Error creating note."
UPDATE_FAILED = "Error updating note."
DELETE_FAILED = "Failed to delete note."
TITLE_REQUIRED = "Title is required."


def truncate_title(title: str) -> str:
    return title[:TITLE_MAX_LENGTH]


def validate_form(form: FormBuffer) -> None:
    """
    Check the form before submitting.

    Raises
    ------
    ValidationError
        If the title is empty or whitespace-only.
    """
    if not form.title.strip():
        raise ValidationError(TITLE_REQUIRED)


class NotesController:
    """
    State machine mediating between the rendering layer and the gateway.

    Parameters
    ----------
    gateway : NotesGatewayInterface
        The injected gateway (NotesGateway in production, a fake in tests).
    verbose : bool
        Emit progress lines for gateway calls and ignored triggers.
    """

    def __init__(self, gateway: NotesGatewayInterface, verbose: bool = False) -> None:
        self.gateway = gateway
        self.verbose = verbose

        self._notes: List[NoteRecord] = []
        self._view = ViewState.list()
        self._form: Optional[FormBuffer] = None
        self._loading = False
        self._error: Optional[str] = None

        # Bumped on every view transition; lets an in-flight call tell
        # whether the user has moved on before it touches the view.
        self._transition = 0

        self._listeners: List[SnapshotListener] = []

    # -----------------------------------------------------------------------
    # Read-only state
    # -----------------------------------------------------------------------

    @property
    def snapshot(self) -> NotesSnapshot:
        notes = tuple(dict(note) for note in self._notes)
        selected = None
        if self._view.note_id is not None:
            found = cache.find_note(self._notes, self._view.note_id)
            selected = dict(found) if found is not None else None
        return NotesSnapshot(
            notes=notes,  # type: ignore[arg-type]
            view=self._view,
            selected=selected,  # type: ignore[arg-type]
            form=self._form,
            loading=self._loading,
            error=self._error,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Register a listener called with a fresh snapshot after every
        transition. Returns a callable that unregisters it.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        snap = self.snapshot
        for listener in list(self._listeners):
            listener(snap)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _go(self, view: ViewState, form: Optional[FormBuffer] = None) -> None:
        self._view = view
        self._form = form
        self._transition += 1

    def _ignore(self, trigger: str, busy: bool = False) -> bool:
        reason = "a request is in flight" if busy else f"in {self._view.mode.value} view"
        log_verbose(f"Ignored '{trigger}': {reason}.", self.verbose)
        return False

    def _begin(self, message: str) -> int:
        """Start a gateway call: clear the error, raise the loading flag."""
        self._error = None
        self._loading = True
        log_verbose(message, self.verbose)
        self._emit()
        return self._transition

    def _settle(self, ok: bool) -> bool:
        """Finish a gateway call: drop the loading flag and emit."""
        self._loading = False
        self._emit()
        return ok

    # -----------------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------------

    async def start(self) -> bool:
        """App start: populate the cache from the gateway."""
        return await self.load()

    async def load(self) -> bool:
        """
        (Re)load every note from the gateway.

        On failure the cache is left unchanged and LOAD_FAILED is shown; the
        user may retry by triggering load again.
        """
        if self._loading:
            return self._ignore("load", busy=True)

        self._begin("Loading notes...")
        try:
            rows = await self.gateway.list()
        except FetchError as e:
            log_verbose(f"Load failed: {e}", self.verbose)
            self._error = LOAD_FAILED
            return self._settle(False)
        except Exception:
            self._settle(False)
            raise

        self._notes = cache.replace_all(rows)

        # Do not keep showing a note the server no longer has.
        note_id = self._view.note_id
        if note_id is not None and cache.find_note(self._notes, note_id) is None:
            self._go(ViewState.list())

        log_verbose(f"Loaded {len(self._notes)} notes.", self.verbose)
        return self._settle(True)

    # -----------------------------------------------------------------------
    # Navigation
    # -----------------------------------------------------------------------

    def select(self, note_id: NoteId) -> bool:
        """Show a note. Valid from List, Viewing, and Editing."""
        if self._view.mode not in (ViewMode.LIST, ViewMode.VIEWING, ViewMode.EDITING):
            return self._ignore("select")
        if cache.find_note(self._notes, note_id) is None:
            log_verbose(f"Ignored 'select': no note {note_id!r}.", self.verbose)
            return False

        self._error = None
        self._go(ViewState.viewing(note_id))
        self._emit()
        return True

    def new(self) -> bool:
        """Open an empty form for a new note. Valid from any view."""
        self._error = None
        self._go(ViewState.creating(), FormBuffer())
        self._emit()
        return True

    def edit(self) -> bool:
        """Open the viewed note in the form. Valid from Viewing only."""
        if self._view.mode is not ViewMode.VIEWING:
            return self._ignore("edit")
        note = cache.find_note(self._notes, self._view.note_id)
        if note is None:
            return self._ignore("edit")

        self._error = None
        form = FormBuffer(
            title=truncate_title(note.get("title") or ""),
            content=note.get("content") or "",
        )
        self._go(ViewState.editing(self._view.note_id), form)
        self._emit()
        return True

    def cancel(self) -> bool:
        """
        Leave the form without submitting: Creating returns to List,
        Editing(N) returns to Viewing(N).
        """
        if self._view.mode is ViewMode.CREATING:
            target = ViewState.list()
        elif self._view.mode is ViewMode.EDITING:
            target = ViewState.viewing(self._view.note_id)
        else:
            return self._ignore("cancel")

        self._error = None
        self._go(target)
        self._emit()
        return True

    def back(self) -> bool:
        """Return to the list, dropping the selection and any form."""
        if self._view.mode is ViewMode.LIST:
            return self._ignore("back")

        self._error = None
        self._go(ViewState.list())
        self._emit()
        return True

    # -----------------------------------------------------------------------
    # Form entry
    # -----------------------------------------------------------------------

    def set_title(self, title: str) -> bool:
        """Update the form title, truncated to TITLE_MAX_LENGTH characters."""
        if self._form is None:
            return self._ignore("set title")
        self._form = self._form._replace(title=truncate_title(title))
        self._emit()
        return True

    def set_content(self, content: str) -> bool:
        if self._form is None:
            return self._ignore("set content")
        self._form = self._form._replace(content=content)
        self._emit()
        return True

    # -----------------------------------------------------------------------
    # Writes
    # -----------------------------------------------------------------------

    async def submit(self) -> bool:
        """
        Submit the form: create from Creating, update from Editing.

        A blank title sets TITLE_REQUIRED without any network call. On
        success the server's returned row is applied to the cache and the
        view moves to Viewing(result). On failure the view and form stay as
        they were and the error message is shown.
        """
        if self._view.mode not in (ViewMode.CREATING, ViewMode.EDITING):
            return self._ignore("submit")
        if self._loading:
            return self._ignore("submit", busy=True)

        form = self._form or FormBuffer()
        try:
            validate_form(form)
        except ValidationError as e:
            self._error = str(e)
            self._emit()
            return False

        creating = self._view.mode is ViewMode.CREATING
        note_id = self._view.note_id

        if creating:
            started = self._begin("Creating note...")
        else:
            started = self._begin(f"Updating note {note_id!r}...")

        try:
            if creating:
                result = await self.gateway.create(form.title, form.content)
            else:
                result = await self.gateway.update(note_id, form.title, form.content)
        except WriteError as e:
            log_verbose(f"Write failed: {e}", self.verbose)
            self._error = CREATE_FAILED if creating else UPDATE_FAILED
            return self._settle(False)
        except Exception:
            self._settle(False)
            raise

        self._notes = cache.apply_write(self._notes, result)
        if self._transition == started:
            self._go(ViewState.viewing(result.get("id")))
        log_verbose(f"Saved note {result.get('id')!r}.", self.verbose)
        return self._settle(True)

    async def delete(self) -> bool:
        """
        Delete the viewed note.

        On success the note leaves the cache and the view returns to List.
        On failure DELETE_FAILED is shown and the view stays on the note.
        """
        if self._view.mode is not ViewMode.VIEWING:
            return self._ignore("delete")
        if self._loading:
            return self._ignore("delete", busy=True)

        note_id = self._view.note_id
        started = self._begin(f"Deleting note {note_id!r}...")
        try:
            await self.gateway.delete(note_id)
        except WriteError as e:
            log_verbose(f"Delete failed: {e}", self.verbose)
            self._error = DELETE_FAILED
            return self._settle(False)
        except Exception:
            self._settle(False)
            raise

        self._notes = cache.remove_note(self._notes, note_id)
        # Never leave a view pointing at the deleted note.
        if self._transition == started or self._view.note_id == note_id:
            self._go(ViewState.list())
        log_verbose(f"Deleted note {note_id!r}.", self.verbose)
        return self._settle(True)
