"""
notes_client

A small Supabase-backed note-taking client: an async gateway over the
`notes` table, a view state controller that owns all transitions, and a
terminal shell that renders the controller's snapshots.
"""

__version__ = "0.1.0"
