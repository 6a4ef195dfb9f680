"""
notes_client/config.py

Resolve Supabase connection settings from the environment.

Values are loaded from a `.env` file (if present) into the process
environment, then read once at startup:

    SUPABASE_URL   the project URL
    SUPABASE_KEY   the access (anon or service role) key
    NOTES_TABLE    optional table name, defaults to "notes"

A missing URL or key, or a URL that is not http(s), is fatal and reported
before any gateway call.
"""

import os
from typing import List, NamedTuple

import httpx
from dotenv import load_dotenv

from notes_client.errors import ConfigError

URL_VAR = "SUPABASE_URL"
KEY_VAR = "SUPABASE_KEY"
TABLE_VAR = "NOTES_TABLE"
DEFAULT_TABLE = "notes"


class NotesConfig(NamedTuple):
    url: str
    key: str
    table: str = DEFAULT_TABLE


def _diagnostic(headline: str, url: str, key: str) -> str:
    return "\n".join(
        [
            headline,
            f"Set {URL_VAR} and {KEY_VAR} in the environment or a .env file.",
            "Current values:",
            f"  {URL_VAR}: '{url}'",
            f"  {KEY_VAR}: '{'[REDACTED]' if key else ''}'",
        ]
    )


def _is_http_url(url: str) -> bool:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def load_config(use_dotenv: bool = True) -> NotesConfig:
    """
    Read the Supabase settings from the environment.

    Parameters
    ----------
    use_dotenv : bool
        Load a `.env` file into the environment first. Variables already set
        in the environment take precedence.

    Returns
    -------
    NotesConfig
        The resolved URL, key, and table name.

    Raises
    ------
    ConfigError
        If the URL or the key is missing or blank, or the URL is not an
        http(s) URL. The message names the offending variables and shows
        the current values with the key redacted.
    """
    if use_dotenv:
        load_dotenv()

    url = (os.getenv(URL_VAR) or "").strip()
    key = (os.getenv(KEY_VAR) or "").strip()
    table = os.getenv(TABLE_VAR) or DEFAULT_TABLE

    missing: List[str] = [name for name, value in ((URL_VAR, url), (KEY_VAR, key)) if not value]
    if missing:
        headline = "Supabase client not initialized: missing " + ", ".join(missing) + "."
        raise ConfigError(_diagnostic(headline, url, key))

    if not _is_http_url(url):
        headline = f"Supabase client not initialized: {URL_VAR} is not an http(s) URL."
        raise ConfigError(_diagnostic(headline, url, key))

    return NotesConfig(url=url, key=key, table=table)
