"""Page paths and capability-link parsing."""

import re
from urllib.parse import unquote, urlsplit

from eventsync.client import encode_public_id
from eventsync.errors import InputError

PAGE_SUFFIXES = {
    "respond": "",
    "results": "/results",
    "admin": "/admin",
}

EDIT_PATH_RE = re.compile(r"^/e/(?P<public_id>[^/]+)/edit/(?P<edit_key>[^/]+)/?$")


def normalize_public_id(raw: str) -> str:
    """Trim a typed-in identifier; blank input is rejected."""
    public_id = raw.strip()
    if not public_id:
        raise InputError("Public ID is required.")
    return public_id


def event_path(public_id: str, page: str = "respond") -> str:
    try:
        suffix = PAGE_SUFFIXES[page]
    except KeyError:
        raise ValueError(f"unknown page: {page}") from None
    return f"/e/{encode_public_id(public_id)}{suffix}"


def edit_path(public_id: str, edit_key: str) -> str:
    return f"/e/{encode_public_id(public_id)}/edit/{encode_public_id(edit_key)}"


def parse_edit_url(url: str) -> tuple[str, str] | None:
    """Extract ``(public_id, edit_key)`` from a capability link.

    Accepts absolute URLs and bare paths; returns None for anything else.
    """
    if not url:
        return None
    match = EDIT_PATH_RE.match(urlsplit(url).path)
    if not match:
        return None
    return unquote(match.group("public_id")), unquote(match.group("edit_key"))
