"""Detect URL-like substrings and split text into plain and link fragments."""

import html
import re
from typing import NamedTuple

URL_PATTERN = re.compile(r"""(https?://[^\s"'<>]+|/(?:api|e)/[^\s"'<>]+)""")


class Fragment(NamedTuple):
    text: str
    is_link: bool = False

    @property
    def href(self) -> str | None:
        return self.text if self.is_link else None


def linkify(text: str) -> list[Fragment]:
    """Split ``text`` left to right into literal and link fragments.

    Joining the fragments' text gives back ``text`` unchanged.
    """
    parts: list[Fragment] = []
    last = 0
    for match in URL_PATTERN.finditer(text):
        if match.start() > last:
            parts.append(Fragment(text[last:match.start()]))
        parts.append(Fragment(match.group(0), is_link=True))
        last = match.end()
    if last < len(text):
        parts.append(Fragment(text[last:]))
    return parts


def links(text: str) -> list[str]:
    return [f.text for f in linkify(text) if f.is_link]


def render_html(fragments: list[Fragment]) -> str:
    out = []
    for f in fragments:
        escaped = html.escape(f.text)
        if f.is_link:
            out.append(f'<a href="{escaped}" target="_blank" rel="noreferrer">{escaped}</a>')
        else:
            out.append(escaped)
    return "".join(out)
