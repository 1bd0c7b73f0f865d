"""Conversions between WebLink and the two ways Jira can store one.

1. Native remote links, identified by a global id in the ``skaralink=`` namespace.
2. Plain comments using a small line-oriented grammar, for projects where
   remote links cannot be given a restricted visibility:

       Remote link: <title>
       URL: <uri>
       Summary: <summary>              (optional)
       Relationship: <relationship>    (optional)
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Any
from urllib.parse import urlsplit

from issue_tracker_interface.errors import MalformedInputError
from issue_tracker_interface.link import WebLink

logger = logging.getLogger(__name__)

GLOBAL_ID_PREFIX = "skaralink="

_TITLE_PATTERN = re.compile(r"Remote link: (.*)")
_URL_PATTERN = re.compile(r"URL: (.*)")
_SUMMARY_PATTERN = re.compile(r"Summary: (.*)")
_RELATIONSHIP_PATTERN = re.compile(r"Relationship: (.*)")

#only these break a comment body into lines; other unicode separators stay inside a line
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

#ASCII characters allowed in a URI reference (RFC 3986), plus percent escapes
_URI_PATTERN = re.compile(r"(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})*")


def global_id(uri: str) -> str:
    """Return the remote link global id for a URI. Jira upserts on this id."""
    return GLOBAL_ID_PREFIX + uri


def _is_other_char(char: str) -> bool:
    """Non-ASCII characters a URI may carry unescaped: anything but controls and spaces."""
    if ord(char) < 0x80:
        return False
    return unicodedata.category(char) not in ("Cc", "Zs", "Zl", "Zp")


def is_valid_uri(value: str) -> bool:
    """Return True if value is a URI reference; the empty string is one."""
    ascii_part = "".join("a" if _is_other_char(char) else char for char in value)
    if not _URI_PATTERN.fullmatch(ascii_part):
        return False
    try:
        urlsplit(value)
    except ValueError:
        return False
    return True


def split_lines(body: str) -> list[str]:
    """Split on \\n, \\r and \\r\\n; a trailing line break does not start a new line."""
    lines = _LINE_BREAK.split(body)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def check_link_comment(link: WebLink) -> None:
    """Raise MalformedInputError unless link can be read back from its comment encoding."""
    if not is_valid_uri(link.uri):
        raise MalformedInputError(f"Invalid link URI: {link.uri!r}")
    for value in (link.title, link.summary, link.relationship):
        if value is not None and len(split_lines(value)) > 1:
            raise MalformedInputError(f"Link text must be a single line: {value!r}")


# ---------------------------------------------------------------------------
# Comment grammar
# ---------------------------------------------------------------------------

def serialize_link_comment(link: WebLink) -> str:
    """Return the comment body encoding a web link."""
    lines = [f"Remote link: {link.title}", f"URL: {link.uri}"]
    if link.summary is not None:
        lines.append(f"Summary: {link.summary}")
    if link.relationship is not None:
        lines.append(f"Relationship: {link.relationship}")
    return "".join(line + "\n" for line in lines)


def parse_link_comment(body: str) -> WebLink | None:
    """Return the web link encoded in a comment body, or None.

    Scanning is best effort: anything that does not look like a link comment
    yields None rather than an error.
    """
    lines = split_lines(body)
    if len(lines) < 2 or len(lines) > 4:
        return None
    title_match = _TITLE_PATTERN.fullmatch(lines[0])
    url_match = _URL_PATTERN.fullmatch(lines[1])
    if not title_match or not url_match:
        return None

    uri = url_match.group(1)
    if not is_valid_uri(uri):
        logger.warning("Invalid link in web link comment: %s", uri)
        return None

    link = WebLink(uri=uri, title=title_match.group(1))
    for line in lines[2:]:
        summary_match = _SUMMARY_PATTERN.fullmatch(line)
        if summary_match:
            link = link.with_summary(summary_match.group(1))
        relationship_match = _RELATIONSHIP_PATTERN.fullmatch(line)
        if relationship_match:
            link = link.with_relationship(relationship_match.group(1))
    return link


# ---------------------------------------------------------------------------
# Native remote links
# ---------------------------------------------------------------------------

def is_managed_remote_link(raw: Any) -> bool:
    """Return True for remote links created through this layer."""
    if not isinstance(raw, dict):
        return False
    value = raw.get("globalId")
    return isinstance(value, str) and value.startswith(GLOBAL_ID_PREFIX)


def remote_link_to_json(link: WebLink) -> dict[str, Any]:
    """Build the POST /remotelink payload for a web link."""
    icon: dict[str, Any] = {}
    status_icon: dict[str, Any] = {}
    status: dict[str, Any] = {"resolved": link.resolved, "icon": status_icon}
    obj: dict[str, Any] = {"url": link.uri, "title": link.title, "icon": icon, "status": status}
    query: dict[str, Any] = {"globalId": global_id(link.uri), "object": obj}

    if link.relationship is not None:
        query["relationship"] = link.relationship
    if link.summary is not None:
        obj["summary"] = link.summary
    if link.icon_url is not None:
        icon["url16x16"] = link.icon_url
    if link.icon_title is not None:
        icon["title"] = link.icon_title
    if link.status_icon_url is not None:
        status_icon["url16x16"] = link.status_icon_url
    if link.status_icon_title is not None:
        status_icon["title"] = link.status_icon_title
    return query


def remote_link_from_json(raw: dict[str, Any]) -> WebLink:
    """Build a web link from a GET /remotelink entry."""
    obj = raw["object"]
    icon = obj.get("icon") or {}
    status = obj.get("status") or {}
    status_icon = status.get("icon") or {}
    return WebLink(
        uri=obj["url"],
        title=obj["title"],
        summary=obj.get("summary"),
        relationship=raw.get("relationship"),
        resolved=bool(status.get("resolved", False)),
        icon_url=icon.get("url16x16"),
        icon_title=icon.get("title"),
        status_icon_url=status_icon.get("url16x16"),
        status_icon_title=status_icon.get("title"),
    )
