"""Persistence channels for web links.

A web link is stored either as a native Jira remote link or, when the
project restricts visibility (remote links cannot carry a visibility role),
as a specially formatted comment. Reads and removals sweep both channels,
since links may have been added under either mode in the past.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from issue_tracker_interface.link import WebLink
from jira_tracker_impl import link_codec
from jira_tracker_impl.comment_store import JiraCommentStore
from jira_tracker_impl.rest import ALREADY_DELETED, UNAUTHORIZED_AS_EMPTY, JiraTransport

logger = logging.getLogger(__name__)


class WebLinkStore(ABC):
    """A place web links of one issue are persisted."""

    @abstractmethod
    def list(self) -> list[WebLink]:
        raise NotImplementedError

    @abstractmethod
    def add(self, link: WebLink) -> None:
        """Store link. Adding the same link twice must leave a single copy."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, link: WebLink) -> None:
        """Remove every copy of link. Removing a missing link is not an error."""
        raise NotImplementedError


class RemoteLinkStore(WebLinkStore):
    """Native remote links, keyed by the global id derived from the URI."""

    def __init__(self, transport: JiraTransport, issue_path: str) -> None:
        self._transport = transport
        self._path = f"{issue_path}/remotelink"

    def list(self) -> list[WebLink]:
        # Users without permission to see remote links get a 401
        raw_links = self._transport.get(self._path, fallbacks=UNAUTHORIZED_AS_EMPTY)
        return [
            link_codec.remote_link_from_json(raw)
            for raw in raw_links
            if link_codec.is_managed_remote_link(raw)
        ]

    def add(self, link: WebLink) -> None:
        self._transport.post(self._path, link_codec.remote_link_to_json(link))

    def remove(self, link: WebLink) -> None:
        self._transport.delete(
            self._path,
            params={"globalId": link_codec.global_id(link.uri)},
            fallbacks=ALREADY_DELETED,
        )


class CommentLinkStore(WebLinkStore):
    """Web links encoded in comments, see link_codec for the format."""

    def __init__(self, comments: JiraCommentStore) -> None:
        self._comments = comments

    def list(self) -> list[WebLink]:
        links = (link_codec.parse_link_comment(comment.body) for comment in self._comments.list())
        return [link for link in links if link is not None]

    def add(self, link: WebLink) -> None:
        already_posted = any(
            existing.uri == link.uri and existing.title == link.title
            for existing in self.list()
        )
        if already_posted:
            logger.debug("Link to %s already posted as a comment", link.uri)
            return
        self._comments.add(link_codec.serialize_link_comment(link))

    def remove(self, link: WebLink) -> None:
        for comment in self._comments.list():
            existing = link_codec.parse_link_comment(comment.body)
            if existing is None or existing.uri != link.uri:
                continue
            self._comments.remove(comment.id)
