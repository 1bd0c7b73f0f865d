"""Unit tests for the two web link persistence channels."""

from unittest.mock import MagicMock

import pytest

from issue_tracker_interface.comment import Comment
from issue_tracker_interface.link import WebLink
from issue_tracker_interface.user import HostUser
from jira_tracker_impl.comment_store import JiraCommentStore, parse_timestamp
from jira_tracker_impl.link_store import CommentLinkStore, RemoteLinkStore
from jira_tracker_impl.rest import ALREADY_DELETED, UNAUTHORIZED_AS_EMPTY

from conftest import comment_json

LINK = WebLink("https://x/y", "Build")


#-------------------- remote links --------------------

@pytest.fixture
def remote_store(transport):
    return RemoteLinkStore(transport, "/issue/TEST-1")


def test_remote_list_keeps_only_managed_links(remote_store, transport):
    transport.get.return_value = [
        {"globalId": "skaralink=https://x/y", "object": {"url": "https://x/y", "title": "Build", "status": {}}},
        {"globalId": "system=other", "object": {"url": "https://z", "title": "Other", "status": {}}},
        {"object": {"url": "https://w", "title": "No id", "status": {}}},
    ]

    assert remote_store.list() == [LINK]
    transport.get.assert_called_once_with("/issue/TEST-1/remotelink", fallbacks=UNAUTHORIZED_AS_EMPTY)


def test_remote_list_unauthorized_is_empty(remote_store, transport):
    # the transport hands back the fallback value for a 401
    transport.get.return_value = UNAUTHORIZED_AS_EMPTY[401]

    assert remote_store.list() == []


def test_remote_add_posts_with_global_id(remote_store, transport):
    remote_store.add(LINK)

    path, payload = transport.post.call_args.args
    assert path == "/issue/TEST-1/remotelink"
    assert payload["globalId"] == "skaralink=https://x/y"


def test_remote_remove_deletes_by_global_id_tolerating_404(remote_store, transport):
    remote_store.remove(LINK)

    transport.delete.assert_called_once_with(
        "/issue/TEST-1/remotelink",
        params={"globalId": "skaralink=https://x/y"},
        fallbacks=ALREADY_DELETED,
    )


#-------------------- comment links --------------------

@pytest.fixture
def comments():
    return MagicMock(spec=JiraCommentStore)


@pytest.fixture
def comment_store(comments):
    return CommentLinkStore(comments)


def _comments(*bodies):
    created = parse_timestamp("2024-01-02T03:04:05.000+0000")
    return [Comment(str(i), body, HostUser.create("duke", "duke"), created, created) for i, body in enumerate(bodies)]


def test_comment_list_skips_ordinary_comments(comment_store, comments):
    comments.list.return_value = _comments("Looks good", "Remote link: Build\nURL: https://x/y\n")

    assert comment_store.list() == [LINK]


def test_comment_add_posts_serialized_link(comment_store, comments):
    comments.list.return_value = _comments("Looks good")

    comment_store.add(LINK)

    comments.add.assert_called_once_with("Remote link: Build\nURL: https://x/y\n")


def test_comment_add_is_idempotent(comment_store, comments):
    # Setup: the same (uri, title) pair is already posted
    comments.list.return_value = _comments("Remote link: Build\nURL: https://x/y\nSummary: old\n")

    comment_store.add(LINK.with_summary("new"))

    comments.add.assert_not_called()


def test_comment_add_same_uri_other_title_is_posted(comment_store, comments):
    comments.list.return_value = _comments("Remote link: Build\nURL: https://x/y\n")

    comment_store.add(WebLink("https://x/y", "Another build"))

    comments.add.assert_called_once()


def test_comment_remove_deletes_matching_uri_only(comment_store, comments):
    comments.list.return_value = _comments(
        "Remote link: Build\nURL: https://x/y\n",
        "Remote link: Other\nURL: https://x/z\n",
        "Remote link: Renamed\nURL: https://x/y\n",
        "Some discussion",
    )

    comment_store.remove(LINK)

    assert [c.args[0] for c in comments.remove.call_args_list] == ["0", "2"]


def test_comment_remove_missing_link_is_a_no_op(comment_store, comments):
    comments.list.return_value = _comments("Some discussion")

    comment_store.remove(LINK)

    comments.remove.assert_not_called()


def test_comment_json_helper_round_trip_through_store(transport, project):
    # end to end through the real comment store with a mocked transport
    transport.get.return_value = {"comments": [comment_json("10", "Remote link: Build\nURL: https://x/y")]}
    store = CommentLinkStore(JiraCommentStore(transport, "/issue/TEST-1", project))

    assert store.list() == [LINK]
