"""Unit tests for JiraProject: link types, issue lookup and the property codec."""

import pytest

from issue_tracker_interface.errors import IssueNotFoundError
from issue_tracker_interface.link import LinkType
from jira_tracker_impl.jira_issue import JiraIssue

from conftest import issue_json


def test_visibility_flags(project, restricted_project):
    assert not project.restricts_visibility
    assert project.visibility_role is None
    assert restricted_project.restricts_visibility
    assert restricted_project.visibility_role == "Staff"


def test_link_types_are_fetched_once(project, transport):
    transport.get.return_value = {"issueLinkTypes": [
        {"id": "1", "name": "Backport", "inward": "backport of", "outward": "backported by"},
    ]}

    first = project.link_types()
    second = project.link_types()

    assert first == second == [LinkType("Backport", inward="backport of", outward="backported by")]
    transport.get.assert_called_once_with("/issueLinkType")


@pytest.mark.parametrize("relationship, matches, outward", [
    ("backport of", True, False),
    ("Backported By", True, True),
    ("relates to", False, False),
])
def test_link_type_matching(relationship, matches, outward):
    link_type = LinkType("Backport", inward="backport of", outward="backported by")
    assert link_type.matches(relationship) is matches
    assert link_type.is_outward(relationship) is outward


def test_issue_lookup(project, transport):
    transport.get.return_value = issue_json("TEST-7")

    issue = project.issue("TEST-7")

    assert isinstance(issue, JiraIssue)
    assert issue.id == "TEST-7"
    assert issue.project is project
    transport.get.assert_called_once_with("/issue/TEST-7", fallbacks={404: None})


def test_issue_lookup_missing_returns_none(project, transport):
    # the transport returns the fallback value for a 404
    transport.get.return_value = None
    assert project.issue("TEST-404") is None


def test_create_issue(project, transport):
    transport.post.return_value = {"id": "10001", "key": "TEST-8"}
    transport.get.return_value = issue_json("TEST-8", summary="Backport")

    issue = project.create_issue("Backport", "Body", {"fixVersions": ["17"], "unknownfield": "x"})

    path, payload = transport.post.call_args.args
    assert path == "/issue"
    assert payload["fields"]["project"] == {"key": "TEST"}
    assert payload["fields"]["fixVersions"] == [{"name": "17"}]
    assert "unknownfield" not in payload["fields"]
    assert issue.id == "TEST-8"


def test_create_issue_not_found_after_creation(project, transport):
    transport.post.return_value = {"key": "TEST-9"}
    transport.get.return_value = None

    with pytest.raises(IssueNotFoundError):
        project.create_issue("Title", "Body")


#-------------------- property codec --------------------

@pytest.mark.parametrize("name, raw, decoded", [
    ("issuetype", {"name": "Bug"}, "Bug"),
    ("priority", {"name": "P2"}, "P2"),
    ("fixVersions", [{"name": "17"}, {"name": "18"}], ["17", "18"]),
    ("components", [], []),
    ("customfield_10000", {"value": "linux"}, "linux"),
    ("customfield_10000", [{"value": "linux"}, {"value": "windows"}], ["linux", "windows"]),
    ("customfield_10001", "free text", "free text"),
])
def test_decode_known_fields(project, name, raw, decoded):
    assert project.decode_property(name, raw) == decoded


@pytest.mark.parametrize("name, raw", [
    ("summary", "A title"),
    ("customfield_99999", "x"),
    ("resolution", None),
    ("priority", "not an object"),
])
def test_decode_unknown_fields_is_none(project, name, raw):
    assert project.decode_property(name, raw) is None


@pytest.mark.parametrize("name, value, encoded", [
    ("issuetype", "Bug", {"name": "Bug"}),
    ("fixVersions", "17", [{"name": "17"}]),
    ("versions", ["17", "18"], [{"name": "17"}, {"name": "18"}]),
    ("customfield_10000", "linux", {"value": "linux"}),
    ("customfield_10001", 3, 3),
])
def test_encode_known_properties(project, name, value, encoded):
    assert project.encode_property(name, value) == encoded


def test_encode_unknown_property_is_none(project):
    assert project.encode_property("summary", "x") is None


def test_encode_custom_fields_passes_through_without_encoder(project):
    assert project.encode_custom_fields("customfield_10000", {"value": "a"}, {}, "TEST-1") == {"value": "a"}


def test_user_mapping(project):
    user = project.user("jane", "Jane Doe")
    assert (user.id, user.username, user.full_name) == ("jane", "jane", "Jane Doe")
