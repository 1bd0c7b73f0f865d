"""Shared fixtures for the Jira backend tests.

No test performs real HTTP calls: the transport is a MagicMock with the
JiraTransport interface, so each test states exactly which responses Jira gives.
"""

from unittest.mock import MagicMock

import pytest

from jira_tracker_impl.jira_issue import JiraIssue
from jira_tracker_impl.jira_project import RAW, SELECT, JiraProject
from jira_tracker_impl.rest import JiraTransport

BASE_URL = "https://bugs.example.org"


def issue_json(key="TEST-1", **fields):
    """Return a Jira issue document with sensible defaults, overridden by fields."""
    defaults = {
        "summary": "A test issue ",
        "description": "Body text",
        "status": {"name": "Open"},
        "resolution": None,
        "created": "2024-01-02T03:04:05.000+0000",
        "updated": "2024-01-03T03:04:05.000+0000",
        "creator": {"key": "duke", "name": "duke", "displayName": "Duke"},
        "assignee": None,
        "labels": ["one", "two"],
        "issuetype": {"name": "Bug"},
    }
    defaults.update(fields)
    return {"key": key, "fields": defaults}


def comment_json(comment_id, body, name="duke"):
    return {
        "id": comment_id,
        "body": body,
        "author": {"name": name, "displayName": name.title()},
        "created": "2024-01-02T03:04:05.000+0000",
        "updated": "2024-01-02T03:04:05.000+0000",
    }


@pytest.fixture
def transport():
    """Returns a transport mock; configure get/post/put/delete per test."""
    mock = MagicMock(spec=JiraTransport)
    mock.base_url = BASE_URL
    return mock


@pytest.fixture
def project(transport):
    return JiraProject(
        transport,
        "TEST",
        custom_fields={"customfield_10000": SELECT, "customfield_10001": RAW},
    )


@pytest.fixture
def restricted_project(transport):
    return JiraProject(transport, "TEST", visibility_role="Staff")


@pytest.fixture
def make_issue(project, transport):
    """Factory building a JiraIssue in the open-visibility project."""
    def _make(key="TEST-1", **fields):
        return JiraIssue(project, transport, issue_json(key, **fields))
    return _make
