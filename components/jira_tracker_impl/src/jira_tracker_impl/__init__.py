"""Jira backend for the issue tracker contracts."""

from jira_tracker_impl.jira_impl import JiraClient, get_client
from jira_tracker_impl.jira_issue import JiraIssue
from jira_tracker_impl.jira_project import JiraProject
from jira_tracker_impl.rest import IssueNotFoundError, JiraError, JiraTransport

__all__ = [
    "IssueNotFoundError",
    "JiraClient",
    "JiraError",
    "JiraIssue",
    "JiraProject",
    "JiraTransport",
    "get_client",
]
