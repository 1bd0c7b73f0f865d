"""
Authentication
--------------
The client supports two credential modes:

1. When get_client(interactive = True)
    User is prompted for the values below at runtime if any required one is missing from the environment.
2. When get_client(interactive = False) - Default
        JIRA_BASE_URL         https://bugs.example.org
        JIRA_API_TOKEN        <personal access token, or API token when JIRA_USER_EMAIL is set>
        JIRA_USER_EMAIL       optional, switches to basic auth with email + API token
        JIRA_VISIBILITY_ROLE  optional, restricts comments to this project role

Dependencies:
    uv add requests

"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import os
from collections.abc import Mapping
from getpass import getpass

from issue_tracker_interface.client import IssueTrackerClient
from jira_tracker_impl.jira_issue import JiraIssue
from jira_tracker_impl.jira_project import CustomFieldEncoder, JiraProject
from jira_tracker_impl.rest import IssueNotFoundError, JiraTransport

# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(IssueTrackerClient):
    """
    Args:
        transport:             The REST transport for the Jira host
        visibility_role:       Project role comments are restricted to, if any
        custom_fields:         Custom field kinds shared by every project (see JiraProject)
        custom_field_encoders: Contextual custom field encoders shared by every project
    """

    def __init__(
        self,
        transport: JiraTransport,
        *,
        visibility_role: str | None = None,
        custom_fields: Mapping[str, str] | None = None,
        custom_field_encoders: Mapping[str, CustomFieldEncoder] | None = None,
    ) -> None:
        self._transport = transport
        self._visibility_role = visibility_role
        self._custom_fields = dict(custom_fields or {})
        self._custom_field_encoders = dict(custom_field_encoders or {})

    @property
    def visibility_role(self) -> str | None:
        return self._visibility_role

    def project(self, name: str) -> JiraProject:
        return JiraProject(
            self._transport,
            name,
            visibility_role=self._visibility_role,
            custom_fields=self._custom_fields,
            custom_field_encoders=self._custom_field_encoders,
        )

    def get_issue(self, issue_id: str) -> JiraIssue:
        """Fetch a single Jira issue by key."""
        #the project key is the part before the dash, e.g. PROJ for PROJ-42
        project_key = issue_id.rsplit("-", 1)[0]
        issue = self.project(project_key).issue(issue_id)
        if issue is None:
            raise IssueNotFoundError(f"Issue {issue_id} not found")
        return issue


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False) -> JiraClient:
    """Return a configured JiraClient.

    Reads credentials from environment variables. If "interactive = True" and
    any required variable is missing, the user will be prompted.

    Environment variables:
        JIRA_BASE_URL:         Base URL of the Jira instance.
        JIRA_API_TOKEN:        Personal access token or API token.
        JIRA_USER_EMAIL:       Optional Atlassian account email (basic auth).
        JIRA_VISIBILITY_ROLE:  Optional role restricting comment visibility.
    """
    base_url = os.environ.get("JIRA_BASE_URL", "")
    api_token = os.environ.get("JIRA_API_TOKEN", "")
    user_email = os.environ.get("JIRA_USER_EMAIL") or None
    visibility_role = os.environ.get("JIRA_VISIBILITY_ROLE") or None

    if interactive:
        if not base_url:
            base_url = input("Jira base URL (e.g. https://bugs.example.org): ").strip()
        if not api_token:
            api_token = getpass("Jira API token: ")
    else:
        #collects the missing fields and raises an error alerting to the missing values
        missing = [name for name, val in [
            ("JIRA_BASE_URL", base_url),
            ("JIRA_API_TOKEN", api_token),
        ] if not val]
        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Set them or call get_client(interactive=True)."
            )

    transport = JiraTransport(base_url, api_token, user_email=user_email)
    return JiraClient(transport, visibility_role=visibility_role)
