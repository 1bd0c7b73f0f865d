"""HTTP transport for the Jira REST API.

Dependencies:
    uv add requests
"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from issue_tracker_interface.errors import IssueNotFoundError as BaseIssueNotFoundError
from issue_tracker_interface.errors import TrackerError

logger = logging.getLogger(__name__)

#common alternate results for status codes that mean "nothing to do"
ALREADY_DELETED: dict[int, Any] = {404: {"already_deleted": True}}
UNAUTHORIZED_AS_EMPTY: dict[int, Any] = {401: []}


class JiraError(TrackerError):
    """Raised when the Jira API returns an unexpected response."""


class IssueNotFoundError(BaseIssueNotFoundError):
    """Raised when a requested Jira resource does not exist."""


class BearerAuth(AuthBase):
    """Personal access token authentication (Jira Server / Data Center)."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self._token}"
        return request


class JiraTransport:
    """
    Args:
        base_url:   Jira instance root URL (e.g. 'https://bugs.example.org')
        api_token:  API token or personal access token
        user_email: When given, basic auth with email + token is used, otherwise bearer auth
    """

    #API v2 takes plain-text comment and description bodies, which the link comments rely on
    _API_PREFIX = "/rest/api/2"

    def __init__(
        self,
        base_url: str,
        api_token: str,
        user_email: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        if user_email:
            self._session.auth = HTTPBasicAuth(user_email, api_token)
        else:
            self._session.auth = BearerAuth(api_token)
        self._session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    @property
    def base_url(self) -> str:
        return self._base_url

    def _url(self, path: str) -> str:
        return f"{self._base_url}{self._API_PREFIX}{path}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        body: Any = None,
        fallbacks: Mapping[int, Any] | None = None,
    ) -> Any:
        """
        Notes on usage:
            "fallbacks" maps an HTTP status code to the result returned in place of raising,
            e.g. ``{404: {"already_deleted": True}}`` for idempotent deletes
        """
        response = self._session.request(method, self._url(path), params=params, json=body)
        if fallbacks and response.status_code in fallbacks:
            logger.debug("%s %s returned %d, using fallback result", method, path, response.status_code)
            return copy.deepcopy(fallbacks[response.status_code])
        self._raise_for_status(response)
        # Jira answers most PUT and DELETE calls with 204 No Content
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    def get(self, path: str, params: dict | None = None, fallbacks: Mapping[int, Any] | None = None) -> Any:
        return self.request("GET", path, params=params, fallbacks=fallbacks)

    def post(self, path: str, body: Any, fallbacks: Mapping[int, Any] | None = None) -> Any:
        return self.request("POST", path, body=body, fallbacks=fallbacks)

    def put(self, path: str, body: Any, fallbacks: Mapping[int, Any] | None = None) -> Any:
        return self.request("PUT", path, body=body, fallbacks=fallbacks)

    def delete(self, path: str, params: dict | None = None, fallbacks: Mapping[int, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params, fallbacks=fallbacks)

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if response.status_code == 404:
            raise IssueNotFoundError(f"Resource not found: {response.url}")
        if not response.ok:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            raise JiraError(f"Jira API error {response.status_code}: {detail}")
