"""
Script: tag_tools/github_api.py
What: Minimal GitHub REST API wrapper for git data endpoints.
Doing: Reads commits and creates tag objects and tag refs with `requests`.
Why: Tag creation needs only three calls, so a small client is easier to test than a full SDK.
Goal: Return status and payload for each call and let callers decide what counts as success.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

from tag_tools.common import TagToolError


DEFAULT_API_URL = "https://api.github.com"
REQUEST_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class ApiResponse:
    status: int
    data: Any


class GitHubClient:
    """Minimal GitHub REST API wrapper bound to one repository."""

    def __init__(self, repository: str, token: str, api_url: str = DEFAULT_API_URL) -> None:
        self.repository = repository
        self.token = token
        self.base_url = (api_url or DEFAULT_API_URL).rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        url = f"{self.base_url}/repos/{self.repository}{path}"
        try:
            response = requests.request(
                method,
                url,
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT_SECONDS,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise TagToolError(f"GitHub API request failed: {method} {url}: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = response.text
        return ApiResponse(status=response.status_code, data=data)

    def get_commit(self, sha: str) -> ApiResponse:
        return self._request("GET", f"/git/commits/{sha}")

    def create_tag(self, tag: str, message: str, sha: str) -> ApiResponse:
        """Create an annotated tag object pointing at a commit."""
        payload = {
            "tag": tag,
            "message": message,
            "object": sha,
            "type": "commit",
        }
        return self._request("POST", "/git/tags", json=payload)

    def create_ref(self, ref: str, sha: str) -> ApiResponse:
        # GitHub rejects the call if the ref already exists.
        return self._request("POST", "/git/refs", json={"ref": ref, "sha": sha})
