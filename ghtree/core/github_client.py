"""GitHub API operations used to discover repositories and fork lineage."""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import urlparse, urlunparse

from .constants import API_BASE, GITHUB_API_ACCEPT, HTTP_TIMEOUT_SEC, REPOS_PER_PAGE, USER_AGENT
from .types import RepoInfo


class GitHubError(RuntimeError):
    def __init__(self, message: str, url: str, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


class GitHubClient:
    def __init__(self, token: str | None = None, api_base: str = API_BASE) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")

    # ---------- low-level HTTP ----------
    def _request_json(self, url: str) -> Any:
        req = urllib.request.Request(url)
        req.add_header("Accept", GITHUB_API_ACCEPT)
        req.add_header("User-Agent", USER_AGENT)
        if self.token:
            req.add_header("Authorization", f"Bearer {self.token}")
        try:
            with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT_SEC) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", "ignore") if getattr(e, "fp", None) else ""
            raise GitHubError(f"GET {url} returned {e.code}", url, status=e.code, body=body) from e
        except urllib.error.URLError as e:
            raise GitHubError(f"GET {url} failed: {e.reason}", url) from e
        except (OSError, http.client.HTTPException) as e:
            # raised while reading the body: timeouts, resets, truncated responses
            raise GitHubError(f"GET {url} failed: {e}", url) from e
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            body = raw.decode("utf-8", "replace")
            raise GitHubError(f"Parsing JSON from {url} failed: {e}", url, body=body) from e

    # ---------- public API ----------
    @staticmethod
    def inject_token_into_https(clone_url: str, token: str) -> str:
        """https://github.com/owner/repo.git -> https://x-access-token:<token>@github.com/owner/repo.git"""
        u = urlparse(clone_url)
        netloc = f"x-access-token:{token}@{u.netloc}"
        return urlunparse((u.scheme, netloc, u.path, u.params, u.query, u.fragment))

    def list_user_repos(self, username: str) -> list[RepoInfo]:
        """Owned, forked and contributed-to repositories of ``username``.

        Only the first page is requested, so at most ``REPOS_PER_PAGE`` entries
        come back.
        """
        url = f"{self.api_base}/users/{username}/repos?type=all&per_page={REPOS_PER_PAGE}"
        data = self._request_json(url)
        if not isinstance(data, list):
            raise GitHubError(f"Unexpected payload from {url}", url, body=str(data))
        return [RepoInfo.from_payload(r) for r in data]

    def get_repo(self, owner: str, name: str) -> RepoInfo:
        """Single repository detail; carries ``parent`` and ``source`` for forks."""
        url = f"{self.api_base}/repos/{owner}/{name}"
        data = self._request_json(url)
        if not isinstance(data, dict):
            raise GitHubError(f"Unexpected payload from {url}", url, body=str(data))
        return RepoInfo.from_payload(data)
