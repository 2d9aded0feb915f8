"""Small types and Enums used by ghtree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .constants import API_BASE
from .errors import GhtreeError


class Category(str, Enum):
    """Relationship of a repository to the acting user; value is the path segment."""

    mine = "mine"
    fork = "fork"
    contributing = "contributing"


class CloneStatus(Enum):
    CLONED = "cloned"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


class RemoteStatus(Enum):
    ADDED = "added"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class CloneOutcome:
    status: CloneStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not CloneStatus.FAILED


@dataclass(frozen=True)
class RemoteOutcome:
    status: RemoteStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not RemoteStatus.FAILED


@dataclass(frozen=True)
class RepoInfo:
    """Repository descriptor as returned by the GitHub API.

    ``parent`` and ``source`` are only populated on the single-repository
    detail record, and only for forks.
    """

    name: str
    full_name: str
    owner: str
    is_fork: bool
    ssh_url: str
    clone_url: str
    parent: RepoInfo | None = None
    source: RepoInfo | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> RepoInfo:
        owner = (payload.get("owner") or {}).get("login", "")
        parent = payload.get("parent")
        source = payload.get("source")
        return cls(
            name=payload.get("name", ""),
            full_name=payload.get("full_name", f"{owner}/{payload.get('name', '')}"),
            owner=owner,
            is_fork=bool(payload.get("fork", False)),
            ssh_url=payload.get("ssh_url", ""),
            clone_url=payload.get("clone_url", ""),
            parent=cls.from_payload(parent) if parent else None,
            source=cls.from_payload(source) if source else None,
        )

    def url(self, use_https: bool = False) -> str:
        return self.clone_url if use_https else self.ssh_url


@dataclass(frozen=True)
class RemoteLink:
    name: str
    url: str


@dataclass(frozen=True)
class ItemResult:
    """What happened to one repository in a batch."""

    repo: RepoInfo
    error: GhtreeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RunOptions:
    """Resolved, immutable options for one run."""

    username: str
    clone_base_dir: Path
    token: str
    verbose: bool = False
    omit_username: bool = False
    use_https: bool = False
    exclude: frozenset[Category] = field(default_factory=frozenset)
    api_base: str = API_BASE
