from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ghtree.core.types import CloneOutcome, CloneStatus, RemoteOutcome, RemoteStatus, RepoInfo, RunOptions


def make_repo(name="x", owner="u", fork=False, parent=None, source=None) -> RepoInfo:
    return RepoInfo(
        name=name,
        full_name=f"{owner}/{name}",
        owner=owner,
        is_fork=fork,
        ssh_url=f"git@github.com:{owner}/{name}.git",
        clone_url=f"https://github.com/{owner}/{name}.git",
        parent=parent,
        source=source,
    )


class FakeGit:
    """Records git invocations; outcomes are queued per command."""

    def __init__(self):
        self.clones: list[tuple[str, Path]] = []
        self.remotes: list[tuple[Path, str, str]] = []
        self.clone_outcomes: list[CloneOutcome] = []
        self.remote_outcomes: list[RemoteOutcome] = []

    def clone(self, url, cwd):
        self.clones.append((url, Path(cwd)))
        if self.clone_outcomes:
            return self.clone_outcomes.pop(0)
        return CloneOutcome(CloneStatus.CLONED)

    def add_remote(self, repo_dir, link):
        self.remotes.append((Path(repo_dir), link.name, link.url))
        if self.remote_outcomes:
            return self.remote_outcomes.pop(0)
        return RemoteOutcome(RemoteStatus.ADDED)


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def fake_github():
    github = MagicMock()
    github.list_user_repos.return_value = []

    def _detail(owner, name):
        parent = make_repo(name=name, owner="parent-owner")
        source = make_repo(name=name, owner="source-owner")
        return make_repo(name=name, owner=owner, fork=True, parent=parent, source=source)

    github.get_repo.side_effect = _detail
    return github


@pytest.fixture
def opts(tmp_path):
    return RunOptions(username="u", clone_base_dir=tmp_path, token="dummy")
