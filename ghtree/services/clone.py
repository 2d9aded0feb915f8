"""Service: clone every repository of a user into a mine/fork/contributing tree."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import typer

from ..core.classify import classify, clone_target
from ..core.constants import (
    ORIGINAL_REMOTE,
    REPOS_PER_PAGE,
    STEPS_PER_REPO,
    UPSTREAM_REMOTE,
)
from ..core.errors import CloneError, LinkFetchError, ListError, RemoteAddError
from ..core.git_client import GitClient
from ..core.github_client import GitHubClient, GitHubError
from ..core.types import CloneStatus, ItemResult, RemoteLink, RepoInfo, RunOptions


class BatchProgress:
    """Completed steps out of a total fixed when the batch starts."""

    def __init__(self, total: int, bar: Any = None) -> None:
        self.total = total
        self.done = 0
        self._bar = bar

    def tick(self, steps: int = 1) -> None:
        if steps <= 0:
            return
        self.done += steps
        if self._bar is not None:
            self._bar.update(steps)


def _say(opts: RunOptions, msg: str) -> None:
    if opts.verbose:
        typer.echo(msg)


def _report(msg: str) -> None:
    typer.secho(msg, err=True, fg=typer.colors.RED)


def fetch_repositories(github: GitHubClient, opts: RunOptions) -> list[RepoInfo]:
    """List the user's repositories (first page only). Raises ListError."""
    _say(opts, f'Fetching information about all the user repositories for "{opts.username}"')
    try:
        repos = github.list_user_repos(opts.username)
    except GitHubError as e:
        msg = f"Fetching repository list failed: {e}"
        if e.body:
            msg += f"\n{e.body}"
        raise ListError(msg) from e
    if len(repos) >= REPOS_PER_PAGE:
        _say(opts, f"Received a full page of {REPOS_PER_PAGE} repositories; any beyond that are not listed.")
    return repos


def fork_remotes(detail: RepoInfo, use_https: bool = False) -> list[RemoteLink]:
    """upstream -> parent, original -> root of the fork network. In that order."""
    if detail.parent is None or detail.source is None:
        raise LinkFetchError(f"No fork lineage (parent/source) for {detail.full_name}")
    return [
        RemoteLink(UPSTREAM_REMOTE, detail.parent.url(use_https)),
        RemoteLink(ORIGINAL_REMOTE, detail.source.url(use_https)),
    ]


def link_fork(
    local_path: Path,
    owner: str,
    name: str,
    *,
    opts: RunOptions,
    github: GitHubClient,
    git: GitClient,
) -> RepoInfo:
    """Register ``upstream`` and ``original`` remotes in a cloned fork.

    Raises LinkFetchError when the lineage cannot be fetched and RemoteAddError
    when a registration fails; a failed ``upstream`` means ``original`` is
    never attempted.
    """
    try:
        detail = github.get_repo(owner, name)
    except GitHubError as e:
        msg = f"Getting fork details failed for {e.url}: {e}"
        if e.body:
            msg += f"\n{e.body}"
        raise LinkFetchError(msg) from e
    _say(opts, f" Received fork data for {owner}/{name}")

    for link in fork_remotes(detail, opts.use_https):
        _say(opts, f" Adding remote information, {link.name} ==> {link.url}")
        outcome = git.add_remote(local_path, link)
        if not outcome.ok:
            raise RemoteAddError(f'Adding remote "{link.name}" failed for {link.url} in {local_path}: {outcome.detail}')
    return detail


def clone_one(
    repo: RepoInfo,
    *,
    opts: RunOptions,
    github: GitHubClient,
    git: GitClient,
    progress: BatchProgress,
) -> RepoInfo:
    """Clone one repository into its category folder and link it if it is a fork.

    Always advances ``progress`` by exactly STEPS_PER_REPO, whatever fails.
    """
    category = classify(repo, opts.username)
    target = clone_target(opts.clone_base_dir, opts.username, category, opts.omit_username)
    url = repo.url(opts.use_https)
    fetch_url = url
    if opts.use_https and opts.token:
        fetch_url = GitHubClient.inject_token_into_https(url, opts.token)

    ticks = 0
    try:
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CloneError(f"Creating {target} failed for {url}: {e}") from e

        _say(opts, f"Cloning repository {url}")
        outcome = git.clone(fetch_url, target)
        progress.tick()
        ticks += 1

        if not outcome.ok:
            raise CloneError(f"Cloning failed for {url}: {outcome.detail}")
        if outcome.status is CloneStatus.ALREADY_EXISTS:
            _say(opts, f" {target / repo.name} already exists, skipping clone")

        if repo.is_fork:
            return link_fork(target / repo.name, repo.owner, repo.name, opts=opts, github=github, git=git)
        return repo
    finally:
        progress.tick(STEPS_PER_REPO - ticks)


def run_batch(
    repos: Sequence[RepoInfo],
    *,
    opts: RunOptions,
    github: GitHubClient,
    git: GitClient,
    bar: Any = None,
) -> list[ItemResult]:
    """Process ``repos`` one at a time, in order. Never fails as a whole."""
    progress = BatchProgress(len(repos) * STEPS_PER_REPO, bar)
    results: list[ItemResult] = []
    for repo in repos:
        try:
            clone_one(repo, opts=opts, github=github, git=git, progress=progress)
        except (CloneError, LinkFetchError, RemoteAddError) as e:
            _report(f"[fail] {repo.full_name}: {e}")
            results.append(ItemResult(repo, e))
        else:
            results.append(ItemResult(repo))
    return results


def clone_user(
    opts: RunOptions,
    github: GitHubClient | None = None,
    git: GitClient | None = None,
) -> list[ItemResult]:
    """List, filter and clone all repositories of ``opts.username``."""
    github = github or GitHubClient(opts.token, api_base=opts.api_base)
    git = git or GitClient()

    typer.echo(f'Cloning to a structure under "{opts.clone_base_dir}"')
    opts.clone_base_dir.mkdir(parents=True, exist_ok=True)

    try:
        repos = fetch_repositories(github, opts)
    except ListError as e:
        # nothing to clone, but not fatal
        _report(f"[fail] {e}")
        repos = []

    if opts.exclude:
        kept = [r for r in repos if classify(r, opts.username) not in opts.exclude]
        _say(opts, f"Skipping {len(repos) - len(kept)} repositories in excluded categories")
        repos = kept

    if not repos:
        typer.echo("No repositories to clone.")
        typer.echo("All done, thank you!")
        return []

    with typer.progressbar(
        length=len(repos) * STEPS_PER_REPO,
        label=f"Processing {len(repos)} repositories",
    ) as bar:
        results = run_batch(repos, opts=opts, github=github, git=git, bar=bar)

    failed = sum(1 for r in results if not r.ok)
    if failed:
        typer.secho(f"{failed}/{len(results)} repositories failed.", err=True)
    typer.echo("All done, thank you!")
    return results
