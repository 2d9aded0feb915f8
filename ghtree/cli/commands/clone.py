"""CLI for cloning every repository of a user into a categorised tree."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import List

import typer

from ...config.settings import get_settings
from ...core.errors import ConfigError
from ...core.types import Category, RunOptions
from ...services.clone import clone_user


def _package_version() -> str:
    try:
        return metadata.version("ghtree")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(_package_version())
        raise typer.Exit()


def build_options(
    username: str,
    target: str | None,
    token: str | None,
    verbose: bool,
    omit_username: bool,
    https: bool,
    exclude: list[Category],
) -> RunOptions:
    """Merge CLI flags over settings. Raises ConfigError when no token is available."""
    s = get_settings()
    _token = token if token is not None else s.github_token
    if not _token:
        raise ConfigError(
            "GitHub authentication token missing\n"
            "Please set it via GITHUB_TOKEN environment variable or --token option"
        )
    if not username.strip():
        raise ConfigError("Seem to be missing <username>")
    return RunOptions(
        username=username,
        clone_base_dir=Path(target or s.default_dest).resolve(),
        token=_token,
        verbose=verbose,
        omit_username=omit_username,
        use_https=https,
        exclude=frozenset(exclude),
        api_base=s.github_api_url,
    )


def clone(
    username: str = typer.Argument(..., help="GitHub username"),
    target: str | None = typer.Argument(None, help="Target path, defaults to current directory"),
    token: str | None = typer.Option(None, "--token", "-t", help="GitHub API personal authentication token"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output, prints each repository as it is processed"),
    omit_username: bool = typer.Option(
        False, "--omit-username", "-O", help="Omit the username directory when creating directory structure"
    ),
    https: bool = typer.Option(False, "--https", help="Clone over HTTPS using the token instead of SSH"),
    exclude: List[Category] = typer.Option(  # noqa: B008
        None, "--exclude", "-x", case_sensitive=False, help="Skip a category of repositories (repeatable)"
    ),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True, help="Version number"
    ),
):
    """Clone all repositories of a GitHub user, ordered by mine/fork/contributing."""
    try:
        opts = build_options(username, target, token, verbose, omit_username, https, list(exclude or []))
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    try:
        clone_user(opts)
    except OSError as e:
        typer.echo(f'Cannot prepare "{opts.clone_base_dir}": {e}', err=True)
        raise typer.Exit(code=1)
