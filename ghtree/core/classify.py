"""Decide where a repository lives in the local tree."""

from __future__ import annotations

from pathlib import Path

from .types import Category, RepoInfo


def classify(repo: RepoInfo, acting_user: str) -> Category:
    # Fork status wins over ownership: the user's own forks file under "fork".
    if repo.is_fork:
        return Category.fork
    if repo.owner == acting_user:
        return Category.mine
    return Category.contributing


def clone_target(base: Path, username: str, category: Category, omit_username: bool = False) -> Path:
    """<base>/[<username>/]<category>"""
    if omit_username:
        return base / category.value
    return base / username / category.value
