"""Small helpers for running the two Git commands the clone pipeline needs."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .constants import CLONE_EXISTS_MARKER, REMOTE_EXISTS_MARKER
from .types import CloneOutcome, CloneStatus, RemoteLink, RemoteOutcome, RemoteStatus


class GitClient:
    # ---------- process helpers ----------
    @staticmethod
    def _run_out(cmd: list[str], cwd: str | Path) -> tuple[bool, str]:
        """Run ``cmd`` in ``cwd``; return (success, combined stdout/stderr)."""
        try:
            proc = subprocess.run(
                cmd,
                cwd=cwd,
                env=os.environ.copy(),
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return False, f"{e}"
        out = "\n".join(s for s in (proc.stdout.strip(), proc.stderr.strip()) if s)
        return proc.returncode == 0, out

    # ---------- clone ----------
    def clone(self, url: str, cwd: str | Path) -> CloneOutcome:
        """``git clone <url>`` inside ``cwd``; an existing non-empty copy is not a failure."""
        ok, out = self._run_out(["git", "-c", "credential.helper=", "clone", url], cwd=cwd)
        if ok:
            return CloneOutcome(CloneStatus.CLONED, out)
        if CLONE_EXISTS_MARKER in out:
            return CloneOutcome(CloneStatus.ALREADY_EXISTS, out)
        return CloneOutcome(CloneStatus.FAILED, out)

    # ---------- remotes ----------
    def add_remote(self, repo_dir: str | Path, link: RemoteLink) -> RemoteOutcome:
        ok, out = self._run_out(["git", "remote", "add", link.name, link.url], cwd=repo_dir)
        if ok:
            return RemoteOutcome(RemoteStatus.ADDED, out)
        if REMOTE_EXISTS_MARKER.format(name=link.name) in out:
            return RemoteOutcome(RemoteStatus.ALREADY_EXISTS, out)
        return RemoteOutcome(RemoteStatus.FAILED, out)
