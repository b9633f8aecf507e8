# git.py
# Small, focused wrapper around the Git CLI.
# Provisioning only ever clones; everything goes through _git() so the rest
# of the codebase never calls subprocess("git ...") directly.

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional


def _git(args: List[str], cwd: Optional[str] = None, timeout: Optional[float] = None) -> str:
    """
    Execute a git command and return its stdout as a clean string.

    Raises subprocess.CalledProcessError on a non-zero exit and
    FileNotFoundError when git is not installed; callers translate those
    into provisioning errors.
    """
    out = subprocess.run(
        ["git", *args],
        cwd=cwd,
        text=True,
        capture_output=True,
        check=True,
        timeout=timeout,
    )
    return out.stdout.strip()


def clone(url: str, dest: Path, *, depth: Optional[int] = None, timeout: Optional[float] = None) -> Path:
    """
    Clone `url` into `dest`.

    `dest` must not exist or must be empty (git's own rule); plans remove the
    previous checkout first.
    """
    args = ["clone"]
    if depth:
        args += ["--depth", str(depth)]
    args += [url, str(dest)]
    _git(args, timeout=timeout)
    return dest


def head_sha(repo: Path) -> str:
    """Full SHA of HEAD in `repo`, used to report what was cloned."""
    return _git(["rev-parse", "HEAD"], cwd=str(repo))
