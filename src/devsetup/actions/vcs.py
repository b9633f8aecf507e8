# actions/vcs.py
from __future__ import annotations

import subprocess
from pathlib import Path

from ..errors import TOOL_HINTS, CloneFailed
from ..model import CloneRepo, ExecutionContext
from ..ui.console import get_console
from ..vcs import git


def clone(action: CloneRepo, ctx: ExecutionContext, scratch: Path) -> None:
    dest = ctx.resolve(action.dest)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        git.clone(action.url, dest, timeout=ctx.command_timeout)
        sha = git.head_sha(dest)
    except FileNotFoundError as e:
        raise CloneFailed(message="git not found", details={"hint": TOOL_HINTS["git"]}) from e
    except subprocess.CalledProcessError as e:
        raise CloneFailed(
            message=f"git clone {action.url} failed (exit={e.returncode})",
            details={"stderr": (e.stderr or "")[-4000:], "dest": str(dest)},
        ) from e
    except subprocess.TimeoutExpired as e:
        raise CloneFailed(message=f"git clone timed out after {e.timeout}s", details={"url": action.url}) from e
    except OSError as e:
        raise CloneFailed(message=f"cannot prepare {dest}: {e}", details={"url": action.url}) from e

    get_console().print_debug(f"cloned {action.url} at {sha[:12]}")
