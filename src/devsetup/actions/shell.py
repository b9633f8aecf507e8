# actions/shell.py
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Sequence, Type

from ..errors import TOOL_HINTS, CommandFailed, ProvisionError
from ..model import ExecutionContext, RunCommand

# Keep the tail of command output in failure details, not the whole log.
OUTPUT_TAIL = 4000


def _with_sudo(argv: Sequence[str], ctx: ExecutionContext, sudo: bool) -> List[str]:
    if sudo and ctx.use_sudo:
        return ["sudo", *argv]
    return list(argv)


def run_command(
    argv: Sequence[str],
    ctx: ExecutionContext,
    *,
    sudo: bool = False,
    cwd: Path | None = None,
    error: Type[ProvisionError] = CommandFailed,
) -> subprocess.CompletedProcess:
    """
    Run a command once and raise `error` on any failure.

    This is the single place where provisioning actions spawn processes:
    sudo prefixing, timeouts and output capture all live here.
    """
    cmd = _with_sudo(argv, ctx, sudo)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            text=True,
            capture_output=True,
            timeout=ctx.command_timeout,
        )
    except FileNotFoundError:
        tool = cmd[0]
        raise error(
            message=f"{tool} not found",
            details={"cmd": " ".join(cmd), "hint": TOOL_HINTS.get(tool, f"Install {tool} or fix PATH.")},
        )
    except subprocess.TimeoutExpired:
        raise error(
            message=f"command timed out after {ctx.command_timeout}s",
            details={"cmd": " ".join(cmd)},
        )

    if proc.returncode != 0:
        details = {"cmd": " ".join(cmd), "exit_code": proc.returncode}
        if proc.stdout:
            details["stdout"] = proc.stdout[-OUTPUT_TAIL:]
        if proc.stderr:
            details["stderr"] = proc.stderr[-OUTPUT_TAIL:]
        raise error(message=f"{cmd[0]} exited with {proc.returncode}", details=details)

    return proc


def run(action: RunCommand, ctx: ExecutionContext, scratch: Path) -> None:
    run_command(action.argv, ctx)
