# actions/packages.py
from __future__ import annotations

from pathlib import Path

from ..errors import PackageInstallFailed
from ..model import ExecutionContext, InstallPackage, PipInstall, RefreshPackages
from .shell import run_command

# Exactly the two supported targets; no name mapping between them.
INSTALL_COMMANDS = {
    "apt": ["apt", "install", "-y"],
    "dnf": ["dnf", "install", "-y"],
}

REFRESH_COMMANDS = {
    "apt": ["apt", "update"],
    "dnf": ["dnf", "makecache"],
}


def _command(table: dict, ctx: ExecutionContext) -> list[str]:
    try:
        return list(table[ctx.package_manager])
    except KeyError:
        raise PackageInstallFailed(
            message=f"unsupported package manager: {ctx.package_manager}",
            details={"supported": ", ".join(sorted(table))},
        )


def install(action: InstallPackage, ctx: ExecutionContext, scratch: Path) -> None:
    cmd = _command(INSTALL_COMMANDS, ctx) + [action.name]
    run_command(cmd, ctx, sudo=True, error=PackageInstallFailed)


def refresh(action: RefreshPackages, ctx: ExecutionContext, scratch: Path) -> None:
    run_command(_command(REFRESH_COMMANDS, ctx), ctx, sudo=True, error=PackageInstallFailed)


def pip_install(action: PipInstall, ctx: ExecutionContext, scratch: Path) -> None:
    run_command([ctx.pip, "install", action.name, "--user"], ctx, error=PackageInstallFailed)
