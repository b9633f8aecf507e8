from __future__ import annotations

import os
import pwd
from pathlib import Path
from typing import Optional

from .model import ExecutionContext
from .plans import PACKAGE_MANAGERS

DIST_ROOT = os.environ.get("DIST_ROOT")
DISTRO = os.environ.get("DEVSETUP_DISTRO")
HTTP_TIMEOUT = os.environ.get("DEVSETUP_HTTP_TIMEOUT", "30")
COMMAND_TIMEOUT = os.environ.get("DEVSETUP_COMMAND_TIMEOUT")
GITHUB_API = os.environ.get("DEVSETUP_GITHUB_API", "https://api.github.com")
GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN")
PIP = os.environ.get("DEVSETUP_PIP", "pip")


def _current_user() -> str:
    return os.environ.get("USER") or pwd.getpwuid(os.geteuid()).pw_name


def _seconds(name: str, raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def default_dist_root(distro: str) -> Path:
    """dist/<Distro> under the working directory, the layout of the dotfiles repo."""
    return Path.cwd() / "dist" / distro.capitalize()


def build_context(
    distro: str,
    *,
    dist_root: Optional[str | Path] = None,
    home: Optional[str | Path] = None,
    user: Optional[str] = None,
    use_sudo: Optional[bool] = None,
) -> ExecutionContext:
    """
    Build the read-only context for one run.

    Explicit arguments (CLI options) win over the environment.

    Raises:
        ValueError: For an unknown distro or a malformed timeout setting
    """
    if distro not in PACKAGE_MANAGERS:
        raise ValueError(f"Unknown distro '{distro}'. Use one of: {', '.join(PACKAGE_MANAGERS)}")

    http_timeout = _seconds("DEVSETUP_HTTP_TIMEOUT", HTTP_TIMEOUT) or 30.0
    command_timeout = _seconds("DEVSETUP_COMMAND_TIMEOUT", COMMAND_TIMEOUT)

    root = dist_root or DIST_ROOT
    root_p = Path(root).expanduser().resolve() if root else default_dist_root(distro)
    home_p = Path(home).expanduser() if home else Path.home()

    return ExecutionContext(
        dist_root=root_p,
        home=home_p.resolve(),
        user=user or _current_user(),
        distro=distro,
        package_manager=PACKAGE_MANAGERS[distro],
        use_sudo=(os.geteuid() != 0) if use_sudo is None else use_sudo,
        http_timeout=http_timeout,
        command_timeout=command_timeout,
        github_api=GITHUB_API,
        github_token=GITHUB_TOKEN,
        pip=PIP,
    )
