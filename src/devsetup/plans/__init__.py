"""Built-in plans, one per supported distribution."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..model import Step
from . import fedora, ubuntu

PLANS: Dict[str, Callable[[], List[Step]]] = {
    "ubuntu": ubuntu.plan,
    "fedora": fedora.plan,
}

PACKAGE_MANAGERS: Dict[str, str] = {
    "ubuntu": ubuntu.PACKAGE_MANAGER,
    "fedora": fedora.PACKAGE_MANAGER,
}

OS_RELEASE = Path("/etc/os-release")


def get_plan(distro: str) -> List[Step]:
    try:
        return PLANS[distro]()
    except KeyError:
        raise ValueError(f"Unknown distro '{distro}'. Use one of: {', '.join(PLANS)}") from None


def _parse_os_release(text: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        out[key] = value.strip().strip('"').strip("'")
    return out


def detect_distro(os_release: Path = OS_RELEASE) -> Optional[str]:
    """
    Map /etc/os-release to a plan name via ID, then ID_LIKE
    (so Debian derivatives get the apt plan). None when unsupported.
    """
    try:
        fields = _parse_os_release(os_release.read_text(encoding="utf-8"))
    except OSError:
        return None

    ids = [fields.get("ID", "")] + fields.get("ID_LIKE", "").split()
    for ident in ids:
        ident = ident.lower()
        if ident in PLANS:
            return ident
        if ident == "debian":
            return "ubuntu"
        if ident in ("rhel", "centos"):
            return "fedora"
    return None


__all__ = ["PLANS", "PACKAGE_MANAGERS", "get_plan", "detect_distro"]
