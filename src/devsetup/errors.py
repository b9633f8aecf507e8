# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional


@dataclass(eq=False)
class ProvisionError(Exception):
    """
    Structured provisioning error with enough context for:
      - a labelled failure line in the CLI
      - details in --debug mode
      - assertions in tests without parsing strings
    """
    message: str
    details: dict = field(default_factory=dict)
    step: Optional[str] = None
    kind: ClassVar[str] = "ProvisionError"

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        if self.step:
            lines.append(f"step={self.step}")
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class PackageInstallFailed(ProvisionError):
    kind: ClassVar[str] = "PackageInstallFailed"


class ConfigCopyFailed(ProvisionError):
    kind: ClassVar[str] = "ConfigCopyFailed"


class ReleaseResolutionFailed(ProvisionError):
    kind: ClassVar[str] = "ReleaseResolutionFailed"


class DownloadFailed(ProvisionError):
    kind: ClassVar[str] = "DownloadFailed"


class ExtractFailed(ProvisionError):
    kind: ClassVar[str] = "ExtractFailed"


class LinkFailed(ProvisionError):
    kind: ClassVar[str] = "LinkFailed"


class CloneFailed(ProvisionError):
    kind: ClassVar[str] = "CloneFailed"


class CommandFailed(ProvisionError):
    kind: ClassVar[str] = "CommandFailed"


class UnknownStepError(ProvisionError):
    """Raised before a run when the selector names no step of the plan."""
    kind: ClassVar[str] = "UnknownStep"


# Hints shown next to a failure when the missing executable is known.
TOOL_HINTS = {
    "apt": "This plan targets Ubuntu/Debian. Use --distro fedora on dnf systems.",
    "dnf": "This plan targets Fedora. Use --distro ubuntu on apt systems.",
    "sudo": "Install sudo or run devsetup as root.",
    "git": "Install git (e.g., sudo apt install git).",
    "pip": "Install pip (python3-pip) or set DEVSETUP_PIP.",
    "powerline-daemon": "Install the powerline package first.",
}
