# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Dict, Optional, Tuple, Union

from .errors import ProvisionError


# ---------------------------------------------------------------------
# Execution context
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class ExecutionContext:
    """
    Read-only state shared by every step of a run.

    Built once by config.build_context() and never mutated afterwards.
    """
    dist_root: Path
    home: Path
    user: str
    distro: str
    package_manager: str = "apt"   # "apt" | "dnf"
    use_sudo: bool = True
    http_timeout: float = 30.0
    command_timeout: Optional[float] = None
    github_api: str = "https://api.github.com"
    github_token: Optional[str] = None
    pip: str = "pip"

    def resolve(self, path: Union[str, Path]) -> Path:
        """
        Map a plan path to a concrete one:
          "~/x"      -> home/x
          "/abs/x"   -> /abs/x
          "rel/x"    -> dist_root/rel/x
        """
        p = str(path)
        if p == "~":
            return self.home
        if p.startswith("~/"):
            return self.home / p[2:]
        if Path(p).is_absolute():
            return Path(p)
        return self.dist_root / p


# ---------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Action:
    """Base class for a single side-effecting operation."""
    kind: ClassVar[str] = "action"

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class InstallPackage(Action):
    name: str
    kind: ClassVar[str] = "install"

    def describe(self) -> str:
        return f"install {self.name}"


@dataclass(frozen=True)
class RefreshPackages(Action):
    kind: ClassVar[str] = "refresh"

    def describe(self) -> str:
        return "refresh package index"


@dataclass(frozen=True)
class PipInstall(Action):
    name: str
    kind: ClassVar[str] = "pip"

    def describe(self) -> str:
        return f"pip install --user {self.name}"


@dataclass(frozen=True)
class CopyConfig(Action):
    source: str
    dest: str
    into: bool = False   # copy to dest/<basename(source)> instead of dest
    kind: ClassVar[str] = "copy"

    def describe(self) -> str:
        suffix = "/" if self.into else ""
        return f"copy {self.source} -> {self.dest}{suffix}"


@dataclass(frozen=True)
class CopySystemConfig(Action):
    candidates: Tuple[str, ...]
    dest: str
    kind: ClassVar[str] = "copy-system"

    def describe(self) -> str:
        return f"copy system config {' | '.join(self.candidates)} -> {self.dest}"


@dataclass(frozen=True)
class AppendSnippet(Action):
    source: str
    dest: str
    marker: str
    placeholder: Optional[str] = None
    candidates: Tuple[str, ...] = ()
    kind: ClassVar[str] = "append"

    def describe(self) -> str:
        return f"append {self.source} -> {self.dest} (unless '{self.marker}' present)"


@dataclass(frozen=True)
class MakeDirs(Action):
    path: str
    kind: ClassVar[str] = "mkdir"

    def describe(self) -> str:
        return f"mkdir -p {self.path}"


@dataclass(frozen=True)
class RemovePath(Action):
    path: str
    kind: ClassVar[str] = "remove"

    def describe(self) -> str:
        return f"remove {self.path}"


@dataclass(frozen=True)
class CloneRepo(Action):
    url: str
    dest: str
    kind: ClassVar[str] = "clone"

    def describe(self) -> str:
        return f"git clone {self.url} {self.dest}"


@dataclass(frozen=True)
class FetchRelease(Action):
    repo: str             # "owner/name"
    asset_pattern: str    # regex searched in the asset file name
    save_as: str          # file name inside the step scratch dir
    kind: ClassVar[str] = "fetch"

    def describe(self) -> str:
        return f"fetch latest {self.repo} asset /{self.asset_pattern}/ as {self.save_as}"


@dataclass(frozen=True)
class ExtractArchive(Action):
    path: str
    dest: str
    strip_components: int = 0
    kind: ClassVar[str] = "extract"

    def describe(self) -> str:
        strip = f" (strip {self.strip_components})" if self.strip_components else ""
        return f"extract {self.path} -> {self.dest}{strip}"


@dataclass(frozen=True)
class LinkBinary(Action):
    target: str      # may be a glob; first sorted match wins
    link_path: str
    kind: ClassVar[str] = "link"

    def describe(self) -> str:
        return f"link {self.link_path} -> {self.target}"


@dataclass(frozen=True)
class RunCommand(Action):
    argv: Tuple[str, ...]
    kind: ClassVar[str] = "command"

    def describe(self) -> str:
        return " ".join(self.argv)


# ---------------------------------------------------------------------
# Steps and results
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Step:
    """A named, ordered list of actions."""
    name: str
    actions: Tuple[Action, ...]


SUCCEEDED = "succeeded"
FAILED = "failed"


@dataclass
class StepResult:
    name: str
    status: str  # "succeeded" | "failed"
    reason: Optional[str] = None
    error: Optional[ProvisionError] = None

    @property
    def ok(self) -> bool:
        return self.status == SUCCEEDED


@dataclass
class PipelineResult:
    """
    Outcome of a pipeline run.

    `results` only holds steps that actually ran, in execution order.
    """
    status: str  # "succeeded" | "failed"
    results: Dict[str, StepResult] = field(default_factory=dict)
    failed_step: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == SUCCEEDED

    @property
    def error(self) -> Optional[ProvisionError]:
        if self.failed_step is None:
            return None
        return self.results[self.failed_step].error
