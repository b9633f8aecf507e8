# dsl.py
from __future__ import annotations

from typing import List, Optional, Sequence

from .model import (
    Action,
    AppendSnippet,
    CloneRepo,
    CopyConfig,
    CopySystemConfig,
    ExtractArchive,
    FetchRelease,
    InstallPackage,
    LinkBinary,
    MakeDirs,
    PipInstall,
    RefreshPackages,
    RemovePath,
    RunCommand,
    Step,
)


# ---------------------------------------------------------------------
# Action helpers
# ---------------------------------------------------------------------

def install(*names: str) -> List[Action]:
    """One InstallPackage per name, in order (each is its own attempt)."""
    return [InstallPackage(n) for n in names]


def refresh() -> RefreshPackages:
    return RefreshPackages()


def pip(name: str) -> PipInstall:
    return PipInstall(name)


def copy(source: str, dest: str) -> CopyConfig:
    return CopyConfig(source, dest)


def copy_into(source: str, directory: str) -> CopyConfig:
    return CopyConfig(source, directory, into=True)


def copy_system(*candidates: str, dest: str) -> CopySystemConfig:
    return CopySystemConfig(tuple(candidates), dest)


def append_once(
    source: str,
    dest: str,
    *,
    marker: str,
    placeholder: Optional[str] = None,
    candidates: Sequence[str] = (),
) -> AppendSnippet:
    return AppendSnippet(source, dest, marker, placeholder, tuple(candidates))


def mkdir(path: str) -> MakeDirs:
    return MakeDirs(path)


def remove(path: str) -> RemovePath:
    return RemovePath(path)


def clone(url: str, dest: str) -> CloneRepo:
    return CloneRepo(url, dest)


def fetch(repo: str, pattern: str, *, save_as: str) -> FetchRelease:
    return FetchRelease(repo, pattern, save_as)


def extract(path: str, dest: str, *, strip: int = 0) -> ExtractArchive:
    return ExtractArchive(path, dest, strip)


def link(target: str, link_path: str) -> LinkBinary:
    return LinkBinary(target, link_path)


def sh(*argv: str) -> RunCommand:
    return RunCommand(tuple(argv))


# ---------------------------------------------------------------------
# Step helper
# ---------------------------------------------------------------------

def step(name: str, *actions: Action | Sequence[Action]) -> Step:
    """
    Build a step. Accepts actions and lists of actions, so
    step("vim", install("vim"), copy(...)) reads in execution order.
    """
    flat: List[Action] = []
    for a in actions:
        if isinstance(a, Action):
            flat.append(a)
        else:
            flat.extend(a)

    if not flat:
        raise ValueError(f"step({name!r}) must have at least one action")
    return Step(name=name, actions=tuple(flat))


def sequence(*steps: Step) -> List[Step]:
    """
    Plan definition helper. Named so a plan file can still define its own
    plan() function:

        from devsetup.dsl import sequence, step, install

        def plan():
            return sequence(step("vim", install("vim")))
    """
    return list(steps)
