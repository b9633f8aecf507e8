"""Executors for each action kind, keyed by action type."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Type

from ..errors import (
    CloneFailed,
    CommandFailed,
    ConfigCopyFailed,
    ExtractFailed,
    LinkFailed,
    PackageInstallFailed,
    ProvisionError,
    ReleaseResolutionFailed,
)
from ..model import (
    Action,
    AppendSnippet,
    CloneRepo,
    CopyConfig,
    CopySystemConfig,
    ExecutionContext,
    ExtractArchive,
    FetchRelease,
    InstallPackage,
    LinkBinary,
    MakeDirs,
    PipInstall,
    RefreshPackages,
    RemovePath,
    RunCommand,
)
from . import archive, files, packages, releases, shell, vcs

Executor = Callable[[Action, ExecutionContext, Path], object]

EXECUTORS: Dict[Type[Action], Executor] = {
    InstallPackage: packages.install,
    RefreshPackages: packages.refresh,
    PipInstall: packages.pip_install,
    CopyConfig: files.copy_config,
    CopySystemConfig: files.copy_system_config,
    AppendSnippet: files.append_snippet,
    MakeDirs: files.make_dirs,
    RemovePath: files.remove_path,
    LinkBinary: files.link_binary,
    CloneRepo: vcs.clone,
    FetchRelease: releases.fetch,
    ExtractArchive: archive.extract,
    RunCommand: shell.run,
}

# Error raised when an executor fails with a plain OSError or ValueError.
FAILURE_KINDS: Dict[Type[Action], Type[ProvisionError]] = {
    InstallPackage: PackageInstallFailed,
    RefreshPackages: PackageInstallFailed,
    PipInstall: PackageInstallFailed,
    CopyConfig: ConfigCopyFailed,
    CopySystemConfig: ConfigCopyFailed,
    AppendSnippet: ConfigCopyFailed,
    MakeDirs: ConfigCopyFailed,
    RemovePath: ConfigCopyFailed,
    LinkBinary: LinkFailed,
    CloneRepo: CloneFailed,
    FetchRelease: ReleaseResolutionFailed,
    ExtractArchive: ExtractFailed,
    RunCommand: CommandFailed,
}


def executor_for(action: Action) -> Executor:
    try:
        return EXECUTORS[type(action)]
    except KeyError:
        raise TypeError(f"No executor registered for action {type(action).__name__}") from None


def failure_kind(action: Action) -> Type[ProvisionError]:
    return FAILURE_KINDS.get(type(action), ProvisionError)


__all__ = ["EXECUTORS", "Executor", "FAILURE_KINDS", "executor_for", "failure_kind"]
