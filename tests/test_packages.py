"""Package manager, pip and command actions against fake executables."""

from __future__ import annotations

from dataclasses import replace

import pytest

from devsetup.actions import packages, shell
from devsetup.errors import CommandFailed, PackageInstallFailed
from devsetup.model import InstallPackage, PipInstall, RefreshPackages, RunCommand


def test_install_uses_apt(ctx, scratch, fake_bin):
    packages.install(InstallPackage("vim"), ctx, scratch)

    assert fake_bin.calls() == ["apt install -y vim"]


def test_install_uses_dnf_on_fedora(ctx, scratch, fake_bin):
    packages.install(InstallPackage("powerline-fonts"), replace(ctx, package_manager="dnf"), scratch)

    assert fake_bin.calls() == ["dnf install -y powerline-fonts"]


def test_install_failure_keeps_exit_code_and_output(ctx, scratch, fake_bin):
    fake_bin.fail_on("gdb")

    with pytest.raises(PackageInstallFailed) as exc:
        packages.install(InstallPackage("gdb"), ctx, scratch)

    assert exc.value.details["exit_code"] == 100
    assert "Unable to locate package gdb" in exc.value.details["stderr"]


def test_refresh_and_pip(ctx, scratch, fake_bin):
    packages.refresh(RefreshPackages(), ctx, scratch)
    packages.pip_install(PipInstall("pygments"), ctx, scratch)

    assert fake_bin.calls() == ["apt update", "pip install pygments --user"]


def test_unsupported_package_manager(ctx, scratch):
    with pytest.raises(PackageInstallFailed, match="unsupported package manager"):
        packages.install(InstallPackage("vim"), replace(ctx, package_manager="pacman"), scratch)


def test_sudo_prefix_only_when_enabled(ctx):
    assert shell._with_sudo(["apt", "update"], ctx, sudo=True) == ["apt", "update"]
    assert shell._with_sudo(["apt", "update"], replace(ctx, use_sudo=True), sudo=True) == [
        "sudo", "apt", "update",
    ]
    assert shell._with_sudo(["pip"], replace(ctx, use_sudo=True), sudo=False) == ["pip"]


def test_missing_executable_gets_a_hint(ctx, scratch):
    with pytest.raises(CommandFailed) as exc:
        shell.run(RunCommand(("definitely-not-a-real-tool-xyz",)), ctx, scratch)

    assert "not found" in exc.value.message
    assert "hint" in exc.value.details


def test_command_timeout(ctx, scratch, fake_bin):
    fake_bin.tool("slow", "#!/bin/sh\nexec sleep 5\n")

    with pytest.raises(CommandFailed, match="timed out"):
        shell.run(RunCommand(("slow",)), replace(ctx, command_timeout=0.2), scratch)
