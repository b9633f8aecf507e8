"""Fedora (dnf) plan."""

from __future__ import annotations

from typing import List

from ..dsl import append_once, copy_into, copy_system, install, mkdir, pip, sequence, sh, step
from ..model import Step
from . import common

PACKAGE_MANAGER = "dnf"

POWERLINE_LOCAL = "~/.config/powerline"
POWERLINE_GLOBAL = (
    "/etc/xdg/powerline/config_files",
    "/etc/xdg/powerline",
)


def powerline() -> Step:
    return step(
        "powerline",
        install("powerline", "powerline-fonts", "python-pip"),
        append_once("powerline/bashrc", "~/.bashrc", marker="powerline-daemon"),
        pip("powerline-gitstatus"),
        mkdir(POWERLINE_LOCAL),
        copy_system(*POWERLINE_GLOBAL, dest=POWERLINE_LOCAL),
        copy_into("powerline/colorschemes", POWERLINE_LOCAL),
        copy_into("powerline/colors.json", POWERLINE_LOCAL),
        copy_into("powerline/config.json", POWERLINE_LOCAL),
        copy_into("powerline/themes", POWERLINE_LOCAL),
        sh("powerline-daemon", "--replace"),
    )


def plan() -> List[Step]:
    return sequence(
        common.vim(),
        common.neovim(),
        common.tmux(),
        powerline(),
        common.gdb(),
    )
