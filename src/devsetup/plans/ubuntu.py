"""Ubuntu (apt) plan."""

from __future__ import annotations

from typing import List

from ..dsl import append_once, copy_into, copy_system, install, mkdir, pip, refresh, sequence, sh, step
from ..model import Step
from . import common

PACKAGE_MANAGER = "apt"

POWERLINE_LOCAL = "~/.config/powerline"
POWERLINE_SCRIPT_DEFAULT = "/usr/share/powerline/bash/powerline.sh"
POWERLINE_SCRIPTS = (
    "/usr/share/powerline/bash/powerline.sh",
    "/usr/share/powerline/bindings/bash/powerline.sh",
)


def powerline() -> Step:
    return step(
        "powerline",
        install("powerline", "fonts-powerline", "python3-pip"),
        append_once(
            "powerline/bashrc",
            "~/.bashrc",
            marker="powerline-daemon",
            placeholder=POWERLINE_SCRIPT_DEFAULT,
            candidates=POWERLINE_SCRIPTS,
        ),
        pip("powerline-gitstatus"),
        mkdir(POWERLINE_LOCAL),
        copy_system("/usr/share/powerline/config_files", dest=POWERLINE_LOCAL),
        copy_into("powerline/colorschemes", POWERLINE_LOCAL),
        copy_into("powerline/colors.json", POWERLINE_LOCAL),
        copy_into("powerline/config.json", POWERLINE_LOCAL),
        copy_into("powerline/themes", POWERLINE_LOCAL),
        sh("powerline-daemon", "--replace"),
    )


def plan() -> List[Step]:
    return sequence(
        step("update", refresh()),
        common.vim(),
        common.neovim(),
        common.tmux(),
        powerline(),
        common.gdb(),
    )
