# example_plan.py
# A custom plan: run with `devsetup run --plan example_plan.py`.
# Paths starting with ~/ land in the home directory; relative sources come
# from the dist root (DIST_ROOT or --dist-root).
from __future__ import annotations

from devsetup.dsl import copy, extract, fetch, install, link, mkdir, sequence, step


def plan():
    return sequence(
        step(
            "vim",
            install("vim"),
            copy("vim/vimrc", "~/.vimrc"),
        ),
        step(
            "ripgrep",
            fetch("BurntSushi/ripgrep", r"x86_64-unknown-linux-musl\.tar\.gz$", save_as="rg.tar.gz"),
            mkdir("~/.local/opt/ripgrep"),
            extract("rg.tar.gz", "~/.local/opt/ripgrep", strip=1),
            link("~/.local/opt/ripgrep/rg", "~/.local/bin/rg"),
        ),
    )
