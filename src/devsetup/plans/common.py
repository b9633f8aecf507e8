"""Steps that are identical on every supported distribution."""

from __future__ import annotations

from ..dsl import clone, copy, extract, fetch, install, link, mkdir, pip, remove, step
from ..model import Step

NVIM_CONFIG_REPO = "https://github.com/haoyouab/nvim.git"
CLANGD_DIR = "~/.local/share/nvim/mason/packages/clangd"
MASON_BIN = "~/.local/share/nvim/mason/bin"


def vim() -> Step:
    return step(
        "vim",
        install("vim"),
        copy("vim/vim", "~/.vim"),
        copy("vim/vimrc", "~/.vimrc"),
    )


def neovim() -> Step:
    return step(
        "neovim",
        install("git", "curl"),
        mkdir("~/.config"),
        mkdir(CLANGD_DIR),
        remove("~/.config/nvim"),
        clone(NVIM_CONFIG_REPO, "~/.config/nvim"),
        # neovim release tarball has a single nvim-linux-x86_64/ top dir
        fetch("neovim/neovim", r"nvim-linux-x86_64.*\.tar\.gz$", save_as="nvim.tar.gz"),
        mkdir("~/.local"),
        extract("nvim.tar.gz", "~/.local", strip=1),
        fetch("clangd/clangd", r"clangd-linux.*\.zip$", save_as="clangd.zip"),
        extract("clangd.zip", CLANGD_DIR),
        mkdir(MASON_BIN),
        link(f"{CLANGD_DIR}/clangd_*/bin/clangd", f"{MASON_BIN}/clangd"),
    )


def tmux() -> Step:
    return step(
        "tmux",
        install("tmux"),
        copy("tmux/tmux.conf", "~/.tmux.conf"),
        copy("tmux/tmux.conf.local", "~/.tmux.conf.local"),
        copy("tmux/tmux.conf.debug", "~/.tmux.conf.debug"),
    )


def gdb() -> Step:
    return step(
        "gdb",
        install("gdb"),
        pip("pygments"),
        copy("gdb/gdbinit", "~/.gdbinit"),
        mkdir("~/.gdbinit.d"),
    )
