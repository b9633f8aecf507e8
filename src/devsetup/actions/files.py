# actions/files.py
from __future__ import annotations

import glob
import os
import pwd
import shutil
from pathlib import Path

from ..errors import ConfigCopyFailed, LinkFailed
from ..model import (
    AppendSnippet,
    CopyConfig,
    CopySystemConfig,
    ExecutionContext,
    LinkBinary,
    MakeDirs,
    RemovePath,
)
from ..ui.console import get_console
from .shell import run_command


# ---------------------------------------------------------------------
# Copy helpers
# ---------------------------------------------------------------------

def _copy_path(src: Path, dest: Path) -> None:
    """`cp -r src dest` with overwrite: files replaced, directories merged."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    if src.is_dir():
        shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=True)
        return
    if dest.is_dir():
        dest = dest / src.name
    shutil.copy2(src, dest)


def copy_config(action: CopyConfig, ctx: ExecutionContext, scratch: Path) -> None:
    src = ctx.resolve(action.source)
    dest = ctx.resolve(action.dest)
    if action.into:
        dest = dest / src.name

    if not src.exists():
        raise ConfigCopyFailed(
            message=f"source not found: {src}",
            details={"source": str(src), "dest": str(dest)},
        )
    try:
        _copy_path(src, dest)
    except OSError as e:
        raise ConfigCopyFailed(
            message=f"failed to copy configuration to {dest}: {e}",
            details={"source": str(src), "dest": str(dest)},
        ) from e


def _current_user() -> str:
    return pwd.getpwuid(os.geteuid()).pw_name


def copy_system_config(action: CopySystemConfig, ctx: ExecutionContext, scratch: Path) -> None:
    """
    Privileged copy of a global config directory's contents into a user dir,
    followed by an ownership fix for the invoking user.
    """
    console = get_console()
    dest = ctx.resolve(action.dest)

    src = next((Path(c) for c in action.candidates if Path(c).is_dir()), None)
    if src is None:
        console.print_warning(
            f"No global config directory found ({', '.join(action.candidates)}), skipping copy"
        )
        return

    console.print_debug(f"copying global config from {src}")
    if ctx.use_sudo:
        dest.mkdir(parents=True, exist_ok=True)
        run_command(["cp", "-r", f"{src}/.", str(dest)], ctx, sudo=True, error=ConfigCopyFailed)
        run_command(
            ["chown", "-R", f"{ctx.user}:{ctx.user}", str(dest)],
            ctx,
            sudo=True,
            error=ConfigCopyFailed,
        )
        return

    try:
        shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=True)
        if os.geteuid() == 0 and ctx.user != _current_user():
            for root, dirs, files in os.walk(dest):
                for name in dirs + files:
                    shutil.chown(os.path.join(root, name), user=ctx.user, group=ctx.user)
            shutil.chown(dest, user=ctx.user, group=ctx.user)
    except (OSError, LookupError) as e:
        raise ConfigCopyFailed(
            message=f"failed to copy global config into {dest}: {e}",
            details={"source": str(src), "dest": str(dest)},
        ) from e


# ---------------------------------------------------------------------
# Snippets, directories
# ---------------------------------------------------------------------

def append_snippet(action: AppendSnippet, ctx: ExecutionContext, scratch: Path) -> None:
    console = get_console()
    src = ctx.resolve(action.source)
    dest = ctx.resolve(action.dest)

    try:
        current = dest.read_text(encoding="utf-8") if dest.exists() else ""
        if action.marker in current:
            console.print_info(f"  '{action.marker}' already configured in {dest}")
            return

        snippet = src.read_text(encoding="utf-8")
        if action.placeholder:
            found = next((c for c in action.candidates if Path(c).is_file()), None)
            if found is None:
                raise ConfigCopyFailed(
                    message=f"none of the expected paths exist: {', '.join(action.candidates)}",
                    details={"placeholder": action.placeholder},
                )
            snippet = snippet.replace(action.placeholder, found)

        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("a", encoding="utf-8") as f:
            f.write(snippet)
    except OSError as e:
        raise ConfigCopyFailed(
            message=f"failed to append {src} to {dest}: {e}",
            details={"source": str(src), "dest": str(dest)},
        ) from e


def make_dirs(action: MakeDirs, ctx: ExecutionContext, scratch: Path) -> None:
    path = ctx.resolve(action.path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigCopyFailed(message=f"cannot create {path}: {e}", details={"path": str(path)}) from e


def remove_path(action: RemovePath, ctx: ExecutionContext, scratch: Path) -> None:
    path = ctx.resolve(action.path)
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
    except OSError as e:
        raise ConfigCopyFailed(message=f"cannot remove {path}: {e}", details={"path": str(path)}) from e


# ---------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------

def _resolve_target(pattern: Path) -> Path | None:
    if not glob.has_magic(str(pattern)):
        return pattern if pattern.exists() else None
    matches = sorted(glob.glob(str(pattern)))
    return Path(matches[0]) if matches else None


def link_binary(action: LinkBinary, ctx: ExecutionContext, scratch: Path) -> None:
    """`ln -sf target link_path`, with `target` optionally a glob."""
    pattern = ctx.resolve(action.target)
    link = ctx.resolve(action.link_path)

    target = _resolve_target(pattern)
    if target is None:
        raise LinkFailed(message=f"link target not found: {pattern}", details={"link": str(link)})

    try:
        link.parent.mkdir(parents=True, exist_ok=True)
        if link.is_symlink() or link.is_file():
            link.unlink()
        elif link.is_dir():
            raise LinkFailed(
                message=f"refusing to replace directory {link} with a link",
                details={"target": str(target)},
            )
        link.symlink_to(target)
    except OSError as e:
        raise LinkFailed(
            message=f"cannot link {link} -> {target}: {e}",
            details={"target": str(target), "link": str(link)},
        ) from e
