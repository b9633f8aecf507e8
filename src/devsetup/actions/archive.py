# actions/archive.py
from __future__ import annotations

import shutil
import stat
import tarfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import Optional

from ..errors import ExtractFailed
from ..model import ExecutionContext, ExtractArchive

TAR_SUFFIXES = (".tar.gz", ".tgz", ".tar.xz", ".txz", ".tar.bz2", ".tar")


def _strip(name: str, n: int) -> Optional[str]:
    """Drop the first `n` path parts; None when nothing is left."""
    parts = [p for p in PurePosixPath(name).parts if p not in ("", ".", "/")]
    parts = parts[n:]
    if not parts:
        return None
    return "/".join(parts)


def extract_tar(archive: Path, dest: Path, strip_components: int = 0) -> None:
    with tarfile.open(str(archive), mode="r:*") as tar:
        members = []
        for m in tar.getmembers():
            name = _strip(m.name, strip_components)
            if name is None:
                continue
            m.name = name
            if m.islnk():
                linkname = _strip(m.linkname, strip_components)
                if linkname is None:
                    continue
                m.linkname = linkname
            members.append(m)
        tar.extractall(path=str(dest), members=members, filter="data")


def extract_zip(archive: Path, dest: Path, strip_components: int = 0) -> None:
    dest_abs = dest.resolve()
    with zipfile.ZipFile(str(archive)) as zf:
        for info in zf.infolist():
            name = _strip(info.filename, strip_components)
            if name is None:
                continue
            target = (dest_abs / name).resolve()
            if dest_abs != target and dest_abs not in target.parents:
                raise ExtractFailed(
                    message=f"archive member escapes destination: {info.filename}",
                    details={"archive": str(archive)},
                )
            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, target.open("wb") as out:
                shutil.copyfileobj(src, out)
            # zipfile drops permission bits; restore them from the external attrs
            mode = (info.external_attr >> 16) & 0o777
            if mode:
                target.chmod(mode | stat.S_IRUSR)


def extract(action: ExtractArchive, ctx: ExecutionContext, scratch: Path) -> None:
    path = Path(action.path)
    if path.is_absolute() or action.path.startswith("~/"):
        archive = ctx.resolve(action.path)
    else:
        archive = scratch / action.path
    dest = ctx.resolve(action.dest)

    if not archive.is_file():
        raise ExtractFailed(message=f"archive not found: {archive}", details={"dest": str(dest)})

    try:
        dest.mkdir(parents=True, exist_ok=True)
        if archive.name.endswith(".zip"):
            extract_zip(archive, dest, action.strip_components)
        elif archive.name.endswith(TAR_SUFFIXES):
            extract_tar(archive, dest, action.strip_components)
        else:
            raise ExtractFailed(
                message=f"unsupported archive format: {archive.name}",
                details={"supported": ", ".join((".zip",) + TAR_SUFFIXES)},
            )
    except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
        raise ExtractFailed(
            message=f"failed to extract {archive.name}: {e}",
            details={"archive": str(archive), "dest": str(dest)},
        ) from e
