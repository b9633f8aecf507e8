"""Archive extraction, including leading-component stripping."""

from __future__ import annotations

import io
import stat
import tarfile
import zipfile
from pathlib import Path

import pytest

from devsetup.actions import archive
from devsetup.errors import ExtractFailed
from devsetup.model import ExtractArchive


def make_tar(path: Path, members: dict[str, bytes]) -> Path:
    with tarfile.open(path, "w:gz") as tar:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(data))
    return path


def make_zip(path: Path, members: dict[str, bytes], mode: int = 0o755) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            info = zipfile.ZipInfo(name)
            info.external_attr = (stat.S_IFREG | mode) << 16
            zf.writestr(info, data)
    return path


def test_tar_strip_one_flattens_single_top_dir(ctx, home, scratch):
    make_tar(
        scratch / "nvim.tar.gz",
        {
            "nvim-linux-x86_64/bin/nvim": b"ELF",
            "nvim-linux-x86_64/share/nvim/runtime/filetype.lua": b"-- ft",
        },
    )

    archive.extract(ExtractArchive("nvim.tar.gz", "~/.local", strip_components=1), ctx, scratch)

    assert (home / ".local" / "bin" / "nvim").read_bytes() == b"ELF"
    assert (home / ".local" / "share" / "nvim" / "runtime" / "filetype.lua").is_file()
    assert not (home / ".local" / "nvim-linux-x86_64").exists()


def test_tar_without_strip_keeps_top_dir(ctx, home, scratch):
    make_tar(scratch / "a.tar.gz", {"top/file.txt": b"x"})

    archive.extract(ExtractArchive("a.tar.gz", "~/out"), ctx, scratch)

    assert (home / "out" / "top" / "file.txt").read_bytes() == b"x"


def test_zip_keeps_executable_bit(ctx, home, scratch):
    make_zip(scratch / "clangd.zip", {"clangd_18.1.3/bin/clangd": b"ELF"})

    archive.extract(ExtractArchive("clangd.zip", "~/clangd"), ctx, scratch)

    binary = home / "clangd" / "clangd_18.1.3" / "bin" / "clangd"
    assert binary.read_bytes() == b"ELF"
    assert binary.stat().st_mode & stat.S_IXUSR


def test_zip_strip(ctx, home, scratch):
    make_zip(scratch / "pkg.zip", {"pkg-1.0/README": b"hi", "pkg-1.0/bin/tool": b"ELF"})

    archive.extract(ExtractArchive("pkg.zip", "~/pkg", strip_components=1), ctx, scratch)

    assert (home / "pkg" / "README").read_bytes() == b"hi"
    assert (home / "pkg" / "bin" / "tool").is_file()


def test_zip_member_outside_destination_is_rejected(ctx, scratch):
    make_zip(scratch / "evil.zip", {"../../escape.txt": b"x"})

    with pytest.raises(ExtractFailed, match="escapes destination"):
        archive.extract(ExtractArchive("evil.zip", "~/out"), ctx, scratch)


def test_missing_archive_fails(ctx, scratch):
    with pytest.raises(ExtractFailed, match="archive not found"):
        archive.extract(ExtractArchive("nope.tar.gz", "~/out"), ctx, scratch)


def test_corrupt_or_unknown_archive_fails(ctx, scratch):
    (scratch / "broken.tar.gz").write_bytes(b"not a tarball")
    (scratch / "thing.rar").write_bytes(b"rar")

    with pytest.raises(ExtractFailed):
        archive.extract(ExtractArchive("broken.tar.gz", "~/out"), ctx, scratch)
    with pytest.raises(ExtractFailed, match="unsupported archive format"):
        archive.extract(ExtractArchive("thing.rar", "~/out"), ctx, scratch)
