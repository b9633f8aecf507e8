"""Shared fixtures: a sandboxed home, a dist root, fake executables and HTTP."""

from __future__ import annotations

import io
import os
import pwd
import urllib.error
import urllib.request
from pathlib import Path

import pytest

from devsetup.model import ExecutionContext
from devsetup.ui.console import Console, set_console


FAKE_TOOL = """#!/bin/sh
echo "{name} $*" >> "$FAKE_LOG"
for arg in "$@"; do
  case " $FAKE_FAIL " in
    *" $arg "*) echo "E: Unable to locate package $arg" >&2; exit 100;;
  esac
done
exit 0
"""

FAKE_GIT = """#!/bin/sh
echo "git $*" >> "$FAKE_LOG"
case "$1" in
  clone) mkdir -p "$3/.git" && echo "cloned" > "$3/init.lua";;
  rev-parse) echo 0123456789abcdef0123456789abcdef01234567;;
esac
exit 0
"""


@pytest.fixture(autouse=True)
def quiet_console():
    set_console(Console(debug=False))
    yield
    set_console(Console(debug=False))


@pytest.fixture
def home(tmp_path: Path) -> Path:
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def dist_root(tmp_path: Path) -> Path:
    """A bundled-dotfiles tree shaped like dist/Ubuntu."""
    root = tmp_path / "dist" / "Ubuntu"
    (root / "vim" / "vim" / "colors").mkdir(parents=True)
    (root / "vim" / "vim" / "colors" / "dark.vim").write_text("hi Normal guibg=black\n")
    (root / "vim" / "vimrc").write_text("set number\n")
    (root / "tmux").mkdir()
    for name in ("tmux.conf", "tmux.conf.local", "tmux.conf.debug"):
        (root / "tmux" / name).write_text(f"# {name}\n")
    (root / "gdb").mkdir()
    (root / "gdb" / "gdbinit").write_text("set pagination off\n")
    (root / "powerline" / "colorschemes").mkdir(parents=True)
    (root / "powerline" / "colorschemes" / "default.json").write_text("{}")
    (root / "powerline" / "themes").mkdir()
    (root / "powerline" / "themes" / "shell.json").write_text("{}")
    (root / "powerline" / "colors.json").write_text("{}")
    (root / "powerline" / "config.json").write_text("{}")
    (root / "powerline" / "bashrc").write_text(
        "powerline-daemon -q\n"
        "POWERLINE_SCRIPT=/usr/share/powerline/bash/powerline.sh\n"
        "source $POWERLINE_SCRIPT\n"
    )
    return root


@pytest.fixture
def ctx(home: Path, dist_root: Path) -> ExecutionContext:
    return ExecutionContext(
        dist_root=dist_root,
        home=home,
        user=pwd.getpwuid(os.geteuid()).pw_name,
        distro="ubuntu",
        package_manager="apt",
        use_sudo=False,
        http_timeout=5.0,
        github_api="https://api.example.test",
    )


@pytest.fixture
def scratch(tmp_path: Path) -> Path:
    d = tmp_path / "scratch"
    d.mkdir()
    return d


class FakeBin:
    """Executables on a private PATH that log every invocation."""

    def __init__(self, bindir: Path, log: Path, monkeypatch: pytest.MonkeyPatch):
        self.bindir = bindir
        self.log = log
        self._monkeypatch = monkeypatch

    def tool(self, name: str, script: str | None = None) -> Path:
        path = self.bindir / name
        path.write_text(script or FAKE_TOOL.format(name=name))
        path.chmod(0o755)
        return path

    def fail_on(self, *args: str) -> None:
        self._monkeypatch.setenv("FAKE_FAIL", " ".join(args))

    def calls(self) -> list[str]:
        if not self.log.exists():
            return []
        return self.log.read_text().splitlines()


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeBin:
    bindir = tmp_path / "bin"
    bindir.mkdir()
    log = tmp_path / "calls.log"
    monkeypatch.setenv("PATH", f"{bindir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("FAKE_LOG", str(log))
    monkeypatch.setenv("FAKE_FAIL", "")
    fb = FakeBin(bindir, log, monkeypatch)
    for name in ("apt", "dnf", "pip", "powerline-daemon"):
        fb.tool(name)
    fb.tool("git", FAKE_GIT)
    return fb


class FakeHTTP:
    """Stand-in for urllib.request.urlopen keyed by URL."""

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requested: list[str] = []

    def add(self, url: str, body: object) -> None:
        self.routes[url] = body

    def __call__(self, req, timeout=None):
        url = req.full_url if isinstance(req, urllib.request.Request) else req
        self.requested.append(url)
        body = self.routes.get(url)
        if body is None:
            raise urllib.error.HTTPError(url, 404, "Not Found", hdrs=None, fp=None)
        if isinstance(body, Exception):
            raise body
        if isinstance(body, bytes):
            return io.BytesIO(body)
        return body


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch) -> FakeHTTP:
    fh = FakeHTTP()
    monkeypatch.setattr(urllib.request, "urlopen", fh)
    return fh
