"""Context construction and path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from devsetup import config


def test_build_context_from_arguments(tmp_path):
    ctx = config.build_context(
        "fedora", dist_root=tmp_path / "dist", home=tmp_path / "home", user="dev", use_sudo=True
    )

    assert ctx.package_manager == "dnf"
    assert ctx.dist_root == (tmp_path / "dist").resolve()
    assert ctx.home == (tmp_path / "home").resolve()
    assert ctx.user == "dev"
    assert ctx.use_sudo is True


def test_build_context_uses_env_dist_root(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DIST_ROOT", str(tmp_path / "from-env"))

    ctx = config.build_context("ubuntu", home=tmp_path)

    assert ctx.dist_root == (tmp_path / "from-env").resolve()
    assert ctx.package_manager == "apt"


def test_default_dist_root_follows_distro(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DIST_ROOT", None)
    monkeypatch.chdir(tmp_path)

    ctx = config.build_context("ubuntu", home=tmp_path)

    assert ctx.dist_root == tmp_path.resolve() / "dist" / "Ubuntu"


def test_unknown_distro_rejected(tmp_path):
    with pytest.raises(ValueError):
        config.build_context("gentoo", home=tmp_path)


def test_context_is_read_only(ctx):
    with pytest.raises(AttributeError):
        ctx.home = Path("/elsewhere")


def test_resolve(ctx, home, dist_root):
    assert ctx.resolve("~") == home
    assert ctx.resolve("~/.vimrc") == home / ".vimrc"
    assert ctx.resolve("/etc/xdg/powerline") == Path("/etc/xdg/powerline")
    assert ctx.resolve("vim/vimrc") == dist_root / "vim" / "vimrc"


def test_timeouts_are_read_from_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "HTTP_TIMEOUT", "12.5")
    monkeypatch.setattr(config, "COMMAND_TIMEOUT", "600")

    ctx = config.build_context("ubuntu", home=tmp_path)

    assert ctx.http_timeout == 12.5
    assert ctx.command_timeout == 600.0


def test_command_timeout_defaults_to_unbounded(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "HTTP_TIMEOUT", "30")
    monkeypatch.setattr(config, "COMMAND_TIMEOUT", None)

    ctx = config.build_context("ubuntu", home=tmp_path)

    assert ctx.http_timeout == 30.0
    assert ctx.command_timeout is None


@pytest.mark.parametrize("setting, raw", [("HTTP_TIMEOUT", "soon"), ("COMMAND_TIMEOUT", "-1")])
def test_malformed_timeouts_are_rejected(tmp_path, monkeypatch, setting, raw):
    monkeypatch.setattr(config, setting, raw)

    with pytest.raises(ValueError, match=f"DEVSETUP_{setting}"):
        config.build_context("ubuntu", home=tmp_path)
