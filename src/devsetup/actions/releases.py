# actions/releases.py
from __future__ import annotations

import http.client
import json
import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .. import __version__
from ..errors import DownloadFailed, ReleaseResolutionFailed
from ..model import ExecutionContext, FetchRelease
from ..ui.console import get_console

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class ReleaseAsset:
    """A downloadable file attached to a release."""
    name: str
    url: str
    size: Optional[int] = None


# ---------------------------------------------------------------------
# Feed parsing and selection
# ---------------------------------------------------------------------

def parse_assets(payload: Any) -> List[ReleaseAsset]:
    """
    Flatten a release feed into assets, keeping listing order.

    Accepts either a single release object (`/releases/latest`) or a list of
    releases (`/releases`, most recent first).
    """
    releases = payload if isinstance(payload, list) else [payload]
    assets: List[ReleaseAsset] = []
    for rel in releases:
        if not isinstance(rel, dict):
            continue
        for a in rel.get("assets") or []:
            if not isinstance(a, dict):
                continue
            name = a.get("name")
            url = a.get("browser_download_url")
            if not name or not url:
                continue
            assets.append(ReleaseAsset(name=name, url=url, size=a.get("size")))
    return assets


def select_asset(assets: Sequence[ReleaseAsset], pattern: str) -> ReleaseAsset:
    """
    Return the first asset whose name matches `pattern`.

    "First" is listing order: the feed's order is the tie-break when several
    assets match, so the same feed always yields the same asset.
    """
    try:
        rx = re.compile(pattern)
    except re.error as e:
        raise ReleaseResolutionFailed(
            message=f"invalid asset pattern /{pattern}/: {e}",
            details={"pattern": pattern},
        ) from e
    for asset in assets:
        if rx.search(asset.name):
            return asset
    raise ReleaseResolutionFailed(
        message=f"no matching asset for /{pattern}/",
        details={"available": ", ".join(a.name for a in assets) or "<none>"},
    )


# ---------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------

def _headers(ctx: ExecutionContext, accept: str) -> dict:
    headers = {
        "Accept": accept,
        "User-Agent": f"devsetup/{__version__}",
    }
    if ctx.github_token:
        headers["Authorization"] = f"Bearer {ctx.github_token}"
    return headers


def latest_release_url(ctx: ExecutionContext, repo: str) -> str:
    return f"{ctx.github_api.rstrip('/')}/repos/{repo}/releases/latest"


def fetch_feed(ctx: ExecutionContext, repo: str) -> Any:
    url = latest_release_url(ctx, repo)
    req = urllib.request.Request(url, headers=_headers(ctx, "application/vnd.github+json"))
    try:
        with urllib.request.urlopen(req, timeout=ctx.http_timeout) as response:
            return json.loads(response.read().decode("utf-8"))
    except urllib.error.HTTPError as e:
        raise ReleaseResolutionFailed(
            message=f"release feed returned HTTP {e.code} {e.reason}",
            details={"url": url},
        ) from e
    except urllib.error.URLError as e:
        raise ReleaseResolutionFailed(
            message=f"release feed unreachable: {e.reason}",
            details={"url": url},
        ) from e
    except (TimeoutError, OSError) as e:
        raise ReleaseResolutionFailed(message=f"release feed request failed: {e}", details={"url": url}) from e
    except http.client.HTTPException as e:
        raise ReleaseResolutionFailed(message=f"release feed response broken: {e!r}", details={"url": url}) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ReleaseResolutionFailed(message=f"invalid JSON from release feed: {e}", details={"url": url}) from e


def resolve_asset(ctx: ExecutionContext, repo: str, pattern: str) -> ReleaseAsset:
    return select_asset(parse_assets(fetch_feed(ctx, repo)), pattern)


def download(ctx: ExecutionContext, asset: ReleaseAsset, dest: Path) -> Path:
    """Stream `asset` to `dest`. An empty body counts as a failed download."""
    req = urllib.request.Request(asset.url, headers=_headers(ctx, "application/octet-stream"))
    written = 0
    try:
        with urllib.request.urlopen(req, timeout=ctx.http_timeout) as response, dest.open("wb") as f:
            while True:
                chunk = response.read(CHUNK_SIZE)
                if not chunk:
                    break
                f.write(chunk)
                written += len(chunk)
    except urllib.error.HTTPError as e:
        raise DownloadFailed(message=f"HTTP {e.code} {e.reason}", details={"url": asset.url}) from e
    except urllib.error.URLError as e:
        raise DownloadFailed(message=f"network error: {e.reason}", details={"url": asset.url}) from e
    except (TimeoutError, OSError) as e:
        raise DownloadFailed(message=f"download failed: {e}", details={"url": asset.url}) from e
    except http.client.HTTPException as e:
        raise DownloadFailed(message=f"download interrupted: {e!r}", details={"url": asset.url}) from e

    if written == 0:
        raise DownloadFailed(message="empty download", details={"url": asset.url})
    return dest


def fetch(action: FetchRelease, ctx: ExecutionContext, scratch: Path) -> Path:
    console = get_console()
    asset = resolve_asset(ctx, action.repo, action.asset_pattern)
    console.print_debug(f"resolved {action.repo} -> {asset.name} ({asset.url})")

    path = download(ctx, asset, scratch / action.save_as)
    console.print_info(f"  downloaded {asset.name}")
    return path
