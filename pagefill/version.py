"""Build identification for `pagefill --version`."""

from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional


class BuildInfo(NamedTuple):
    version: Optional[str]
    commit: Optional[str]
    date: Optional[str]


def _package_version() -> Optional[str]:
    try:
        return importlib.metadata.version("pagefill")
    except importlib.metadata.PackageNotFoundError:
        return None


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd),
                                      stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, OSError):
        return None


def _from_embedded_file() -> tuple[Optional[str], Optional[str]]:
    # Generated at build time by the hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None, None
    return getattr(_build_info, "COMMIT", None), getattr(_build_info, "DATE", None)


def get_build_info() -> BuildInfo:
    """Return version and commit, preferring the embedded build info."""
    commit, date = _from_embedded_file()
    if not commit:
        root = Path(__file__).resolve().parent
        commit = _run_git(["rev-parse", "HEAD"], cwd=root)
        date = _run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=root) if commit else None
    return BuildInfo(version=_package_version(), commit=commit, date=date)


def get_version_string() -> str:
    info = get_build_info()
    version = info.version or "unknown"
    # Short (7-character) git hashes
    commit = info.commit[:7] if info.commit else "unknown"
    return f"pagefill {version} ({commit} {info.date or 'unknown'})"
