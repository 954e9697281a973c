"""Build version information and upgrade version checks."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)

VERSION = "0.0.1"
COMMIT = ""
DATE = ""

_VALID_CURRENT_VERSIONS = frozenset({"2.6.0", "2.7.0", "2.8.0", "2.9.0"})
_SHORT_COMMIT_LEN = 7


def get() -> str:
    """Return the current version."""
    return VERSION


def get_git_commit() -> str:
    """Return the commit SHA, asking git for it when none was recorded at build time."""
    if COMMIT:
        return COMMIT
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.error("failed to get git commit: %s", exc)
        return ""
    return result.stdout.strip()


def get_version_details() -> str:
    """Return the version joined with the short commit SHA."""
    commit = get_git_commit()
    if len(commit) < _SHORT_COMMIT_LEN:
        raise ValueError(
            f"commit {commit!r} is shorter than {_SHORT_COMMIT_LEN} characters"
        )
    return "-".join([get(), commit[:_SHORT_COMMIT_LEN]])


def _base(v: str) -> str:
    return v.split("-")[0]


def is_current_version_valid(v: str) -> bool:
    """Tell whether ``v`` is a version that may be upgraded from."""
    return _base(v) in _VALID_CURRENT_VERSIONS


def is_desired_version_valid(v: str) -> bool:
    """Tell whether ``v`` matches the version of this build."""
    return _base(VERSION) == _base(v)