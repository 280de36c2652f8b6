"""Git hash capture with dirty-tree detection for code provenance tracking."""

import subprocess


def _git_clean(*args: str) -> bool:
    """True if `git diff --quiet <args>` reports no changes."""
    try:
        subprocess.check_output(
            ["git", "diff", "--quiet", *args],
            stderr=subprocess.DEVNULL,
        )
    except subprocess.CalledProcessError:
        return False
    return True


def get_git_hash() -> str:
    """Get the short git SHA of HEAD, suffixed '-dirty' for uncommitted changes.

    Returns:
        "a3f9c1d", "a3f9c1d-dirty", or "unknown" outside a git checkout or
        when git is not installed.
    """
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            stderr=subprocess.DEVNULL,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"

    if not (_git_clean() and _git_clean("--cached")):
        sha += "-dirty"
    return sha
