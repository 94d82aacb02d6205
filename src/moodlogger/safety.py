from __future__ import annotations

import sys
from pathlib import Path


def find_git_root(start: Path) -> Path | None:
    """Nearest ancestor of start (inclusive) holding a .git entry."""
    for cur in (start, *start.parents):
        if (cur / ".git").exists():
            return cur
    return None


def assert_safe_data_path(data_path: Path, allow_repo_data_path: bool) -> None:
    # refuse a data file inside any git work tree (unless overridden)
    git_root = find_git_root(data_path.parent)
    if git_root is None or allow_repo_data_path:
        return
    print("🚫 Refusing to keep your mood journal inside a git repo.", file=sys.stderr)
    print(f"   data_path: {data_path}", file=sys.stderr)
    print(f"   repo_root: {git_root}", file=sys.stderr)
    print(
        "   Fix: use ~/.config/moodlogger/*.json, set MOODLOGGER_DATA, or pass --allow-repo-data-path",
        file=sys.stderr,
    )
    raise SystemExit(2)
