from __future__ import annotations

import logging
import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Put the repository root on ``sys.path`` when run as a plain script.

    ``python bubble_count/__main__.py`` does not make the package importable on
    its own, so the parent of this package directory is inserted first.
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root_str = str(pkg_dir.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # Works when executed as a module: python -m bubble_count
    from .app import run  # type: ignore[attr-defined]
    from .config import log_level_from_env  # type: ignore[attr-defined]
except ImportError:
    # Works when executed as a script (IDE "Run Python File", absolute path, etc.)
    _ensure_repo_root_on_path()
    from bubble_count.app import run  # type: ignore[attr-defined]
    from bubble_count.config import log_level_from_env  # type: ignore[attr-defined]


def main() -> int:
    """Entry point for running the game from the command line."""
    logging.basicConfig(
        level=log_level_from_env(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
