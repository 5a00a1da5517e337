"""Crab CLI entry point.

Allows running via `python -m crab` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys
from typing import Optional

from .version import get_version_string


def main(argv: Optional[list[str]] = None) -> None:
    # Only an optional filename and --version are understood
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    # Lazy import to avoid importing UI deps for --version
    from .config import configure_logging, load_config
    from .editor import Editor

    config = load_config()
    configure_logging(config)
    editor = Editor(config)
    if args:
        editor.load_file(args[0])
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
