from __future__ import annotations

import sys

from attention.app import run_app


def main() -> int:
    """Module entrypoint for `python -m attention.main` or the `attention` console script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
