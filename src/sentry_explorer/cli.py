"""Console-script entrypoint; the CLI lives in `sentry_explorer.explorer.main`."""

from __future__ import annotations

from sentry_explorer.explorer.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
