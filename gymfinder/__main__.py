"""Module entrypoint for ``python -m gymfinder``."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover - CLI dispatch
    raise SystemExit(main())
