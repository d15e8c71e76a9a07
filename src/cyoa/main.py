"""Console script entry point for ``cyoa``."""
from __future__ import annotations

from cyoa.presentation.cli.app import main as run_cli


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
