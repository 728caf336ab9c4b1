"""Entry point for `python -m lenra_check`."""

from lenra_check.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
