"""Allow ``python -m parkr`` to run the CLI."""

from parkr.ui.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
