"""Allow ``python -m ttynamed``."""

from __future__ import annotations

from ttynamed.cli.main import main

if __name__ == "__main__":
    main()
