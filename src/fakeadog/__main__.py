"""Module entrypoint.

Allows:
    python -m fakeadog
"""

from __future__ import annotations

from fakeadog.cli import main

if __name__ == "__main__":
    main()
