"""Run script.

Lets the CLI run with `python -m main` during development, next to the
`procura` console script.
"""

from __future__ import annotations

import sys

# Windows terminals default to cp1252; the tables print ₹ and box characters.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
