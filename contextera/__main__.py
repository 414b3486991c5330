"""Module entrypoint for ``python -m contextera``.

Module-mode execution behaves exactly like the console script.
"""

from .cli import main


if __name__ == "__main__":
    main()
