"""Module entrypoint for `python -m schema_guard.cli`.

Delegates to the validator CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
