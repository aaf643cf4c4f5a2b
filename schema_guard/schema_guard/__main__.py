"""Module entrypoint for `python -m schema_guard`."""

from .cli.run_validate import main


if __name__ == "__main__":
    main()
