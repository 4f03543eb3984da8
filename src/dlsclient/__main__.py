"""Module entrypoint: ``python -m dlsclient``."""

from dlsclient.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
