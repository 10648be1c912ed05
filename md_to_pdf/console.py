"""Progress and diagnostic output."""

import sys

_quiet = False


def set_quiet(quiet: bool) -> None:
    global _quiet
    _quiet = quiet


def say(message: str = "") -> None:
    if not _quiet:
        print(message)


def warn(message: str) -> None:
    print(f"⚠  {message}", file=sys.stderr)


def error(message: str) -> None:
    print(f"✗  {message}", file=sys.stderr)
