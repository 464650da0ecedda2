"""Infrastructure: reading user data from a local file or stdin.

This is the only local-I/O boundary of the tool.  ``-`` selects
standard input.
"""

from __future__ import annotations

import sys
from pathlib import Path

from vultr_cli.exceptions import UserDataReadError

STDIN_PATH: str = "-"


def read_user_data(path: str) -> bytes:
    """Return the raw bytes at *path* (``-`` for stdin).

    Raises
    ------
    UserDataReadError
        If the source cannot be read.
    """
    try:
        if path == STDIN_PATH:
            return sys.stdin.buffer.read()
        return Path(path).expanduser().read_bytes()
    except OSError as exc:
        raise UserDataReadError(f"error reading user-data : {exc}") from exc
