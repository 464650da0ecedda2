"""Resolution of mutually exclusive command-line options.

Presence is explicit: an option whose value is ``None`` was not
provided, anything else was.  Callers normalise "blank" inputs (such as
an empty string) to ``None`` before resolving.
"""

from __future__ import annotations

from collections.abc import Mapping

from vultr_cli.exceptions import AmbiguousOptionsError


def resolve_exclusive(options: Mapping[str, object | None]) -> str | None:
    """Return the name of the single provided option.

    Three outcomes are possible:

    * exactly one option set — its name is returned;
    * no option set — ``None`` is returned so the caller can apply a
      fallback;
    * more than one option set — :class:`AmbiguousOptionsError` is
      raised, naming every provided option in mapping order.
    """
    selected = [name for name, value in options.items() if value is not None]

    if len(selected) > 1:
        raise AmbiguousOptionsError(selected)

    if not selected:
        return None

    return selected[0]


def blank_to_none(value: str | None) -> str | None:
    """Treat an empty string flag value as "not provided"."""
    if value is None or value == "":
        return None
    return value
