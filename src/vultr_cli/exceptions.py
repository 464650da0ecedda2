"""Custom exception hierarchy for vultr-cli.

All exceptions that cross layer boundaries must inherit from
:class:`VultrCliError`.  Raw third-party exceptions (e.g. from
``requests``) must NEVER propagate beyond the infrastructure layer —
they must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
VultrCliError
├── UsageError
│   ├── MissingInstanceIdError
│   ├── MissingOptionError
│   │   └── MissingOSSourceError
│   └── AmbiguousOptionsError
├── ConfigurationError
├── ApiError
├── UserDataReadError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class VultrCliError(Exception):
    """Base exception for all vultr-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Usage (detected before any network call) ------------------------------

class UsageError(VultrCliError):
    """Raised when the command line itself is invalid."""


class MissingInstanceIdError(UsageError):
    """Raised when a command needs an instance id and none was given."""

    def __init__(self) -> None:
        super().__init__("please provide an instanceID")


class MissingOptionError(UsageError):
    """Raised when none of a required set of options was provided."""


class MissingOSSourceError(MissingOptionError):
    """Raised when no OS source (os, app, iso, snapshot) was provided."""

    def __init__(self) -> None:
        super().__init__(
            "an os ID must be provided",
            hint="Pass one of --os, --app, --iso or --snapshot.",
        )


class AmbiguousOptionsError(UsageError):
    """Raised when more than one mutually exclusive option was provided."""

    def __init__(
        self,
        selected: Sequence[str],
        message: str | None = None,
    ) -> None:
        self.selected: tuple[str, ...] = tuple(selected)
        if message is None:
            names = ", ".join(self.selected)
            message = (
                f"Too many options have been selected : [{names}] : "
                "please select one"
            )
        super().__init__(message)


# --- Configuration ---------------------------------------------------------

class ConfigurationError(VultrCliError):
    """Raised when settings (API key, config file) are missing or invalid."""


# --- Remote API ------------------------------------------------------------

class ApiError(VultrCliError):
    """Raised when the Vultr API rejects a call or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status: int | None = status
        """HTTP status code, or ``None`` for transport failures."""


# --- Local I/O -------------------------------------------------------------

class UserDataReadError(VultrCliError):
    """Raised when the user-data source file cannot be read."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(VultrCliError):
    """Raised when a required runtime dependency is not available."""
