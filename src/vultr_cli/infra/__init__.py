"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Vultr HTTP API, the config
file, and the local filesystem.  Every raw third-party exception must be
caught here and re-raised as a
:class:`~vultr_cli.exceptions.VultrCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Import submodules directly; this package does not re-export them, so
  loading ``infra.userdata`` does not pull in ``requests`` or ``yaml``.
"""
