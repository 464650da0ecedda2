"""Shared pytest fixtures and configuration for the vultr-cli test suite.

Guidelines
----------
* No internet access in any test.
* The API gateway is mocked at the core boundary; HTTP is mocked at the
  ``requests.Session`` boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on the developer's environment or config file.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Any,
) -> None:
    """Hide real credentials and keep Rich output on one line."""
    monkeypatch.delenv("VULTR_API_KEY", raising=False)
    monkeypatch.delenv("VULTR_API_URL", raising=False)
    monkeypatch.delenv("VULTR_API_TIMEOUT", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture()
def gateway() -> MagicMock:
    """A gateway double whose calls return empty response bodies."""
    mock = MagicMock()
    for name in (
        "start", "halt", "reboot", "reinstall", "delete", "create", "update",
        "restore", "get", "list", "get_bandwidth", "get_user_data",
        "list_ipv4", "list_ipv6", "create_ipv4", "delete_ipv4",
        "get_backup_schedule", "set_backup_schedule", "iso_status",
        "attach_iso", "detach_iso", "default_reverse_ipv4",
        "list_reverse_ipv6", "delete_reverse_ipv6", "create_reverse_ipv4",
        "create_reverse_ipv6",
    ):
        getattr(mock, name).return_value = {}
    return mock

