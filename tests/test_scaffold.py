"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from vultr_cli import __version__
from vultr_cli.cli import exit_codes
from vultr_cli.cli.app import main
from vultr_cli.exceptions import (
    AmbiguousOptionsError,
    ApiError,
    ConfigurationError,
    MissingInstanceIdError,
    MissingOptionError,
    MissingOSSourceError,
    UsageError,
    UserDataReadError,
    VultrCliError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            UsageError,
            MissingOptionError,
            AmbiguousOptionsError,
            ConfigurationError,
            ApiError,
            UserDataReadError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[VultrCliError]
    ) -> None:
        assert issubclass(exc_class, VultrCliError)

    @pytest.mark.parametrize(
        "exc_class",
        [MissingInstanceIdError, MissingOptionError, AmbiguousOptionsError],
    )
    def test_usage_errors(self, exc_class: type[VultrCliError]) -> None:
        assert issubclass(exc_class, UsageError)

    def test_missing_os_source_is_missing_option(self) -> None:
        assert issubclass(MissingOSSourceError, MissingOptionError)
        assert "must be provided" in str(MissingOSSourceError())

    def test_hint_is_stored(self) -> None:
        err = VultrCliError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = VultrCliError("boom")
        assert err.hint is None

    def test_api_error_keeps_status(self) -> None:
        err = ApiError("not found", status=404)
        assert err.status == 404

    def test_ambiguous_default_message_names_options(self) -> None:
        err = AmbiguousOptionsError(["app_id", "iso_id"])
        assert err.selected == ("app_id", "iso_id")
        assert "Too many options" in str(err)
        assert "app_id" in str(err)
        assert "iso_id" in str(err)

    def test_missing_instance_id_message(self) -> None:
        assert str(MissingInstanceIdError()) == "please provide an instanceID"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "server" in capsys.readouterr().out

    def test_group_without_command_prints_group_help(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(["server", "reverse-dns"])
        assert code == exit_codes.SUCCESS
        assert "set-ipv4" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_unknown_command_is_usage_error(self) -> None:
        with pytest.raises(UsageError):
            main(["server", "explode", "abc"])
