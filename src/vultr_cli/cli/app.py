"""CLI application entry point and command routing for vultr-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~vultr_cli.exceptions.VultrCliError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — work is delegated to the handlers,
  the core service layer and the infrastructure gateway.
* The argparse tree is built from the declarative table in
  :mod:`vultr_cli.cli.commands`.
* The API gateway is injected into :func:`main`; it is only built from
  configuration when the caller does not supply one.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from vultr_cli.cli import exit_codes
from vultr_cli.cli.commands import COMMANDS, GROUPS, CommandSpec
from vultr_cli.cli.console import console
from vultr_cli.cli.handlers import Invocation
from vultr_cli.core.instance_service import InstanceService
from vultr_cli.core.protocols import InstanceGateway
from vultr_cli.exceptions import (
    ApiError,
    MissingInstanceIdError,
    UsageError,
    VultrCliError,
)
from vultr_cli.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad usage as :class:`UsageError`."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=f"Run '{self.prog} --help' for usage.")


def build_parser() -> argparse.ArgumentParser:
    """Construct the full argument parser from the command table."""
    parser = _ArgumentParser(
        prog="vultr-cli",
        description="Command-line front end for the Vultr instance API.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log API requests to stderr.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (default: ~/.vultr-cli.yaml).",
    )
    parser.set_defaults(command_spec=None, help_parser=parser)

    group_actions: dict[tuple[str, ...], argparse._SubParsersAction] = {
        (): parser.add_subparsers(title="commands", metavar="<command>"),
    }

    for path, help_text in GROUPS.items():
        group = group_actions[path[:-1]].add_parser(
            path[-1], help=help_text, description=help_text
        )
        group.set_defaults(help_parser=group)
        group_actions[path] = group.add_subparsers(
            title="commands", metavar="<command>"
        )

    for spec in COMMANDS:
        leaf = group_actions[spec.group].add_parser(
            spec.name,
            aliases=list(spec.aliases),
            help=spec.help,
            description=spec.help,
        )
        if spec.takes_instance_id:
            leaf.add_argument(
                "instance_id",
                nargs="?",
                default=None,
                metavar="instanceID",
                help="id of the target instance",
            )
        for flag in spec.flags:
            flag.add_to(leaf)
        leaf.set_defaults(command_spec=spec, help_parser=leaf)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _bind(spec: CommandSpec, args: argparse.Namespace) -> Invocation:
    """Check arity and collect the flag values declared by *spec*."""
    instance_id = ""
    if spec.takes_instance_id:
        instance_id = args.instance_id or ""
        if not instance_id:
            raise MissingInstanceIdError()
    flags = {flag.dest: getattr(args, flag.dest) for flag in spec.flags}
    return Invocation(instance_id=instance_id, flags=flags)


def _build_gateway(config_path: str | None) -> InstanceGateway:
    """Create the HTTP gateway from configuration."""
    from vultr_cli.infra.config import load_settings
    from vultr_cli.infra.vultr_gateway import VultrGateway

    return VultrGateway(load_settings(config_path))


def _dispatch(
    spec: CommandSpec,
    invocation: Invocation,
    gateway: InstanceGateway,
) -> int:
    """Run one handler, prefixing remote failures with the operation."""
    logger.debug("Dispatching %s", " ".join(spec.path))
    service = InstanceService(gateway)
    try:
        spec.handler(service, invocation)
    except ApiError as exc:
        raise ApiError(
            f"{spec.error_prefix} : {exc}",
            status=exc.status,
            hint=exc.hint,
        ) from exc
    return exit_codes.SUCCESS


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    gateway: InstanceGateway | None = None,
) -> int:
    """Run the vultr-cli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    gateway:
        API gateway to use.  When ``None`` (default), one is built from
        the environment and config file.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    spec: CommandSpec | None = args.command_spec
    if spec is None:
        args.help_parser.print_help()
        return exit_codes.SUCCESS

    invocation = _bind(spec, args)

    if gateway is None:
        gateway = _build_gateway(args.config)

    return _dispatch(spec, invocation, gateway)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except VultrCliError as exc:
        console.print(f"Error: {exc}", markup=False)
        if exc.hint:
            console.print(f"Hint: {exc.hint}", markup=False)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}",
            markup=False,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
