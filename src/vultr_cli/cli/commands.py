"""Declarative command table for the ``server`` tree.

Every operation is one :class:`CommandSpec` row: its path, whether it
takes an instance id, its flags, its handler, and the prefix used when a
remote call fails.  :func:`vultr_cli.cli.app.build_parser` turns the
table into an argparse tree once at start-up; nothing registers commands
at runtime.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from vultr_cli.cli import handlers
from vultr_cli.cli.handlers import Invocation
from vultr_cli.core.instance_service import InstanceService

Handler = Callable[[InstanceService, Invocation], None]


@dataclass(frozen=True, slots=True)
class FlagSpec:
    """One named flag; fields map onto ``ArgumentParser.add_argument``."""

    names: tuple[str, ...]
    help: str
    type: Callable[[str], Any] | None = str
    default: Any = None
    required: bool = False
    action: str | type[argparse.Action] | None = None

    @property
    def dest(self) -> str:
        long_name = next(name for name in self.names if name.startswith("--"))
        return long_name[2:].replace("-", "_")

    def add_to(self, parser: argparse.ArgumentParser) -> None:
        kwargs: dict[str, Any] = {
            "dest": self.dest,
            "help": self.help,
            "default": self.default,
            "required": self.required,
        }
        if self.action is not None:
            kwargs["action"] = self.action
        if self.action not in ("store_true", argparse.BooleanOptionalAction):
            kwargs["type"] = self.type
        parser.add_argument(*self.names, **kwargs)


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """One leaf operation of the command tree."""

    path: tuple[str, ...]
    help: str
    handler: Handler
    error_prefix: str
    takes_instance_id: bool = True
    flags: tuple[FlagSpec, ...] = ()
    aliases: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def group(self) -> tuple[str, ...]:
        return self.path[:-1]


# ---------------------------------------------------------------------------
# Shared flags
# ---------------------------------------------------------------------------

_PAGING: tuple[FlagSpec, ...] = (
    FlagSpec(("-c", "--cursor"), "(optional) Cursor for paging.", default=""),
    FlagSpec(
        ("-p", "--per-page"),
        "(optional) Number of items requested per page. Default and Max are 25.",
        type=int,
        default=25,
    ),
)

_CREATE_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(("-r", "--region"), "region id you wish to have the instance created in", required=True),
    FlagSpec(("-p", "--plan"), "plan id you wish the instance to have", required=True),
    FlagSpec(("-o", "--os"), "os id you wish the instance to have", type=int),
    FlagSpec(
        ("--ipxe",),
        "if you've selected the 'custom' operating system, this can be set to "
        "chainload the specified URL on bootup",
    ),
    FlagSpec(("--iso",), "iso ID you want to create the instance with"),
    FlagSpec(("--snapshot",), "snapshot ID you want to create the instance with"),
    FlagSpec(("--script-id",), "script id of the startup script"),
    FlagSpec(("--ipv6",), "enable ipv6", action="store_true", default=False),
    FlagSpec(("--private-network",), "enable private network", action="store_true", default=False),
    FlagSpec(("--network",), "network ID you want to assign to the instance (repeatable)", action="append"),
    FlagSpec(("-l", "--label"), "label you want to give this instance"),
    FlagSpec(("-s", "--ssh-keys"), "ssh key ID you want to assign to the instance (repeatable)", action="append"),
    FlagSpec(("-b", "--auto-backup"), "enable auto backups", action="store_true", default=False),
    FlagSpec(("-a", "--app"), "application ID you want this instance to have", type=int),
    FlagSpec(("-u", "--userdata"), "base64 encoded userdata you want to give this instance"),
    FlagSpec(
        ("-n", "--notify"),
        "notify when server has been created",
        action=argparse.BooleanOptionalAction,
        default=True,
    ),
    FlagSpec(("-d", "--ddos"), "enable ddos protection", action="store_true", default=False),
    FlagSpec(("--reserved-ipv4",), "ip address of the floating IP to use as the main IP for this instance"),
    FlagSpec(("--host",), "The hostname to assign to this instance"),
    FlagSpec(("-t", "--tag"), "The tag to assign to this instance"),
    FlagSpec(("--firewall-group",), "The firewall group to assign to this instance"),
)

_REVERSE_ENTRY: tuple[FlagSpec, ...] = (
    FlagSpec(("-i", "--ip"), "ip address you wish to set a reverse DNS on", required=True),
    FlagSpec(("-e", "--entry"), "reverse dns entry", required=True),
)


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------

GROUPS: dict[tuple[str, ...], str] = {
    ("server",): "commands to interact with servers on vultr",
    ("server", "os"): "update operating system for an instance",
    ("server", "app"): "update application for an instance",
    ("server", "backup"): "list and create backup schedules for an instance",
    ("server", "iso"): "attach/detach ISOs to a given instance",
    ("server", "ipv4"): "list/create/delete ipv4 on instance",
    ("server", "ipv6"): "commands for ipv6 on instance",
    ("server", "plans"): "update/list plans for an instance",
    ("server", "reverse-dns"): "commands to handle reverse-dns on an instance",
    ("server", "user-data"): "commands to handle userdata on an instance",
}

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(("server", "start"), "starts a server", handlers.start, "error starting server"),
    CommandSpec(("server", "stop"), "stops a server", handlers.stop, "error stopping server"),
    CommandSpec(("server", "restart"), "restart a server", handlers.restart, "error rebooting server"),
    CommandSpec(("server", "reinstall"), "reinstall a server", handlers.reinstall, "error reinstalling server"),
    CommandSpec(
        ("server", "tag"),
        "add/modify tag on server",
        handlers.tag,
        "error adding tag to server",
        flags=(FlagSpec(("-t", "--tag"), "tag you want to set for a given instance", required=True),),
    ),
    CommandSpec(
        ("server", "delete"),
        "delete/destroy a server",
        handlers.delete,
        "error deleting server",
        aliases=("destroy",),
    ),
    CommandSpec(
        ("server", "label"),
        "label a server",
        handlers.label,
        "error labeling server",
        flags=(FlagSpec(("-l", "--label"), "label you want to set for a given instance", required=True),),
    ),
    CommandSpec(("server", "bandwidth"), "bandwidth for server", handlers.bandwidth, "error getting bandwidth for server"),
    CommandSpec(
        ("server", "list"),
        "list all available servers",
        handlers.list_servers,
        "error getting list of servers",
        takes_instance_id=False,
        flags=_PAGING,
        aliases=("l",),
    ),
    CommandSpec(("server", "get"), "get info about a specific server", handlers.get, "error getting server"),
    CommandSpec(
        ("server", "update-firewall-group"),
        "assign a firewall group to server",
        handlers.update_firewall_group,
        "error setting firewall group",
        takes_instance_id=False,
        flags=(
            FlagSpec(("-i", "--instance-id"), "instance id of the instance you want to use", required=True),
            FlagSpec(
                ("-f", "--firewall-group-id"),
                "firewall group id that you want to assign. 0 Value will unset the firewall-group",
                required=True,
            ),
        ),
    ),
    CommandSpec(
        ("server", "restore"),
        "restore instance from backup/snapshot",
        handlers.restore,
        "error restoring instance",
        flags=(
            FlagSpec(("-b", "--backup"), "id of backup you wish to restore the instance with"),
            FlagSpec(("-s", "--snapshot"), "id of snapshot you wish to restore the instance with"),
        ),
    ),
    CommandSpec(
        ("server", "create"),
        "Create a server instance",
        handlers.create,
        "error creating instance",
        takes_instance_id=False,
        flags=_CREATE_FLAGS,
    ),
    # os / app
    CommandSpec(
        ("server", "os", "change"),
        "changes operating system",
        handlers.change_os,
        "error updating os",
        flags=(FlagSpec(("-o", "--os"), "operating system ID you wish to use", type=int, required=True),),
    ),
    CommandSpec(
        ("server", "app", "change"),
        "changes application",
        handlers.change_app,
        "error updating application",
        flags=(FlagSpec(("-a", "--app"), "application ID you wish to use", type=int, required=True),),
    ),
    # backup
    CommandSpec(
        ("server", "backup", "get"),
        "get backup schedules on a given instance",
        handlers.backup_get,
        "error getting backup schedule",
    ),
    CommandSpec(
        ("server", "backup", "create"),
        "create backup schedule on a given instance",
        handlers.backup_create,
        "error creating backup schedule",
        flags=(
            FlagSpec(
                ("-t", "--type"),
                "Backup cron type. Can be one of 'daily', 'weekly', 'monthly', "
                "'daily_alt_even', or 'daily_alt_odd'.",
                required=True,
            ),
            FlagSpec(("-o", "--hour"), "Hour value (0-23).", type=int, default=0),
            FlagSpec(("-w", "--dow"), "Day-of-week value (0-6). Applicable to crons: 'weekly'", type=int, default=0),
            FlagSpec(("-m", "--dom"), "Day-of-month value (1-28). Applicable to crons: 'monthly'", type=int, default=0),
        ),
    ),
    # iso
    CommandSpec(("server", "iso", "status"), "current ISO state", handlers.iso_status, "error getting iso state info"),
    CommandSpec(
        ("server", "iso", "attach"),
        "attach ISO to instance",
        handlers.iso_attach,
        "error attaching iso",
        flags=(FlagSpec(("-i", "--iso-id"), "id of the ISO you wish to attach", required=True),),
    ),
    CommandSpec(("server", "iso", "detach"), "detach ISO from instance", handlers.iso_detach, "error detaching iso"),
    # ipv4
    CommandSpec(
        ("server", "ipv4", "list"),
        "list ipv4 for a server",
        handlers.ipv4_list,
        "error getting ipv4 info",
        flags=_PAGING,
        aliases=("v4",),
    ),
    CommandSpec(
        ("server", "ipv4", "create"),
        "create ipv4 for instance",
        handlers.ipv4_create,
        "error creating ipv4",
        flags=(
            FlagSpec(("--reboot",), "whether to reboot server after adding ipv4 address", action="store_true", default=False),
        ),
    ),
    CommandSpec(
        ("server", "ipv4", "delete"),
        "delete ipv4 for instance",
        handlers.ipv4_delete,
        "error deleting ipv4",
        flags=(FlagSpec(("-i", "--ipv4"), "ipv4 address you wish to delete", required=True),),
        aliases=("destroy",),
    ),
    # ipv6
    CommandSpec(
        ("server", "ipv6", "list"),
        "list ipv6 for a server",
        handlers.ipv6_list,
        "error getting ipv6 info",
        flags=_PAGING,
        aliases=("v6",),
    ),
    # plans
    CommandSpec(
        ("server", "plans", "upgrade"),
        "upgrade plan for instance",
        handlers.upgrade_plan,
        "error upgrading plans",
        flags=(FlagSpec(("-p", "--plan"), "plan id that you wish to upgrade to", required=True),),
    ),
    # reverse-dns
    CommandSpec(
        ("server", "reverse-dns", "default-ipv4"),
        "Set a reverse DNS entry for an IPv4 address of an instance to the original setting",
        handlers.reverse_default_ipv4,
        "error setting default reverse dns",
        flags=(FlagSpec(("-i", "--ip"), "iPv4 address used in the reverse DNS update", required=True),),
    ),
    CommandSpec(
        ("server", "reverse-dns", "list-ipv6"),
        "List the IPv6 reverse DNS entries for an instance",
        handlers.reverse_list_ipv6,
        "error getting the reverse ipv6 list",
    ),
    CommandSpec(
        ("server", "reverse-dns", "delete-ipv6"),
        "Remove a reverse DNS entry for an IPv6 address for an instance",
        handlers.reverse_delete_ipv6,
        "error deleting reverse ipv6 entry",
        flags=(FlagSpec(("-i", "--ip"), "ipv6 address you wish to delete"),),
        aliases=("destroy-ipv6",),
    ),
    CommandSpec(
        ("server", "reverse-dns", "set-ipv4"),
        "Set a reverse DNS entry for an IPv4 address for an instance",
        handlers.reverse_set_ipv4,
        "error setting reverse dns ipv4 entry",
        flags=_REVERSE_ENTRY,
    ),
    CommandSpec(
        ("server", "reverse-dns", "set-ipv6"),
        "Set a reverse DNS entry for an IPv6 address for an instance",
        handlers.reverse_set_ipv6,
        "error setting reverse dns ipv6 entry",
        flags=_REVERSE_ENTRY,
    ),
    # user-data
    CommandSpec(
        ("server", "user-data", "set"),
        "Set the user-data of a server",
        handlers.user_data_set,
        "error setting user-data",
        flags=(FlagSpec(("-d", "--userdata"), "file to read userdata from ('-' for stdin)", default="-"),),
    ),
    CommandSpec(
        ("server", "user-data", "get"),
        "Get the user-data of a server",
        handlers.user_data_get,
        "error getting user-data",
    ),
)
