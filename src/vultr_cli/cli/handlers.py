"""Command handlers — one function per ``server`` operation.

Each handler receives the :class:`InstanceService` (already bound to a
gateway) and the parsed :class:`Invocation`, builds at most one request,
makes one service call, and renders the outcome.  Handlers never catch
errors; the dispatcher and the error boundary in :mod:`vultr_cli.cli.app`
do that.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from vultr_cli.cli import printer
from vultr_cli.cli.console import console
from vultr_cli.core import request_builder
from vultr_cli.core.instance_service import InstanceService
from vultr_cli.core.models import ListOptions
from vultr_cli.exceptions import MissingInstanceIdError, MissingOptionError
from vultr_cli.infra.userdata import read_user_data


@dataclass(frozen=True, slots=True)
class Invocation:
    """Arguments of a single command invocation."""

    instance_id: str
    """Target instance; empty for commands that take none."""

    flags: Mapping[str, Any] = field(default_factory=dict)


def _paging(call: Invocation) -> ListOptions:
    return request_builder.build_list_options(
        cursor=call.flags.get("cursor"),
        per_page=call.flags.get("per_page"),
    )


def _say(message: str) -> None:
    console.print(message, markup=False)


def _update_value(call: Invocation, dest: str, flag: str) -> Any:
    """Return a flag value for an update; empty or zero values send nothing."""
    value = call.flags.get(dest)
    if value is None or value == "" or value == 0:
        raise MissingOptionError(f"please provide a value for {flag}")
    return value


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

def start(service: InstanceService, call: Invocation) -> None:
    service.start(call.instance_id)
    _say("Started up server")


def stop(service: InstanceService, call: Invocation) -> None:
    service.halt(call.instance_id)
    _say("Stopped the server")


def restart(service: InstanceService, call: Invocation) -> None:
    service.reboot(call.instance_id)
    _say("Rebooted server")


def reinstall(service: InstanceService, call: Invocation) -> None:
    service.reinstall(call.instance_id)
    _say("Reinstalled server")


def delete(service: InstanceService, call: Invocation) -> None:
    service.delete(call.instance_id)
    _say("Deleted server")


def restore(service: InstanceService, call: Invocation) -> None:
    request = request_builder.build_restore_request(
        backup_id=call.flags.get("backup"),
        snapshot_id=call.flags.get("snapshot"),
    )
    service.restore(call.instance_id, request)
    _say("Instance has been restored")


def create(service: InstanceService, call: Invocation) -> None:
    flags = call.flags
    request = request_builder.build_create_request(
        region=flags["region"],
        plan=flags["plan"],
        os_id=flags.get("os"),
        ipxe_chain_url=flags.get("ipxe"),
        iso_id=flags.get("iso"),
        snapshot_id=flags.get("snapshot"),
        script_id=flags.get("script_id"),
        enable_ipv6=flags.get("ipv6", False),
        enable_private_network=flags.get("private_network", False),
        networks=flags.get("network") or (),
        label=flags.get("label"),
        ssh_keys=flags.get("ssh_keys") or (),
        auto_backup=flags.get("auto_backup", False),
        app_id=flags.get("app"),
        user_data=flags.get("userdata"),
        notify=flags.get("notify", True),
        ddos=flags.get("ddos", False),
        reserved_ipv4=flags.get("reserved_ipv4"),
        hostname=flags.get("host"),
        tag=flags.get("tag"),
        firewall_group_id=flags.get("firewall_group"),
    )
    printer.server(service.create(request))


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------

def tag(service: InstanceService, call: Invocation) -> None:
    value: str = _update_value(call, "tag", "--tag")
    service.update(call.instance_id, request_builder.build_update_request(tag=value))
    _say(f"Tagged server with : {value}")


def label(service: InstanceService, call: Invocation) -> None:
    value: str = _update_value(call, "label", "--label")
    service.update(call.instance_id, request_builder.build_update_request(label=value))
    _say(f"Labeled server with : {value}")


def update_firewall_group(service: InstanceService, call: Invocation) -> None:
    instance_id = call.flags.get("instance_id") or ""
    if not instance_id:
        raise MissingInstanceIdError()
    # "0" unsets the firewall group.
    request = request_builder.build_update_request(
        firewall_group_id=_update_value(call, "firewall_group_id", "--firewall-group-id"),
    )
    service.update(instance_id, request)
    _say("Updated firewall-group")


def change_os(service: InstanceService, call: Invocation) -> None:
    request = request_builder.build_update_request(os_id=_update_value(call, "os", "--os"))
    service.update(call.instance_id, request)
    _say("Updated OS")


def change_app(service: InstanceService, call: Invocation) -> None:
    request = request_builder.build_update_request(app_id=_update_value(call, "app", "--app"))
    service.update(call.instance_id, request)
    _say("Updated Application")


def upgrade_plan(service: InstanceService, call: Invocation) -> None:
    request = request_builder.build_update_request(plan=_update_value(call, "plan", "--plan"))
    service.update(call.instance_id, request)
    _say("Upgraded plan")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get(service: InstanceService, call: Invocation) -> None:
    printer.server(service.get(call.instance_id))


def list_servers(service: InstanceService, call: Invocation) -> None:
    instances, page = service.list_instances(_paging(call))
    printer.server_list(instances, page)


def bandwidth(service: InstanceService, call: Invocation) -> None:
    printer.bandwidth(service.bandwidth(call.instance_id))


# ---------------------------------------------------------------------------
# Backups / ISO
# ---------------------------------------------------------------------------

def backup_get(service: InstanceService, call: Invocation) -> None:
    printer.backup_schedule(service.get_backup_schedule(call.instance_id))


def backup_create(service: InstanceService, call: Invocation) -> None:
    request = request_builder.build_backup_schedule_request(
        type=call.flags["type"],
        hour=call.flags.get("hour", 0),
        dow=call.flags.get("dow", 0),
        dom=call.flags.get("dom", 0),
    )
    service.set_backup_schedule(call.instance_id, request)
    _say("Created backup schedule")


def iso_status(service: InstanceService, call: Invocation) -> None:
    printer.iso_status(service.iso_status(call.instance_id))


def iso_attach(service: InstanceService, call: Invocation) -> None:
    service.attach_iso(call.instance_id, call.flags["iso_id"])
    _say("ISO has been attached")


def iso_detach(service: InstanceService, call: Invocation) -> None:
    service.detach_iso(call.instance_id)
    _say("ISO has been detached")


# ---------------------------------------------------------------------------
# IPv4 / IPv6
# ---------------------------------------------------------------------------

def ipv4_list(service: InstanceService, call: Invocation) -> None:
    addresses, page = service.list_ipv4(call.instance_id, _paging(call))
    printer.ipv4_list(addresses, page)


def ipv4_create(service: InstanceService, call: Invocation) -> None:
    service.create_ipv4(call.instance_id, reboot=call.flags.get("reboot", False))
    _say("IPV4 has been created")


def ipv4_delete(service: InstanceService, call: Invocation) -> None:
    service.delete_ipv4(call.instance_id, call.flags["ipv4"])
    _say("IPV4 has been deleted")


def ipv6_list(service: InstanceService, call: Invocation) -> None:
    addresses, page = service.list_ipv6(call.instance_id, _paging(call))
    printer.ipv6_list(addresses, page)


# ---------------------------------------------------------------------------
# Reverse DNS
# ---------------------------------------------------------------------------

def reverse_default_ipv4(service: InstanceService, call: Invocation) -> None:
    service.default_reverse_ipv4(call.instance_id, call.flags["ip"])
    _say("Set default reserve dns")


def reverse_list_ipv6(service: InstanceService, call: Invocation) -> None:
    printer.reverse_ipv6(service.list_reverse_ipv6(call.instance_id))


def reverse_delete_ipv6(service: InstanceService, call: Invocation) -> None:
    service.delete_reverse_ipv6(call.instance_id, call.flags.get("ip") or "")
    _say("Deleted reverse DNS IPV6 entry")


def reverse_set_ipv4(service: InstanceService, call: Invocation) -> None:
    request = request_builder.build_reverse_ip_request(
        ip=call.flags["ip"], entry=call.flags["entry"]
    )
    service.create_reverse_ipv4(call.instance_id, request)
    _say("Set reverse DNS entry for ipv4 address")


def reverse_set_ipv6(service: InstanceService, call: Invocation) -> None:
    request = request_builder.build_reverse_ip_request(
        ip=call.flags["ip"], entry=call.flags["entry"]
    )
    service.create_reverse_ipv6(call.instance_id, request)
    _say("Set reverse DNS entry for ipv6 address")


# ---------------------------------------------------------------------------
# User data
# ---------------------------------------------------------------------------

def user_data_set(service: InstanceService, call: Invocation) -> None:
    raw = read_user_data(call.flags.get("userdata") or "-")
    service.update(call.instance_id, request_builder.build_user_data_request(raw))
    _say("Set user-data for server")


def user_data_get(service: InstanceService, call: Invocation) -> None:
    printer.user_data(service.get_user_data(call.instance_id))
