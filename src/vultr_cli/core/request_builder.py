"""Request builders — validated flag values in, immutable request records out.

Every function here is pure and deterministic: building twice from the
same inputs yields equal records with identical payloads.  Required-flag
enforcement happens in the argument parser before these run.
"""

from __future__ import annotations

import base64
from collections.abc import Sequence

from vultr_cli.core.models import (
    BackupScheduleRequest,
    InstanceCreateRequest,
    InstanceUpdateRequest,
    ListOptions,
    ReverseIPRequest,
    RestoreRequest,
)
from vultr_cli.core.options import blank_to_none, resolve_exclusive
from vultr_cli.exceptions import (
    AmbiguousOptionsError,
    MissingOptionError,
    MissingOSSourceError,
)

# OS source names, as reported on the create request.
OS_SOURCE_OS: str = "os_id"
OS_SOURCE_APP: str = "app_id"
OS_SOURCE_ISO: str = "iso_id"
OS_SOURCE_SNAPSHOT: str = "snapshot_id"

# Provider OS ids that select a non-OS provisioning path.
APP_OS_ID: int = 186
ISO_OS_ID: int = 159
SNAPSHOT_OS_ID: int = 164

_FORCED_OS_IDS: dict[str, int] = {
    OS_SOURCE_APP: APP_OS_ID,
    OS_SOURCE_ISO: ISO_OS_ID,
    OS_SOURCE_SNAPSHOT: SNAPSHOT_OS_ID,
}

DEFAULT_PER_PAGE: int = 25


# ---------------------------------------------------------------------------
# OS source
# ---------------------------------------------------------------------------

def resolve_os_source(
    *,
    os_id: int | None,
    app_id: int | None,
    iso_id: str | None,
    snapshot_id: str | None,
) -> tuple[str, int]:
    """Pick the OS provisioning path and the ``os_id`` to send.

    The explicit ``os_id`` is not part of the exclusive set; it is only a
    fallback when none of app, ISO or snapshot was given.  An ``os_id``
    or ``app_id`` of ``0`` names nothing and counts as absent.

    Raises
    ------
    AmbiguousOptionsError
        If more than one of app, ISO and snapshot was given.
    MissingOSSourceError
        If nothing usable was given.
    """
    source = resolve_exclusive(
        {
            OS_SOURCE_APP: app_id or None,
            OS_SOURCE_SNAPSHOT: blank_to_none(snapshot_id),
            OS_SOURCE_ISO: blank_to_none(iso_id),
        }
    )

    if source is not None:
        return source, _FORCED_OS_IDS[source]

    if os_id:
        return OS_SOURCE_OS, os_id

    raise MissingOSSourceError()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_create_request(
    *,
    region: str,
    plan: str,
    os_id: int | None = None,
    ipxe_chain_url: str | None = None,
    iso_id: str | None = None,
    snapshot_id: str | None = None,
    script_id: str | None = None,
    enable_ipv6: bool = False,
    enable_private_network: bool = False,
    networks: Sequence[str] = (),
    label: str | None = None,
    ssh_keys: Sequence[str] = (),
    auto_backup: bool = False,
    app_id: int | None = None,
    user_data: str | None = None,
    notify: bool = True,
    ddos: bool = False,
    reserved_ipv4: str | None = None,
    hostname: str | None = None,
    tag: str | None = None,
    firewall_group_id: str | None = None,
) -> InstanceCreateRequest:
    """Build the body for an instance create call."""
    source, resolved_os_id = resolve_os_source(
        os_id=os_id,
        app_id=app_id,
        iso_id=iso_id,
        snapshot_id=snapshot_id,
    )
    return InstanceCreateRequest(
        region=region,
        plan=plan,
        os_id=resolved_os_id,
        os_source=source,
        ipxe_chain_url=blank_to_none(ipxe_chain_url),
        iso_id=blank_to_none(iso_id),
        snapshot_id=blank_to_none(snapshot_id),
        script_id=blank_to_none(script_id),
        enable_ipv6=enable_ipv6,
        enable_private_network=enable_private_network,
        attach_private_network=tuple(networks),
        label=blank_to_none(label),
        sshkey_id=tuple(ssh_keys),
        backups=auto_backup,
        app_id=app_id,
        user_data=blank_to_none(user_data),
        activation_email=notify,
        ddos_protection=ddos,
        reserved_ipv4=blank_to_none(reserved_ipv4),
        hostname=blank_to_none(hostname),
        tag=blank_to_none(tag),
        firewall_group_id=blank_to_none(firewall_group_id),
    )


def build_restore_request(
    *,
    backup_id: str | None,
    snapshot_id: str | None,
) -> RestoreRequest:
    """Build a restore body from exactly one of backup or snapshot."""
    backup_id = blank_to_none(backup_id)
    snapshot_id = blank_to_none(snapshot_id)

    if backup_id is None and snapshot_id is None:
        raise MissingOptionError(
            "at least one flag must be provided (snapshot or backup)",
        )
    if backup_id is not None and snapshot_id is not None:
        raise AmbiguousOptionsError(
            ["backup_id", "snapshot_id"],
            "one flag must be provided not both (snapshot or backup)",
        )

    if snapshot_id is not None:
        return RestoreRequest(snapshot_id=snapshot_id)
    return RestoreRequest(backup_id=backup_id)


def build_update_request(
    *,
    tag: str | None = None,
    label: str | None = None,
    firewall_group_id: str | None = None,
    os_id: int | None = None,
    app_id: int | None = None,
    plan: str | None = None,
    user_data: str | None = None,
) -> InstanceUpdateRequest:
    return InstanceUpdateRequest(
        tag=tag,
        label=label,
        firewall_group_id=firewall_group_id,
        os_id=os_id,
        app_id=app_id,
        plan=plan,
        user_data=user_data,
    )


def build_user_data_request(raw: bytes) -> InstanceUpdateRequest:
    """Base64 encode raw user data into an update body."""
    encoded = base64.b64encode(raw).decode("ascii")
    return InstanceUpdateRequest(user_data=encoded)


def build_backup_schedule_request(
    *,
    type: str,
    hour: int = 0,
    dow: int = 0,
    dom: int = 0,
) -> BackupScheduleRequest:
    return BackupScheduleRequest(type=type, hour=hour, dow=dow, dom=dom)


def build_reverse_ip_request(*, ip: str, entry: str) -> ReverseIPRequest:
    return ReverseIPRequest(ip=ip, reverse=entry)


def build_list_options(
    *,
    cursor: str | None = None,
    per_page: int | None = None,
) -> ListOptions:
    """Build a paging cursor; values are passed through unmodified."""
    return ListOptions(
        cursor=cursor or "",
        per_page=DEFAULT_PER_PAGE if per_page is None else per_page,
    )
