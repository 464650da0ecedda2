"""Domain models for vultr-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and payload serialisation.  They carry zero
I/O and zero dependencies on external packages.

Request models serialise with :meth:`to_payload`, which drops unset
fields the same way the API's omit-empty JSON convention does.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, fields
from typing import Any


def _is_unset(value: object) -> bool:
    """Return ``True`` for values the API treats as "not sent"."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, tuple, list)) and not value:
        return True
    if isinstance(value, int) and not isinstance(value, bool) and value == 0:
        return True
    return False


class _PayloadMixin:
    """Serialise a request dataclass into an omit-empty JSON dict."""

    __slots__ = ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for field in fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if _is_unset(value):
                continue
            payload[field.name] = list(value) if isinstance(value, tuple) else value
        return payload


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InstanceCreateRequest(_PayloadMixin):
    """Body of ``POST /instances``.

    ``os_source`` records which OS provisioning path was resolved; it is
    not part of the wire payload.
    """

    region: str
    plan: str
    os_id: int
    os_source: str
    ipxe_chain_url: str | None = None
    iso_id: str | None = None
    snapshot_id: str | None = None
    script_id: str | None = None
    enable_ipv6: bool = False
    enable_private_network: bool = False
    attach_private_network: tuple[str, ...] = ()
    label: str | None = None
    sshkey_id: tuple[str, ...] = ()
    backups: bool = False
    app_id: int | None = None
    user_data: str | None = None
    activation_email: bool = True
    ddos_protection: bool = False
    reserved_ipv4: str | None = None
    hostname: str | None = None
    tag: str | None = None
    firewall_group_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = _PayloadMixin.to_payload(self)
        payload.pop("os_source", None)
        if self.backups:
            payload["backups"] = "enabled"
        return payload


@dataclass(frozen=True, slots=True)
class InstanceUpdateRequest(_PayloadMixin):
    """Body of ``PATCH /instances/{id}``; only set fields are sent."""

    tag: str | None = None
    label: str | None = None
    firewall_group_id: str | None = None
    os_id: int | None = None
    app_id: int | None = None
    plan: str | None = None
    user_data: str | None = None


@dataclass(frozen=True, slots=True)
class BackupScheduleRequest:
    """Body of ``POST /instances/{id}/backup-schedule``."""

    type: str
    hour: int = 0
    dow: int = 0
    dom: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {"type": self.type, "hour": self.hour, "dow": self.dow, "dom": self.dom}


@dataclass(frozen=True, slots=True)
class RestoreRequest(_PayloadMixin):
    """Body of ``POST /instances/{id}/restore`` — exactly one field is set."""

    backup_id: str | None = None
    snapshot_id: str | None = None


@dataclass(frozen=True, slots=True)
class ReverseIPRequest(_PayloadMixin):
    """A reverse-DNS entry for one IP address."""

    ip: str
    reverse: str


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Paging cursor passed through unmodified to list calls."""

    cursor: str = ""
    per_page: int = 25


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Meta:
    """Paging metadata returned alongside list results."""

    total: int
    next: str
    prev: str


@dataclass(frozen=True, slots=True)
class Instance:
    """A compute instance as reported by the API."""

    id: str
    label: str
    os: str
    status: str
    power_status: str
    server_status: str
    region: str
    plan: str
    main_ip: str
    v6_main_ip: str
    internal_ip: str
    vcpu_count: int
    ram: int
    disk: int
    allowed_bandwidth: int
    date_created: str
    tag: str
    os_id: int
    app_id: int
    firewall_group_id: str
    default_password: str | None = None
    """Only present in the response to a create call."""


@dataclass(frozen=True, slots=True)
class BandwidthDay:
    date: str
    incoming_bytes: int
    outgoing_bytes: int


@dataclass(frozen=True, slots=True)
class IPv4:
    ip: str
    netmask: str
    gateway: str
    type: str
    reverse: str


@dataclass(frozen=True, slots=True)
class IPv6:
    ip: str
    network: str
    network_size: int
    type: str


@dataclass(frozen=True, slots=True)
class ReverseIPv6:
    ip: str
    reverse: str


@dataclass(frozen=True, slots=True)
class BackupSchedule:
    enabled: bool
    type: str
    next_scheduled_time_utc: str
    hour: int
    dow: int
    dom: int


@dataclass(frozen=True, slots=True)
class IsoStatus:
    state: str
    iso_id: str


@dataclass(frozen=True, slots=True)
class UserData:
    """Instance user data; the API stores it base64 encoded."""

    data: str

    @property
    def decoded(self) -> str:
        """Return the decoded text, or the raw value if it is not base64."""
        try:
            return base64.b64decode(self.data, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return self.data
