"""Core instance service — one remote call per operation.

The service depends on an :class:`~vultr_cli.core.protocols.InstanceGateway`
injected at construction time (dependency inversion), keeping the core
free of any HTTP imports.  It sends request records as payloads and
parses the raw response bodies into domain models.

Guarantees
----------
* Pure orchestration — no ``print()``, no filesystem access.
* Only :class:`~vultr_cli.exceptions.VultrCliError` subclasses escape.
* No retries: each method makes at most one gateway call.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from vultr_cli.core.models import (
    BackupSchedule,
    BackupScheduleRequest,
    BandwidthDay,
    Instance,
    InstanceCreateRequest,
    InstanceUpdateRequest,
    IPv4,
    IPv6,
    IsoStatus,
    ListOptions,
    Meta,
    RestoreRequest,
    ReverseIPRequest,
    ReverseIPv6,
    UserData,
)
from vultr_cli.core.protocols import InstanceGateway
from vultr_cli.exceptions import ApiError, VultrCliError

_T = TypeVar("_T")


class InstanceService:
    """Stateless facade over the instance API.

    Parameters
    ----------
    gateway:
        Any object satisfying the :class:`InstanceGateway` protocol.
    """

    def __init__(self, gateway: InstanceGateway) -> None:
        self._gateway: InstanceGateway = gateway

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, instance_id: str) -> None:
        self._call(self._gateway.start, instance_id)

    def halt(self, instance_id: str) -> None:
        self._call(self._gateway.halt, instance_id)

    def reboot(self, instance_id: str) -> None:
        self._call(self._gateway.reboot, instance_id)

    def reinstall(self, instance_id: str) -> None:
        self._call(self._gateway.reinstall, instance_id)

    def delete(self, instance_id: str) -> None:
        self._call(self._gateway.delete, instance_id)

    def create(self, request: InstanceCreateRequest) -> Instance:
        body = self._call(self._gateway.create, request.to_payload())
        return self._parse_instance(_section(body, "instance"))

    def update(self, instance_id: str, request: InstanceUpdateRequest) -> None:
        self._call(self._gateway.update, instance_id, request.to_payload())

    def restore(self, instance_id: str, request: RestoreRequest) -> None:
        self._call(self._gateway.restore, instance_id, request.to_payload())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, instance_id: str) -> Instance:
        body = self._call(self._gateway.get, instance_id)
        return self._parse_instance(_section(body, "instance"))

    def list_instances(self, options: ListOptions) -> tuple[list[Instance], Meta]:
        body = self._call(
            self._gateway.list,
            per_page=options.per_page,
            cursor=options.cursor,
        )
        instances = [self._parse_instance(raw) for raw in _items(body, "instances")]
        return instances, self._parse_meta(body)

    def bandwidth(self, instance_id: str) -> list[BandwidthDay]:
        body = self._call(self._gateway.get_bandwidth, instance_id)
        days = _section(body, "bandwidth")
        return [
            BandwidthDay(
                date=str(date),
                incoming_bytes=_int(usage.get("incoming_bytes")),
                outgoing_bytes=_int(usage.get("outgoing_bytes")),
            )
            for date, usage in sorted(days.items())
            if isinstance(usage, dict)
        ]

    def get_user_data(self, instance_id: str) -> UserData:
        body = self._call(self._gateway.get_user_data, instance_id)
        return UserData(data=str(_section(body, "user_data").get("data", "")))

    # ------------------------------------------------------------------
    # Networking
    # ------------------------------------------------------------------

    def list_ipv4(
        self, instance_id: str, options: ListOptions
    ) -> tuple[list[IPv4], Meta]:
        body = self._call(
            self._gateway.list_ipv4,
            instance_id,
            per_page=options.per_page,
            cursor=options.cursor,
        )
        addresses = [
            IPv4(
                ip=str(raw.get("ip", "")),
                netmask=str(raw.get("netmask", "")),
                gateway=str(raw.get("gateway", "")),
                type=str(raw.get("type", "")),
                reverse=str(raw.get("reverse", "")),
            )
            for raw in _items(body, "ipv4s")
        ]
        return addresses, self._parse_meta(body)

    def list_ipv6(
        self, instance_id: str, options: ListOptions
    ) -> tuple[list[IPv6], Meta]:
        body = self._call(
            self._gateway.list_ipv6,
            instance_id,
            per_page=options.per_page,
            cursor=options.cursor,
        )
        addresses = [
            IPv6(
                ip=str(raw.get("ip", "")),
                network=str(raw.get("network", "")),
                network_size=_int(raw.get("network_size")),
                type=str(raw.get("type", "")),
            )
            for raw in _items(body, "ipv6s")
        ]
        return addresses, self._parse_meta(body)

    def create_ipv4(self, instance_id: str, *, reboot: bool) -> None:
        self._call(self._gateway.create_ipv4, instance_id, reboot=reboot)

    def delete_ipv4(self, instance_id: str, ip: str) -> None:
        self._call(self._gateway.delete_ipv4, instance_id, ip)

    # ------------------------------------------------------------------
    # Backups / ISO
    # ------------------------------------------------------------------

    def get_backup_schedule(self, instance_id: str) -> BackupSchedule:
        body = self._call(self._gateway.get_backup_schedule, instance_id)
        raw = _section(body, "backup_schedule")
        return BackupSchedule(
            enabled=bool(raw.get("enabled", False)),
            type=str(raw.get("type", "")),
            next_scheduled_time_utc=str(raw.get("next_scheduled_time_utc", "")),
            hour=_int(raw.get("hour")),
            dow=_int(raw.get("dow")),
            dom=_int(raw.get("dom")),
        )

    def set_backup_schedule(
        self, instance_id: str, request: BackupScheduleRequest
    ) -> None:
        self._call(self._gateway.set_backup_schedule, instance_id, request.to_payload())

    def iso_status(self, instance_id: str) -> IsoStatus:
        body = self._call(self._gateway.iso_status, instance_id)
        raw = _section(body, "iso_status")
        return IsoStatus(
            state=str(raw.get("state", "")),
            iso_id=str(raw.get("iso_id", "")),
        )

    def attach_iso(self, instance_id: str, iso_id: str) -> None:
        self._call(self._gateway.attach_iso, instance_id, iso_id)

    def detach_iso(self, instance_id: str) -> None:
        self._call(self._gateway.detach_iso, instance_id)

    # ------------------------------------------------------------------
    # Reverse DNS
    # ------------------------------------------------------------------

    def default_reverse_ipv4(self, instance_id: str, ip: str) -> None:
        self._call(self._gateway.default_reverse_ipv4, instance_id, ip)

    def list_reverse_ipv6(self, instance_id: str) -> list[ReverseIPv6]:
        body = self._call(self._gateway.list_reverse_ipv6, instance_id)
        return [
            ReverseIPv6(ip=str(raw.get("ip", "")), reverse=str(raw.get("reverse", "")))
            for raw in _items(body, "reverse_ipv6s")
        ]

    def delete_reverse_ipv6(self, instance_id: str, ip: str) -> None:
        self._call(self._gateway.delete_reverse_ipv6, instance_id, ip)

    def create_reverse_ipv4(self, instance_id: str, request: ReverseIPRequest) -> None:
        self._call(self._gateway.create_reverse_ipv4, instance_id, request.to_payload())

    def create_reverse_ipv6(self, instance_id: str, request: ReverseIPRequest) -> None:
        self._call(self._gateway.create_reverse_ipv6, instance_id, request.to_payload())

    # ------------------------------------------------------------------
    # Gateway delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(method: Callable[..., _T], *args: Any, **kwargs: Any) -> _T:
        """Call the gateway and ensure only our exceptions escape."""
        try:
            return method(*args, **kwargs)
        except VultrCliError:
            # Already typed; propagate unchanged.
            raise
        except Exception as exc:
            raise ApiError(f"Unexpected gateway error: {exc}") from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_instance(raw: dict[str, Any]) -> Instance:
        password = raw.get("default_password")
        return Instance(
            id=str(raw.get("id", "")),
            label=str(raw.get("label", "")),
            os=str(raw.get("os", "")),
            status=str(raw.get("status", "")),
            power_status=str(raw.get("power_status", "")),
            server_status=str(raw.get("server_status", "")),
            region=str(raw.get("region", "")),
            plan=str(raw.get("plan", "")),
            main_ip=str(raw.get("main_ip", "")),
            v6_main_ip=str(raw.get("v6_main_ip", "")),
            internal_ip=str(raw.get("internal_ip", "")),
            vcpu_count=_int(raw.get("vcpu_count")),
            ram=_int(raw.get("ram")),
            disk=_int(raw.get("disk")),
            allowed_bandwidth=_int(raw.get("allowed_bandwidth")),
            date_created=str(raw.get("date_created", "")),
            tag=str(raw.get("tag", "")),
            os_id=_int(raw.get("os_id")),
            app_id=_int(raw.get("app_id")),
            firewall_group_id=str(raw.get("firewall_group_id", "")),
            default_password=str(password) if password else None,
        )

    @staticmethod
    def _parse_meta(body: dict[str, Any]) -> Meta:
        raw = _section(body, "meta")
        links = raw.get("links")
        if not isinstance(links, dict):
            links = {}
        return Meta(
            total=_int(raw.get("total")),
            next=str(links.get("next") or ""),
            prev=str(links.get("prev") or ""),
        )


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def _section(body: dict[str, Any], key: str) -> dict[str, Any]:
    """Safely pull a nested object out of a response body."""
    raw = body.get(key) if isinstance(body, dict) else None
    return raw if isinstance(raw, dict) else {}


def _items(body: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Safely pull a list of objects out of a response body."""
    raw = body.get(key) if isinstance(body, dict) else None
    if not isinstance(raw, list):
        return []
    # Skip malformed entries.
    return [entry for entry in raw if isinstance(entry, dict)]


def _int(value: object) -> int:
    """Convert *value* to ``int``, defaulting to ``0``."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return 0
