"""Presenter — renders API results as tables.

Uses a Rich :class:`~rich.table.Table` when Rich is installed and falls
back to plain aligned columns otherwise.  Values coming from the API are
escaped so they are never interpreted as Rich markup.
"""

from __future__ import annotations

from collections.abc import Sequence

from vultr_cli.cli.console import console
from vultr_cli.core.models import (
    BackupSchedule,
    BandwidthDay,
    Instance,
    IPv4,
    IPv6,
    IsoStatus,
    Meta,
    ReverseIPv6,
    UserData,
)


# ---------------------------------------------------------------------------
# Table rendering
# ---------------------------------------------------------------------------

def _render_table(
    columns: Sequence[str],
    rows: Sequence[Sequence[object]],
    *,
    show_header: bool = True,
) -> None:
    """Render *rows* under *columns* with Rich or as plain text."""
    cells = [[str(value) for value in row] for row in rows]

    try:
        from rich.markup import escape
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_table(columns, cells, show_header=show_header)
        return

    table = Table(
        show_header=show_header,
        header_style="bold",
        box=None,
        pad_edge=False,
    )
    for column in columns:
        table.add_column(column, no_wrap=True)
    for row in cells:
        table.add_row(*(escape(value) for value in row))
    console.print(table)


def _print_plain_table(
    columns: Sequence[str],
    cells: Sequence[Sequence[str]],
    *,
    show_header: bool,
) -> None:
    """Render a table without Rich."""
    widths = [len(column) if show_header else 0 for column in columns]
    for row in cells:
        for index, value in enumerate(row):
            widths[index] = max(widths[index], len(value))

    def line(values: Sequence[str]) -> str:
        return "  ".join(value.ljust(widths[i]) for i, value in enumerate(values)).rstrip()

    if show_header:
        print(line(columns))
    for row in cells:
        print(line(row))


def _render_details(pairs: Sequence[tuple[str, object]]) -> None:
    _render_table(("FIELD", "VALUE"), pairs, show_header=False)


# ---------------------------------------------------------------------------
# Result printers
# ---------------------------------------------------------------------------

def meta(page: Meta) -> None:
    console.print()
    _render_table(
        ("TOTAL", "NEXT PAGE", "PREV PAGE"),
        [(page.total, page.next, page.prev)],
    )


def server(instance: Instance) -> None:
    """Print every field of a single instance."""
    pairs: list[tuple[str, object]] = [
        ("ID", instance.id),
        ("LABEL", instance.label),
        ("OS", instance.os),
        ("STATUS", instance.status),
        ("POWER STATUS", instance.power_status),
        ("SERVER STATE", instance.server_status),
        ("REGION", instance.region),
        ("PLAN", instance.plan),
        ("MAIN IP", instance.main_ip),
        ("V6 MAIN IP", instance.v6_main_ip),
        ("INTERNAL IP", instance.internal_ip),
        ("CPU COUNT", instance.vcpu_count),
        ("RAM", instance.ram),
        ("DISK", instance.disk),
        ("ALLOWED BANDWIDTH", instance.allowed_bandwidth),
        ("DATE CREATED", instance.date_created),
        ("TAG", instance.tag),
        ("OS ID", instance.os_id),
        ("APP ID", instance.app_id),
        ("FIREWALL GROUP ID", instance.firewall_group_id),
    ]
    if instance.default_password:
        pairs.append(("DEFAULT PASSWORD", instance.default_password))
    _render_details(pairs)


def server_list(instances: Sequence[Instance], page: Meta) -> None:
    _render_table(
        ("ID", "IP", "LABEL", "OS", "STATUS", "REGION", "CPU", "RAM", "DISK", "TAG"),
        [
            (
                item.id,
                item.main_ip,
                item.label,
                item.os,
                item.status,
                item.region,
                item.vcpu_count,
                item.ram,
                item.disk,
                item.tag,
            )
            for item in instances
        ],
    )
    meta(page)


def bandwidth(days: Sequence[BandwidthDay]) -> None:
    _render_table(
        ("DATE", "INCOMING BYTES", "OUTGOING BYTES"),
        [(day.date, day.incoming_bytes, day.outgoing_bytes) for day in days],
    )


def ipv4_list(addresses: Sequence[IPv4], page: Meta) -> None:
    _render_table(
        ("IP", "NETMASK", "GATEWAY", "TYPE", "REVERSE"),
        [(a.ip, a.netmask, a.gateway, a.type, a.reverse) for a in addresses],
    )
    meta(page)


def ipv6_list(addresses: Sequence[IPv6], page: Meta) -> None:
    _render_table(
        ("IP", "NETWORK", "NETWORK SIZE", "TYPE"),
        [(a.ip, a.network, a.network_size, a.type) for a in addresses],
    )
    meta(page)


def reverse_ipv6(entries: Sequence[ReverseIPv6]) -> None:
    _render_table(("IP", "REVERSE"), [(e.ip, e.reverse) for e in entries])


def backup_schedule(schedule: BackupSchedule) -> None:
    _render_details(
        [
            ("ENABLED", schedule.enabled),
            ("CRON TYPE", schedule.type),
            ("NEXT RUN", schedule.next_scheduled_time_utc),
            ("HOUR", schedule.hour),
            ("DOW", schedule.dow),
            ("DOM", schedule.dom),
        ]
    )


def iso_status(status: IsoStatus) -> None:
    _render_table(("STATE", "ISO ID"), [(status.state, status.iso_id)])


def user_data(data: UserData) -> None:
    console.print(data.decoded, markup=False)
