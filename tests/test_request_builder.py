"""Tests for request construction (core/request_builder.py).

All builders are pure, so these tests need no mocks.

Coverage:
* OS source resolution and the forced OS ids.
* Create request defaults and pass-through fields.
* Restore exclusivity.
* User-data encoding, backup schedule, reverse DNS, paging.
* Determinism of repeated builds.
"""

from __future__ import annotations

import base64
import json
from typing import Any

import pytest

from vultr_cli.core import request_builder
from vultr_cli.core.models import InstanceCreateRequest, ListOptions, RestoreRequest
from vultr_cli.exceptions import (
    AmbiguousOptionsError,
    MissingOptionError,
    MissingOSSourceError,
)


def _create(**overrides: Any) -> InstanceCreateRequest:
    kwargs: dict[str, Any] = {"region": "ewr", "plan": "vc2-1c-1gb"}
    kwargs.update(overrides)
    return request_builder.build_create_request(**kwargs)


# ---------------------------------------------------------------------------
# OS source
# ---------------------------------------------------------------------------

class TestResolveOsSource:
    @pytest.mark.parametrize(
        ("option", "value", "expected_source", "expected_os_id"),
        [
            ("app_id", 37, "app_id", 186),
            ("iso_id", "iso-1", "iso_id", 159),
            ("snapshot_id", "snap-1", "snapshot_id", 164),
        ],
    )
    def test_single_source_forces_os_id(
        self,
        option: str,
        value: object,
        expected_source: str,
        expected_os_id: int,
    ) -> None:
        kwargs: dict[str, Any] = {
            "os_id": 1743,
            "app_id": None,
            "iso_id": None,
            "snapshot_id": None,
        }
        kwargs[option] = value
        assert request_builder.resolve_os_source(**kwargs) == (
            expected_source,
            expected_os_id,
        )

    def test_explicit_os_id_is_fallback(self) -> None:
        source, os_id = request_builder.resolve_os_source(
            os_id=1743, app_id=None, iso_id=None, snapshot_id=None
        )
        assert source == "os_id"
        assert os_id == 1743

    @pytest.mark.parametrize("os_id", [None, 0])
    def test_no_source_fails(self, os_id: int | None) -> None:
        with pytest.raises(MissingOSSourceError, match="must be provided"):
            request_builder.resolve_os_source(
                os_id=os_id, app_id=None, iso_id=None, snapshot_id=None
            )

    def test_app_zero_counts_as_absent(self) -> None:
        assert request_builder.resolve_os_source(
            os_id=1743, app_id=0, iso_id=None, snapshot_id=None
        ) == ("os_id", 1743)

    def test_app_zero_alone_fails(self) -> None:
        with pytest.raises(MissingOSSourceError):
            request_builder.resolve_os_source(
                os_id=None, app_id=0, iso_id=None, snapshot_id=None
            )

    def test_app_zero_does_not_clash_with_iso(self) -> None:
        source, os_id = request_builder.resolve_os_source(
            os_id=None, app_id=0, iso_id="iso-1", snapshot_id=None
        )
        assert (source, os_id) == ("iso_id", 159)

    def test_empty_strings_count_as_absent(self) -> None:
        source, _ = request_builder.resolve_os_source(
            os_id=None, app_id=37, iso_id="", snapshot_id=""
        )
        assert source == "app_id"

    def test_two_sources_fail_naming_keys(self) -> None:
        with pytest.raises(AmbiguousOptionsError, match="Too many options") as exc_info:
            request_builder.resolve_os_source(
                os_id=None, app_id=37, iso_id="iso-1", snapshot_id=None
            )
        assert set(exc_info.value.selected) == {"app_id", "iso_id"}

    def test_three_sources_fail(self) -> None:
        with pytest.raises(AmbiguousOptionsError) as exc_info:
            request_builder.resolve_os_source(
                os_id=1, app_id=37, iso_id="iso-1", snapshot_id="snap-1"
            )
        assert set(exc_info.value.selected) == {"app_id", "iso_id", "snapshot_id"}


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

class TestBuildCreateRequest:
    def test_app_create(self) -> None:
        request = _create(app_id=37)
        assert request.os_source == "app_id"
        assert request.os_id == 186
        assert request.app_id == 37

    def test_app_overrides_os_flag(self) -> None:
        request = _create(app_id=37, os_id=1743)
        assert request.os_id == 186

    def test_iso_and_snapshot_are_carried(self) -> None:
        assert _create(iso_id="iso-1").iso_id == "iso-1"
        assert _create(snapshot_id="snap-1").snapshot_id == "snap-1"

    def test_defaults(self) -> None:
        payload = _create(os_id=1743).to_payload()
        assert payload == {
            "region": "ewr",
            "plan": "vc2-1c-1gb",
            "os_id": 1743,
            "activation_email": True,
        }

    def test_notify_can_be_disabled(self) -> None:
        assert "activation_email" not in _create(os_id=1, notify=False).to_payload()

    def test_optional_flags_are_sent(self) -> None:
        payload = _create(
            os_id=1743,
            enable_ipv6=True,
            ddos=True,
            auto_backup=True,
            enable_private_network=True,
            networks=["net-1", "net-2"],
            ssh_keys=["key-1"],
            label="web-1",
            hostname="web-1.example.com",
            tag="prod",
            firewall_group_id="fw-1",
            script_id="script-1",
            reserved_ipv4="203.0.113.5",
            user_data="I2Nsb3VkLWNvbmZpZw==",
            ipxe_chain_url="https://boot.example.com/ipxe",
        ).to_payload()
        assert payload["enable_ipv6"] is True
        assert payload["ddos_protection"] is True
        assert payload["backups"] == "enabled"
        assert payload["enable_private_network"] is True
        assert payload["attach_private_network"] == ["net-1", "net-2"]
        assert payload["sshkey_id"] == ["key-1"]
        assert payload["label"] == "web-1"
        assert payload["hostname"] == "web-1.example.com"
        assert payload["tag"] == "prod"
        assert payload["firewall_group_id"] == "fw-1"
        assert payload["script_id"] == "script-1"
        assert payload["reserved_ipv4"] == "203.0.113.5"
        assert payload["user_data"] == "I2Nsb3VkLWNvbmZpZw=="
        assert payload["ipxe_chain_url"] == "https://boot.example.com/ipxe"

    def test_os_source_is_not_sent(self) -> None:
        assert "os_source" not in _create(app_id=37).to_payload()

    def test_ambiguous_sources_fail(self) -> None:
        with pytest.raises(AmbiguousOptionsError):
            _create(app_id=37, snapshot_id="snap-1")

    def test_missing_source_fails(self) -> None:
        with pytest.raises(MissingOSSourceError):
            _create()

    def test_building_twice_is_identical(self) -> None:
        flags: dict[str, Any] = {
            "app_id": 37,
            "label": "web-1",
            "ssh_keys": ["key-1", "key-2"],
            "networks": ["net-1"],
            "enable_ipv6": True,
        }
        first = _create(**flags)
        second = _create(**flags)
        assert first == second
        assert json.dumps(first.to_payload(), sort_keys=True) == json.dumps(
            second.to_payload(), sort_keys=True
        )

    def test_request_is_immutable(self) -> None:
        request = _create(os_id=1)
        with pytest.raises(AttributeError):
            request.os_id = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Restore
# ---------------------------------------------------------------------------

class TestBuildRestoreRequest:
    def test_neither_fails(self) -> None:
        with pytest.raises(MissingOptionError, match="at least one flag"):
            request_builder.build_restore_request(backup_id="", snapshot_id="")

    def test_neither_none_fails(self) -> None:
        with pytest.raises(MissingOptionError):
            request_builder.build_restore_request(backup_id=None, snapshot_id=None)

    def test_both_fail(self) -> None:
        with pytest.raises(AmbiguousOptionsError, match="not both"):
            request_builder.build_restore_request(backup_id="b-1", snapshot_id="s-1")

    def test_backup_only(self) -> None:
        request = request_builder.build_restore_request(backup_id="b-1", snapshot_id="")
        assert request == RestoreRequest(backup_id="b-1")
        assert request.to_payload() == {"backup_id": "b-1"}

    def test_snapshot_only(self) -> None:
        request = request_builder.build_restore_request(backup_id=None, snapshot_id="s-1")
        assert request.to_payload() == {"snapshot_id": "s-1"}


# ---------------------------------------------------------------------------
# Other builders
# ---------------------------------------------------------------------------

class TestOtherBuilders:
    def test_update_only_sends_set_fields(self) -> None:
        request = request_builder.build_update_request(tag="prod")
        assert request.to_payload() == {"tag": "prod"}

    def test_firewall_group_zero_is_sent(self) -> None:
        request = request_builder.build_update_request(firewall_group_id="0")
        assert request.to_payload() == {"firewall_group_id": "0"}

    def test_user_data_is_base64_encoded(self) -> None:
        raw = b"#cloud-config\npackages: [nginx]\n"
        request = request_builder.build_user_data_request(raw)
        assert request.user_data is not None
        assert base64.b64decode(request.user_data) == raw
        assert request.to_payload() == {"user_data": base64.b64encode(raw).decode()}

    def test_backup_schedule_sends_zero_values(self) -> None:
        request = request_builder.build_backup_schedule_request(type="daily", hour=3)
        assert request.to_payload() == {"type": "daily", "hour": 3, "dow": 0, "dom": 0}

    def test_reverse_ip(self) -> None:
        request = request_builder.build_reverse_ip_request(
            ip="192.0.2.10", entry="web.example.com"
        )
        assert request.to_payload() == {"ip": "192.0.2.10", "reverse": "web.example.com"}

    def test_list_options_defaults(self) -> None:
        assert request_builder.build_list_options() == ListOptions(cursor="", per_page=25)

    def test_list_options_pass_through(self) -> None:
        options = request_builder.build_list_options(cursor="bmV4dA==", per_page=100)
        assert options == ListOptions(cursor="bmV4dA==", per_page=100)
