"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Any, Protocol


class InstanceGateway(Protocol):
    """Contract for the remote instance API.

    Every method performs exactly one remote call and returns the
    decoded JSON response body (an empty dict when the API answers with
    no content).  Implementations must map all backend-specific
    exceptions to :class:`~vultr_cli.exceptions.ApiError`.
    """

    # --- lifecycle ---------------------------------------------------------

    def start(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def halt(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def reboot(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def reinstall(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def delete(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create an instance; the body carries an ``"instance"`` object."""
        ...  # pragma: no cover

    def update(self, instance_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        ...  # pragma: no cover

    def restore(self, instance_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        ...  # pragma: no cover

    # --- reads -------------------------------------------------------------

    def get(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def list(self, *, per_page: int, cursor: str) -> dict[str, Any]:
        """List instances; the body carries ``"instances"`` and ``"meta"``."""
        ...  # pragma: no cover

    def get_bandwidth(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def get_user_data(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    # --- networking --------------------------------------------------------

    def list_ipv4(
        self, instance_id: str, *, per_page: int, cursor: str
    ) -> dict[str, Any]: ...  # pragma: no cover

    def list_ipv6(
        self, instance_id: str, *, per_page: int, cursor: str
    ) -> dict[str, Any]: ...  # pragma: no cover

    def create_ipv4(self, instance_id: str, *, reboot: bool) -> dict[str, Any]:
        ...  # pragma: no cover

    def delete_ipv4(self, instance_id: str, ip: str) -> dict[str, Any]: ...  # pragma: no cover

    # --- backups / ISO -----------------------------------------------------

    def get_backup_schedule(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def set_backup_schedule(
        self, instance_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]: ...  # pragma: no cover

    def iso_status(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def attach_iso(self, instance_id: str, iso_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def detach_iso(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    # --- reverse DNS -------------------------------------------------------

    def default_reverse_ipv4(self, instance_id: str, ip: str) -> dict[str, Any]:
        ...  # pragma: no cover

    def list_reverse_ipv6(self, instance_id: str) -> dict[str, Any]: ...  # pragma: no cover

    def delete_reverse_ipv6(self, instance_id: str, ip: str) -> dict[str, Any]:
        ...  # pragma: no cover

    def create_reverse_ipv4(
        self, instance_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]: ...  # pragma: no cover

    def create_reverse_ipv6(
        self, instance_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]: ...  # pragma: no cover
