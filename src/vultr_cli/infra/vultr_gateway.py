"""requests-backed implementation of :class:`~vultr_cli.core.protocols.InstanceGateway`.

This module is the **only** place in the codebase that talks HTTP.  All
``requests`` exceptions and non-2xx responses are caught here and
re-raised as :class:`~vultr_cli.exceptions.ApiError` — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from vultr_cli.exceptions import ApiError
from vultr_cli.infra.config import Settings
from vultr_cli.version import __version__

logger = logging.getLogger(__name__)


class VultrGateway:
    """Concrete :class:`InstanceGateway` for the Vultr v2 REST API.

    Usage::

        gateway = VultrGateway(load_settings())
        body = gateway.get("cb676a46-66fd-4dfb-b839-443f2e6c0b60")

    This class satisfies the :class:`~vultr_cli.core.protocols.InstanceGateway`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        settings: Settings,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url: str = settings.api_url
        self._timeout: float = settings.timeout
        self._session: requests.Session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {settings.api_key}",
                "Content-Type": "application/json",
                "User-Agent": f"vultr-cli/{__version__}",
            }
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, instance_id: str) -> dict[str, Any]:
        return self._request("POST", f"/instances/{_seg(instance_id)}/start")

    def halt(self, instance_id: str) -> dict[str, Any]:
        return self._request("POST", f"/instances/{_seg(instance_id)}/halt")

    def reboot(self, instance_id: str) -> dict[str, Any]:
        return self._request("POST", f"/instances/{_seg(instance_id)}/reboot")

    def reinstall(self, instance_id: str) -> dict[str, Any]:
        return self._request("POST", f"/instances/{_seg(instance_id)}/reinstall")

    def delete(self, instance_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/instances/{_seg(instance_id)}")

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/instances", json=payload)

    def update(self, instance_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", f"/instances/{_seg(instance_id)}", json=payload)

    def restore(self, instance_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request(
            "POST", f"/instances/{_seg(instance_id)}/restore", json=payload
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, instance_id: str) -> dict[str, Any]:
        return self._request("GET", f"/instances/{_seg(instance_id)}")

    def list(self, *, per_page: int, cursor: str) -> dict[str, Any]:
        return self._request("GET", "/instances", params=_paging(per_page, cursor))

    def get_bandwidth(self, instance_id: str) -> dict[str, Any]:
        return self._request("GET", f"/instances/{_seg(instance_id)}/bandwidth")

    def get_user_data(self, instance_id: str) -> dict[str, Any]:
        return self._request("GET", f"/instances/{_seg(instance_id)}/user-data")

    # ------------------------------------------------------------------
    # Networking
    # ------------------------------------------------------------------

    def list_ipv4(
        self, instance_id: str, *, per_page: int, cursor: str
    ) -> dict[str, Any]:
        return self._request(
            "GET",
            f"/instances/{_seg(instance_id)}/ipv4",
            params=_paging(per_page, cursor),
        )

    def list_ipv6(
        self, instance_id: str, *, per_page: int, cursor: str
    ) -> dict[str, Any]:
        return self._request(
            "GET",
            f"/instances/{_seg(instance_id)}/ipv6",
            params=_paging(per_page, cursor),
        )

    def create_ipv4(self, instance_id: str, *, reboot: bool) -> dict[str, Any]:
        return self._request(
            "POST", f"/instances/{_seg(instance_id)}/ipv4", json={"reboot": reboot}
        )

    def delete_ipv4(self, instance_id: str, ip: str) -> dict[str, Any]:
        return self._request(
            "DELETE", f"/instances/{_seg(instance_id)}/ipv4/{_seg(ip)}"
        )

    # ------------------------------------------------------------------
    # Backups / ISO
    # ------------------------------------------------------------------

    def get_backup_schedule(self, instance_id: str) -> dict[str, Any]:
        return self._request("GET", f"/instances/{_seg(instance_id)}/backup-schedule")

    def set_backup_schedule(
        self, instance_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        return self._request(
            "POST", f"/instances/{_seg(instance_id)}/backup-schedule", json=payload
        )

    def iso_status(self, instance_id: str) -> dict[str, Any]:
        return self._request("GET", f"/instances/{_seg(instance_id)}/iso")

    def attach_iso(self, instance_id: str, iso_id: str) -> dict[str, Any]:
        return self._request(
            "POST", f"/instances/{_seg(instance_id)}/iso/attach", json={"iso_id": iso_id}
        )

    def detach_iso(self, instance_id: str) -> dict[str, Any]:
        return self._request("POST", f"/instances/{_seg(instance_id)}/iso/detach")

    # ------------------------------------------------------------------
    # Reverse DNS
    # ------------------------------------------------------------------

    def default_reverse_ipv4(self, instance_id: str, ip: str) -> dict[str, Any]:
        return self._request(
            "POST",
            f"/instances/{_seg(instance_id)}/ipv4/reverse/default",
            json={"ip": ip},
        )

    def list_reverse_ipv6(self, instance_id: str) -> dict[str, Any]:
        return self._request("GET", f"/instances/{_seg(instance_id)}/ipv6/reverse")

    def delete_reverse_ipv6(self, instance_id: str, ip: str) -> dict[str, Any]:
        return self._request(
            "DELETE", f"/instances/{_seg(instance_id)}/ipv6/reverse/{_seg(ip)}"
        )

    def create_reverse_ipv4(
        self, instance_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        return self._request(
            "POST", f"/instances/{_seg(instance_id)}/ipv4/reverse", json=payload
        )

    def create_reverse_ipv6(
        self, instance_id: str, payload: dict[str, Any]
    ) -> dict[str, Any]:
        return self._request(
            "POST", f"/instances/{_seg(instance_id)}/ipv6/reverse", json=payload
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform one HTTP call and return the decoded JSON body.

        Raises
        ------
        ApiError
            On transport failure or any non-2xx response.
        """
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, path)

        try:
            response = self._session.request(
                method,
                url,
                json=json,
                params=params,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise ApiError(
                f"could not reach the Vultr API: {exc}",
                hint="Check your network connection and VULTR_API_URL.",
            ) from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)

        if not response.ok:
            self._raise_mapped(response)

        if response.status_code == 204 or not response.content:
            return {}

        try:
            body = response.json()
        except ValueError as exc:
            raise ApiError(
                "the Vultr API returned a response that is not JSON",
                status=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            raise ApiError(
                "the Vultr API returned an unexpected data structure",
                status=response.status_code,
            )
        return body

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _raise_mapped(response: requests.Response) -> None:
        """Translate a non-2xx response into :class:`ApiError`.

        Always raises.
        """
        status = response.status_code
        message = ""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = str(body.get("error") or "")
        if not message:
            message = response.text.strip() or response.reason or "request failed"

        hint: str | None = None
        if status == 401:
            hint = "Check that your API key is valid and allowed from this IP."
        elif status == 429:
            hint = "Rate limit exceeded; wait a moment before retrying."

        raise ApiError(f"{status} {message}", status=status, hint=hint)


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def _seg(value: str) -> str:
    """Quote *value* for use as a single URL path segment."""
    return quote(value, safe="")


def _paging(per_page: int, cursor: str) -> dict[str, Any]:
    params: dict[str, Any] = {"per_page": per_page}
    if cursor:
        params["cursor"] = cursor
    return params
