"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from vultr_cli.core.instance_service import InstanceService
from vultr_cli.core.models import (
    BackupScheduleRequest,
    Instance,
    InstanceCreateRequest,
    InstanceUpdateRequest,
    ListOptions,
    Meta,
    RestoreRequest,
    ReverseIPRequest,
)
from vultr_cli.core.options import resolve_exclusive
from vultr_cli.core.protocols import InstanceGateway

__all__: list[str] = [
    "BackupScheduleRequest",
    "Instance",
    "InstanceCreateRequest",
    "InstanceGateway",
    "InstanceService",
    "InstanceUpdateRequest",
    "ListOptions",
    "Meta",
    "RestoreRequest",
    "ReverseIPRequest",
    "resolve_exclusive",
]
