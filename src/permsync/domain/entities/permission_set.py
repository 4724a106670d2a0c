"""Permission set entities - the declared record and its provider reference."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PermissionSetRecord:
    """Declared permission set. Existence in the Metadata Store is the source of truth."""

    name: str
    document: dict[str, Any] = field(default_factory=dict)


@dataclass
class PermissionSetReference:
    """Provider-assigned identifier, written by downstream provisioning."""

    name: str
    provider_id: str
