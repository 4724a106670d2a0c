"""Link entity - a consumer of a permission set, owned by the links table."""

from dataclasses import dataclass


@dataclass
class LinkRecord:
    """Association between a permission set and one of its consumers."""

    link_id: str
    permission_set_name: str
    principal_name: str | None = None
    principal_type: str | None = None
    target: str | None = None
