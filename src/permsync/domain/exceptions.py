"""Domain exceptions."""


class PermSyncError(Exception):
    """Base exception for permission set sync."""

    pass


class ConfigurationError(PermSyncError):
    """Deployment configuration is missing or inconsistent."""

    pass


class ValidationError(PermSyncError):
    """Validation failed for input data."""

    pass


class ParseError(PermSyncError):
    """Object body is not a valid permission set document."""

    pass


class NotFound(PermSyncError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class StoreError(PermSyncError):
    """Transient backend failure; safe to retry."""

    pass


class StoreReadError(StoreError):
    """Reading from a table or the object store failed."""

    pass


class StoreWriteError(StoreError):
    """Writing to or deleting from a table failed."""

    pass


class LinkLookupError(PermSyncError):
    """Querying dependent links for a permission set failed."""

    pass


class DependentLinksExist(PermSyncError):
    """Permission set still has links and cannot be deleted through the API."""

    def __init__(self, name: str, link_count: int) -> None:
        super().__init__(
            f"Permission set {name} has {link_count} dependent link(s); remove them first"
        )
        self.name = name
        self.link_count = link_count


class IngestionFailed(PermSyncError):
    """Event-mode ingestion failed after the operator was notified."""

    def __init__(self, object_key: str, reason: str) -> None:
        super().__init__(f"{object_key}: {reason}")
        self.object_key = object_key
        self.reason = reason
