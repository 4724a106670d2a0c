"""Provisioning mode - how permission sets enter the system."""

from enum import StrEnum

from permsync.domain.exceptions import ConfigurationError


class ProvisioningMode(StrEnum):
    """Mutually exclusive ingestion strategies, fixed at deployment time."""

    API = "api"
    EVENT = "event"

    @classmethod
    def parse(cls, value: "str | ProvisioningMode") -> "ProvisioningMode":
        """Parse a mode flag case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown provisioning mode {value!r}; expected 'api' or 'event'"
            ) from None
