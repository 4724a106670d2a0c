"""Domain value objects."""

from permsync.domain.value_objects.provisioning_mode import ProvisioningMode

__all__ = [
    "ProvisioningMode",
]
