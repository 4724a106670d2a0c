"""Permission set DTOs and document schema."""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

MAX_NAME_LENGTH = 32
# DynamoDB numbers: 38 digits of precision, magnitude 1E-130 up to 1E+126.
MAX_NUMBER_DIGITS = 38
MIN_NUMBER_EXPONENT = -130
MAX_NUMBER_EXPONENT = 125


class PermissionSetTag(BaseModel):
    """Key/value tag attached to a permission set."""

    Key: StrictStr = Field(min_length=1)
    Value: StrictStr


class PermissionSetDocument(BaseModel):
    """Structural schema of a permission set document.

    Only the shape is checked; the policy language itself is not interpreted.
    Unknown keys are accepted so the stored document stays verbatim.
    """

    model_config = ConfigDict(extra="allow")

    Version: str | None = None
    Statement: list[dict[str, Any]] | None = None
    permissionSetName: str | None = None
    sessionDurationInMinutes: StrictInt | None = Field(default=None, ge=60, le=720)
    relayState: str | None = None
    tags: list[PermissionSetTag] | None = None
    managedPoliciesArnList: list[StrictStr] | None = None
    inlinePolicyDocument: dict[str, Any] | None = None

    @field_validator("Statement")
    @classmethod
    def _statement_not_empty(cls, value: list[dict[str, Any]] | None) -> list[dict[str, Any]] | None:
        if value is not None and not value:
            raise ValueError("Statement must contain at least one entry")
        return value

    @field_validator("managedPoliciesArnList")
    @classmethod
    def _arns(cls, value: list[str] | None) -> list[str] | None:
        for arn in value or []:
            if not arn.startswith("arn:"):
                raise ValueError(f"Not an ARN: {arn}")
        return value

    @model_validator(mode="after")
    def _has_policy(self) -> "PermissionSetDocument":
        if (
            self.Statement is None
            and self.inlinePolicyDocument is None
            and not self.managedPoliciesArnList
        ):
            raise ValueError(
                "Document needs Statement, inlinePolicyDocument or managedPoliciesArnList"
            )
        return self


def validate_document(document: object) -> dict[str, Any]:
    """Check document shape; return it unchanged. Raises ValueError with a readable reason."""
    if not isinstance(document, dict):
        raise ValueError("Document must be a JSON object")
    try:
        PermissionSetDocument.model_validate(document)
    except PydanticValidationError as e:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'document'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValueError(reasons) from None
    _check_storable(document, "document")
    return document


def _check_storable(value: Any, path: str) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _check_storable(item, f"{path}.{key}")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_storable(item, f"{path}.{index}")
    elif isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"{path}: number must be finite")
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        number = Decimal(repr(value))
        if not number:
            return
        if len(number.as_tuple().digits) > MAX_NUMBER_DIGITS:
            raise ValueError(f"{path}: number exceeds {MAX_NUMBER_DIGITS} digits")
        if not MIN_NUMBER_EXPONENT <= number.adjusted() <= MAX_NUMBER_EXPONENT:
            raise ValueError(f"{path}: number is out of the storable range")


def validate_name(name: object) -> str:
    """Check a permission set name. Raises ValueError."""
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Permission set name is required")
    if name != name.strip():
        raise ValueError("Permission set name must not have surrounding whitespace")
    if "/" in name:
        raise ValueError("Permission set name must not contain '/'")
    if len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"Permission set name exceeds {MAX_NAME_LENGTH} characters")
    return name


class PermissionSetAction(StrEnum):
    """Operations accepted by the API handler."""

    UPSERT = "upsert"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class PermissionSetAck:
    """Acknowledgement returned after a successful operation."""

    name: str
    status: str


@dataclass
class PermissionSetOutput:
    """Output DTO for a stored permission set."""

    name: str
    document: dict[str, Any]
    provider_id: str | None = None
