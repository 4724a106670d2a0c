"""Pytest fixtures for permission set sync tests."""

from __future__ import annotations

import pytest

from permsync.application.ports import OperatorNotification
from permsync.domain.entities import LinkRecord, PermissionSetRecord, PermissionSetReference
from permsync.domain.exceptions import LinkLookupError, StoreReadError, StoreWriteError


# --- Fake repositories ---


class FakePermissionSetRepository:
    """In-memory Metadata Store."""

    def __init__(self) -> None:
        self._by_name: dict[str, PermissionSetRecord] = {}
        self.fail_writes = False
        self.fail_reads = False

    async def get(self, name: str) -> PermissionSetRecord | None:
        if self.fail_reads:
            raise StoreReadError(f"Reading permission set {name} failed")
        return self._by_name.get(name)

    async def put(self, record: PermissionSetRecord) -> None:
        if self.fail_writes:
            raise StoreWriteError(f"Writing permission set {record.name} failed")
        self._by_name[record.name] = record

    async def delete(self, name: str) -> bool:
        if self.fail_writes:
            raise StoreWriteError(f"Deleting permission set {name} failed")
        return self._by_name.pop(name, None) is not None

    def snapshot(self) -> dict[str, dict]:
        """Current contents as name -> document."""
        return {name: r.document for name, r in self._by_name.items()}


class FakeReferenceRepository:
    """In-memory Reference Store."""

    def __init__(self) -> None:
        self._by_name: dict[str, PermissionSetReference] = {}

    async def get(self, name: str) -> PermissionSetReference | None:
        return self._by_name.get(name)

    async def delete(self, name: str) -> bool:
        return self._by_name.pop(name, None) is not None

    def add(self, name: str, provider_id: str) -> None:
        """Helper standing in for downstream provisioning."""
        self._by_name[name] = PermissionSetReference(name=name, provider_id=provider_id)


class FakeLinkRepository:
    """In-memory links table."""

    def __init__(self) -> None:
        self._links: list[LinkRecord] = []
        self.fail_lookups = False

    async def list_by_permission_set(self, name: str) -> list[LinkRecord]:
        if self.fail_lookups:
            raise LinkLookupError(f"Looking up links for {name} failed")
        return [link for link in self._links if link.permission_set_name == name]

    def add(self, link_id: str, permission_set_name: str) -> None:
        """Helper to add a link for tests."""
        self._links.append(LinkRecord(link_id=link_id, permission_set_name=permission_set_name))


class FakeObjectStore:
    """In-memory object store."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}

    async def get_object_body(self, key: str) -> bytes:
        if key not in self.objects:
            raise StoreReadError(f"Fetching {key} failed: NoSuchKey")
        return self.objects[key]


class FakeNotifier:
    """Records notifications instead of publishing them."""

    def __init__(self) -> None:
        self.sent: list[OperatorNotification] = []
        self.fail = False

    async def notify(self, notification: OperatorNotification) -> None:
        if self.fail:
            raise StoreWriteError("Publishing notification failed")
        self.sent.append(notification)


# --- Fixtures ---


@pytest.fixture
def permission_sets() -> FakePermissionSetRepository:
    return FakePermissionSetRepository()


@pytest.fixture
def references() -> FakeReferenceRepository:
    return FakeReferenceRepository()


@pytest.fixture
def links() -> FakeLinkRepository:
    return FakeLinkRepository()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def readonly_document() -> dict:
    """Inline policy document for a read-only permission set."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {"Effect": "Allow", "Action": ["s3:GetObject", "s3:ListBucket"], "Resource": "*"}
        ],
    }
