"""Object store layout for permission set files: permission_sets/{name}.json."""

from urllib.parse import unquote_plus

PERMISSION_SETS_PREFIX = "permission_sets/"
PERMISSION_SET_SUFFIX = ".json"


def decode_event_key(raw_key: str) -> str:
    """S3 notifications deliver keys URL-encoded with '+' for spaces."""
    return unquote_plus(raw_key)


def is_permission_set_key(key: str) -> bool:
    """Whether the key is a file directly under the prefix with the suffix.

    Keys in nested folders are outside the layout; names cannot contain '/'.
    """
    if not (key.startswith(PERMISSION_SETS_PREFIX) and key.endswith(PERMISSION_SET_SUFFIX)):
        return False
    stem = key[len(PERMISSION_SETS_PREFIX) : -len(PERMISSION_SET_SUFFIX)]
    return bool(stem) and "/" not in stem


def permission_set_name_from_key(key: str) -> str:
    """Derive the permission set name from its object key."""
    if not is_permission_set_key(key):
        raise ValueError(f"Not a permission set object key: {key}")
    return key[len(PERMISSION_SETS_PREFIX) : -len(PERMISSION_SET_SUFFIX)]


def object_key_for(name: str) -> str:
    """Object key under which the named permission set is stored."""
    return f"{PERMISSION_SETS_PREFIX}{name}{PERMISSION_SET_SUFFIX}"
