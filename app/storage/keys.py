"""Object key construction for project assets."""

import re
import time
import uuid

_DISALLOWED = re.compile(r"[^a-z0-9-]")


def sanitize_project_name(project_name: str) -> str:
    """Lowercase; each character outside a-z, 0-9 and '-' becomes '-' (runs are not collapsed)."""
    return _DISALLOWED.sub("-", project_name.lower())


def file_extension(file_name: str) -> str:
    """Text after the last '.'; the whole name if there is no dot."""
    return file_name.rsplit(".", 1)[-1]


def project_prefix(project_name: str, folder: str | None = None) -> str:
    sanitized = sanitize_project_name(project_name)
    return f"{sanitized}/{folder}" if folder else sanitized


def build_object_key(
    file_name: str,
    folder: str,
    project_name: str | None = None,
    timestamp_ms: int | None = None,
    token: str | None = None,
) -> str:
    """
    Build [project/]folder/<timestamp>-<token>.<ext>.
    timestamp_ms defaults to now, token to 12 random hex chars.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    if token is None:
        token = uuid.uuid4().hex[:12]
    name = f"{timestamp_ms}-{token}.{file_extension(file_name)}"
    if project_name:
        return f"{sanitize_project_name(project_name)}/{folder}/{name}"
    return f"{folder}/{name}"


def split_key(key: str) -> tuple[str, str]:
    """Split a key into (parent prefix, leaf name). Keys without '/' have an empty parent."""
    if "/" not in key:
        return "", key
    parent, leaf = key.rsplit("/", 1)
    return parent, leaf
