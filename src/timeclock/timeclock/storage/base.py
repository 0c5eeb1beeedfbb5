from __future__ import annotations

from typing import Protocol


class ObjectStorage(Protocol):
    """Where selfie images go. Returns an opaque reference stored on the punch."""

    def store(self, path: str, data: bytes, content_type: str) -> str:
        raise NotImplementedError

    def remove(self, path: str) -> None:
        """Delete an object written by `store`; a missing object is not an error."""
        raise NotImplementedError
