from __future__ import annotations

from pathlib import Path, PurePosixPath

from .base import ObjectStorage


class LocalObjectStorage(ObjectStorage):
    """Filesystem-backed storage: files land in `<root>/<bucket>/<path>`."""

    def __init__(self, root_dir: str | Path, bucket: str = "selfies"):
        self._root = Path(root_dir)
        self._bucket = bucket

    def _target(self, path: str) -> tuple[PurePosixPath, Path]:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Invalid object path: {path!r}")
        return relative, self._root / self._bucket / Path(*relative.parts)

    def store(self, path: str, data: bytes, content_type: str) -> str:
        relative, target = self._target(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        # Mode 'xb' refuses to overwrite an existing object.
        with open(target, "xb") as fh:
            fh.write(data)
        return f"{self._bucket}/{relative.as_posix()}"

    def remove(self, path: str) -> None:
        _, target = self._target(path)
        target.unlink(missing_ok=True)
