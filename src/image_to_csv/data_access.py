from __future__ import annotations

import hashlib
from pathlib import Path, PureWindowsPath

_HASH_CHUNK_BYTES = 1 << 20


class DataAccessError(Exception):
    pass


def resolve_under_data_root(*, data_root: Path, relpath: str) -> Path:
    """
    Resolve a source image relpath under the explicitly configured data_root.

    Rejects empty, absolute (POSIX or drive-letter) and escaping (`..`) references.
    """

    if not relpath or not relpath.strip():
        raise DataAccessError("Expected a non-empty image relpath")
    if relpath.startswith(("/", "\\")) or PureWindowsPath(relpath).drive:
        raise DataAccessError(f"Expected a relative path under data_root, got: {relpath!r}")

    root = data_root.expanduser().resolve()
    candidate = (root / relpath.replace("\\", "/")).resolve()
    if not candidate.is_relative_to(root):
        raise DataAccessError(f"Image relpath escapes data_root: relpath={relpath!r}")

    return candidate


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        while chunk := f.read(_HASH_CHUNK_BYTES):
            h.update(chunk)
    return h.hexdigest()
