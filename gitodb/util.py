"""Helper functions: hashing, zlib codec, digest validation, atomic writes, file modes."""

from __future__ import annotations

import hashlib
import os
import stat
import tempfile
import zlib
from pathlib import Path

from .constants import SHA1_HEX_LEN
from .errors import CorruptObjectError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def sha1_hash(data: bytes) -> str:
    """Compute SHA-1 hex digest of data."""
    return hashlib.sha1(data).hexdigest()


def is_valid_hex_sha(sha: str) -> bool:
    """Return True if sha is exactly 40 hex characters (either case)."""
    return isinstance(sha, str) and len(sha) == SHA1_HEX_LEN and all(c in _HEX_DIGITS for c in sha)


def compress(data: bytes) -> bytes:
    """zlib-compress data at the default level (what git writes for loose objects)."""
    return zlib.compress(data)


def decompress(data: bytes) -> bytes:
    """Inverse of compress. Raises CorruptObjectError on a bad or truncated stream."""
    d = zlib.decompressobj()
    try:
        out = d.decompress(data)
        out += d.flush()
    except zlib.error as e:
        raise CorruptObjectError(f"invalid zlib stream: {e}") from e
    if not d.eof:
        raise CorruptObjectError("invalid zlib stream: truncated")
    return out


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write bytes to file atomically (temp then replace)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".tmp_")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def write_text_atomic(path: Path, text: str) -> None:
    """Write text to file atomically."""
    write_bytes_atomic(path, text.encode("utf-8"))


def is_executable(mode: int) -> bool:
    """Return True if any executable bit is set in st_mode (for mode 100755)."""
    return (mode & 0o111) != 0


def classify(st_mode: int) -> str:
    """Map an lstat() st_mode to 'symlink', 'dir', 'file' or 'other'."""
    if stat.S_ISLNK(st_mode):
        return "symlink"
    if stat.S_ISDIR(st_mode):
        return "dir"
    if stat.S_ISREG(st_mode):
        return "file"
    return "other"
