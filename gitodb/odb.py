"""Object database: loose objects under .git/objects/<aa>/<bb...>, write-if-absent."""

from __future__ import annotations

from pathlib import Path

from .errors import CorruptObjectError, InvalidDigestError, NotARepositoryError, ObjectNotFoundError
from .log_utils import getLogger
from .objects import GitObject
from .util import compress, decompress, is_valid_hex_sha, sha1_hash, write_bytes_atomic

logger = getLogger(__name__)


class ObjectDB:
    """Loose object storage under .git/objects/<aa>/<bb...>."""

    def __init__(self, objects_dir: Path) -> None:
        self.objects_dir = Path(objects_dir)

    def require_root(self) -> None:
        """Raise NotARepositoryError unless the objects directory exists."""
        if not self.objects_dir.is_dir():
            raise NotARepositoryError(f"not a git repository (missing {self.objects_dir})")

    def path_for(self, sha: str) -> Path:
        """Path to loose object file. sha must be full 40-char hex."""
        if not is_valid_hex_sha(sha):
            raise InvalidDigestError(f"invalid object name: {sha!r}")
        sha = sha.lower()
        return self.objects_dir / sha[:2] / sha[2:]

    def exists(self, sha: str) -> bool:
        """Return True if object exists (sha must be full 40-char)."""
        self.require_root()
        return self.path_for(sha).is_file()

    def write(self, raw: bytes) -> str:
        """Store framed object bytes; return full 40-char hash. Never overwrites."""
        self.require_root()
        sha = sha1_hash(raw)
        path = self.path_for(sha)
        if path.exists():
            logger.debug("object %s already present", sha)
            return sha
        write_bytes_atomic(path, compress(raw))
        logger.debug("wrote object %s (%d bytes)", sha, len(raw))
        return sha

    def store(self, obj: GitObject) -> str:
        """Write object to ODB; return full 40-char hash."""
        return self.write(obj.raw())

    def read(self, sha: str) -> bytes:
        """Framed object bytes (type size\\0content). Raises ObjectNotFoundError."""
        self.require_root()
        path = self.path_for(sha)
        if not path.is_file():
            raise ObjectNotFoundError(f"object {sha} not found")
        raw = decompress(path.read_bytes())
        if sha1_hash(raw) != sha.lower():
            raise CorruptObjectError(f"object {sha} does not match its contents")
        return raw

    def load(self, sha: str) -> GitObject:
        """Load object by full 40-char hash. Raises ObjectNotFoundError."""
        return GitObject.from_raw(self.read(sha))
