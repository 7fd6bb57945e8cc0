"""Git objects: framing, Blob, Tree (entry codec), Commit with serialization/parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .config import DEFAULT_IDENTITY, CommitIdentity
from .constants import OBJ_BLOB, OBJ_COMMIT, OBJ_TREE, OBJECT_KINDS, SHA1_RAW_LEN
from .errors import (
    CorruptObjectError,
    InvalidDigestError,
    MalformedTreeError,
    NotATreeError,
    WrongKindError,
)
from .util import compress, decompress, is_valid_hex_sha, sha1_hash


def _object_header(obj_type: str, content: bytes) -> bytes:
    """Header: '<type> <size>\\0'."""
    return f"{obj_type} {len(content)}\0".encode()


def frame(obj_type: str, content: bytes) -> bytes:
    """Full object bytes: header + content. This is what gets hashed and compressed."""
    return _object_header(obj_type, content) + content


def parse_object(raw: bytes) -> Tuple[str, bytes]:
    """Split framed object bytes into (kind, payload). Raises CorruptObjectError."""
    null_idx = raw.find(b"\0")
    if null_idx == -1:
        raise CorruptObjectError("invalid object: no null byte in header")
    parts = raw[:null_idx].split(b" ")
    if len(parts) != 2 or not parts[1].isdigit():
        raise CorruptObjectError(f"invalid object header: {raw[:null_idx]!r}")
    kind = parts[0].decode("ascii", "replace")
    if kind not in OBJECT_KINDS:
        raise CorruptObjectError(f"unknown object type: {kind}")
    content = raw[null_idx + 1 :]
    if int(parts[1]) != len(content):
        raise CorruptObjectError(
            f"object size mismatch: header says {int(parts[1])}, payload is {len(content)}"
        )
    return kind, content


def _expect_kind(raw: bytes, expected: str) -> bytes:
    kind, content = parse_object(raw)
    if kind != expected:
        if expected == OBJ_TREE:
            raise NotATreeError(f"object is a {kind}, not a tree")
        raise WrongKindError(f"object is a {kind}, not a {expected}")
    return content


def _require_sha(sha: str) -> str:
    if not is_valid_hex_sha(sha):
        raise InvalidDigestError(f"invalid object name: {sha!r}")
    return sha.lower()


class GitObject:
    """Base git object (blob, tree, commit)."""

    def __init__(self, obj_type: str, content: bytes) -> None:
        self.type = obj_type
        self.content = content

    def raw(self) -> bytes:
        """Uncompressed representation: header + content."""
        return frame(self.type, self.content)

    def hash_id(self) -> str:
        """SHA-1 of uncompressed representation: header + content."""
        return sha1_hash(self.raw())

    def serialize(self) -> bytes:
        """Compressed bytes for storage: zlib(header + content)."""
        return compress(self.raw())

    @classmethod
    def from_raw(cls, raw: bytes) -> "GitObject":
        """Parse uncompressed object bytes into Blob, Tree or Commit."""
        obj_type, content = parse_object(raw)
        if obj_type == OBJ_BLOB:
            return Blob(content)
        if obj_type == OBJ_TREE:
            return Tree.from_content(content)
        return Commit.from_content(content)

    @classmethod
    def deserialize(cls, data: bytes) -> "GitObject":
        """Parse compressed object bytes into a GitObject."""
        return cls.from_raw(decompress(data))


class Blob(GitObject):
    """Blob object: raw file content."""

    def __init__(self, content: bytes) -> None:
        super().__init__(OBJ_BLOB, content)


def encode_blob(content: bytes) -> bytes:
    return Blob(content).raw()


def decode_blob(raw: bytes) -> bytes:
    """Return the payload of framed blob bytes. Raises WrongKindError for other kinds."""
    return _expect_kind(raw, OBJ_BLOB)


@dataclass
class TreeEntry:
    """Single tree entry: mode, raw name bytes, object hash (40 hex chars)."""
    mode: str
    name: bytes
    sha: str

    def to_bytes(self) -> bytes:
        """Format: b'{mode} {name}\\0' + 20-byte binary sha."""
        if not self.mode or not self.mode.isdigit():
            raise MalformedTreeError(f"invalid tree entry mode: {self.mode!r}")
        if not self.name or b"\0" in self.name or b"/" in self.name:
            raise MalformedTreeError(f"invalid tree entry name: {self.name!r}")
        sha = _require_sha(self.sha)
        return self.mode.encode("ascii") + b" " + self.name + b"\0" + bytes.fromhex(sha)

    @property
    def is_tree(self) -> bool:
        return self.mode.lstrip("0") == "40000"

    @property
    def kind(self) -> str:
        return OBJ_TREE if self.is_tree else OBJ_BLOB


def sort_entries(entries: Iterable[TreeEntry]) -> List[TreeEntry]:
    """Order entries by raw name bytes ('a' < 'ab' < 'b'); no locale, no trailing-slash rule."""
    return sorted(entries, key=lambda e: e.name)


def encode_tree_entries(entries: Iterable[TreeEntry]) -> bytes:
    """Concatenate entry records; the NUL plus fixed 20-byte digest delimit each one."""
    return b"".join(e.to_bytes() for e in entries)


def decode_tree_entries(content: bytes) -> List[TreeEntry]:
    """Parse a tree payload. Raises MalformedTreeError on any framing violation."""
    entries: List[TreeEntry] = []
    i = 0
    n = len(content)
    while i < n:
        null_idx = content.find(b"\0", i)
        if null_idx == -1:
            raise MalformedTreeError(f"invalid tree entry at offset {i}: missing NUL")
        sp = content.find(b" ", i, null_idx)
        if sp == -1:
            raise MalformedTreeError(f"invalid tree entry at offset {i}: missing space")
        sha_bin = content[null_idx + 1 : null_idx + 1 + SHA1_RAW_LEN]
        if len(sha_bin) != SHA1_RAW_LEN:
            raise MalformedTreeError(f"invalid tree entry at offset {i}: truncated sha")
        mode = content[i:sp].decode("ascii", "replace")
        entries.append(TreeEntry(mode, content[sp + 1 : null_idx], sha_bin.hex()))
        i = null_idx + 1 + SHA1_RAW_LEN
    return entries


class Tree(GitObject):
    """Tree object: entries sorted by name in byte order."""

    def __init__(self, entries: Iterable[TreeEntry] | None = None) -> None:
        self.entries: List[TreeEntry] = sort_entries(entries or [])
        super().__init__(OBJ_TREE, encode_tree_entries(self.entries))

    @classmethod
    def from_content(cls, content: bytes) -> "Tree":
        tree = cls.__new__(cls)
        tree.type = OBJ_TREE
        tree.entries = decode_tree_entries(content)
        tree.content = content  # preserve exact bytes for correct hash
        return tree


def encode_tree(entries: Iterable[TreeEntry]) -> bytes:
    return Tree(entries).raw()


def decode_tree(raw: bytes) -> List[TreeEntry]:
    """Entries of framed tree bytes. Raises NotATreeError or MalformedTreeError."""
    return decode_tree_entries(_expect_kind(raw, OBJ_TREE))


def _parse_identity(rest: str) -> CommitIdentity:
    """'Name <email> 1234567890 +0000' -> CommitIdentity."""
    parts = rest.rsplit(" ", 2)
    if len(parts) != 3 or not parts[1].lstrip("-").isdigit():
        raise CorruptObjectError(f"invalid identity line: {rest!r}")
    who, ts, tz = parts
    lt = who.find(" <")
    if lt == -1 or not who.endswith(">"):
        return CommitIdentity(who, "", int(ts), tz)
    return CommitIdentity(who[:lt], who[lt + 2 : -1], int(ts), tz)


class Commit(GitObject):
    """Commit object: tree, parents, author, committer, message."""

    def __init__(
        self,
        tree_hash: str,
        parent_hashes: Union[str, Sequence[str]],
        message: str,
        author: Optional[CommitIdentity] = None,
        committer: Optional[CommitIdentity] = None,
    ) -> None:
        if isinstance(parent_hashes, str):
            parent_hashes = [parent_hashes]
        self.tree_hash = _require_sha(tree_hash)
        self.parent_hashes = [_require_sha(p) for p in parent_hashes]
        self.author = author or DEFAULT_IDENTITY
        self.committer = committer or self.author
        self.message = message
        super().__init__(OBJ_COMMIT, self._serialize_commit())

    def _serialize_commit(self) -> bytes:
        """Header lines, a blank line, then the message.

        A newline is appended only when the message does not already end in
        one, so "msg" and "msg\\n" encode to the same bytes, as git writes them.
        """
        lines = [f"tree {self.tree_hash}"]
        for p in self.parent_hashes:
            lines.append(f"parent {p}")
        lines.append(f"author {self.author.signature()}")
        lines.append(f"committer {self.committer.signature()}")
        lines.append("")
        msg = self.message if self.message.endswith("\n") else self.message + "\n"
        lines.append(msg)
        return "\n".join(lines).encode("utf-8")

    @classmethod
    def from_content(cls, content: bytes) -> "Commit":
        """Parse commit content; preserve exact bytes for hash consistency."""
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptObjectError(f"commit is not valid UTF-8: {e}") from e
        head, sep, message = text.partition("\n\n")
        if not sep:
            raise CorruptObjectError("invalid commit: no blank line before message")
        tree_hash = ""
        parent_hashes: List[str] = []
        author = committer = None
        for line in head.split("\n"):
            if line.startswith("tree "):
                tree_hash = line[5:]
            elif line.startswith("parent "):
                parent_hashes.append(line[7:])
            elif line.startswith("author "):
                author = _parse_identity(line[7:])
            elif line.startswith("committer "):
                committer = _parse_identity(line[10:])
        if not is_valid_hex_sha(tree_hash) or author is None or committer is None:
            raise CorruptObjectError("invalid commit: missing tree, author or committer")
        if message.endswith("\n"):
            message = message[:-1]
        commit = cls.__new__(cls)
        commit.tree_hash = tree_hash
        commit.parent_hashes = parent_hashes
        commit.author = author
        commit.committer = committer
        commit.message = message
        commit.content = content  # keep exact bytes for correct hash
        commit.type = OBJ_COMMIT
        return commit


def encode_commit(
    tree_hash: str,
    parent_hashes: Union[str, Sequence[str]],
    message: str,
    identity: Optional[CommitIdentity] = None,
) -> bytes:
    """Framed commit bytes. identity is used for both author and committer."""
    return Commit(tree_hash, parent_hashes, message, author=identity).raw()
