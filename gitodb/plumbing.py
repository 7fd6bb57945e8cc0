"""Plumbing commands: hash-object, cat-file, ls-tree, write-tree, commit-tree."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Union

from .config import CommitIdentity
from .constants import OBJ_BLOB, OBJ_TREE
from .errors import InvalidDigestError, ObjectNotFoundError
from .objects import Blob, Commit, TreeEntry, decode_tree, parse_object
from .repo import Repository
from .util import is_valid_hex_sha
from .worktree import build_tree


def hash_object(repo: Repository, path: Union[str, Path], write: bool = True) -> str:
    """Compute blob hash of file; optionally write to ODB. Return hash."""
    repo.require_repo()
    p = Path(path)
    if not p.is_absolute():
        p = repo.path / p
    if not p.is_file():
        raise FileNotFoundError(f"path {path} is not a file")
    blob = Blob(p.read_bytes())
    if write:
        return repo.store_object(blob)
    return blob.hash_id()


def cat_file_type(repo: Repository, sha: str) -> str:
    """Return object type (blob, tree, commit)."""
    repo.require_repo()
    kind, _ = parse_object(repo.odb.read(sha))
    return kind


def cat_file_size(repo: Repository, sha: str) -> int:
    """Return payload size in bytes."""
    repo.require_repo()
    _, content = parse_object(repo.odb.read(sha))
    return len(content)


def _format_entry(entry: TreeEntry) -> str:
    return f"{entry.mode:0>6} {entry.kind} {entry.sha}\t{os.fsdecode(entry.name)}"


def cat_file_pretty(repo: Repository, sha: str, out: Optional[TextIO] = None) -> None:
    """Pretty-print object: commit (headers + message), tree (mode kind sha name), blob (raw)."""
    repo.require_repo()
    out = out or sys.stdout
    obj = repo.load_object(sha)
    if obj.type == OBJ_BLOB:
        out.flush()
        buf = getattr(out, "buffer", None)
        if buf is not None:
            buf.write(obj.content)
            buf.flush()
        else:
            out.write(obj.content.decode("utf-8", "replace"))
    elif obj.type == OBJ_TREE:
        for entry in obj.entries:
            out.write(_format_entry(entry) + "\n")
    else:
        out.write(obj.content.decode("utf-8", "replace"))


def ls_tree(
    repo: Repository,
    sha: str,
    name_only: bool = False,
    out: Optional[TextIO] = None,
) -> List[TreeEntry]:
    """List a tree's entries in stored order; print them to out and return them.

    Raises NotATreeError if sha names a blob or commit, MalformedTreeError if
    the payload is damaged.
    """
    repo.require_repo()
    out = out or sys.stdout
    entries = decode_tree(repo.odb.read(sha))
    for entry in entries:
        if name_only:
            out.write(os.fsdecode(entry.name) + "\n")
        else:
            out.write(_format_entry(entry) + "\n")
    return entries


def write_tree(repo: Repository) -> str:
    """Snapshot the working root into tree objects; return the root tree hash."""
    return build_tree(repo, repo.path)


def commit_tree(
    repo: Repository,
    tree_hash: str,
    parent_hashes: Union[str, Sequence[str]],
    message: str,
    identity: Optional[CommitIdentity] = None,
) -> str:
    """Create commit object; return commit hash. Does not update refs.

    The tree must be present and be a tree. Parents must be well-formed
    digests but are not required to exist in this object database.
    """
    repo.require_repo()
    if isinstance(parent_hashes, str):
        parent_hashes = [parent_hashes]
    for sha in [tree_hash, *parent_hashes]:
        if not is_valid_hex_sha(sha):
            raise InvalidDigestError(f"invalid object name: {sha!r}")
    if not repo.odb.exists(tree_hash):
        raise ObjectNotFoundError(f"tree {tree_hash} not found")
    decode_tree(repo.odb.read(tree_hash))
    commit = Commit(tree_hash, parent_hashes, message, author=identity)
    return repo.store_object(commit)

