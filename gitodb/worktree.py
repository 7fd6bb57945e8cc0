"""Directory walker: snapshot a filesystem subtree into blob and tree objects."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .constants import GIT_DIR_NAME, MODE_DIR, MODE_FILE, MODE_FILE_EXECUTABLE, MODE_SYMLINK
from .log_utils import getLogger
from .objects import Blob, Tree, TreeEntry
from .repo import Repository
from .util import classify, is_executable

logger = getLogger(__name__)


@dataclass
class _PendingDir:
    """A directory whose children are still being visited."""
    path: Path
    name: bytes
    children: List[Path]
    entries: List[TreeEntry] = field(default_factory=list)


def _open_dir(path: Path, name: bytes) -> _PendingDir:
    children = [p for p in path.iterdir() if p.name != GIT_DIR_NAME]
    # Reverse so pop() visits in listing order; final order comes from Tree sorting.
    children.reverse()
    return _PendingDir(path, name, children)


def build_tree(repo: Repository, root: Optional[Path] = None) -> str:
    """Write blobs and trees for everything under root; return the root tree hash.

    Directories named .git are skipped at every level. Symlinks are stored as
    blobs of their target path and never followed. Sockets, fifos and devices
    are skipped. Uses an explicit stack, so nesting depth is not limited by
    the interpreter's recursion limit.
    """
    repo.require_repo()
    root = Path(root) if root is not None else repo.path
    stack: List[_PendingDir] = [_open_dir(root, b"")]
    while True:
        top = stack[-1]
        if not top.children:
            stack.pop()
            sha = repo.store_object(Tree(top.entries))
            if not stack:
                return sha
            stack[-1].entries.append(TreeEntry(MODE_DIR, top.name, sha))
            continue

        child = top.children.pop()
        name = os.fsencode(child.name)
        st = os.lstat(child)
        kind = classify(st.st_mode)
        if kind == "dir":
            stack.append(_open_dir(child, name))
        elif kind == "file":
            mode = MODE_FILE_EXECUTABLE if is_executable(st.st_mode) else MODE_FILE
            sha = repo.store_object(Blob(child.read_bytes()))
            top.entries.append(TreeEntry(mode, name, sha))
        elif kind == "symlink":
            target = os.fsencode(os.readlink(child))
            sha = repo.store_object(Blob(target))
            top.entries.append(TreeEntry(MODE_SYMLINK, name, sha))
        else:
            logger.debug("skipping special file %s", child)
