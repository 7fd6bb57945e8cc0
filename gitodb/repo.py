"""Repository: ties the working root, .git dir and the object database together."""

from __future__ import annotations

from pathlib import Path

from .constants import DEFAULT_BRANCH, GIT_DIR_NAME, OBJECTS_DIR_NAME
from .errors import NotARepositoryError
from .objects import GitObject
from .odb import ObjectDB
from .util import write_text_atomic


class Repository:
    """Git repository rooted at an explicit path (never the process cwd)."""

    def __init__(self, path: str | Path = ".") -> None:
        self.path = Path(path).resolve()
        self.git_dir = self.path / GIT_DIR_NAME
        self.objects_dir = self.git_dir / OBJECTS_DIR_NAME
        self.odb = ObjectDB(self.objects_dir)

    def require_repo(self) -> None:
        """Raise NotARepositoryError if .git/objects is missing."""
        if not self.objects_dir.is_dir():
            raise NotARepositoryError("not a git repository")

    def init(self) -> bool:
        """Create new repo. Return False if already exists."""
        if self.git_dir.exists():
            return False
        self.objects_dir.mkdir(parents=True)
        (self.git_dir / "refs" / "heads").mkdir(parents=True)
        (self.git_dir / "refs" / "tags").mkdir(parents=True)
        write_text_atomic(self.git_dir / "HEAD", f"ref: refs/heads/{DEFAULT_BRANCH}\n")
        from . import config
        cfg = config.read_config(self)
        if not cfg.has_section("core"):
            cfg.add_section("core")
            cfg.set("core", "repositoryformatversion", "0")
            cfg.set("core", "filemode", "true")
            cfg.set("core", "bare", "false")
            config.write_config(self, cfg)
        return True

    def store_object(self, obj: GitObject) -> str:
        """Store object in ODB; return full hash."""
        return self.odb.store(obj)

    def load_object(self, sha: str) -> GitObject:
        """Load object by full hash."""
        return self.odb.load(sha)
