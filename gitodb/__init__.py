"""gitodb: git-compatible loose object database (blobs, trees, commits)."""

from .repo import Repository
from .errors import GitodbError, NotARepositoryError

__all__ = ["Repository", "GitodbError", "NotARepositoryError"]
