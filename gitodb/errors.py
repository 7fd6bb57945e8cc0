"""Custom exceptions for gitodb."""

from __future__ import annotations


class GitodbError(Exception):
    """Base exception for gitodb."""

    pass


class NotARepositoryError(GitodbError):
    """Raised when the object database root (.git/objects) is missing."""

    pass


class ObjectNotFoundError(GitodbError):
    """Raised when an object is not found in the ODB."""

    pass


class InvalidDigestError(ObjectNotFoundError):
    """Raised when a digest is not 40 hex characters.

    Subclasses ObjectNotFoundError: a malformed name can never address an object.
    """

    pass


class CorruptObjectError(GitodbError):
    """Raised when stored bytes fail to decompress, frame, or hash correctly."""

    pass


class MalformedTreeError(GitodbError):
    """Raised when a tree payload or tree entry violates the entry framing."""

    pass


class WrongKindError(GitodbError):
    """Raised when an object header names a different kind than expected."""

    pass


class NotATreeError(WrongKindError):
    """Raised when a tree was requested but the object is not a tree."""

    pass


class ConfigError(GitodbError):
    """Raised when .git/config or an identity/date value cannot be parsed."""

    pass


class InvalidConfigKeyError(ConfigError):
    """Raised when a config key is invalid (e.g. not section.option)."""

    pass
