"""Git-like configuration: read/write .git/config (INI format) and commit identity."""

from __future__ import annotations

import configparser
import io
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .constants import DEFAULT_AUTHOR_EMAIL, DEFAULT_AUTHOR_NAME, DEFAULT_TIMESTAMP, DEFAULT_TZ_OFFSET
from .errors import ConfigError, InvalidConfigKeyError
from .util import write_text_atomic

if TYPE_CHECKING:
    from .repo import Repository

CONFIG_FILENAME = "config"


@dataclass(frozen=True)
class CommitIdentity:
    """Who and when for author/committer lines."""
    name: str
    email: str
    timestamp: int = DEFAULT_TIMESTAMP
    tz_offset: str = DEFAULT_TZ_OFFSET

    def signature(self) -> str:
        """'Name <email> <timestamp> <tz>' as written in commit headers."""
        return f"{self.name} <{self.email}> {self.timestamp} {self.tz_offset}"


DEFAULT_IDENTITY = CommitIdentity(DEFAULT_AUTHOR_NAME, DEFAULT_AUTHOR_EMAIL)


def _config_path(repo: "Repository") -> Path:
    return repo.git_dir / CONFIG_FILENAME


def _parse_key(key: str) -> tuple[str, str]:
    """Return (section, option). Raises InvalidConfigKeyError if key invalid."""
    parts = key.split(".")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise InvalidConfigKeyError(f"invalid config key: {key!r} (expected section.option)")
    return parts[0].strip(), parts[1].strip()


def read_config(repo: "Repository") -> configparser.ConfigParser:
    """Read .git/config. Return empty parser if file missing."""
    repo.require_repo()
    path = _config_path(repo)
    cfg = configparser.ConfigParser()
    if path.exists():
        try:
            cfg.read_string(path.read_text(encoding="utf-8"))
        except configparser.Error as e:
            raise ConfigError(f"bad config file {path}: {e}") from e
    return cfg


def write_config(repo: "Repository", cfg: configparser.ConfigParser) -> None:
    """Write config to .git/config atomically."""
    repo.require_repo()
    buf = io.StringIO()
    cfg.write(buf)
    write_text_atomic(_config_path(repo), buf.getvalue())


def get_value(repo: "Repository", key: str) -> Optional[str]:
    """Get config value for key (section.option). Return None if missing."""
    section, option = _parse_key(key)
    cfg = read_config(repo)
    if cfg.has_section(section) and cfg.has_option(section, option):
        return cfg.get(section, option)
    return None


def set_value(repo: "Repository", key: str, value: str) -> None:
    """Set config value. Creates section if needed."""
    section, option = _parse_key(key)
    cfg = read_config(repo)
    if not cfg.has_section(section):
        cfg.add_section(section)
    cfg.set(section, option, value)
    write_config(repo, cfg)


def parse_author(author: str) -> tuple[str, str]:
    """'Name <email>' -> (name, email). Raises ConfigError on other shapes."""
    author = author.strip()
    lt = author.find("<")
    if lt == -1 or not author.endswith(">"):
        raise ConfigError(f"invalid identity (expected 'Name <email>'): {author!r}")
    return author[:lt].strip(), author[lt + 1 : -1].strip()


def parse_date(date: str) -> tuple[int, str]:
    """'1234567890 +0000' -> (timestamp, tz). Raises ConfigError."""
    parts = date.strip().split()
    if len(parts) != 2 or not parts[0].isdigit():
        raise ConfigError(f"invalid date (expected '<unix-ts> <+hhmm>'): {date!r}")
    tz = parts[1]
    if len(tz) != 5 or tz[0] not in "+-" or not tz[1:].isdigit():
        raise ConfigError(f"invalid timezone offset: {tz!r}")
    return int(parts[0]), tz


def get_commit_identity(
    repo: "Repository",
    author: Optional[str] = None,
    date: Optional[str] = None,
) -> CommitIdentity:
    """Identity for new commits: explicit args, then user.name/user.email, then the placeholder."""
    ident = DEFAULT_IDENTITY
    name = get_value(repo, "user.name")
    email = get_value(repo, "user.email")
    if name is not None and email is not None:
        ident = replace(ident, name=name, email=email)
    if author:
        name, email = parse_author(author)
        ident = replace(ident, name=name, email=email)
    if date:
        ts, tz = parse_date(date)
        ident = replace(ident, timestamp=ts, tz_offset=tz)
    return ident
