"""Constants for gitodb: file modes, object kinds, digest sizes, placeholder identity."""

from __future__ import annotations

# Tree entry modes (as written inside tree objects; directories carry no leading zero)
MODE_FILE = "100644"
MODE_FILE_EXECUTABLE = "100755"
MODE_SYMLINK = "120000"
MODE_DIR = "40000"

# Object types
OBJ_BLOB = "blob"
OBJ_TREE = "tree"
OBJ_COMMIT = "commit"

OBJECT_KINDS = (OBJ_BLOB, OBJ_TREE, OBJ_COMMIT)

# Repository layout
GIT_DIR_NAME = ".git"
OBJECTS_DIR_NAME = "objects"
DEFAULT_BRANCH = "main"

# SHA-1 hex length / raw length
SHA1_HEX_LEN = 40
SHA1_RAW_LEN = 20

# Digest of the empty tree ("tree 0\0")
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# Placeholder commit identity; no clock or identity source is consulted
DEFAULT_AUTHOR_NAME = "John Doe"
DEFAULT_AUTHOR_EMAIL = "john@example.com"
DEFAULT_TIMESTAMP = 1234567890
DEFAULT_TZ_OFFSET = "+0000"
