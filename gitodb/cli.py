"""CLI: argparse and command dispatch."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_commit_identity
from .errors import GitodbError
from .log_utils import default_logging_config
from .plumbing import (
    cat_file_pretty,
    cat_file_size,
    cat_file_type,
    commit_tree,
    hash_object,
    ls_tree,
    write_tree,
)
from .repo import Repository


def _repo() -> Repository:
    return Repository(Path.cwd())


def cmd_init(_: argparse.Namespace) -> int:
    repo = _repo()
    if not repo.init():
        print("Repository already exists")
        return 1
    print(f"Initialized empty Git repository in {repo.git_dir}")
    return 0


def cmd_hash_object(args: argparse.Namespace) -> int:
    repo = _repo()
    try:
        print(hash_object(repo, args.path, write=args.write))
    except (GitodbError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def cmd_cat_file(args: argparse.Namespace) -> int:
    repo = _repo()
    try:
        if args.type_only:
            print(cat_file_type(repo, args.object))
        elif args.size_only:
            print(cat_file_size(repo, args.object))
        else:
            cat_file_pretty(repo, args.object)
    except (GitodbError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def cmd_ls_tree(args: argparse.Namespace) -> int:
    repo = _repo()
    try:
        ls_tree(repo, args.tree, name_only=args.name_only)
    except (GitodbError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def cmd_write_tree(_: argparse.Namespace) -> int:
    repo = _repo()
    try:
        print(write_tree(repo))
    except (GitodbError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def cmd_commit_tree(args: argparse.Namespace) -> int:
    repo = _repo()
    try:
        identity = get_commit_identity(repo, author=args.author, date=args.date)
        print(commit_tree(repo, args.tree, args.parent or [], args.message, identity))
    except (GitodbError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitodb",
        description="Read and write git loose objects (blobs, trees, commits).",
    )
    sub = parser.add_subparsers(dest="command", help="Commands")

    # init
    sub.add_parser("init", help="Create .git with an empty object database")

    # hash-object
    p_ho = sub.add_parser("hash-object", help="Compute blob hash (optionally write)")
    p_ho.add_argument("path", help="Path to file")
    p_ho.add_argument("-w", "--write", action="store_true", help="Write object to ODB")

    # cat-file
    p_cat = sub.add_parser("cat-file", help="Show object type, size or content")
    mode = p_cat.add_mutually_exclusive_group(required=True)
    mode.add_argument("-t", dest="type_only", action="store_true", help="Show type only")
    mode.add_argument("-s", dest="size_only", action="store_true", help="Show payload size only")
    mode.add_argument("-p", dest="pretty", action="store_true", help="Pretty-print content")
    p_cat.add_argument("object", help="Object hash (40 hex chars)")

    # ls-tree
    p_ls = sub.add_parser("ls-tree", help="List tree contents")
    p_ls.add_argument("--name-only", action="store_true", help="List names only")
    p_ls.add_argument("tree", help="Tree hash")

    # write-tree
    sub.add_parser("write-tree", help="Write the working directory as trees; print tree hash")

    # commit-tree
    p_ct = sub.add_parser("commit-tree", help="Create commit from tree; print commit hash")
    p_ct.add_argument("tree", help="Tree hash")
    p_ct.add_argument("-p", "--parent", action="append", dest="parent", help="Parent commit (repeat for merges)")
    p_ct.add_argument("-m", "--message", required=True, help="Commit message")
    p_ct.add_argument("--author", help="Author and committer (Name <email>)")
    p_ct.add_argument("--date", help="Timestamp and offset (e.g. '1700000000 +0100')")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    default_logging_config()
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    handlers = {
        "init": cmd_init,
        "hash-object": cmd_hash_object,
        "cat-file": cmd_cat_file,
        "ls-tree": cmd_ls_tree,
        "write-tree": cmd_write_tree,
        "commit-tree": cmd_commit_tree,
    }
    handler = handlers.get(args.command)
    if not handler:
        parser.print_help()
        return 1
    try:
        return handler(args) or 0
    except (GitodbError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
