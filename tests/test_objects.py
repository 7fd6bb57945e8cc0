"""Tests for objects: framing, blob/tree/commit encoding, tree entry codec and hash correctness."""

import unittest

from gitodb.config import CommitIdentity
from gitodb.errors import (
    CorruptObjectError,
    InvalidDigestError,
    MalformedTreeError,
    NotATreeError,
    WrongKindError,
)
from gitodb.objects import (
    Blob,
    Commit,
    GitObject,
    Tree,
    TreeEntry,
    decode_blob,
    decode_tree,
    decode_tree_entries,
    encode_blob,
    encode_commit,
    encode_tree,
    parse_object,
)
from gitodb.util import decompress, sha1_hash


class TestBlob(unittest.TestCase):
    def test_blob_framing(self) -> None:
        self.assertEqual(encode_blob(b"hello world\n"), b"blob 12\0hello world\n")

    def test_hello_world_digest(self) -> None:
        self.assertEqual(
            sha1_hash(encode_blob(b"hello world\n")),
            "3b18e512dba79e4c8300dd08aeb37f8e728b8dad",
        )
        self.assertEqual(Blob(b"").hash_id(), "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391")

    def test_blob_roundtrip(self) -> None:
        content = b"\x00\xffbinary\nstuff"
        blob = Blob(content)
        blob2 = GitObject.deserialize(blob.serialize())
        self.assertIsInstance(blob2, Blob)
        self.assertEqual(blob2.content, content)
        self.assertEqual(blob2.hash_id(), blob.hash_id())
        self.assertEqual(decode_blob(decompress(blob.serialize())), content)

    def test_decode_blob_rejects_tree(self) -> None:
        with self.assertRaises(WrongKindError):
            decode_blob(encode_tree([]))


class TestParseObject(unittest.TestCase):
    def test_missing_nul(self) -> None:
        with self.assertRaises(CorruptObjectError):
            parse_object(b"blob 3abc")

    def test_bad_header(self) -> None:
        with self.assertRaises(CorruptObjectError):
            parse_object(b"blob\0abc")
        with self.assertRaises(CorruptObjectError):
            parse_object(b"blob x\0abc")

    def test_unknown_kind(self) -> None:
        with self.assertRaises(CorruptObjectError):
            parse_object(b"tag 3\0abc")

    def test_length_mismatch(self) -> None:
        with self.assertRaises(CorruptObjectError):
            parse_object(b"blob 4\0abc")

    def test_payload_may_contain_nul(self) -> None:
        self.assertEqual(parse_object(b"blob 3\0a\0c"), ("blob", b"a\0c"))


class TestTreeEntryCodec(unittest.TestCase):
    def test_entry_bytes(self) -> None:
        entry = TreeEntry("100644", b"foo.txt", "ab" * 20)
        self.assertEqual(entry.to_bytes(), b"100644 foo.txt\0" + bytes.fromhex("ab" * 20))

    def test_sort_is_byte_order(self) -> None:
        entries = [
            TreeEntry("100644", b"b", "1" * 40),
            TreeEntry("100644", b"ab", "2" * 40),
            TreeEntry("100644", b"a", "3" * 40),
        ]
        tree = Tree(entries)
        self.assertEqual([e.name for e in tree.entries], [b"a", b"ab", b"b"])
        self.assertEqual([e.name for e in decode_tree_entries(tree.content)], [b"a", b"ab", b"b"])

    def test_dir_sorts_by_plain_name(self) -> None:
        # No trailing-slash rule: "foo" (tree) sorts before "foo.txt"
        tree = Tree([
            TreeEntry("100644", b"foo.txt", "1" * 40),
            TreeEntry("40000", b"foo", "2" * 40),
        ])
        self.assertEqual([e.name for e in tree.entries], [b"foo", b"foo.txt"])

    def test_roundtrip_preserves_names_modes_digests(self) -> None:
        entries = [
            TreeEntry("100644", b"a.txt", "a" * 40),
            TreeEntry("100755", b"run.sh", "b" * 40),
            TreeEntry("120000", b"link", "c" * 40),
            TreeEntry("40000", b"sub dir", "d" * 40),
        ]
        tree = Tree(entries)
        decoded = decode_tree(tree.raw())
        self.assertEqual(decoded, tree.entries)
        self.assertEqual(Tree.from_content(tree.content).hash_id(), tree.hash_id())

    def test_non_utf8_name(self) -> None:
        entry = TreeEntry("100644", b"caf\xe9", "e" * 40)
        self.assertEqual(decode_tree(encode_tree([entry])), [entry])

    def test_uppercase_digest_is_normalized(self) -> None:
        entry = TreeEntry("100644", b"x", "AB" * 20)
        self.assertEqual(decode_tree(encode_tree([entry]))[0].sha, "ab" * 20)

    def test_empty_tree_digest(self) -> None:
        self.assertEqual(Tree().hash_id(), "4b825dc642cb6eb9a060e54bf8d69288fbee4904")

    def test_name_with_nul_rejected(self) -> None:
        with self.assertRaises(MalformedTreeError):
            TreeEntry("100644", b"a\0b", "a" * 40).to_bytes()
        with self.assertRaises(MalformedTreeError):
            TreeEntry("100644", b"", "a" * 40).to_bytes()
        with self.assertRaises(MalformedTreeError):
            TreeEntry("100644", b"a/b", "a" * 40).to_bytes()

    def test_bad_digest_rejected(self) -> None:
        with self.assertRaises(InvalidDigestError):
            TreeEntry("100644", b"a", "xyz").to_bytes()

    def test_decode_missing_space(self) -> None:
        with self.assertRaises(MalformedTreeError):
            decode_tree_entries(b"100644name\0" + b"\x01" * 20)

    def test_decode_missing_nul(self) -> None:
        with self.assertRaises(MalformedTreeError):
            decode_tree_entries(b"100644 name")

    def test_decode_truncated_digest(self) -> None:
        with self.assertRaises(MalformedTreeError):
            decode_tree_entries(b"100644 name\0" + b"\x01" * 19)

    def test_decode_tree_requires_tree_header(self) -> None:
        with self.assertRaises(NotATreeError):
            decode_tree(encode_blob(b"100644 name\0" + b"\x01" * 20))


class TestCommit(unittest.TestCase):
    TREE = "c" * 40
    PARENT = "d" * 40

    def test_commit_layout(self) -> None:
        raw = encode_commit(self.TREE, self.PARENT, "initial")
        kind, content = parse_object(raw)
        self.assertEqual(kind, "commit")
        lines = content.decode().split("\n")
        self.assertEqual(sum(1 for l in lines if l.startswith("tree ")), 1)
        self.assertEqual(sum(1 for l in lines if l.startswith("parent ")), 1)
        self.assertEqual(sum(1 for l in lines if l.startswith("author ")), 1)
        self.assertEqual(sum(1 for l in lines if l.startswith("committer ")), 1)
        self.assertTrue(content.endswith(b"\n\ninitial\n"))
        self.assertEqual(
            content,
            b"tree " + self.TREE.encode() + b"\n"
            b"parent " + self.PARENT.encode() + b"\n"
            b"author John Doe <john@example.com> 1234567890 +0000\n"
            b"committer John Doe <john@example.com> 1234567890 +0000\n"
            b"\n"
            b"initial\n",
        )

    def test_commit_is_deterministic(self) -> None:
        a = encode_commit(self.TREE, [self.PARENT], "msg")
        b = encode_commit(self.TREE, [self.PARENT], "msg")
        self.assertEqual(a, b)

    def test_trailing_newline_not_doubled(self) -> None:
        raw = encode_commit(self.TREE, [self.PARENT], "msg\n")
        self.assertTrue(raw.endswith(b"\n\nmsg\n"))

    def test_root_and_merge_commits(self) -> None:
        root = Commit(self.TREE, [], "root")
        self.assertNotIn(b"parent ", root.content)
        merge = Commit(self.TREE, [self.PARENT, "e" * 40], "merge")
        self.assertEqual(merge.content.count(b"\nparent "), 2)

    def test_invalid_digests(self) -> None:
        with self.assertRaises(InvalidDigestError):
            encode_commit("not-a-sha", self.PARENT, "m")
        with self.assertRaises(InvalidDigestError):
            encode_commit(self.TREE, "f" * 39, "m")

    def test_custom_identity(self) -> None:
        ident = CommitIdentity("Ada", "ada@example.org", 1700000000, "+0530")
        raw = encode_commit(self.TREE, self.PARENT, "m", identity=ident)
        self.assertIn(b"author Ada <ada@example.org> 1700000000 +0530\n", raw)
        self.assertIn(b"committer Ada <ada@example.org> 1700000000 +0530\n", raw)

    def test_from_content_preserves_hash(self) -> None:
        commit = Commit(self.TREE, [self.PARENT], "message body")
        parsed = GitObject.deserialize(commit.serialize())
        self.assertIsInstance(parsed, Commit)
        self.assertEqual(parsed.tree_hash, self.TREE)
        self.assertEqual(parsed.parent_hashes, [self.PARENT])
        self.assertEqual(parsed.author.name, "John Doe")
        self.assertEqual(parsed.committer.email, "john@example.com")
        self.assertEqual(parsed.message, "message body")
        self.assertEqual(parsed.hash_id(), commit.hash_id())

    def test_from_content_rejects_missing_tree(self) -> None:
        with self.assertRaises(CorruptObjectError):
            Commit.from_content(b"author A <a> 1 +0000\ncommitter A <a> 1 +0000\n\nx\n")
