"""Behavior every entity store backend must share."""

import os

from tests.fixtures.prose import PROSE

UNKNOWN = "87fe0a1ae82a518592f6b12b0183e950b4541c62"


class TestStoreContract:
    """Run against each backend via the parametrized ``store`` fixture."""

    def test_responds_to_contract(self, store):
        for name in ("read", "open", "write", "exist", "purge"):
            assert callable(getattr(store, name))

    def test_write_returns_digest_and_size(self, store):
        digest, size = store.write([b"My wild love went riding,"])
        assert len(digest) == 40
        assert size == 25
        assert store.read(digest) == b"My wild love went riding,"

    def test_fixture_digest(self, store):
        digest, _ = store.write([b"she rode to the sea;"])
        assert digest == "90a4c84d51a277f3dafc34693ca264531b9f51b6"

    def test_exist(self, store):
        digest, _ = store.write([b"She rode to the devil,"])
        assert store.exist(digest)
        assert not store.exist("938jasddj83jasdh4438021ksdfjsdfjsdsf")
        assert not store.exist(UNKNOWN)

    def test_read_returns_entire_body(self, store):
        digest, _ = store.write([b"She gathered ", b"together"])
        assert store.read(digest) == b"She gathered together"

    def test_text_chunks(self, store):
        digest, size = store.write(["And asked him to pay."])
        assert size == 21
        assert store.read(digest) == b"And asked him to pay."

    def test_read_unknown(self, store):
        assert store.read(UNKNOWN) is None

    def test_read_malformed(self, store):
        assert store.read("not-a-digest") is None
        assert store.open("../../etc/passwd") is None

    def test_open_returns_iterable_body(self, store):
        digest, _ = store.write([b"Some shells for her hair."])
        body = store.open(digest)
        assert b"".join(body) == b"Some shells for her hair."
        # Each iteration starts over
        assert b"".join(body) == b"Some shells for her hair."

    def test_open_unknown(self, store):
        assert store.open(UNKNOWN) is None

    def test_large_binary_body(self, store):
        data = os.urandom(3 * 1024 * 1024 + 7)
        chunks = [data[i:i + 65536] for i in range(0, len(data), 65536)]

        digest, size = store.write(chunks)

        assert size == len(data)
        assert store.read(digest) == data

    def test_empty_body(self, store):
        digest, size = store.write([])
        assert size == 0
        assert store.read(digest) == b""

    def test_rewrite_is_idempotent(self, store):
        first = store.write([b"The devil was wiser"])
        second = store.write([b"The devil ", b"was wiser"])
        assert first == second
        assert store.read(first[0]) == b"The devil was wiser"

    def test_purge(self, store):
        digest, _ = store.write([b"My wild love went riding,"])
        assert store.purge(digest) is None
        assert store.read(digest) is None
        assert store.open(digest) is None
        assert not store.exist(digest)

    def test_purge_unknown_is_not_error(self, store):
        assert store.purge(UNKNOWN) is None

    def test_many_bodies(self, store):
        lines = [line for line in PROSE.splitlines(keepends=True)]
        digests = {line: store.write([line])[0] for line in lines}
        for line, digest in digests.items():
            assert store.read(digest) == line.encode("utf-8")
