"""Tests for reading and fingerprinting source files."""

from furnace.parsers.base import content_digest, read_source

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class TestContentDigest:
    def test_deterministic(self):
        data = b"fn main() {}\n"
        assert content_digest(data) == content_digest(bytes(data))

    def test_single_byte_difference(self):
        assert content_digest(b"fn a() {}") != content_digest(b"fn b() {}")

    def test_fixed_length_hex(self):
        digest = content_digest(b"anything")
        assert len(digest) == 64
        int(digest, 16)

    def test_empty(self):
        assert content_digest(b"") == EMPTY_SHA256


class TestReadSource:
    def test_reads_raw_bytes(self, tmp_path):
        path = tmp_path / "lib.rs"
        path.write_bytes(b"fn \xc3\xa9() {}\n")
        assert read_source(path) == b"fn \xc3\xa9() {}\n"

    def test_missing_file_is_empty(self, tmp_path):
        assert read_source(tmp_path / "missing.rs") == b""

    def test_directory_is_empty(self, tmp_path):
        assert read_source(tmp_path) == b""

    def test_invalid_utf8_is_empty(self, tmp_path):
        path = tmp_path / "blob.rs"
        path.write_bytes(b"\x80\x81\x82")
        assert read_source(path) == b""
