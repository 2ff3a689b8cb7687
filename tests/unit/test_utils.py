"""Tests for hashing, encoding and one-time pad helpers."""

import pytest
from ecash.utils.hash import sha256, hash_preimage, message_representative
from ecash.utils.encoding import (
    ensure_bytes,
    int_to_hex,
    parse_int,
    shares_to_hex,
    hex_to_shares,
)
from ecash.utils.otp import xor_bytes, make_otp, decrypt_otp


class TestHash:
    """Test hash helpers."""

    def test_sha256_str_and_bytes_agree(self):
        """Test that strings are hashed as UTF-8."""
        assert sha256("abc") == sha256(b"abc")

    def test_hash_preimage_known_value(self):
        """Test against the published SHA-256 test vector."""
        assert hash_preimage(b"abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_message_representative_is_256_bit(self):
        """Test that the representative fits in 256 bits."""
        assert 0 <= message_representative("coin") < 2**256


class TestEncoding:
    """Test encoding helpers."""

    def test_ensure_bytes(self):
        """Test bytes and str inputs."""
        assert ensure_bytes(b"x") == b"x"
        assert ensure_bytes("x") == b"x"

    def test_ensure_bytes_invalid_type(self):
        """Test that other types are rejected."""
        with pytest.raises(TypeError):
            ensure_bytes(12345)

    def test_int_to_hex(self):
        """Test integer hex encoding."""
        assert int_to_hex(255) == "ff"
        assert int_to_hex(0) == "0"

    def test_int_to_hex_negative(self):
        """Test that negative integers are rejected."""
        with pytest.raises(ValueError):
            int_to_hex(-1)

    @pytest.mark.parametrize("text,expected", [
        ("255", 255),
        ("0xff", 255),
        ("0XFF", 255),
        (" 42 ", 42),
    ])
    def test_parse_int(self, text, expected):
        """Test decimal and hex parsing."""
        assert parse_int(text) == expected

    def test_parse_int_invalid(self):
        """Test that garbage is rejected."""
        with pytest.raises(ValueError):
            parse_int("0xzz")

    def test_shares_hex(self):
        """Test hex encoding of preimage lists."""
        assert shares_to_hex([b"\x00\x01", b"\xff"]) == ["0001", "ff"]
        assert hex_to_shares(["0001", "ff"]) == [b"\x00\x01", b"\xff"]


class TestOneTimePad:
    """Test one-time pad helpers."""

    def test_xor_bytes(self):
        """Test byte-wise XOR."""
        assert xor_bytes(b"\x0f\xf0", b"\xff\xff") == b"\xf0\x0f"

    def test_xor_length_mismatch(self):
        """Test that operands must have equal length."""
        with pytest.raises(ValueError):
            xor_bytes(b"ab", b"abc")

    def test_make_otp_splits_plaintext(self):
        """Test that key XOR ciphertext gives back the plaintext."""
        key, ciphertext = make_otp("IDENT:alice")

        assert len(key) == len(ciphertext) == len("IDENT:alice")
        assert decrypt_otp(key, ciphertext, return_type="string") == "IDENT:alice"

    def test_make_otp_fresh_key(self):
        """Test that every pad uses a new key."""
        key1, _ = make_otp("IDENT:alice")
        key2, _ = make_otp("IDENT:alice")

        assert key1 != key2

    def test_decrypt_return_types(self):
        """Test the selectable output encodings."""
        key, ciphertext = make_otp(b"hi")

        assert decrypt_otp(key, ciphertext) == b"hi"
        assert decrypt_otp(key, ciphertext, return_type="hex") == "6869"
        assert decrypt_otp(key, ciphertext, return_type="string") == "hi"

    def test_decrypt_unknown_return_type(self):
        """Test that unknown encodings are rejected."""
        with pytest.raises(ValueError):
            decrypt_otp(b"a", b"b", return_type="base64")


class TestLogging:
    """Test logging setup."""

    def test_configure_logging_accepts_level(self):
        """Test that configuring with an explicit level does not raise."""
        from ecash.utils.log import configure_logging

        configure_logging("debug")

    def test_configure_logging_default_level(self, monkeypatch):
        """Test that the configured level is used by default."""
        from ecash.utils.log import configure_logging

        monkeypatch.setenv("ECASH_LOG_LEVEL", "warning")
        configure_logging()
