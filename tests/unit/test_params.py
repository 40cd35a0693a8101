"""Unit tests for blake2s_core.params module."""

import pytest

from blake2s_core import ParameterBlock, ParameterError
from blake2s_core.constants import IV


class TestParameterBlock:
    """Test ParameterBlock layout and validation."""

    def test_default_layout(self):
        """Test the default 32-byte unkeyed block."""
        blob = ParameterBlock().to_bytes()

        assert len(blob) == 32
        assert blob[:4] == bytes([32, 0, 1, 1])
        assert blob[4:] == bytes(28)

    def test_field_offsets(self):
        """Test every field lands at its documented offset."""
        param = ParameterBlock(
            digest_length=20,
            key_length=16,
            fanout=2,
            depth=3,
            leaf_length=0x11223344,
            node_offset=0x55667788,
            xof_length=0x99AA,
            node_depth=4,
            inner_length=32,
            salt=b"saltsalt",
            personal=b"person",
        )
        blob = param.to_bytes()

        assert blob[0:4] == bytes([20, 16, 2, 3])
        assert blob[4:8] == bytes.fromhex("44332211")
        assert blob[8:12] == bytes.fromhex("88776655")
        assert blob[12:14] == bytes.fromhex("aa99")
        assert blob[14] == 4
        assert blob[15] == 32
        assert blob[16:24] == b"saltsalt"
        assert blob[24:32] == b"person\x00\x00"

    def test_from_bytes_parses_to_bytes_output(self):
        """Test parsing a serialized block."""
        param = ParameterBlock(digest_length=16, salt=b"12345678", personal=b"abcdefgh")

        assert ParameterBlock.from_bytes(param.to_bytes()) == param

    def test_from_bytes_wrong_size(self):
        """Test parsing a truncated block."""
        with pytest.raises(ParameterError):
            ParameterBlock.from_bytes(bytes(31))

    def test_words_are_little_endian(self):
        """Test word packing of the first parameter word."""
        words = ParameterBlock(digest_length=32, key_length=0).words()

        assert words[0] == 0x01010020
        assert words[1:] == (0,) * 7

    def test_chain_value(self):
        """Test IV XOR parameter words."""
        h = ParameterBlock().chain_value()

        assert h[0] == 0x6B08E647
        assert h[1:] == list(IV[1:])

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"digest_length": 0},
            {"digest_length": 33},
            {"key_length": 33},
            {"fanout": 256},
            {"leaf_length": 1 << 32},
            {"node_offset": -1},
            {"xof_length": 1 << 16},
            {"inner_length": 33},
            {"salt": b"123456789"},
            {"personal": b"123456789"},
        ],
    )
    def test_invalid_fields(self, kwargs):
        """Test out-of-range fields raise ParameterError."""
        with pytest.raises(ParameterError):
            ParameterBlock(**kwargs)

    def test_parameter_error_is_value_error(self):
        """Test ParameterError can be caught as ValueError."""
        with pytest.raises(ValueError):
            ParameterBlock(digest_length=0)
