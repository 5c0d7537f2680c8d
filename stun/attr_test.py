import binascii

import pytest

from stun.attr import (
    XORMappedAddress,
    decode_xor_mapped_address,
    encode_xor_mapped_address,
)
from stun.errors import (
    AttributeNotSupported,
    InvalidAddressFormat,
    InvalidAttributeLength,
    InvalidPort,
    MalformedAttribute,
)
from tests import testutils


class Test_EncodeXorMappedAddress:
    def test_encode(self):
        encoded = encode_xor_mapped_address(25139, "166.119.231.99")
        assert binascii.hexlify(encoded) == b"002000080001432187654321"

    def test_encode_has_12_bytes(self):
        assert len(encode_xor_mapped_address(0, "0.0.0.0")) == 12
        assert len(encode_xor_mapped_address(0x2112, "255.255.255.255")) == 12

    def test_encode_fields(self):
        encoded = encode_xor_mapped_address(8080, "127.0.0.1")
        assert encoded[0:2] == b"\x00\x20"
        assert encoded[2:4] == b"\x00\x08"
        assert encoded[4:6] == b"\x00\x01"
        assert encoded[6:8] == bytes.fromhex("3e82")
        assert encoded[8:12] == bytes([94, 18, 164, 67])

    def test_encode_invalid_port(self):
        with pytest.raises(InvalidPort):
            encode_xor_mapped_address(65536, "127.0.0.1")

    def test_encode_invalid_address(self):
        with pytest.raises(InvalidAddressFormat):
            encode_xor_mapped_address(3478, "300.0.0.1")


class Test_DecodeXorMappedAddress:
    def test_decode(self):
        message = testutils.header() + testutils.attribute(
            x_port="1212", x_address="12121212"
        )

        attr = decode_xor_mapped_address(message)

        assert attr == XORMappedAddress(
            port=0x3300, ip="51.0.182.80", type=0x0020, length=0x0008, family=0x0001
        )
        assert attr.address == ("51.0.182.80", 0x3300)

    def test_decode_keeps_family_as_read(self):
        message = testutils.header() + testutils.attribute(family="abcd")
        assert decode_xor_mapped_address(message).family == 0xABCD

    def test_decode_captured(self):
        attr = decode_xor_mapped_address(testutils.CAPTURED_RESPONSE)
        assert attr.port == testutils.CAPTURED_PORT
        assert attr.ip == testutils.CAPTURED_IP

    def test_decode_memoryview(self):
        attr = decode_xor_mapped_address(memoryview(testutils.CAPTURED_RESPONSE))
        assert attr.address == (testutils.CAPTURED_IP, testutils.CAPTURED_PORT)

    def test_attribute_not_supported(self):
        message = testutils.header() + testutils.attribute(type_="abcd")
        with pytest.raises(AttributeNotSupported):
            decode_xor_mapped_address(message)

    def test_invalid_attribute_length(self):
        message = testutils.header() + testutils.attribute(length="ffff")
        with pytest.raises(InvalidAttributeLength):
            decode_xor_mapped_address(message)

    def test_type_checked_before_length(self):
        message = testutils.header() + testutils.attribute(type_="abcd", length="ffff")
        with pytest.raises(AttributeNotSupported):
            decode_xor_mapped_address(message)

    @pytest.mark.parametrize("size", [0, 4, 11])
    def test_truncated_attribute(self, size):
        message = testutils.header() + testutils.attribute()[:size]
        with pytest.raises(MalformedAttribute):
            decode_xor_mapped_address(message)
