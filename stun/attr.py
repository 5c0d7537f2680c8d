from dataclasses import dataclass

from .errors import AttributeNotSupported, InvalidAttributeLength, MalformedAttribute
from .utils import (
    ATTRIBUTE_HEADER_SIZE,
    COOKIE_UINT32_BYTES,
    IPV4_PROTOCOL,
    MESSAGE_HEADER_LENGTH,
    address_string_to_xored_bytes,
    unpack_unsigned_short,
    xor_port,
    xor_port_to_bytes,
    xored_bytes_to_address_string,
)

XOR_MAPPED_ADDRESS_TYPE = 0x0020
# Family 2 bytes, X-Port 2 bytes, X-Address 4 bytes
XOR_MAPPED_ADDRESS_LENGTH = 0x0008
XOR_MAPPED_ADDRESS_SIZE = ATTRIBUTE_HEADER_SIZE + XOR_MAPPED_ADDRESS_LENGTH


@dataclass
class XORMappedAddress:
    """
    XOR-MAPPED-ADDRESS attribute with the port and address already un-XOR'd.

    Layout on the wire, relative to the attribute start:
    type[0:2] length[2:4] family[4:6] x-port[6:8] x-address[8:12]
    """

    TYPE = XOR_MAPPED_ADDRESS_TYPE
    NAME = "XOR-MAPPED-ADDRESS"

    port: int
    ip: str
    type: int = XOR_MAPPED_ADDRESS_TYPE
    length: int = XOR_MAPPED_ADDRESS_LENGTH
    family: int = IPV4_PROTOCOL

    @property
    def address(self) -> tuple[str, int]:
        return (self.ip, self.port)

    def marshal(self, cookie: bytes = COOKIE_UINT32_BYTES) -> bytes:
        return (
            XOR_MAPPED_ADDRESS_TYPE.to_bytes(2, "big")
            + XOR_MAPPED_ADDRESS_LENGTH.to_bytes(2, "big")
            + IPV4_PROTOCOL.to_bytes(2, "big")
            + xor_port_to_bytes(self.port, cookie)
            + address_string_to_xored_bytes(self.ip, cookie)
        )

    @staticmethod
    def unmarshal(
        data: bytes | memoryview, cookie: bytes = COOKIE_UINT32_BYTES
    ) -> "XORMappedAddress":
        if len(data) < XOR_MAPPED_ADDRESS_SIZE:
            raise MalformedAttribute(
                f"{XORMappedAddress.NAME} needs {XOR_MAPPED_ADDRESS_SIZE} bytes, got {len(data)}"
            )

        attr_type = unpack_unsigned_short(data[0:2])
        attr_length = unpack_unsigned_short(data[2:4])
        family = unpack_unsigned_short(data[4:6])

        # Type is checked before length, a foreign attribute may carry any length
        if attr_type != XOR_MAPPED_ADDRESS_TYPE:
            raise AttributeNotSupported(f"Attribute not supported: {attr_type:#06x}")

        if attr_length != XOR_MAPPED_ADDRESS_LENGTH:
            raise InvalidAttributeLength(
                f"Invalid attribute length: {attr_length:#06x}"
            )

        return XORMappedAddress(
            port=xor_port(unpack_unsigned_short(data[6:8]), cookie),
            ip=xored_bytes_to_address_string(bytes(data[8:12]), cookie),
            type=attr_type,
            length=attr_length,
            family=family,
        )


def decode_xor_mapped_address(message: bytes | memoryview) -> XORMappedAddress:
    """Decode the single attribute that follows the 20 byte header."""
    return XORMappedAddress.unmarshal(message[MESSAGE_HEADER_LENGTH:])


def encode_xor_mapped_address(port: int, ip: str) -> bytes:
    return XORMappedAddress(port=port, ip=ip).marshal()
