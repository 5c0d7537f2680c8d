import os
from dataclasses import dataclass

from .attr import XORMappedAddress, decode_xor_mapped_address
from .errors import InvalidMagicCookie, InvalidTransactionId, MalformedHeader
from .message_type import BINDING_REQUEST, BINDING_SUCCESS_RESPONSE
from .utils import (
    COOKIE,
    COOKIE_UINT32_BYTES,
    MESSAGE_HEADER_LENGTH,
    TRANSACTION_ID_SIZE,
    unpack_unsigned,
    unpack_unsigned_short,
)


@dataclass
class Header:
    type: int
    length: int
    magic_cookie: int
    transaction_id: bytes

    @property
    def has_magic_cookie(self) -> bool:
        return self.magic_cookie == COOKIE

    @property
    def is_binding_request(self) -> bool:
        return self.type == BINDING_REQUEST

    def __repr__(self) -> str:
        return (
            f"Header(type={self.type:#06x}, length={self.length}, "
            f"magic_cookie={self.magic_cookie:#010x}, "
            f"transaction_id={self.transaction_id.hex()})"
        )


@dataclass(repr=False)
class BindingResponse(Header):
    xor_mapped_address: XORMappedAddress

    def __repr__(self) -> str:
        return (
            f"BindingResponse(type={self.type:#06x}, length={self.length}, "
            f"magic_cookie={self.magic_cookie:#010x}, "
            f"transaction_id={self.transaction_id.hex()}, "
            f"xor_mapped_address={self.xor_mapped_address})"
        )


def decode_header(message: bytes | memoryview, strict: bool = False) -> Header:
    """
    Split the 20 byte STUN header into its fields.

    The magic cookie is returned as read. Pass strict=True to reject messages
    whose cookie is not 0x2112A442.
    """
    if len(message) < MESSAGE_HEADER_LENGTH:
        raise MalformedHeader(
            f"STUN header needs {MESSAGE_HEADER_LENGTH} bytes, got {len(message)}"
        )

    header = Header(
        type=unpack_unsigned_short(message[0:2]),
        length=unpack_unsigned_short(message[2:4]),
        magic_cookie=unpack_unsigned(message[4:8]),
        transaction_id=bytes(message[8:MESSAGE_HEADER_LENGTH]),
    )

    if strict and not header.has_magic_cookie:
        raise InvalidMagicCookie(f"Invalid magic cookie {header.magic_cookie:#010x}")

    return header


# Requests carry no attribute this codec understands
decode_request = decode_header


def decode_response(
    message: bytes | memoryview, strict: bool = False
) -> BindingResponse:
    header = decode_header(message, strict=strict)
    return BindingResponse(
        type=header.type,
        length=header.length,
        magic_cookie=header.magic_cookie,
        transaction_id=header.transaction_id,
        xor_mapped_address=decode_xor_mapped_address(message),
    )


def _transaction_id_bytes(transaction_id: bytes | bytearray | memoryview) -> bytes:
    transaction_id = bytes(transaction_id)
    if len(transaction_id) != TRANSACTION_ID_SIZE:
        raise InvalidTransactionId(
            f"Transaction id must be {TRANSACTION_ID_SIZE} bytes, got {len(transaction_id)}"
        )
    return transaction_id


def _encode_header(message_type: int, length: int, transaction_id: bytes) -> bytes:
    return (
        message_type.to_bytes(2, "big")
        + length.to_bytes(2, "big")
        + COOKIE_UINT32_BYTES
        + _transaction_id_bytes(transaction_id)
    )


def encode_response_header(transaction_id: bytes, length: int = 0) -> bytes:
    return _encode_header(BINDING_SUCCESS_RESPONSE, length, transaction_id)


def create_binding_response(transaction_id: bytes, port: int, ip: str) -> bytes:
    attributes = XORMappedAddress(port=port, ip=ip).marshal()
    return encode_response_header(transaction_id, len(attributes)) + attributes


def create_binding_request(transaction_id: bytes | None = None) -> bytes:
    if transaction_id is None:
        transaction_id = os.urandom(TRANSACTION_ID_SIZE)
    return _encode_header(BINDING_REQUEST, 0, transaction_id)
