import ipaddress

from .errors import InvalidAddressFormat, InvalidPort


MESSAGE_HEADER_LENGTH = 20
ATTRIBUTE_HEADER_SIZE = 4
TRANSACTION_ID_SIZE = 12

COOKIE = 0x2112A442
COOKIE_UINT32_BYTES = COOKIE.to_bytes(4, "big")

IPV4_PROTOCOL = 0x01

MAX_PORT = 0xFFFF


def is_stun(b: bytes | memoryview) -> bool:
    if len(b) < MESSAGE_HEADER_LENGTH:
        return False
    extracted_value = (b[4] << 24) | (b[5] << 16) | (b[6] << 8) | b[7]
    return extracted_value == COOKIE


# X-Port is the mapped port XOR'd with the most significant 16 bits of the
# magic cookie, X-Address is each octet XOR'd with the cookie byte at the same
# index. Both transforms are their own inverse.
# https://datatracker.ietf.org/doc/html/rfc5389#section-15.2


def xor_port(port: int, cookie: bytes = COOKIE_UINT32_BYTES) -> int:
    return port ^ int.from_bytes(cookie[0:2], "big")


def xor_address_octets(
    octets: bytes | list[int], cookie: bytes = COOKIE_UINT32_BYTES
) -> bytes:
    if len(octets) != 4:
        raise ValueError(f"IPv4 address must have 4 octets, got {len(octets)}")
    return bytes(octet ^ cookie[i] for i, octet in enumerate(octets))


def parse_ipv4_octets(ip: str) -> bytes:
    if not isinstance(ip, str):
        raise InvalidAddressFormat(f"IPv4 address must be a string, got {ip!r}")
    try:
        return ipaddress.IPv4Address(ip).packed
    except ipaddress.AddressValueError as e:
        raise InvalidAddressFormat(f"Invalid IPv4 address {ip!r}: {e}") from e


def address_string_to_xored_bytes(
    ip: str, cookie: bytes = COOKIE_UINT32_BYTES
) -> bytes:
    return xor_address_octets(parse_ipv4_octets(ip), cookie)


def xored_bytes_to_address_string(
    octets: bytes | list[int], cookie: bytes = COOKIE_UINT32_BYTES
) -> str:
    return ".".join(str(octet) for octet in xor_address_octets(octets, cookie))


def int_to_minimal_bytes(value: int, min_size: int = 0) -> bytes:
    """
    Encode value as big-endian bytes going through its hex representation.

    The hex string is left padded with a single "0" when its digit count is
    odd, so 0x1 becomes b"\\x01" and 0x123 becomes b"\\x01\\x23". The result is
    then left padded with zero bytes up to min_size, which fixed width fields
    such as X-Port rely on: 0x00ff only takes one byte on its own.
    """
    if value < 0:
        raise ValueError(f"Unable encode negative value {value}")

    hex_str = f"{value:x}"
    hex_str = "0" * (len(hex_str) % 2) + hex_str
    return bytes.fromhex(hex_str).rjust(min_size, b"\x00")


def validate_port(port: int) -> int:
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidPort(f"Port must be an integer, got {port!r}")
    if port < 0 or port > MAX_PORT:
        raise InvalidPort(f"Port {port} out of range 0..{MAX_PORT}")
    return port


def xor_port_to_bytes(port: int, cookie: bytes = COOKIE_UINT32_BYTES) -> bytes:
    return int_to_minimal_bytes(xor_port(validate_port(port), cookie), min_size=2)


def unpack_unsigned_short(data: bytes) -> int:
    return int.from_bytes(data[:2], "big")


def unpack_unsigned(data: bytes) -> int:
    return int.from_bytes(data[:4], "big")
