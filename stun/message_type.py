import enum


class MessageClass(enum.IntEnum):
    Request = 0x00  # 0b00
    Indication = 0x01  # 0b01
    SuccessResponse = 0x02  # 0b10
    ErrorResponse = 0x03  # 0b11


class Method(enum.IntEnum):
    Binding = 0x001


# Method bits are split in three runs around the two class bits.
# A: bits 0-3, B: bits 4-6 (moved by 1), D: bits 7-11 (moved by 2).
method_a_bits = 0xF  # 0b0000000000001111
method_b_bits = 0x70  # 0b0000000001110000
method_d_bits = 0xF80  # 0b0000111110000000

method_b_shift = 1
method_d_shift = 2

# C0 lands on bit 4, C1 on bit 8.
c0_bit = 0x1
c1_bit = 0x2

class_c0_shift = 4
class_c1_shift = 7


class MessageType:
    def __init__(self, method: Method, message_class: MessageClass):
        self.method = method
        self.message_class = message_class

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageType):
            return NotImplemented
        return (
            self.method == other.method and self.message_class == other.message_class
        )

    def __hash__(self) -> int:
        return hash((self.method, self.message_class))

    def __repr__(self) -> str:
        return (
            f"MessageType(method=Method.{self.method.name}, "
            f"message_class=MessageClass.{self.message_class.name})"
        )

    def to_int(self) -> int:
        """
        Pack method and class into the 14 significant bits of the type field.

        https://datatracker.ietf.org/doc/html/rfc5389#section-6

          0                 1
          2  3  4 5 6 7 8 9 0 1 2 3 4 5
         +--+--+-+-+-+-+-+-+-+-+-+-+-+-+
         |M |M |M|M|M|C|M|M|M|C|M|M|M|M|
         |11|10|9|8|7|1|6|5|4|0|3|2|1|0|
         +--+--+-+-+-+-+-+-+-+-+-+-+-+-+

        Binding (0x001) with SuccessResponse (0b10) gives 0x0101.
        """
        m = int(self.method)
        a = m & method_a_bits
        b = m & method_b_bits
        d = m & method_d_bits
        m = a | (b << method_b_shift) | (d << method_d_shift)

        c = int(self.message_class)
        c0 = (c & c0_bit) << class_c0_shift
        c1 = (c & c1_bit) << class_c1_shift

        return m | c0 | c1

    def to_uint16_bytes(self) -> bytes:
        return self.to_int().to_bytes(2, "big")

    @staticmethod
    def from_int(v: int) -> "MessageType":
        c0 = (v >> class_c0_shift) & c0_bit
        c1 = (v >> class_c1_shift) & c1_bit
        message_class = c0 | c1

        a = v & method_a_bits
        b = (v >> method_b_shift) & method_b_bits
        d = (v >> method_d_shift) & method_d_bits
        method = a | b | d

        # Raises ValueError for methods other than Binding
        return MessageType(Method(method), MessageClass(message_class))


BINDING_REQUEST = MessageType(Method.Binding, MessageClass.Request).to_int()
BINDING_SUCCESS_RESPONSE = MessageType(
    Method.Binding, MessageClass.SuccessResponse
).to_int()
