import pytest

from stun.message_type import (
    BINDING_REQUEST,
    BINDING_SUCCESS_RESPONSE,
    MessageClass,
    MessageType,
    Method,
)


def test_binding_constants():
    assert BINDING_REQUEST == 0x0001
    assert BINDING_SUCCESS_RESPONSE == 0x0101


@pytest.mark.parametrize(
    "message_class, expected",
    [
        (MessageClass.Request, 0x0001),
        (MessageClass.Indication, 0x0011),
        (MessageClass.SuccessResponse, 0x0101),
        (MessageClass.ErrorResponse, 0x0111),
    ],
)
def test_binding_message_type(message_class, expected):
    message_type = MessageType(Method.Binding, message_class)

    assert message_type.to_int() == expected
    assert message_type.to_uint16_bytes() == expected.to_bytes(2, "big")
    assert MessageType.from_int(expected) == message_type


def test_unknown_method():
    # Allocate (0x003) request
    with pytest.raises(ValueError):
        MessageType.from_int(0x0003)
