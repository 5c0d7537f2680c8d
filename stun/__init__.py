from .message_type import (
    MessageClass,
    Method,
    MessageType,
    BINDING_REQUEST,
    BINDING_SUCCESS_RESPONSE,
)
from .message import (
    Header,
    BindingResponse,
    decode_header,
    decode_request,
    decode_response,
    encode_response_header,
    create_binding_response,
    create_binding_request,
)
from .attr import (
    XORMappedAddress,
    decode_xor_mapped_address,
    encode_xor_mapped_address,
)
from .errors import (
    StunError,
    DecodeError,
    EncodeError,
    MalformedHeader,
    InvalidMagicCookie,
    MalformedAttribute,
    AttributeNotSupported,
    InvalidAttributeLength,
    InvalidAddressFormat,
    InvalidPort,
    InvalidTransactionId,
)
from .utils import is_stun
