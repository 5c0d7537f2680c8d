class StunError(ValueError):
    pass


class DecodeError(StunError):
    pass


class MalformedHeader(DecodeError):
    pass


class InvalidMagicCookie(DecodeError):
    pass


class MalformedAttribute(DecodeError):
    pass


class AttributeNotSupported(DecodeError):
    pass


class InvalidAttributeLength(DecodeError):
    pass


class EncodeError(StunError):
    pass


class InvalidAddressFormat(EncodeError):
    pass


class InvalidPort(EncodeError):
    pass


class InvalidTransactionId(EncodeError):
    pass
