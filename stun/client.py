import asyncio
import logging
from typing import Any, override

from .message import (
    BindingResponse,
    create_binding_request,
    decode_header,
    decode_response,
)
from .errors import StunError
from .utils import is_stun

logger = logging.getLogger(__name__)


class BindingQueryProtocol(asyncio.DatagramProtocol):
    def __init__(self, transaction_id: bytes) -> None:
        self._transaction_id = transaction_id
        self.response = asyncio.get_running_loop().create_future()

    @override
    def datagram_received(self, data: bytes, addr: tuple[str | Any, int]) -> None:
        if self.response.done() or not is_stun(data):
            return

        try:
            header = decode_header(data, strict=True)
            if header.transaction_id != self._transaction_id:
                logger.debug("Skip response with foreign transaction from %s", addr)
                return
            self.response.set_result(decode_response(data, strict=True))
        except StunError as e:
            self.response.set_exception(e)

    @override
    def error_received(self, exc: Exception) -> None:
        if not self.response.done():
            self.response.set_exception(exc)


async def query_binding(
    host: str, port: int, timeout: float = 3.0
) -> BindingResponse:
    """
    Send one Binding Request and wait for its response.

    Raises TimeoutError when nothing arrives in time. There is no
    retransmission.
    """
    loop = asyncio.get_running_loop()
    request = create_binding_request()
    transaction_id = request[8:20]

    transport, protocol = await loop.create_datagram_endpoint(
        lambda: BindingQueryProtocol(transaction_id),
        remote_addr=(host, port),
    )

    try:
        transport.sendto(request)
        logger.debug(
            "Sent binding request %s to %s:%d", transaction_id.hex(), host, port
        )
        return await asyncio.wait_for(protocol.response, timeout)
    finally:
        transport.close()
