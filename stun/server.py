import asyncio
import logging
from dataclasses import dataclass
from typing import Any, override

from .errors import StunError
from .message import create_binding_response, decode_request, decode_response

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3478


@dataclass
class BindingServerOptions:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    # Drop datagrams whose magic cookie is not 0x2112A442
    strict: bool = False
    # Decode each response again before sending, for logging
    verify_response: bool = True


class BindingRequestHandler(asyncio.DatagramProtocol):
    def __init__(self, options: BindingServerOptions) -> None:
        self._options = options
        self._transport: asyncio.DatagramTransport | None = None

    @property
    def transport(self) -> asyncio.DatagramTransport:
        if self._transport is None:
            raise ValueError("Unable get binding server transport")
        return self._transport

    @override
    def connection_made(self, transport: asyncio.transports.DatagramTransport) -> None:
        self._transport = transport
        # If zero port os will assign it by itself
        _, port = transport.get_extra_info("sockname")[:2]
        self._options.port = port
        logger.info("STUN server listening to port %d", port)

    @override
    def datagram_received(self, data: bytes, addr: tuple[str | Any, int]) -> None:
        if self._transport is None:
            return

        address, port = addr[:2]

        try:
            response = self.handle(data, str(address), port)
        except StunError as e:
            logger.warning("Drop datagram from %s:%d: %s", address, port, e)
            return

        if response is None:
            return

        self._transport.sendto(response, (address, port))

    @override
    def error_received(self, exc: Exception) -> None:
        logger.error("Binding server socket error: %s", exc)

    def handle(self, data: bytes, address: str, port: int) -> bytes | None:
        """
        Build the Binding Response for one inbound datagram.

        The reflected address is the observed sender, never a payload field.
        Returns None for STUN messages other than a Binding Request.
        """
        request = decode_request(data, strict=self._options.strict)
        logger.debug("[REQUEST] %s from %s:%d", request, address, port)

        if not request.is_binding_request:
            logger.info(
                "Ignore message type %#06x from %s:%d", request.type, address, port
            )
            return None

        response = create_binding_response(request.transaction_id, port, address)

        if self._options.verify_response:
            logger.debug("[RESPONSE] %s", decode_response(response))

        return response


async def serve(
    options: BindingServerOptions,
) -> tuple[asyncio.DatagramTransport, BindingRequestHandler]:
    loop = asyncio.get_running_loop()
    return await loop.create_datagram_endpoint(
        lambda: BindingRequestHandler(options),
        local_addr=(options.host, options.port),
    )
