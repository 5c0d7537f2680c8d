import argparse
import asyncio
import functools
import logging
import signal

from stun.client import query_binding
from stun.server import DEFAULT_PORT, BindingServerOptions, serve

logger = logging.getLogger("stun")


async def run_server(options: BindingServerOptions):
    loop = asyncio.get_running_loop()
    stop = loop.create_future()

    def ask_exit(signame: str):
        logger.info("got signal %s: exit", signame)
        if not stop.done():
            stop.set_result(None)

    for signame in {"SIGINT", "SIGTERM"}:
        loop.add_signal_handler(
            getattr(signal, signame), functools.partial(ask_exit, signame)
        )

    transport, _ = await serve(options)
    try:
        await stop
    finally:
        transport.close()


async def run_query(host: str, port: int, timeout: float):
    response = await query_binding(host, port, timeout)
    ip, mapped_port = response.xor_mapped_address.address
    print(f"{ip}:{mapped_port}")


def main():
    parser = argparse.ArgumentParser(description="STUN binding server")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve_parser = commands.add_parser("serve", help="answer binding requests")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    serve_parser.add_argument(
        "--strict",
        action="store_true",
        help="drop datagrams without the RFC 5389 magic cookie",
    )
    serve_parser.add_argument(
        "--no-verify",
        action="store_true",
        help="skip decoding responses again for logging",
    )

    query_parser = commands.add_parser("query", help="ask a server for my address")
    query_parser.add_argument("host")
    query_parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    query_parser.add_argument("--timeout", type=float, default=3.0)

    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level))

    match args.command:
        case "serve":
            options = BindingServerOptions(
                host=args.host,
                port=args.port,
                strict=args.strict,
                verify_response=not args.no_verify,
            )
            asyncio.run(run_server(options))
        case "query":
            asyncio.run(run_query(args.host, args.port, args.timeout))


if __name__ == "__main__":
    main()
