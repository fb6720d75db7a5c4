"""Command line entry point: python -m rest_mcp."""
import argparse
import logging
import sys

from rest_mcp.config import settings
from rest_mcp.server import run_server


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="MCP server for making REST API requests")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default=None,
        help=f"MCP transport (default: {settings.MCP_TRANSPORT})",
    )
    parser.add_argument("--host", default=None, help="Bind host for the HTTP transport")
    parser.add_argument("--port", type=int, default=None, help="Port for the HTTP transport")
    args = parser.parse_args(argv)

    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    run_server(settings, transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
