"""
schema-form MCP Server command line.

Usage:
    # stdio mode (desktop clients)
    schema-form-mcp --transport stdio

    # SSE mode (for Docker/remote)
    schema-form-mcp --transport sse --port 8080

    # Use environment variables
    MCP_TRANSPORT=sse MCP_PORT=8080 schema-form-mcp
"""

import argparse
import asyncio
import logging
import sys

from schema_form.config import get_config, update_config
from schema_form.mcp_server.server import run_mcp_server

logger = logging.getLogger("schema-form-mcp")


def build_parser() -> argparse.ArgumentParser:
    config = get_config()

    parser = argparse.ArgumentParser(
        prog="schema-form-mcp",
        description="schema-form MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Desktop clients (stdio)
  schema-form-mcp --transport stdio

  # Docker/Remote (SSE)
  schema-form-mcp --transport sse --port 8080

Environment Variables:
  MCP_TRANSPORT              Transport type: stdio or sse (default: stdio)
  MCP_HOST                   Host for SSE transport (default: 0.0.0.0)
  MCP_PORT                   Port for SSE transport (default: 8080)
  SCHEMA_FORM_LOG_LEVEL      Log level (default: INFO)
  SCHEMA_FORM_MAX_SESSIONS   Open form sessions kept in memory (default: 100)
  SCHEMA_FORM_INDENT_JSON    Indent of tool results, 0 for compact (default: 2)
        """,
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=config.mcp_transport,
        help=f"Transport type (default: {config.mcp_transport})",
    )

    parser.add_argument(
        "--host",
        default=config.mcp_host,
        help=f"Host for SSE transport (default: {config.mcp_host})",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=config.mcp_port,
        help=f"Port for SSE transport (default: {config.mcp_port})",
    )

    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )

    parser.add_argument(
        "--max-sessions",
        type=int,
        default=config.max_sessions,
        help=f"Open form sessions kept in memory (default: {config.max_sessions})",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    update_config(log_level=args.log_level.upper(), max_sessions=args.max_sessions)

    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    logger.info("=" * 60)
    logger.info("schema-form MCP Server")
    logger.info(f"Transport: {args.transport}")
    if args.transport == "sse":
        logger.info(f"Host: {args.host}")
        logger.info(f"Port: {args.port}")
    logger.info(f"Max sessions: {args.max_sessions}")
    logger.info("=" * 60)

    try:
        asyncio.run(
            run_mcp_server(
                transport=args.transport,
                host=args.host,
                port=args.port,
            )
        )
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
