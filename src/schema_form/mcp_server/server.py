"""
MCP server for schema-form.

Form sessions live in the process-wide session store. Every client
connection also remembers the sessions it opened, and whatever it leaves
open is closed when the connection ends.
"""

import json
import logging
from contextvars import ContextVar
from typing import Any, Literal

import uvicorn
from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from schema_form import __version__
from schema_form.config import get_config
from schema_form.mcp_server.session_store import close_session, form_sessions
from schema_form.mcp_server.tools import call_tool as handle_tool_call
from schema_form.mcp_server.tools import get_mcp_tools

SERVICE_NAME = "schema-form-mcp"

logger = logging.getLogger("schema-form-mcp")

# Form session ids opened over the connection being served
connection_forms: ContextVar[set[str] | None] = ContextVar("connection_forms", default=None)


def track_connection_forms(name: str, arguments: dict[str, Any], result: dict[str, Any], forms: set[str]) -> None:
    """Record the form sessions a tool call opened or closed."""
    if "error" in result:
        return
    if name == "open_form":
        forms.add(result["session_id"])
    elif name == "close_form":
        forms.discard(arguments["session_id"])


def close_abandoned_forms(forms: set[str]) -> int:
    """Close sessions a finished connection left open; returns how many were still stored."""
    closed = 0
    for session_id in sorted(forms):
        if close_session(session_id):
            closed += 1
            logger.info(f"Closed abandoned form session {session_id}")
    forms.clear()
    return closed


def health_payload() -> dict[str, Any]:
    config = get_config()
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__,
        "transport": "sse",
        "open_sessions": len(form_sessions),
        "max_sessions": config.max_sessions,
        "at_capacity": len(form_sessions) >= config.max_sessions,
    }


def create_mcp_server() -> Server:
    """
    Create the MCP server with the form tools registered.

    Tool results are sent back as one JSON text block; failures are
    returned as {"error": ...} rather than raised to the client.
    """
    server = Server(SERVICE_NAME)
    tools = [
        Tool(name=t["name"], description=t["description"], inputSchema=t["inputSchema"])
        for t in get_mcp_tools()
    ]

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        logger.info(f"Tool call: {name}")
        logger.debug(f"Tool args: {arguments}")
        try:
            result = handle_tool_call(name, arguments)
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            result = {"error": str(e)}
        else:
            forms = connection_forms.get()
            if forms is not None:
                track_connection_forms(name, arguments, result, forms)
        indent = get_config().indent_json_output or None
        return [TextContent(type="text", text=json.dumps(result, indent=indent))]

    return server


async def serve_connection(server: Server, read_stream, write_stream) -> None:
    """Serve one client until it disconnects, then close the forms it left open."""
    forms: set[str] = set()
    token = connection_forms.set(forms)
    try:
        await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        connection_forms.reset(token)
        close_abandoned_forms(forms)


def create_sse_app(server: Server) -> Starlette:
    """Starlette app serving MCP over SSE at /sse, with a /health route."""
    # message endpoint path is relative to the /sse mount
    transport = SseServerTransport("/messages/")

    async def sse_endpoint(scope, receive, send):
        async with transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
            await serve_connection(server, read_stream, write_stream)

    async def health(request):
        return JSONResponse(health_payload())

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Mount("/sse/messages", app=transport.handle_post_message),
            Mount("/sse", app=sse_endpoint),
        ],
    )


async def run_mcp_server(
    transport: Literal["stdio", "sse"] = "stdio",
    host: str = "0.0.0.0",
    port: int = 8080,
) -> None:
    """
    Run the MCP server until it is stopped.

    Args:
        transport: "stdio" for a local subprocess client, "sse" for remote clients
        host: Bind address for SSE
        port: Port for SSE
    """
    server = create_mcp_server()

    if transport == "stdio":
        logger.info("Serving MCP over stdio")
        async with stdio_server() as (read_stream, write_stream):
            await serve_connection(server, read_stream, write_stream)
    elif transport == "sse":
        logger.info(f"Serving MCP over SSE on {host}:{port}")
        config = uvicorn.Config(
            create_sse_app(server),
            host=host,
            port=port,
            log_level=get_config().log_level.lower(),
        )
        await uvicorn.Server(config).serve()
    else:
        raise ValueError(f"Unknown transport: {transport}. Use 'stdio' or 'sse'.")
