"""
schema-form MCP Server Entry Point.

Run the MCP server from a source checkout with either stdio or SSE transport.

Usage:
    # stdio mode (desktop clients)
    python run_mcp_server.py --transport stdio

    # SSE mode (for Docker/remote)
    python run_mcp_server.py --transport sse --port 8080

    # Use environment variables
    MCP_TRANSPORT=sse MCP_PORT=8080 python run_mcp_server.py

Installed packages provide the same command as `schema-form-mcp`.
"""

import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from schema_form.mcp_server.cli import main


if __name__ == "__main__":
    main()
