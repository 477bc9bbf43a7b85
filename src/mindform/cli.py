"""
MindForm command line.

Usage:
    # Web server (generation API and shared forms)
    mindform web --port 9110

    # MCP server, stdio mode (desktop clients)
    mindform mcp --transport stdio

    # MCP server, SSE mode (Docker/remote)
    mindform mcp --transport sse --port 8080
"""

import argparse
import asyncio
import logging
import sys

from mindform.config import get_config, update_config

logger = logging.getLogger("mindform")

EPILOG = """
Environment Variables:
  OPENAI_API_KEY              OpenAI API key for form generation
  OPENAI_MODEL                Model used by the generator (default: gpt-4.1-mini)
  MINDFORM_PUBLIC_URL         Base URL used in share links
  MINDFORM_STORAGE_BACKEND    memory or json (default: memory)
  MINDFORM_STORAGE_DIR        Directory for the json backend
  MCP_TRANSPORT               Transport type: stdio or sse (default: stdio)
  MCP_PORT                    Port for SSE transport (default: 8080)
"""


def build_parser() -> argparse.ArgumentParser:
    config = get_config()

    parser = argparse.ArgumentParser(
        prog="mindform",
        description="MindForm: AI form generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help=f"Logging level (default: {config.log_level})",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    web = commands.add_parser("web", help="Run the web server")
    web.add_argument("--host", default=config.host, help=f"Host to bind (default: {config.host})")
    web.add_argument(
        "--port",
        type=int,
        default=config.server_port,
        help=f"Port to listen on (default: {config.server_port})",
    )

    mcp = commands.add_parser("mcp", help="Run the MCP server")
    mcp.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=config.mcp_transport,
        help=f"Transport type (default: {config.mcp_transport})",
    )
    mcp.add_argument("--host", default="0.0.0.0", help="Host for SSE transport (default: 0.0.0.0)")
    mcp.add_argument(
        "--port",
        type=int,
        default=config.mcp_port,
        help=f"Port for SSE transport (default: {config.mcp_port})",
    )
    return parser


def run_web(host: str, port: int) -> None:
    import uvicorn

    from mindform.web import create_app

    logger.info("Starting web server on %s:%s", host, port)
    uvicorn.run(create_app(), host=host, port=port)


def run_mcp(transport: str, host: str, port: int) -> None:
    from mindform.mcp_server import run_mcp_server

    logger.info("Starting MCP server (transport: %s)", transport)
    asyncio.run(run_mcp_server(transport=transport, host=host, port=port))


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    # stdio carries the MCP protocol, so logs go to stderr
    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)
    update_config(log_level=args.log_level.upper())

    try:
        if args.command == "web":
            update_config(host=args.host, server_port=args.port)
            run_web(args.host, args.port)
        else:
            update_config(mcp_transport=args.transport, mcp_port=args.port)
            run_mcp(args.transport, args.host, args.port)
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
