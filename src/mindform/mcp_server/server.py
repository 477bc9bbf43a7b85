"""
MCP server for MindForm.

Exposes form generation and answer validation as MCP tools, over stdio
(local clients) or SSE (remote deployment).
"""

import json
import logging
from typing import Any, Literal

from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from mindform.gateway import GenerationGateway, SchemaGenerationGateway
from mindform.mcp_server.tools import (
    get_mcp_tools,
    mcp_generate_form,
    mcp_validate_answers,
)
from mindform.storage import create_store
from mindform.storage.base import FormStore

logger = logging.getLogger(__name__)

SERVER_NAME = "mindform-mcp"


def create_mcp_server(
    gateway: GenerationGateway | None = None,
    store: FormStore | None = None,
) -> Server:
    """
    Build an MCP server with the MindForm tools registered.

    Args:
        gateway: Generation gateway. If None, an agent-backed gateway is
            created on the first generate_form call.
        store: Where generated forms are saved. If None, built from
            configuration.
    """
    server = Server(SERVER_NAME)
    form_store = store if store is not None else create_store()
    lazy_gateway: dict[str, GenerationGateway] = {}
    if gateway is not None:
        lazy_gateway["default"] = gateway

    async def generate_form(arguments: dict[str, Any]) -> dict[str, Any]:
        if "default" not in lazy_gateway:
            lazy_gateway["default"] = SchemaGenerationGateway()
        return await mcp_generate_form(
            lazy_gateway["default"],
            form_store,
            description=arguments.get("description", ""),
            clarification=arguments.get("clarification"),
            clarification_answers=arguments.get("clarification_answers"),
        )

    async def validate_answers(arguments: dict[str, Any]) -> dict[str, Any]:
        return mcp_validate_answers(
            schema=arguments.get("schema", {}),
            answers=arguments.get("answers", {}),
        )

    handlers = {
        "generate_form": generate_form,
        "validate_answers": validate_answers,
    }

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [Tool(**definition) for definition in get_mcp_tools()]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        logger.info("Tool call: %s", name)
        handler = handlers.get(name)
        if handler is None:
            result = {"error": f"Unknown tool: {name}"}
        else:
            result = await handler(arguments or {})
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


async def serve_stdio(server: Server) -> None:
    """Serve over stdin/stdout until the client disconnects."""
    logger.info("MCP server listening on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def create_sse_app(server: Server) -> Starlette:
    """
    Starlette app serving the MCP server over SSE.

    Routes:
        GET  /health          liveness probe
        GET  /sse             event stream
        POST /sse/messages/   client messages
    """
    transport = SseServerTransport("/messages/")

    async def sse_endpoint(scope, receive, send):
        async with transport.connect_sse(scope, receive, send) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    async def messages_endpoint(scope, receive, send):
        await transport.handle_post_message(scope, receive, send)

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "healthy", "service": SERVER_NAME, "transport": "sse"})

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Mount("/sse/messages", app=messages_endpoint),
            Mount("/sse", app=sse_endpoint),
        ],
    )


async def serve_sse(server: Server, host: str = "0.0.0.0", port: int = 8080) -> None:
    """Serve over SSE with uvicorn."""
    import uvicorn

    logger.info("MCP server listening on http://%s:%s/sse", host, port)
    config = uvicorn.Config(create_sse_app(server), host=host, port=port, log_level="info")
    await uvicorn.Server(config).serve()


async def run_mcp_server(
    transport: Literal["stdio", "sse"] = "stdio",
    host: str = "0.0.0.0",
    port: int = 8080,
) -> None:
    """
    Start the MCP server.

    Args:
        transport: "stdio" or "sse".
        host: Bind address, SSE only.
        port: Listen port, SSE only.

    Raises:
        ValueError: Unknown transport.
    """
    if transport not in ("stdio", "sse"):
        raise ValueError(f"Unknown transport: {transport}. Use 'stdio' or 'sse'.")

    server = create_mcp_server()
    if transport == "stdio":
        await serve_stdio(server)
    else:
        await serve_sse(server, host, port)
