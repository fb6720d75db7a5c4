"""
FastMCP-based MCP server exposing the REST tools.

Every RestTool is registered as an MCP tool whose arguments mirror the tool's
parameter object. The configured REST_API_AUTH_TOKEN is passed to each
handler; success envelopes become a text content block and error envelopes
are reported through ToolError so the client sees isError.
"""
import json
import logging
from typing import Annotated, Any, Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent
from pydantic import Field

from rest_mcp.config import Settings, settings as default_settings
from rest_mcp.tools import ALL_TOOLS, RestTool, ToolResponse
from rest_mcp.tools.schemas import BodyRequestInput

logger = logging.getLogger(__name__)

INSTRUCTIONS = """
rest-mcp makes HTTP requests on behalf of the agent.

Tools: rest_get, rest_post, rest_put, rest_patch, rest_delete.
Each takes a `url` plus optional `headers`, `queryParams` and
`withoutAuthorization`; POST, PUT and PATCH also accept a `body`
(sent as JSON) and a `contentType`.

The result is a JSON document with `response`, `status`, `statusText`
and `headers`. Non-2xx statuses are returned as results, not errors.
"""

UrlArg = Annotated[str, Field(description="The URL to send the request to")]
HeadersArg = Annotated[
    dict[str, str] | None, Field(description="Additional headers to include")
]
WithoutAuthorizationArg = Annotated[
    bool | None, Field(description="Skip authorization header")
]
QueryParamsArg = Annotated[
    dict[str, Any] | None, Field(description="Query parameters to append to URL")
]
BodyArg = Annotated[
    Any, Field(description="The request body (will be JSON stringified)")
]
ContentTypeArg = Annotated[
    str | None, Field(description="Content-Type header (default: application/json)")
]


def _supplied(**arguments: Any) -> dict[str, Any]:
    """Keep only the arguments the caller actually provided."""
    return {key: value for key, value in arguments.items() if value is not None}


def _log_response(tool_name: str, response: ToolResponse, preview_chars: int) -> None:
    rendered = json.dumps(response.to_dict(), ensure_ascii=False)
    if len(rendered) > preview_chars:
        rendered = f"{rendered[:preview_chars]}..."
    logger.info(f"[{tool_name}] Response: {rendered}")


def register_tool(mcp: FastMCP, tool: RestTool, config: Settings) -> None:
    """
    Register a RestTool on a FastMCP server.

    Args:
        mcp: Server to register on
        tool: Tool descriptor
        config: Settings providing the auth token, log preview length and request settings
    """

    async def run(arguments: dict[str, Any]) -> list[TextContent]:
        response = await tool.handle(arguments, config.REST_API_AUTH_TOKEN, config=config)
        _log_response(tool.name, response, config.LOG_PREVIEW_CHARS)
        if response.is_error:
            raise ToolError(response.text)
        return [TextContent(type="text", text=response.text)]

    if issubclass(tool.input_model, BodyRequestInput):

        async def handler(
            url: UrlArg,
            body: BodyArg = None,
            headers: HeadersArg = None,
            withoutAuthorization: WithoutAuthorizationArg = None,
            contentType: ContentTypeArg = None,
            queryParams: QueryParamsArg = None,
        ):
            return await run(_supplied(
                url=url,
                body=body,
                headers=headers,
                withoutAuthorization=withoutAuthorization,
                contentType=contentType,
                queryParams=queryParams,
            ))

    else:

        async def handler(
            url: UrlArg,
            headers: HeadersArg = None,
            withoutAuthorization: WithoutAuthorizationArg = None,
            queryParams: QueryParamsArg = None,
        ):
            return await run(_supplied(
                url=url,
                headers=headers,
                withoutAuthorization=withoutAuthorization,
                queryParams=queryParams,
            ))

    handler.__name__ = tool.name
    mcp.tool(handler, name=tool.name, description=tool.description)


def create_server(
    config: Settings | None = None,
    tools: Iterable[RestTool] | None = None,
) -> FastMCP:
    """Create a FastMCP server with the REST tools registered."""
    config = config or default_settings
    mcp = FastMCP(name=config.APP_NAME, instructions=INSTRUCTIONS)

    for tool in (ALL_TOOLS if tools is None else tools):
        register_tool(mcp, tool, config)

    if config.REST_API_AUTH_TOKEN is None:
        logger.info("REST_API_AUTH_TOKEN not set, requests are sent without authorization")

    return mcp


def create_http_app(mcp: FastMCP, config: Settings | None = None) -> FastAPI:
    """Wrap the FastMCP streamable HTTP app in a FastAPI app with CORS."""
    config = config or default_settings
    fastmcp_app = mcp.http_app()

    # Pass lifespan from FastMCP app as required for session management
    app = FastAPI(title=f"{config.APP_NAME} MCP Server", lifespan=fastmcp_app.lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id", "X-Request-Id"],
    )

    app.mount("/", fastmcp_app)
    return app


def run_server(
    config: Settings | None = None,
    transport: str | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the server over stdio or HTTP."""
    import uvicorn

    config = config or default_settings
    transport = (transport or config.MCP_TRANSPORT).lower()
    mcp = create_server(config)

    if transport == "stdio":
        logger.info(f"{config.APP_NAME} v{config.APP_VERSION} running on stdio")
        mcp.run(transport="stdio")
    elif transport == "http":
        host = host or config.MCP_HOST
        port = port or config.MCP_PORT
        logger.info(f"{config.APP_NAME} v{config.APP_VERSION} listening on http://{host}:{port}/mcp")
        uvicorn.run(create_http_app(mcp, config), host=host, port=port)
    else:
        raise ValueError(f"Unsupported transport: {transport}")


mcp = create_server()
