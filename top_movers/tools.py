"""
MCP tool surface.
Exposes the Alpha Vantage movers as the ``topMovers`` tool over the streamable
HTTP transport. Yahoo data is not part of the tool contract.
"""
import logging
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from pydantic import Field

from top_movers.schemas.movers import TopMoversSchema
from top_movers.services.movers_service import MoversService
from top_movers.utils.validators import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT, resolve_limit

logger = logging.getLogger(__name__)

TOOL_NAME = "topMovers"
TOOL_DESCRIPTION = (
    "Fetches the current top gaining, losing, and most actively traded US stocks from Alpha Vantage."
)


async def run_top_movers(service: MoversService, limit: Optional[int] = None) -> TopMoversSchema:
    resolved = resolve_limit(limit)
    logger.info("Tool call", extra={"tool": TOOL_NAME, "limit": resolved})
    result = await service.get_top_movers(resolved)
    return TopMoversSchema.model_validate(result.model_dump())


def build_mcp_server(service: MoversService) -> FastMCP:
    server = FastMCP(
        name="top-movers-app",
        stateless_http=True,
        json_response=True,
        transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
    )

    @server.tool(name=TOOL_NAME, title="Top Movers", description=TOOL_DESCRIPTION, structured_output=True)
    async def top_movers(
        limit: Annotated[
            Optional[int],
            Field(description=f"Rows per list, {MIN_LIMIT}-{MAX_LIMIT} (default {DEFAULT_LIMIT})."),
        ] = None,
    ) -> TopMoversSchema:
        return await run_top_movers(service, limit)

    return server
