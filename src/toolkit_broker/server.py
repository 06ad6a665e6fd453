"""Toolkit broker MCP server — entry point."""

from __future__ import annotations

from fastmcp import FastMCP

from .broker import BrokerHandlers, ToolExecutor
from .catalog import build_registry, load_catalogs
from .config import Settings
from .executor import HandlerTable, HttpToolExecutor
from .logging_config import create_logger, setup_logging
from .registry import ToolRegistry
from .router import register_broker_tools

logger = create_logger(__name__)


def create_server(
    registry: ToolRegistry,
    execute_tool: ToolExecutor,
    settings: Settings | None = None,
) -> FastMCP:
    """Create the MCP server around an already built registry.

    The registry is finalized here if the host has not done so yet.
    """
    settings = settings or Settings()
    registry.finalize()

    mcp = FastMCP(settings.server_name)
    broker = BrokerHandlers(registry, server_name=settings.server_name)
    register_broker_tools(mcp, broker, execute_tool)
    return mcp


def create_executor(settings: Settings) -> ToolExecutor:
    """HTTP gateway executor when configured, else an empty handler table."""
    if settings.executor_url:
        return HttpToolExecutor(
            settings.executor_url,
            user=settings.executor_user,
            timeout=settings.executor_timeout,
        )
    logger.warning("TOOLKIT_EXECUTOR_URL is not set; toolkit_call has no handlers")
    return HandlerTable()


def main() -> None:
    """CLI entry point."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    registry = build_registry(load_catalogs(settings.catalog_paths), settings)
    server = create_server(registry, create_executor(settings), settings)
    server.run()


if __name__ == "__main__":
    main()
