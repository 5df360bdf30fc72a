"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from log_level_normalizer.core.config import FilterConfig, resolve_field_config
from log_level_normalizer.core.levels import MAX_LEVEL, MIN_LEVEL, describe_levels


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-level-normalizer/help")
    def help_resource() -> str:
        """Return a short description and the list of resource URIs."""
        return (
            f"Normalized log levels range from {MIN_LEVEL} to {MAX_LEVEL}; "
            "higher means more severe.\n"
            "Inputs are checked in the order syslog, JUL, JCL; the last match wins.\n"
            "\nResources:\n"
            "- app://log-level-normalizer/help\n"
            "- app://log-level-normalizer/tables\n"
            "- app://log-level-normalizer/config/fields\n"
            "- app://log-level-normalizer/schemas/config\n"
        )

    @mcp.resource("app://log-level-normalizer/tables")
    def tables() -> dict[str, dict[str, int]]:
        """Return the syslog, JUL and JCL severity tables."""
        return describe_levels()

    @mcp.resource("app://log-level-normalizer/config/fields")
    def field_config() -> dict[str, Any]:
        """Return the effective field names (defaults plus env overrides)."""
        return resolve_field_config().model_dump()

    @mcp.resource("app://log-level-normalizer/schemas/config")
    def config_schema() -> dict[str, Any]:
        """Return the JSON schema of the filter configuration."""
        return FilterConfig.model_json_schema()
