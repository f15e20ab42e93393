"""MCP adapter — exposes routing and the catalog to MCP clients."""
