"""MCP tool registrations; each module exposes ``register(mcp, store)``."""
