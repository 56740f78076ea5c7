"""MCP server exposing Hebrew Bible vocabulary frequency tools.

Tools:
- list_books           (catalog of built books)
- get_frequency_table  (ranked vocabulary for a chapter range)
- get_verse_text       (reconstructed verse text)
"""

from __future__ import annotations

import argparse
import logging

from mcp.server.fastmcp import FastMCP

from bhsa_vocab.store import ArtifactStore
from bhsa_vocab.tools import catalog, frequency

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

mcp = FastMCP("bhsa-vocab")

# Shared store; artifacts load on first use and stay cached
store = ArtifactStore()

catalog.register(mcp, store)
frequency.register(mcp, store)


def main():
    """Run the MCP server."""
    parser = argparse.ArgumentParser(
        description="BHSA vocabulary frequency MCP server",
    )
    parser.add_argument(
        "--sse",
        type=int,
        metavar="PORT",
        help="Run with SSE transport on specified port",
    )
    parser.add_argument(
        "--http",
        type=int,
        metavar="PORT",
        help="Run with Streamable HTTP transport on specified port",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.sse:
        transport = "sse"
        port = args.sse
    elif args.http:
        transport = "http"
        port = args.http
    else:
        transport = "stdio"
        port = None

    logger.info("Starting BHSA vocabulary MCP server (transport: %s)...", transport)

    # Report a missing catalog at startup, not on the first tool call
    try:
        books = store.load_catalog().books
        logger.info("Serving %d books from %s", len(books), store.directory)
    except FileNotFoundError as e:
        logger.warning("%s; run bhsa-vocab-build first", e)

    if transport == "stdio":
        mcp.run(transport="stdio")
    elif transport == "sse":
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        mcp.run(transport="sse")
    elif transport == "http":
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
