import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv
from fastmcp import FastMCP

from loader import load_tools_from_directory
from middleware import get_cors_middleware

load_dotenv()

# Initialize logging
logger = logging.getLogger(__name__)
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

# Initialize FastMCP server
mcp = FastMCP("timeshift-mcp")

# Get CORS middleware configuration
cors = get_cors_middleware()

try:
    # Load tool plugins
    result = load_tools_from_directory(mcp)
    logger.info("Loaded tools: %s", ", ".join(result["loaded"]))
except Exception as e:
    logger.error("Failed to load tools: %s", e)
    raise

# Build the app with middleware and the intended path
app = mcp.http_app(path="/mcp", middleware=[cors])


def main():
    mode = sys.argv[1] if len(sys.argv) > 1 else "http"

    if mode == "stdio":
        print("Running MCP in stdio mode...")
        mcp.run()

    elif mode in ("http", "sse"):
        host = os.getenv("MCP_HOST", "127.0.0.1")
        port = int(os.getenv("MCP_PORT", "5001"))
        print("Running MCP over HTTP streaming...")
        uvicorn.run(app, host=host, port=port)

    else:
        raise ValueError(f"Unknown mode: {mode}")


if __name__ == "__main__":
    main()
