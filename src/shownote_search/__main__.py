"""
Show Note Search server

Ingests a podcast RSS feed, splits each episode description into show
notes, and serves keyword search over episode titles and show-note link
text, both as MCP tools and as a JSON HTTP API under /api.
"""

import os
import sys

from .server import get_server, initialize_server, set_components


def main():
    """Main entry point for the server."""
    try:
        config, storage, feed_manager, search_engine = initialize_server()
        set_components(config, storage, feed_manager, search_engine)
        
        server = get_server()
        
        # The /api routes are only served by the HTTP transports
        transport = os.getenv("MCP_TRANSPORT", "http")
        
        if transport in ["http", "sse", "streamable-http"]:
            host = os.getenv("MCP_HTTP_HOST", "0.0.0.0")
            port = int(os.getenv("MCP_HTTP_PORT", "5000"))
            print(f"[INFO] Starting {transport} transport on {host}:{port}", file=sys.stderr)
            server.run(transport=transport, host=host, port=port)
        else:
            print("[INFO] Starting stdio transport", file=sys.stderr)
            server.run()
            
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"[ERROR] Server failed to start: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
