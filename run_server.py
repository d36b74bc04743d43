#!/usr/bin/env python3
"""
Start the storefront web server
"""

import sys
import os

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

if __name__ == "__main__":
    import uvicorn
    from server.config import server_config

    print(f"""
    ╔══════════════════════════════════════════════════════════╗
    ║            🛍️  Pop Up Storefront Starting...              ║
    ╚══════════════════════════════════════════════════════════╝

    📍 Storefront: http://{server_config.API_HOST}:{server_config.API_PORT}/
    📚 API Docs:   http://{server_config.API_HOST}:{server_config.API_PORT}/docs

    Press CTRL+C to stop the server
    """)

    uvicorn.run(
        "server.app:app",
        host=server_config.API_HOST,
        port=server_config.API_PORT,
        reload=True,
        log_level="info"
    )
