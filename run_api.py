#!/usr/bin/env python3
"""
Script to run the Book Library API server.
"""

import sys
from pathlib import Path

import uvicorn

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from library_api.config import config


def main():
    """Run the API server."""
    print("📚 Book Library API Mock Server")
    print(f"🔌 Port: {config.port}")
    print(f"🌐 Environment: {config.environment}")
    print(f"🔗 URL: http://localhost:{config.port}")
    print("=" * 50)
    print("Quick test:")
    print(f"  curl http://localhost:{config.port}/books")
    print("=" * 50)

    uvicorn.run(
        "library_api.main:app",
        host=config.host,
        port=config.port,
        reload=config.is_development(),
        log_level=config.log_level.lower(),
        access_log=False
    )


if __name__ == "__main__":
    main()
