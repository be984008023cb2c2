#!/usr/bin/env python3
"""Start the probe server with uvicorn."""

import uvicorn
from dotenv import load_dotenv


def main():
    """Start the FastAPI server."""
    # Environment selection happens before settings are read.
    load_dotenv()

    from healthprobe.config import get_settings

    settings = get_settings()

    print("🚀 Starting health probe server...")
    print(f"🔍 Host: {settings.host}")
    print(f"🔍 Port: {settings.port}")
    print(f"🔍 Environment: {settings.environment.value}")

    uvicorn.run(
        "healthprobe.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.observability.log_level.value.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
