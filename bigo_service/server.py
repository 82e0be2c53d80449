#!/usr/bin/env python3
"""
Server entry point for the Big-O Lens service.
"""
import uvicorn

from bigo_service.config import settings, logger


def main():
    """Run the server."""
    logger.info(f"Starting Big-O Lens on {settings.HOST}:{settings.PORT}")

    uvicorn.run(
        "bigo_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
