"""
FastAPI Production Server

Usage:
    python scripts/run-prod.py
"""

import uvicorn
from loguru import logger

from bizassist.config.settings import settings
from bizassist.utils.logger import setup_logger


def main():
    """Start the FastAPI production server"""
    setup_logger()
    logger.info(f"{settings.system_name} - API Server (Production) on {settings.api_host}:{settings.api_port}")

    uvicorn.run(
        "bizassist.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
