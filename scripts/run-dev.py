"""
FastAPI Development Server

Run the business assistant API with auto-reload.

Usage:
    python scripts/run-dev.py
"""

from pathlib import Path

import uvicorn
from loguru import logger

from bizassist.config.settings import settings
from bizassist.utils.logger import setup_logger

project_root = Path(__file__).resolve().parent.parent


def main():
    """Start the FastAPI development server"""
    setup_logger()
    logger.info("=" * 80)
    logger.info(f"{settings.system_name} - API Server")
    logger.info("=" * 80)
    logger.info(f"Storage backend: {settings.storage_backend} | LLM provider: {settings.llm_provider}")
    logger.info(f"Server will be available at: http://localhost:{settings.api_port}")
    logger.info(f"API Documentation: http://localhost:{settings.api_port}/docs")
    logger.info(f"Chat: POST http://localhost:{settings.api_port}/api/chat")
    logger.info("Press CTRL+C to stop the server")
    logger.info("=" * 80)

    uvicorn.run(
        "bizassist.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level="info",
        access_log=True,
        reload_dirs=[str(project_root / "bizassist")],
    )


if __name__ == "__main__":
    main()
