from __future__ import annotations

import logging
import os

import uvicorn

from organizer.api.app import create_app
from organizer.config import load_settings


def main() -> None:
    """
    Main entry point for the Relationship Organizer server.

    Starts the REST API and, when TELEGRAM_NOTIFICATIONS_ENABLED is set,
    the morning/evening task summaries. Run a single process only: every
    process arms its own scheduler, so two servers send every summary twice.
    """
    pid = os.getpid()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    )

    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info(f"Server starting - PID: {pid}")
    logger.info("=" * 60)

    try:
        settings = load_settings()
        app = create_app(settings)
        logger.info(f"Listening on {settings.host}:{settings.port}")
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except KeyboardInterrupt:
        logger.info(f"Server stopped by user - PID: {pid}")
    except Exception:
        logger.error(f"Server crashed - PID: {pid}", exc_info=True)
        raise
    finally:
        logger.info(f"Server shutdown complete - PID: {pid}")


if __name__ == "__main__":
    main()
