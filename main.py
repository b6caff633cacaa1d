"""
Unified Entry Point for Cloud Server Deployment

Starts the relay API with its queue drainer in a single process. The
queue lives in memory, so exactly one process must serve the relay.
"""

import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def run_api_server():
    """Run the FastAPI server; the drainer starts with its lifespan."""
    import uvicorn
    from app.core.config import settings
    from app.main import app

    # Cloud servers set PORT env var - Settings reads it
    logger.info(f"Starting relay on 0.0.0.0:{settings.server_port}...")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.server_port,
        log_level=settings.log_level.lower(),
        access_log=True
    )


def main():
    """Main entry point. There is no graceful drain: queued requests are lost on exit."""
    print("=" * 70)
    print("THROTTLED WEBHOOK RELAY - STARTUP")
    print("=" * 70)

    try:
        run_api_server()
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")


if __name__ == "__main__":
    main()
