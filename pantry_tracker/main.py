import logging

import uvicorn

from .core.config import Config

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)
logger = logging.getLogger(__name__)


def run() -> None:
    from .app import app

    logger.info(f"Starting Pantry Tracker on {Config.HOST}:{Config.PORT} ({Config.ENVIRONMENT})")
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)


if __name__ == "__main__":
    run()
