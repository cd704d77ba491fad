"""
Moodify Main Application

Entry point that reads configuration and serves the FastAPI backend.
"""

import logging

import uvicorn
from dotenv import load_dotenv

from .models.config_models import MoodifyConfig

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the Moodify backend with uvicorn."""
    config = MoodifyConfig.from_env()
    logger.info(f"Starting Moodify backend on {config.host}:{config.port}")

    uvicorn.run(
        "moodify.api.backend:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
