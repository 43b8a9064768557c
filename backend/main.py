"""
Main FastAPI application entry point (uvicorn main:app)
"""
import sys

from topicqa.core.errors import ConfigError
from topicqa.core.logging_config import LoggingConfig
from topicqa.main import create_app

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)

try:
    app = create_app()
except ConfigError as e:
    logger.critical("Invalid configuration, refusing to start", extra={"error": str(e)})
    sys.exit(1)
