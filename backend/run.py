"""Run script with proper environment loading"""
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

BACKEND_DIR = Path(__file__).resolve().parent
BASE_DIR = BACKEND_DIR.parent


def main() -> int:
    # Relative DATA_FILE_PATH / log paths resolve against backend/
    os.chdir(BACKEND_DIR)
    load_dotenv(BASE_DIR / ".env", override=False)

    import uvicorn

    from topicqa.core.config import get_settings
    from topicqa.core.errors import ConfigError
    from topicqa.core.logging_config import LoggingConfig
    from topicqa.main import create_app

    LoggingConfig.configure()
    logger = LoggingConfig.get_logger("topicqa.run")
    settings = get_settings()

    try:
        app = create_app(settings)
    except ConfigError as e:
        logger.critical("Invalid configuration, refusing to start", extra={"error": str(e)})
        return 1

    logger.info(f"API server running at http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
