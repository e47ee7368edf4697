"""Process entrypoint: validate configuration, then serve the API with uvicorn."""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from movies_api.core.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    try:
        settings = get_settings()
    except ValidationError as exc:
        missing = ", ".join(
            str(error["loc"][0]) for error in exc.errors() if error.get("loc")
        )
        logger.error("Missing or invalid environment variables: %s", missing)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    logger.info("Starting movies-api on %s:%s", settings.host, settings.port)
    # Startup failures inside the lifespan (table creation) make uvicorn exit non-zero
    uvicorn.run("movies_api.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
