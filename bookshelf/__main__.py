"""Entry point: ``python -m bookshelf``."""

import uvicorn

from .config import load_config
from .logging_utils import configure_logging


def main() -> None:
    """Load configuration, set up logging and serve the API."""
    config = load_config()
    configure_logging(config.logging.level, config.logging.format)

    uvicorn.run(
        "bookshelf.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
