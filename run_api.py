#!/usr/bin/env python3
"""
Script to run the Book Review Catalog API server.
"""

import uvicorn

from api.config import config
from utilities.config import config as logging_config
from utilities.logger import setup_logging, get_logger


def main():
    """Run the API server."""
    setup_logging(
        log_level=logging_config.log_level,
        log_format=logging_config.log_format,
        log_file=logging_config.get_log_file_path(),
        debug=logging_config.debug
    )
    logger = get_logger(__name__)
    logger.info(
        "Starting Book Review Catalog API server",
        host=config.host,
        port=config.port,
        debug=config.debug,
        books_file=config.books_file
    )

    uvicorn.run(
        "api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    main()
