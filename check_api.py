#!/usr/bin/env python3
"""
Smoke-test client for the catalog read endpoints.
Calls the status-envelope endpoints of a running server and logs each result.
"""

import argparse
import asyncio
import sys
from typing import Dict, Optional

import httpx

from utilities.config import config
from utilities.logger import setup_logging, get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"

CHECKS = [
    ("all books", "/async/books"),
    ("book by ISBN", "/promise/isbn/1"),
    ("books by author", "/async/author/Chinua Achebe"),
    ("books by title", "/async/title/Things Fall Apart"),
]


async def run_checks(
    base_url: str = DEFAULT_BASE_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Dict[str, dict]:
    """
    Call each read endpoint once.

    Args:
        base_url: Server base URL
        transport: Optional transport, e.g. to call an app in-process

    Returns:
        Response bodies keyed by check name

    Raises:
        httpx.HTTPError: If a request fails or returns an error status
    """
    results = {}
    async with httpx.AsyncClient(base_url=base_url, transport=transport, timeout=10) as client:
        for name, path in CHECKS:
            logger.info("Checking endpoint", check=name, path=path)
            response = await client.get(path)
            response.raise_for_status()
            results[name] = response.json()
            logger.info("Endpoint responded", check=name, status_code=response.status_code, body=results[name])
    return results


def main():
    parser = argparse.ArgumentParser(description="Smoke-test the catalog read endpoints")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    setup_logging(log_level=config.log_level, log_format="console", debug=config.debug)

    try:
        asyncio.run(run_checks(args.base_url))
    except httpx.HTTPError as e:
        logger.error("Smoke test failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
