"""Entry point for running the zplgfa conversion service as a module."""

import logging
import sys

import uvicorn

from zplgfa.config import settings


def main() -> int:
    """Run the zplgfa server."""
    # Configure logging
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "zplgfa.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
