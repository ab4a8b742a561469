"""Run the proxy with uvicorn: ``python -m browser_proxy``."""

from __future__ import annotations

import uvicorn

from .config import HOST, PORT, APP_LOG_LEVEL
from .logging import configure_logging
from .server import create_app


def main() -> None:
    configure_logging()
    uvicorn.run(
        create_app(),
        host=HOST,
        port=PORT,
        log_level=APP_LOG_LEVEL.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
