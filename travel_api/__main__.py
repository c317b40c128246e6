"""
Process entry point: ``python -m travel_api`` or the ``travel-api`` script.

Starts uvicorn on APP_HOST:PORT (default 0.0.0.0:5000).
"""

import uvicorn

from travel_api.config import settings


def main() -> None:
    uvicorn.run(
        "travel_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
