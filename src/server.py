"""Process entry point.

uvicorn runs the app's lifespan: a failed database connection at startup
ends the process with a non-zero status, and SIGINT/SIGTERM close the
connection before a clean exit.
"""

import uvicorn

from src.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
