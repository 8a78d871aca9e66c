"""Run the service with uvicorn: ``python -m shortl``."""

import uvicorn

from shortl.core.config import settings


def main() -> None:
    uvicorn.run(
        "shortl.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,  # logging is configured by shortl.core.logging
    )


if __name__ == "__main__":
    main()
