"""Run the API with uvicorn: ``python -m careertrack``."""

import uvicorn

from careertrack.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "careertrack.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
