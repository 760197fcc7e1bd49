"""Run the API with uvicorn.

Usage:
    python -m visual_learning
"""
import uvicorn

from visual_learning.core.config import settings


def main() -> None:
    uvicorn.run(
        "visual_learning:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
