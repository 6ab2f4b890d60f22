"""Run the diet tracker API with uvicorn."""

import uvicorn

from diet_tracker.config import Settings


def main() -> None:
    """Start the HTTP server on the configured host and port."""
    settings = Settings()
    uvicorn.run(
        "diet_tracker.api.asgi:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
