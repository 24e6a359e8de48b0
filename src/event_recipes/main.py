"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn event_recipes.main:app --reload

    # Installed console script
    event-recipes-service
"""

from event_recipes.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using configured host and port."""
    import uvicorn

    from event_recipes.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "event_recipes.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
