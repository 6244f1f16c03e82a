"""
Entry point for the Grocery Parser API

Runs the FastAPI service with uvicorn. Settings come from the environment
or a .env file next to this script.
"""

from dotenv import load_dotenv

if __name__ == "__main__":
    load_dotenv()

    import uvicorn
    from grocery_parser.config.settings import get_settings
    from grocery_parser.monitoring.observability import configure_observability

    settings = get_settings()
    configure_observability(settings)

    # Single worker: cache and stats are in-process
    uvicorn.run(
        "grocery_parser.api:app",
        host="0.0.0.0",
        port=settings.port,
        workers=1,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
