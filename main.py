"""Main entry point for running the FastAPI application with auto-reload."""
import uvicorn

from solace.config import settings

if __name__ == "__main__":
    db_url = settings.db.url or "<not configured>"
    print(f"Starting {settings.app_name} v{settings.version}")
    print(f"Debug mode: {settings.debug}")
    print(f"Database: {db_url.split('@')[-1] if '@' in db_url else db_url}")
    print(f"Auto-reload: {'Enabled' if settings.debug else 'Disabled'}")
    print("-" * 50)

    uvicorn.run(
        "solace.api:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        reload_dirs=["solace", "config"] if settings.debug else None,
        reload_includes=["*.py"] if settings.debug else None,
        log_level=settings.logging.level.lower(),
    )
