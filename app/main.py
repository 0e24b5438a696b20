import uvicorn

from app.api.app import create_app
from app.config.settings import Settings
from app.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build dependencies -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)
    Log.info(f"Serving on {settings.host}:{settings.port} ({settings.app_env})")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
