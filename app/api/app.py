from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.api.routes import router
from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.processor import Processor, build_processor
from app.waitlist.waitlist_log import WaitlistLog


def create_app(
    settings: Settings | None = None,
    processor: Processor | None = None,
    waitlist: WaitlistLog | None = None,
) -> FastAPI:
    """Build the FastAPI application with its request-independent collaborators."""
    settings = settings or Settings()
    app = FastAPI(title="ReadyToSend")
    app.state.settings = settings
    app.state.processor = processor or build_processor(settings)
    app.state.waitlist = waitlist or WaitlistLog(Path(settings.waitlist_path))
    app.include_router(router)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> PlainTextResponse:
        Log.exception(f"Unhandled error on {request.url.path}: {type(exc).__name__}")
        return PlainTextResponse("Something went wrong. Please try again.", status_code=500)

    return app
