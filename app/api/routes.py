import json

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.datastructures import UploadFile

from app.classification.exceptions import AiTimeoutError, ClassificationError
from app.config.settings import Settings
from app.extraction.exceptions import TextBudgetExceededError
from app.logging.logger import Log
from app.processor.exceptions import ExtractionFailedError, UploadValidationError
from app.processor.models import UploadedFile
from app.processor.processor import Processor
from app.waitlist.waitlist_log import InvalidEmailError, WaitlistLog

ARCHIVE_FILENAME = "ReadyToSend.zip"

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/api/generate")
async def generate(request: Request) -> Response:
    settings: Settings = request.app.state.settings
    processor: Processor = request.app.state.processor

    form = await request.form()
    uploads = [
        part for part in form.getlist(settings.upload_field_name)
        if isinstance(part, UploadFile)
    ]
    try:
        processor.check_uploads(
            [(upload.filename or "upload", upload.size) for upload in uploads]
        )
        files = [await _read_upload(upload) for upload in uploads]
        archive = await processor.process(files)
    except UploadValidationError as exc:
        Log.warning(f"generate: rejected {exc}")
        return PlainTextResponse(str(exc), status_code=400)
    except TextBudgetExceededError as exc:
        return PlainTextResponse(
            f"Total extracted text exceeds limit ({exc.limit_chars} characters). "
            "Please upload fewer or smaller files.",
            status_code=400,
        )
    except AiTimeoutError as exc:
        Log.warning(f"generate: timeout {exc}")
        return PlainTextResponse(
            "The request took too long. Please try fewer or smaller files.",
            status_code=408,
        )
    except ExtractionFailedError as exc:
        return PlainTextResponse(str(exc), status_code=500)
    except ClassificationError as exc:
        Log.error(f"generate: ai_error {exc}")
        return PlainTextResponse(
            "Failed to organize the files. Please try again with fewer files.",
            status_code=500,
        )
    finally:
        await form.close()

    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{ARCHIVE_FILENAME}"'},
    )


@router.post("/api/notify")
async def notify(request: Request) -> PlainTextResponse:
    waitlist: WaitlistLog = request.app.state.waitlist
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return PlainTextResponse("Bad request", status_code=400)
    if not isinstance(payload, dict):
        return PlainTextResponse("Bad request", status_code=400)
    try:
        waitlist.add(payload.get("email"))
    except InvalidEmailError as exc:
        return PlainTextResponse(str(exc), status_code=400)
    except OSError as exc:
        Log.error(f"notify: waitlist write failed: {exc}")
        return PlainTextResponse("Bad request", status_code=400)
    return PlainTextResponse("ok")


async def _read_upload(upload: UploadFile) -> UploadedFile:
    content = await upload.read()
    return UploadedFile(name=upload.filename or "upload", size=len(content), content=content)
