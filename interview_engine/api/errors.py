"""
Maps engine errors to structured HTTP responses.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from interview_engine.core.errors import ErrorKind, InterviewEngineError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorKind.OUT_OF_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.GENERATION_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.GRADING_ERROR: status.HTTP_502_BAD_GATEWAY,
}


async def engine_error_handler(request: Request, exc: InterviewEngineError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind.value}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.kind.value}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(InterviewEngineError, engine_error_handler)
