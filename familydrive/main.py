"""Entry point for the FamilyDrive service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import reset_request_id, set_request_id, setup_logging
from familydrive import config
from familydrive.database import init_database
from familydrive.exceptions import (
    FamilyDriveError,
    ActorNotFoundError,
    PermissionDeniedError,
    NotFoundError,
    InvalidRequestError,
    ConflictError,
    BlobNotFoundError
)
from familydrive.routes.basic_routes import router as basic_router
from familydrive.routes.file_routes import router as file_router
from familydrive.routes.user_routes import router as user_router
from familydrive.schemas.common import ErrorResponse
from familydrive.seed import seed_test_data
from familydrive.storage import LocalBlobStorage

logger = setup_logging('familydrive')

app = FastAPI(
    title="FamilyDrive API",
    description="Family file sharing with Admin, Parent and Kid roles",
    version=config.APPLICATION_VERSION
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    token = set_request_id(request_id)

    start_time = time.time()
    actor = request.headers.get(config.USER_ID_HEADER) or 'anonymous'

    logger.info(f"Request started: {request.method} {request.url.path} [user_id={actor}]")

    try:
        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s"
        )
    finally:
        reset_request_id(token)

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize database, uploads directory and seed data on application startup.
    """
    logger.info("FamilyDrive service starting up...")

    init_database()
    logger.info("Database initialized")

    LocalBlobStorage().ensure_directory()

    if config.SEED_TEST_DATA:
        seed_test_data()


def _error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(detail=detail, code=code).model_dump())


@app.exception_handler(ActorNotFoundError)
async def actor_not_found_handler(request: Request, exc: ActorNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    user_id = getattr(request.state, 'user_id', 'unknown')
    logger.warning(
        f"Actor not found: {exc} [request_id={request_id}] [user_id={user_id}] path={request.url.path}"
    )
    # Same body as a permission failure so callers cannot probe which ids exist.
    return _error_response(status.HTTP_403_FORBIDDEN, "Access denied", "ACCESS_DENIED")


@app.exception_handler(PermissionDeniedError)
async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    user_id = getattr(request.state, 'user_id', 'unknown')
    logger.warning(
        f"Permission denied: {exc} [request_id={request_id}] [user_id={user_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_403_FORBIDDEN, "Access denied", "ACCESS_DENIED")


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Not found error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_404_NOT_FOUND, str(exc), "NOT_FOUND")


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid request error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), "INVALID_REQUEST")


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Conflict error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), "CONFLICT")


@app.exception_handler(BlobNotFoundError)
async def blob_not_found_handler(request: Request, exc: BlobNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Blob missing: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(status.HTTP_404_NOT_FOUND, str(exc), "BLOB_MISSING")


@app.exception_handler(FamilyDriveError)
async def familydrive_exception_handler(request: Request, exc: FamilyDriveError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"FamilyDrive exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), "INTERNAL_ERROR")


app.include_router(basic_router)
app.include_router(user_router)
app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "FamilyDrive API", "status": "running"}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "familydrive.main:app",
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
    )


if __name__ == "__main__":
    main()
