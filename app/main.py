from contextlib import asynccontextmanager
import logging

import aioboto3
import aiohttp
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status

from app.models.base import ErrorResponse
from app.routes.buckets import router as buckets_router
from app.routes.lightsail import router as lightsail_router
from app.services.config import ApiConfig
from app.services.dependencies import get_s3_service_from_app
from app.services.errors import ResourceProviderError
from app.services.setup.errors import ProvisioningError


logger = logging.getLogger(__name__)

api_config = ApiConfig.from_env()


def _ensure_logging() -> None:
    formatter = logging.Formatter("%(levelname)s: %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        root.setLevel(logging.INFO)
        for handler in root.handlers:
            handler.setFormatter(formatter)


async def _check_credentials(app: FastAPI) -> None:
    """Startup check: one authenticated S3 call so bad credentials show up in the logs early."""

    try:
        bucket_count = await get_s3_service_from_app(app).verify_credentials()
    except (ResourceProviderError, ValueError) as exc:
        logger.warning("AWS credentials check failed: %s", exc)
        return
    logger.info("AWS credentials valid; %d bucket(s) visible", bucket_count)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_logging()
    app.state.aws_session = aioboto3.Session()
    app.state.http_session = aiohttp.ClientSession()
    try:
        if api_config.check_credentials_on_startup:
            await _check_credentials(app)
        yield
    finally:
        await app.state.http_session.close()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(api_config.allowed_origins),
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(buckets_router)
app.include_router(lightsail_router)


def _error_body(error_type: str, message: str) -> dict[str, str]:
    return ErrorResponse(error_type=error_type, error=message).model_dump(by_alias=True)


@app.exception_handler(ProvisioningError)
async def provisioning_error_handler(request: Request, exc: ProvisioningError) -> JSONResponse:
    """Map provisioning failures to ``{"errorType": ..., "error": ...}``.

    The status code comes from the error class (400/409 for request problems,
    500 for provider failures). ``errorType`` keeps the provider's own error
    code when there is one, so clients can tell an AccessDenied from a
    NoSuchBucket without seeing AWS internals.
    """
    return JSONResponse(
        status_code=int(exc.status_code),
        content=_error_body(exc.error_type, exc.message),
    )


@app.exception_handler(ResourceProviderError)
async def resource_provider_error_handler(request: Request, exc: ResourceProviderError) -> JSONResponse:
    logger.error("Unhandled AWS error (operation=%s code=%s)", exc.operation, exc.code)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(exc.code, exc.provider_message),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("InvalidRequest", "Invalid request body"),
    )


@app.get("/")
async def root():
    return {"message": "Hello World! Static site and Lightsail provisioning API is running."}
