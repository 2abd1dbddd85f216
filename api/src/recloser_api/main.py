# ruff: noqa: I001
import logging
import os
import time
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from recloser_api.logging_config import configure_logging
from recloser_api.catalog.errors import CatalogError, CycleDetected, InvalidReference, NotFound, StoreUnavailable
# Static catalog routes (/firmwares/compare) must register before /firmwares/{firmware_id}
from recloser_api.routers.catalog import router as catalog_router
from recloser_api.routers.components import router as components_router
from recloser_api.routers.features import router as features_router
from recloser_api.routers.firmwares import router as firmwares_router
from recloser_api.routers.i18n import router as i18n_router
from recloser_api.routers.reclosers import router as reclosers_router
from recloser_api.routers.services import router as services_router

configure_logging(
    service_name=os.getenv("LOG_SERVICE_NAME", "recloser-api"),
)

app = FastAPI(title="Recloser Catalog API")
logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        start = time.perf_counter()
        try:
            response = await call_next(request)
            # Log 5xx responses too (even if handled downstream), unless the
            # catalog error handler already reported the cause
            if 500 <= response.status_code < 600 and not getattr(request.state, "error_logged", False):
                duration_ms = int((time.perf_counter() - start) * 1000)
                logger.error(
                    "HTTP 5xx response",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "client": request.client.host if request.client else None,
                        "duration_ms": duration_ms,
                    },
                )
            return response
        except Exception as exc:  # noqa: BLE001 - we want to log all unhandled exceptions
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.error(
                "Unhandled exception during request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "client": request.client.host if request.client else None,
                    "duration_ms": duration_ms,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                    "traceback": traceback.format_exc(),
                },
            )
            raise


app.add_middleware(ErrorLoggingMiddleware)


_STATUS_BY_ERROR: dict[type[CatalogError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    CycleDetected: status.HTTP_409_CONFLICT,
    InvalidReference: status.HTTP_422_UNPROCESSABLE_ENTITY,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in _STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    level = logging.ERROR if status_code >= 500 else logging.WARNING
    logger.log(
        level,
        "Catalog error",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
    )
    if level == logging.ERROR:
        request.state.error_logged = True
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.get("/health")
def healthcheck() -> dict:
    return {"status": "ok"}


app.include_router(catalog_router)
app.include_router(i18n_router)
app.include_router(components_router)
app.include_router(reclosers_router)
app.include_router(firmwares_router)
app.include_router(services_router)
app.include_router(features_router)
