from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError

from tour_payments.core.exceptions import GlobalException, StorageUnavailable
from tour_payments.core.errors import ErrorCode
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import get_correlation_id, logger
from tour_payments.utils.response import error_response


def _error_json(
    request: Request, status_code: int, code: str, message: str
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(
            code,
            message,
            status_code=status_code,
            trace_id=get_correlation_id(request),
        ).model_dump(),
    )


def register_exception_handlers(app: FastAPI):
    # ---------- Custom Domain Errors ----------
    @app.exception_handler(GlobalException)
    async def handle_global_exception(
        request: Request, exc: GlobalException
    ):
        if exc.status_code >= 500:
            logger.warning(
                "%s on %s: %s", exc.error_code, request.url.path, exc.message
            )
        return _error_json(request, exc.status_code, exc.error_code, exc.message)

    # ---------- Database Errors ----------
    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(
        request: Request, exc: SQLAlchemyError
    ):
        if isinstance(exc, (OperationalError, InterfaceError)):
            logger.warning(
                "Storage unavailable on %s cid=%s: %s",
                request.url.path,
                get_correlation_id(request),
                exc,
            )
            unavailable = StorageUnavailable()
            return _error_json(
                request,
                unavailable.status_code,
                unavailable.error_code,
                unavailable.message,
            )

        logger.exception(
            "Database failure on %s cid=%s", request.url.path, get_correlation_id(request)
        )
        return _error_json(
            request, 500, ErrorCode.DATABASE_ERROR, ErrorMessage.DATABASE_FAILURE
        )

    # ---------- Catch-all (500) ----------
    @app.exception_handler(Exception)
    async def handle_unhandled_exception(
        request: Request, exc: Exception
    ):
        logger.exception(
            "Unhandled error on %s cid=%s", request.url.path, get_correlation_id(request)
        )
        return _error_json(
            request, 500, ErrorCode.INTERNAL_SERVER_ERROR, ErrorMessage.SERVER_ERROR
        )
