"""
FastAPI application factory
"""
import logging
import traceback

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import OperationalError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware

from app.config import get_settings
from app.domain.errors import LedgerError, RecordNotFoundError, DuplicateRecordError
from app.infrastructure.db.session import check_db_connection
from app.api.v1 import auth, expenses, quinielas, balances

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str, errors: list | None = None) -> JSONResponse:
    body = {"success": False, "code": code, "message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Last resort: anything no handler claimed is logged with traceback and becomes a 500"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return _error(500, "INTERNAL", "Error interno del servidor")


def register_error_handlers(app: FastAPI) -> None:
    """
    LedgerError        -> 400 (404 not found, 409 conflict)
    validation error   -> 400 with per-field messages
    OperationalError   -> 503 (database unreachable)
    """

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        if isinstance(exc, RecordNotFoundError):
            status_code = 404
        elif isinstance(exc, DuplicateRecordError):
            status_code = 409
        else:
            status_code = 400
        return _error(status_code, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ())[1:]),
                "message": str(err.get("msg", "")).removeprefix("Value error, "),
            }
            for err in exc.errors()
        ]
        return _error(400, "VALIDATION", "Datos de entrada inválidos", errors)

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        code = "UNAUTHORIZED" if exc.status_code == 401 else "HTTP_ERROR"
        return _error(exc.status_code, code, str(exc.detail))

    @app.exception_handler(OperationalError)
    async def db_unavailable_handler(request: Request, exc: OperationalError):
        logger.error("Database unavailable on %s %s: %s", request.method, request.url.path, exc)
        return _error(503, "UNAVAILABLE", "Error de conexión a la base de datos")


def create_app() -> FastAPI:
    """
    Application factory - creates and wires the FastAPI app

    Returns:
        Configured FastAPI app
    """
    settings = get_settings()

    app = FastAPI(
        title="Quiniela Caja Diaria",
        debug=settings.DEBUG,
    )

    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY
    )

    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(expenses.router)
    app.include_router(quinielas.router)
    app.include_router(balances.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (database reachable)"""
        check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
