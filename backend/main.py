"""
main.py
FastAPI application entrypoint for the Customer Management API.

What this service does
----------------------
- CRUD over customers (soft delete only), their addresses and orders
- Derived read views: substring search, filter by type, dashboard statistics
- Health endpoint with database row counts

Design decisions (high level)
-----------------------------
- Tables are created on startup if they don't exist (idempotent, safe for local dev),
  then the sample data set is loaded unless customers already exist.
- Each request gets one SQLAlchemy session, wrapped in a `UnitOfWork` that is
  passed explicitly to the service functions; services decide when to commit.
- Error mapping:
    * service NotFoundError                  -> 404 {"detail"}
    * service ValidationError (duplicates)   -> 400 {"error", "message", "field"}
    * request body/query validation          -> 400 {"error", "message", "field", "errors"}
    * IntegrityError from the store          -> 400 {"error", "message"}
    * anything else                          -> 500 {"title", "detail"}
"""

import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from .config import SEED_ON_STARTUP
from .db import Base, SessionLocal, engine
from .logging_config import get_logger
from .routers import addresses, customers, health, orders
from .seed_data import seed_sample_data
from .services.errors import NotFoundError, ValidationError

logger = get_logger(__name__)

app = FastAPI(
    title="Customer Management API",
    description="Customers, addresses and orders with search, filters and dashboard statistics.",
    version="1.0.0",
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(f"{request.method} {request.url.path} -> {status_code} ({duration_ms} ms)")


app.add_middleware(RequestLoggingMiddleware)


@app.on_event("startup")
def startup_event() -> None:
    """
    App lifecycle hook: run once when the server starts.

    We create tables if they do not exist yet (idempotent), then seed the
    sample data unless SEED_ON_STARTUP is off or customers already exist.
    A seeding failure is logged and does not stop the API from serving.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready.")

    if not SEED_ON_STARTUP:
        return
    session = SessionLocal()
    try:
        seed_sample_data(session)
    except SQLAlchemyError:
        logger.exception("An error occurred seeding the database")
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": exc.error, "message": exc.message, "field": exc.field},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Payload/query validation failures are reported as 400, naming the first
    offending field (camelCase, as sent by the client).
    """
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # loc looks like ["body", "email"] or ["query", "query"]
        field = loc[-1] if len(loc) > 1 else None
        errors.append({"field": field, "message": err.get("msg", ""), "location": loc})

    first = errors[0] if errors else {"field": None, "message": "Invalid request"}
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation failed",
            "message": first["message"],
            "field": first["field"],
            "errors": errors,
        },
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=400,
        content={"error": "Integrity error", "message": str(exc.orig)},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"title": "Internal Server Error", "detail": str(exc)},
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(addresses.router)
app.include_router(orders.router)


@app.get("/", tags=["Meta"])
def root() -> dict:
    """
    Lightweight service check and human-friendly note.
    """
    return {"message": "Customer Management API is running!"}
