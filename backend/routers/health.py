"""GET /api/health: liveness plus row counts, 500 when the database is unreachable."""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..logging_config import get_logger
from ..repositories.unit_of_work import UnitOfWork
from ..schemas import HealthOut
from .deps import get_uow

logger = get_logger(__name__)

router = APIRouter(tags=["Meta"])


@router.get("/api/health", response_model=HealthOut)
def health(uow: UnitOfWork = Depends(get_uow)):
    """
    Check API and database health.

    Counts customers and orders; any database error is reported as a 500
    problem payload carrying the error message.
    """
    try:
        customers = uow.statistics.count_customers()
        orders = uow.statistics.count_orders()
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "title": "Database connection failed",
                "status": 500,
                "detail": f"Database connection failed: {e}",
            },
        )

    return HealthOut(
        status="Healthy",
        database="Connected",
        customers=customers,
        orders=orders,
        timestamp=datetime.utcnow(),
    )
