"""Shared FastAPI dependencies for the routers."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..repositories.unit_of_work import UnitOfWork


def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    """One unit of work per request, bound to the request's session."""
    return UnitOfWork(db)
