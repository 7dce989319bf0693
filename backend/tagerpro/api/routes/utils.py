import logging

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from tagerpro.api.deps import SessionDep

router = APIRouter(prefix="/utils", tags=["utils"])
logger = logging.getLogger(__name__)


@router.get("/health-check/")
def health_check(session: SessionDep) -> bool:
    """Liveness plus a round trip to the database."""
    try:
        session.exec(select(1))
    except SQLAlchemyError as exc:
        logger.error("Health check could not reach the database: %s", exc)
        raise HTTPException(status_code=503, detail="Database connection unavailable") from exc
    return True
