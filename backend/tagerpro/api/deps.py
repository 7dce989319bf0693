import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from tagerpro.ai.llm_client import LLMClient
from tagerpro.core.db import engine

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def get_llm_client() -> LLMClient:
    return LLMClient()


SessionDep = Annotated[Session, Depends(get_db)]
LLMDep = Annotated[LLMClient, Depends(get_llm_client)]


def _rollback_session_safely(session: Session) -> None:
    try:
        session.rollback()
    except SQLAlchemyError as exc:
        logger.warning("Session rollback failed: %s", exc)


@contextmanager
def storage_errors(session: Session, action: str) -> Iterator[None]:
    """Turn storage failures inside the block into a logged 500 'Failed to <action>'."""
    try:
        yield
    except SQLAlchemyError as exc:
        _rollback_session_safely(session)
        logger.error("Error trying to %s: %s", action, exc)
        raise HTTPException(status_code=500, detail=f"Failed to {action}") from exc
