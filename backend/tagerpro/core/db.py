import logging

from sqlmodel import SQLModel, create_engine

from tagerpro.core.config import settings

logger = logging.getLogger(__name__)


def _connect_args(uri: str) -> dict:
    if uri.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.SQLALCHEMY_DATABASE_URI),
)


def init_db() -> None:
    # Tables are created directly from the SQLModel metadata; there is no
    # migration history to replay.
    from tagerpro import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database schema ready")
