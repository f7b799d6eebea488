"""Application context: everything a running app holds, built once at startup."""

import logging
from dataclasses import dataclass, field
from datetime import timedelta

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from filmoteca.core.config import Settings
from filmoteca.core.database import build_engine, build_session_factory
from filmoteca.core.security import TokenService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Settings, database engine, session factory and token service for one app instance."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    tokens: TokenService
    _closed: bool = field(default=False, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = build_engine(settings)
        tokens = TokenService(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            tokens=tokens,
        )

    def init(self) -> None:
        """Create tables when configured to, then seed the bootstrap admin."""
        # Imported here so models register on Base.metadata before create_all.
        from filmoteca.models import Base
        from filmoteca.services.bootstrap import ensure_bootstrap_admin

        if self.settings.DB_CREATE_ALL:
            Base.metadata.create_all(self.engine)
        db = self.session_factory()
        try:
            ensure_bootstrap_admin(db, self.settings)
        finally:
            db.close()
        logger.info("Application context initialized (env=%s)", self.settings.APP_ENV)

    def close(self) -> None:
        if self._closed:
            return
        self.engine.dispose()
        self._closed = True
        logger.info("Application context closed")
