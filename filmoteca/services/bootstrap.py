"""Seed the default admin account on startup (idempotent)."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from filmoteca.core.config import DEFAULT_BOOTSTRAP_ADMIN_PASSWORD
from filmoteca.core.errors import ConflictError
from filmoteca.models.user import ROLE_ADMIN
from filmoteca.services.users import UserStore

if TYPE_CHECKING:
    from filmoteca.core.config import Settings

logger = logging.getLogger(__name__)


def ensure_bootstrap_admin(db: Session, settings: "Settings") -> bool:
    """
    Create the bootstrap admin unless a user with its username already exists.
    Returns True when a user was created. A concurrent seeding by another
    process surfaces as ConflictError and is treated as already seeded.
    """
    if not settings.BOOTSTRAP_ADMIN_ENABLED:
        logger.info("Bootstrap admin is disabled (BOOTSTRAP_ADMIN_ENABLED=false); skipping.")
        return False

    store = UserStore(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    username = settings.BOOTSTRAP_ADMIN_USERNAME
    if store.find_by_username(username) is not None:
        logger.info("Bootstrap admin %s already exists", username)
        return False

    password = settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value()
    if settings.is_production and password == DEFAULT_BOOTSTRAP_ADMIN_PASSWORD:
        logger.warning(
            "Seeding bootstrap admin %s with the default password; set BOOTSTRAP_ADMIN_PASSWORD",
            username,
        )
    try:
        store.create(
            username=username,
            email=settings.BOOTSTRAP_ADMIN_EMAIL,
            password=password,
            role=ROLE_ADMIN,
        )
    except ConflictError:
        logger.info("Bootstrap admin %s was created concurrently or email is taken", username)
        return False
    logger.info("Bootstrap admin %s created", username)
    return True
