"""Catalog service: CRUD and statistics for filmography entries."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from filmoteca.core.errors import NotFound
from filmoteca.models.base import utcnow
from filmoteca.models.filmografia import (
    DEFAULT_POSTER_URL,
    TIPO_PELICULA,
    TIPO_SERIE,
    Filmografia,
)
from filmoteca.schemas.filmografia import FilmografiaCreate, FilmografiaUpdate

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5

# Columns that must not become NULL through a partial update.
NON_NULLABLE_FIELDS = frozenset({"tipo", "fecha", "titulo", "sinopsis"})


def _poster_or_default(url: str | None) -> str:
    if url is None or not url.strip():
        return DEFAULT_POSTER_URL
    return url.strip()


def list_filmografias(db: Session) -> list[Filmografia]:
    """All entries, newest first."""
    return db.query(Filmografia).order_by(Filmografia.created_at.desc()).all()


def get_filmografia(db: Session, filmografia_id: str) -> Filmografia:
    film = db.get(Filmografia, filmografia_id)
    if film is None:
        raise NotFound("filmography not found")
    return film


def create_filmografia(db: Session, body: FilmografiaCreate, created_by_id: str) -> Filmografia:
    values = body.model_dump()
    values["url_poster"] = _poster_or_default(values.get("url_poster"))
    now = utcnow()
    film = Filmografia(**values, created_by_id=created_by_id, created_at=now, updated_at=now)
    db.add(film)
    db.commit()
    db.refresh(film)
    logger.info("Created filmography id=%s titulo=%r by user=%s", film.id, film.titulo, created_by_id)
    return film


def update_filmografia(db: Session, filmografia_id: str, body: FilmografiaUpdate) -> Filmografia:
    """Apply only the fields present in the request body; updated_at is always refreshed."""
    film = get_filmografia(db, filmografia_id)
    changes = body.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        if field == "url_poster":
            value = _poster_or_default(value)
        setattr(film, field, value)
    film.updated_at = utcnow()
    db.commit()
    db.refresh(film)
    logger.info("Updated filmography id=%s fields=%s", film.id, sorted(changes))
    return film


def delete_filmografia(db: Session, filmografia_id: str) -> None:
    film = get_filmografia(db, filmografia_id)
    db.delete(film)
    db.commit()
    logger.info("Deleted filmography id=%s", filmografia_id)


def get_estadisticas(db: Session) -> dict:
    """Counts by type plus the most recent entries."""
    counts = dict(
        db.query(Filmografia.tipo, func.count(Filmografia.id)).group_by(Filmografia.tipo).all()
    )
    recientes = (
        db.query(Filmografia)
        .order_by(Filmografia.created_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    return {
        "total": sum(counts.values()),
        "peliculas": counts.get(TIPO_PELICULA, 0),
        "series": counts.get(TIPO_SERIE, 0),
        "recientes": recientes,
    }
