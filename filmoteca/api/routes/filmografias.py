"""Catalog endpoints: list, read, create, update, delete and statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from filmoteca.api.routes.auth import get_current_user, require_editor
from filmoteca.core.database import get_db
from filmoteca.schemas.auth import CurrentUser, MessageResponse
from filmoteca.schemas.filmografia import (
    Estadisticas,
    EstadisticasResponse,
    FilmografiaCreate,
    FilmografiaOut,
    FilmografiaResponse,
    FilmografiaUpdate,
)
from filmoteca.services import filmografias as service

router = APIRouter()


@router.get("/obtenerFilmografias", response_model=list[FilmografiaOut])
def list_filmografias(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[FilmografiaOut]:
    """All catalog entries, newest first."""
    return [FilmografiaOut.from_model(f) for f in service.list_filmografias(db)]


@router.get("/obtenerFilmografia/{filmografia_id}", response_model=FilmografiaOut)
def get_filmografia(
    filmografia_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FilmografiaOut:
    return FilmografiaOut.from_model(service.get_filmografia(db, filmografia_id))


@router.post(
    "/nuevaFilmografia",
    response_model=FilmografiaResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_filmografia(
    body: FilmografiaCreate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(require_editor)],
) -> FilmografiaResponse:
    """Create an entry (admin or editor). A blank poster URL gets the generic poster."""
    film = service.create_filmografia(db, body, created_by_id=user.id)
    return FilmografiaResponse(
        message="filmography created successfully",
        data=FilmografiaOut.from_model(film),
    )


@router.put("/actualizarFilmografia/{filmografia_id}", response_model=FilmografiaResponse)
def update_filmografia(
    filmografia_id: str,
    body: FilmografiaUpdate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_editor)],
) -> FilmografiaResponse:
    film = service.update_filmografia(db, filmografia_id, body)
    return FilmografiaResponse(
        message="filmography updated successfully",
        data=FilmografiaOut.from_model(film),
    )


@router.delete("/eliminarFilmografia/{filmografia_id}", response_model=MessageResponse)
def delete_filmografia(
    filmografia_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(require_editor)],
) -> MessageResponse:
    service.delete_filmografia(db, filmografia_id)
    return MessageResponse(message="filmography deleted successfully")


@router.get("/estadisticas", response_model=EstadisticasResponse)
def get_estadisticas(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EstadisticasResponse:
    """Totals by type and the five most recent entries."""
    stats = service.get_estadisticas(db)
    return EstadisticasResponse(
        estadisticas=Estadisticas(
            total=stats["total"],
            peliculas=stats["peliculas"],
            series=stats["series"],
            recientes=[FilmografiaOut.from_model(f) for f in stats["recientes"]],
        )
    )
