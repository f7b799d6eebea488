"""Schemas for catalog entries: create/update payloads and the rendered record."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from filmoteca.models.filmografia import Filmografia
from filmoteca.schemas.auth import CamelModel

TipoLiteral = Literal["película", "serie"]

# Mirror the column sizes in models/filmografia.py.
TITLE_MAX_LEN = 512
GENRE_MAX_LEN = 255
URL_MAX_LEN = 2048


def _require_text(value: str | None) -> str | None:
    """Required text fields may be omitted on update but never blanked."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class FilmografiaFields(CamelModel):
    """Optional descriptive fields shared by create and update."""

    duracion: str | None = Field(default=None, max_length=64)
    url_poster: str | None = Field(default=None, max_length=URL_MAX_LEN)
    titulo_en: str | None = Field(default=None, max_length=TITLE_MAX_LEN)
    titulo_cat: str | None = Field(default=None, max_length=TITLE_MAX_LEN)
    sinopsis_en: str | None = None
    sinopsis_cat: str | None = None
    genero: str | None = Field(default=None, max_length=GENRE_MAX_LEN)
    genero_en: str | None = Field(default=None, max_length=GENRE_MAX_LEN)
    genero_cat: str | None = Field(default=None, max_length=GENRE_MAX_LEN)
    director: str | None = Field(default=None, max_length=TITLE_MAX_LEN)
    guionistas: str | None = None
    reparto: str | None = None
    link_imdb: str | None = Field(default=None, max_length=URL_MAX_LEN)
    url_youtube: str | None = Field(default=None, max_length=URL_MAX_LEN)
    url_making_of: str | None = Field(default=None, max_length=URL_MAX_LEN)
    plataformas: str | None = None


class FilmografiaCreate(FilmografiaFields):
    """Body of POST /nuevaFilmografia. Unknown keys are ignored."""

    tipo: TipoLiteral = "película"
    fecha: str = Field(..., max_length=64)
    titulo: str = Field(..., max_length=TITLE_MAX_LEN)
    sinopsis: str

    strip_required = field_validator("fecha", "titulo", "sinopsis")(_require_text)


class FilmografiaUpdate(FilmografiaFields):
    """Body of PUT /actualizarFilmografia/{id}; only the keys sent are applied."""

    tipo: TipoLiteral | None = None
    fecha: str | None = Field(default=None, max_length=64)
    titulo: str | None = Field(default=None, max_length=TITLE_MAX_LEN)
    sinopsis: str | None = None

    strip_required = field_validator("fecha", "titulo", "sinopsis")(_require_text)


class CreatedBy(CamelModel):
    id: str
    username: str


class FilmografiaOut(FilmografiaFields):
    """Catalog entry as returned by the API."""

    id: str
    tipo: str
    fecha: str
    titulo: str
    sinopsis: str
    created_by: CreatedBy | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, film: Filmografia) -> "FilmografiaOut":
        data = {name: getattr(film, name) for name in cls.model_fields if hasattr(film, name)}
        data.pop("created_by", None)
        creator = film.created_by
        return cls(
            **data,
            created_by=CreatedBy(id=creator.id, username=creator.username) if creator else None,
        )


class FilmografiaResponse(CamelModel):
    success: bool = True
    message: str
    data: FilmografiaOut


class Estadisticas(CamelModel):
    total: int
    peliculas: int
    series: int
    recientes: list[FilmografiaOut]


class EstadisticasResponse(CamelModel):
    success: bool = True
    estadisticas: Estadisticas
