"""ORM model for catalog entries (movies and series)."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from filmoteca.models.base import Base, new_id, utcnow

TIPO_PELICULA = "película"
TIPO_SERIE = "serie"
TIPOS: frozenset[str] = frozenset({TIPO_PELICULA, TIPO_SERIE})

DEFAULT_POSTER_URL = (
    "https://res.cloudinary.com/dvoh9w1ro/image/upload/v1706542878/imagen_generica_bpgzg5.png"
)


class Filmografia(Base):
    """One catalog entry; title, synopsis and genre are kept in Spanish, English and Catalan."""

    __tablename__ = "filmografias"

    id = Column(String(32), primary_key=True, default=new_id)
    tipo = Column(String(16), nullable=False, default=TIPO_PELICULA, index=True)
    fecha = Column(String(64), nullable=False)
    duracion = Column(String(64), nullable=True)
    url_poster = Column(String(2048), nullable=False, default=DEFAULT_POSTER_URL)
    titulo = Column(String(512), nullable=False)
    titulo_en = Column(String(512), nullable=True)
    titulo_cat = Column(String(512), nullable=True)
    sinopsis = Column(Text, nullable=False)
    sinopsis_en = Column(Text, nullable=True)
    sinopsis_cat = Column(Text, nullable=True)
    genero = Column(String(255), nullable=True)
    genero_en = Column(String(255), nullable=True)
    genero_cat = Column(String(255), nullable=True)
    director = Column(String(512), nullable=True)
    guionistas = Column(Text, nullable=True)
    reparto = Column(Text, nullable=True)
    link_imdb = Column(String(2048), nullable=True)
    url_youtube = Column(String(2048), nullable=True)
    url_making_of = Column(String(2048), nullable=True)
    plataformas = Column(Text, nullable=True)
    created_by_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    created_by = relationship("User", lazy="joined")
