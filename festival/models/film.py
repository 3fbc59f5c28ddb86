"""Film model."""

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Text

from festival.database import Base, UTCDateTime
from festival.models.enums import FilmStatus
from festival.models.mixins import IdentityMixin, utcnow

# Columns an owning submitter may change; status is additionally editable by admins.
EDITABLE_FILM_FIELDS = frozenset(
    {"title", "director", "synopsis", "duration", "genre", "trailer_url", "poster_url"}
)


class Film(Base, IdentityMixin):
    """A film submitted to the festival."""

    __tablename__ = "films"

    title = Column(String(255), nullable=False)
    director = Column(String(255), nullable=False)
    synopsis = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    genre = Column(String(100), nullable=False, index=True)
    submitter_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(
        Enum(FilmStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=FilmStatus.PENDING,
        index=True,
    )
    submission_date = Column(UTCDateTime, default=utcnow, nullable=False)
    trailer_url = Column(String(2048), nullable=True)
    poster_url = Column(String(2048), nullable=True)
