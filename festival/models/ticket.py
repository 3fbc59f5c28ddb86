"""Ticket model."""

from sqlalchemy import Column, Enum, Float, ForeignKey, Integer, String

from festival.database import Base, UTCDateTime
from festival.models.enums import TicketStatus
from festival.models.mixins import IdentityMixin, utcnow


class Ticket(Base, IdentityMixin):
    """A ticket purchase for a film screening."""

    __tablename__ = "tickets"

    film_id = Column(String(32), ForeignKey("films.id"), nullable=False, index=True)
    buyer_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    price = Column(Float, nullable=False)  # unit price
    quantity = Column(Integer, nullable=False)
    purchase_date = Column(UTCDateTime, default=utcnow, nullable=False)
    status = Column(
        Enum(TicketStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=TicketStatus.PENDING,
    )
    session_time = Column(UTCDateTime, nullable=False)

    @property
    def total_price(self) -> float:
        return self.price * self.quantity
