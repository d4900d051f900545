"""
Residents, administrators and their login accounts.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from laundry.models.base import BaseModel
from laundry.models.enums import Privilege

if TYPE_CHECKING:
    from laundry.models.booking import PassBooking, PassLock

__all__ = ["Person", "Account"]


class Person(BaseModel):
    """
    A resident or administrator of the building.

    Attributes:
        firstname: Given name
        lastname: Family name
        personal_number: National identity number, 'YYYYMMDD-XXXX'
        email: Unique contact address
        privilege_id: :class:`Privilege` value
    """

    __tablename__ = "person"

    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str] = mapped_column(String(100), nullable=False)
    personal_number: Mapped[str] = mapped_column(String(13), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    privilege_id: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(Privilege.STANDARD)
    )

    account: Mapped["Account"] = relationship(back_populates="person", uselist=False)

    @property
    def privilege(self) -> Privilege:
        try:
            return Privilege(self.privilege_id)
        except ValueError:
            return Privilege.INVALID


class Account(BaseModel):
    """Login credentials bound to exactly one person."""

    __tablename__ = "account"

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    person_id: Mapped[int] = mapped_column(
        ForeignKey("person.id"), nullable=False, unique=True
    )

    person: Mapped["Person"] = relationship(back_populates="account")
    bookings: Mapped[List["PassBooking"]] = relationship(back_populates="account")
    locks: Mapped[List["PassLock"]] = relationship(back_populates="account")

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, username={self.username!r})>"
