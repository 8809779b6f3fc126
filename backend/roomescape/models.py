from __future__ import annotations

import datetime
from enum import StrEnum

from sqlalchemy import Enum, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql.sqltypes import Date, String, Time


RESERVATION_SLOT_CONSTRAINT = "uq_reservations_slot"


class Base(DeclarativeBase):
    pass


class Role(StrEnum):
    ADMIN = "ADMIN"
    USER = "USER"


class Member(Base):
    __tablename__ = "members"
    __table_args__ = (UniqueConstraint("email", name="uq_members_email"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            values_callable=lambda enum_cls: [e.value for e in enum_cls],
            native_enum=False,
        ),
        nullable=False,
        default=Role.USER,
    )


class ReservationTime(Base):
    __tablename__ = "reservation_times"
    __table_args__ = (UniqueConstraint("start_at", name="uq_reservation_times_start_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    start_at: Mapped[datetime.time] = mapped_column(Time, nullable=False)


class Theme(Base):
    __tablename__ = "themes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(1000), nullable=False)


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        UniqueConstraint("date", "time_id", "theme_id", name=RESERVATION_SLOT_CONSTRAINT),
        Index("idx_res_time", "time_id"),
        Index("idx_res_theme", "theme_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    time_id: Mapped[int] = mapped_column(ForeignKey("reservation_times.id", ondelete="RESTRICT"), nullable=False)
    theme_id: Mapped[int] = mapped_column(ForeignKey("themes.id", ondelete="RESTRICT"), nullable=False)

    time: Mapped["ReservationTime"] = relationship()
    theme: Mapped["Theme"] = relationship()
