from __future__ import annotations

from datetime import date, time
from typing import Any, List, Optional, Tuple, cast

from sqlalchemy import Select, delete, func, select
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..domain.repositories import (
    MemberRepository,
    ReservationRepository,
    ReservationTimeRepository,
    ThemeRepository,
)
from ..models import Member, Reservation, ReservationTime, Theme


async def _delete_by_id(session: AsyncSession, model: Any, row_id: int) -> int:
    result = cast(CursorResult[Any], await session.execute(delete(model).where(model.id == row_id)))
    return int(result.rowcount or 0)


class SqlAlchemyReservationTimeRepository(ReservationTimeRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> List[ReservationTime]:
        rows = await self.session.scalars(select(ReservationTime).order_by(ReservationTime.id))
        return list(rows.all())

    async def find_by_id(self, time_id: int) -> Optional[ReservationTime]:
        return await self.session.get(ReservationTime, time_id)

    async def exists_by_start_at(self, start_at: time) -> bool:
        stmt = select(ReservationTime.id).where(ReservationTime.start_at == start_at).limit(1)
        return await self.session.scalar(stmt) is not None

    async def save(self, reservation_time: ReservationTime) -> ReservationTime:
        self.session.add(reservation_time)
        await self.session.flush()
        return reservation_time

    async def delete(self, time_id: int) -> int:
        return await _delete_by_id(self.session, ReservationTime, time_id)


class SqlAlchemyThemeRepository(ThemeRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> List[Theme]:
        rows = await self.session.scalars(select(Theme).order_by(Theme.id))
        return list(rows.all())

    async def find_by_id(self, theme_id: int) -> Optional[Theme]:
        return await self.session.get(Theme, theme_id)

    async def find_popular_themes(self, start: date, end: date, count: int) -> List[Theme]:
        """Themes ranked by reservations dated within [start, end], most booked first, lowest id on ties."""
        reserved = func.count(Reservation.id).label("reserved")
        stmt: Select[Tuple[Theme, Any]] = (
            select(Theme, reserved)
            .join(Reservation, Reservation.theme_id == Theme.id)
            .where(Reservation.date >= start, Reservation.date <= end)
            .group_by(Theme.id)
            .order_by(reserved.desc(), Theme.id.asc())
            .limit(count)
        )
        rows = await self.session.execute(stmt)
        return [theme for theme, _ in rows.all()]

    async def save(self, theme: Theme) -> Theme:
        self.session.add(theme)
        await self.session.flush()
        return theme

    async def delete(self, theme_id: int) -> int:
        return await _delete_by_id(self.session, Theme, theme_id)


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _select(self) -> Select[Tuple[Reservation]]:
        return (
            select(Reservation)
            .options(joinedload(Reservation.time), joinedload(Reservation.theme))
            .order_by(Reservation.id)
        )

    async def find_all(self) -> List[Reservation]:
        rows = await self.session.scalars(self._select())
        return list(rows.all())

    async def find_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return await self.session.scalar(self._select().where(Reservation.id == reservation_id))

    async def find_all_by_date_and_theme_id(self, reservation_date: date, theme_id: int) -> List[Reservation]:
        stmt = self._select().where(Reservation.date == reservation_date, Reservation.theme_id == theme_id)
        rows = await self.session.scalars(stmt)
        return list(rows.all())

    async def exists_by_time_id(self, time_id: int) -> bool:
        stmt = select(Reservation.id).where(Reservation.time_id == time_id).limit(1)
        return await self.session.scalar(stmt) is not None

    async def exists_by_theme_id(self, theme_id: int) -> bool:
        stmt = select(Reservation.id).where(Reservation.theme_id == theme_id).limit(1)
        return await self.session.scalar(stmt) is not None

    async def save(self, reservation: Reservation) -> Reservation:
        self.session.add(reservation)
        await self.session.flush()
        return reservation

    async def delete(self, reservation_id: int) -> int:
        return await _delete_by_id(self.session, Reservation, reservation_id)


class SqlAlchemyMemberRepository(MemberRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, member_id: int) -> Optional[Member]:
        return await self.session.get(Member, member_id)

    async def find_by_email(self, email: str) -> Optional[Member]:
        return await self.session.scalar(select(Member).where(Member.email == email))

    async def save(self, member: Member) -> Member:
        self.session.add(member)
        await self.session.flush()
        return member
