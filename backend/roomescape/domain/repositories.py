from __future__ import annotations

from datetime import date, time
from typing import Protocol

from ..models import Member, Reservation, ReservationTime, Theme


class ReservationTimeRepository(Protocol):
    async def find_all(self) -> list[ReservationTime]: ...

    async def find_by_id(self, time_id: int) -> ReservationTime | None: ...

    async def exists_by_start_at(self, start_at: time) -> bool: ...

    async def save(self, reservation_time: ReservationTime) -> ReservationTime: ...

    async def delete(self, time_id: int) -> int: ...


class ThemeRepository(Protocol):
    async def find_all(self) -> list[Theme]: ...

    async def find_by_id(self, theme_id: int) -> Theme | None: ...

    async def find_popular_themes(self, start: date, end: date, count: int) -> list[Theme]: ...

    async def save(self, theme: Theme) -> Theme: ...

    async def delete(self, theme_id: int) -> int: ...


class ReservationRepository(Protocol):
    async def find_all(self) -> list[Reservation]: ...

    async def find_by_id(self, reservation_id: int) -> Reservation | None: ...

    async def find_all_by_date_and_theme_id(self, reservation_date: date, theme_id: int) -> list[Reservation]: ...

    async def exists_by_time_id(self, time_id: int) -> bool: ...

    async def exists_by_theme_id(self, theme_id: int) -> bool: ...

    async def save(self, reservation: Reservation) -> Reservation: ...

    async def delete(self, reservation_id: int) -> int: ...


class MemberRepository(Protocol):
    async def find_by_id(self, member_id: int) -> Member | None: ...

    async def find_by_email(self, email: str) -> Member | None: ...

    async def save(self, member: Member) -> Member: ...
