from datetime import date, time
from typing import List, Optional, Tuple

import pytest
from roomescape.domain.errors import (
    ThemeInUseError,
    ThemeNotFoundError,
    TimeDuplicatedError,
    TimeInUseError,
    TimeNotFoundError,
)
from roomescape.models import Reservation, ReservationTime, Theme
from roomescape.usecases import themes as theme_uc
from roomescape.usecases import times as time_uc


class FakeTimeRepo:
    def __init__(self, times: List[ReservationTime]) -> None:
        self.times = times
        self.deleted: List[int] = []

    async def find_all(self) -> List[ReservationTime]:
        return list(self.times)

    async def exists_by_start_at(self, start_at: time) -> bool:
        return any(t.start_at == start_at for t in self.times)

    async def save(self, reservation_time: ReservationTime) -> ReservationTime:
        reservation_time.id = len(self.times) + 1
        self.times.append(reservation_time)
        return reservation_time

    async def delete(self, time_id: int) -> int:
        self.deleted.append(time_id)
        return 1 if any(t.id == time_id for t in self.times) else 0


class FakeThemeRepo:
    def __init__(self, themes: List[Theme]) -> None:
        self.themes = themes
        self.popular_args: Optional[Tuple[date, date, int]] = None

    async def find_by_id(self, theme_id: int) -> Optional[Theme]:
        return next((t for t in self.themes if t.id == theme_id), None)

    async def find_popular_themes(self, start: date, end: date, count: int) -> List[Theme]:
        self.popular_args = (start, end, count)
        return self.themes[:count]

    async def delete(self, theme_id: int) -> int:
        return 1 if any(t.id == theme_id for t in self.themes) else 0


class FakeResRepo:
    def __init__(self, rows: List[Reservation]) -> None:
        self.rows = rows

    async def find_all_by_date_and_theme_id(self, reservation_date: date, theme_id: int) -> List[Reservation]:
        return [r for r in self.rows if r.date == reservation_date and r.theme_id == theme_id]

    async def exists_by_time_id(self, time_id: int) -> bool:
        return any(r.time_id == time_id for r in self.rows)

    async def exists_by_theme_id(self, theme_id: int) -> bool:
        return any(r.theme_id == theme_id for r in self.rows)


def _times() -> List[ReservationTime]:
    return [ReservationTime(id=1, start_at=time(10, 0)), ReservationTime(id=2, start_at=time(12, 0))]


def _themes() -> List[Theme]:
    return [
        Theme(id=1, name="Theme 1", description="", thumbnail=""),
        Theme(id=2, name="Theme 2", description="", thumbnail=""),
    ]


@pytest.mark.asyncio
async def test_add_time_rejects_existing_start() -> None:
    repo = FakeTimeRepo(_times())
    with pytest.raises(TimeDuplicatedError):
        await time_uc.add_time(repo, start_at=time(10, 0, 30))


@pytest.mark.asyncio
async def test_add_time_truncates_seconds() -> None:
    repo = FakeTimeRepo(_times())
    created = await time_uc.add_time(repo, start_at=time(14, 30, 15))
    assert created.start_at == time(14, 30)
    assert created.id == 3


@pytest.mark.asyncio
async def test_available_times_flags_booked_slot() -> None:
    booked = Reservation(id=1, name="n", date=date(2024, 6, 1), time_id=2, theme_id=1)
    rows = await time_uc.get_available_times(
        FakeTimeRepo(_times()),
        FakeThemeRepo(_themes()),
        FakeResRepo([booked]),
        reservation_date=date(2024, 6, 1),
        theme_id=1,
    )
    assert [(t.id, flag) for t, flag in rows] == [(1, False), (2, True)]


@pytest.mark.asyncio
async def test_available_times_requires_theme() -> None:
    with pytest.raises(ThemeNotFoundError):
        await time_uc.get_available_times(
            FakeTimeRepo(_times()),
            FakeThemeRepo(_themes()),
            FakeResRepo([]),
            reservation_date=date(2024, 6, 1),
            theme_id=3,
        )


@pytest.mark.asyncio
async def test_delete_time_blocked_while_reserved() -> None:
    repo = FakeTimeRepo(_times())
    reserved = Reservation(id=1, name="n", date=date(2024, 6, 1), time_id=1, theme_id=1)
    with pytest.raises(TimeInUseError):
        await time_uc.delete_time(repo, FakeResRepo([reserved]), time_id=1)
    assert repo.deleted == []


@pytest.mark.asyncio
async def test_delete_missing_time_is_not_found() -> None:
    with pytest.raises(TimeNotFoundError):
        await time_uc.delete_time(FakeTimeRepo(_times()), FakeResRepo([]), time_id=9)


@pytest.mark.asyncio
async def test_popular_themes_window_excludes_today() -> None:
    repo = FakeThemeRepo(_themes())
    result = await theme_uc.get_popular_themes(repo, days=7, limit=1, today=date(2024, 6, 8))
    assert repo.popular_args == (date(2024, 6, 1), date(2024, 6, 7), 1)
    assert [t.id for t in result] == [1]


@pytest.mark.asyncio
@pytest.mark.parametrize("days,limit", [(0, 10), (7, 0)])
async def test_popular_themes_rejects_non_positive_arguments(days: int, limit: int) -> None:
    with pytest.raises(ValueError):
        await theme_uc.get_popular_themes(FakeThemeRepo(_themes()), days=days, limit=limit, today=date(2024, 6, 8))


@pytest.mark.asyncio
async def test_delete_theme_blocked_while_reserved() -> None:
    reserved = Reservation(id=1, name="n", date=date(2024, 6, 1), time_id=1, theme_id=2)
    with pytest.raises(ThemeInUseError):
        await theme_uc.delete_theme(FakeThemeRepo(_themes()), FakeResRepo([reserved]), theme_id=2)


@pytest.mark.asyncio
async def test_delete_missing_theme_is_not_found() -> None:
    with pytest.raises(ThemeNotFoundError):
        await theme_uc.delete_theme(FakeThemeRepo(_themes()), FakeResRepo([]), theme_id=5)
