from datetime import date, time

from ..domain.errors import ThemeNotFoundError, TimeDuplicatedError, TimeInUseError, TimeNotFoundError
from ..domain.repositories import ReservationRepository, ReservationTimeRepository, ThemeRepository
from ..domain.services import mark_booked
from ..models import ReservationTime


async def get_times(time_repo: ReservationTimeRepository) -> list[ReservationTime]:
    return await time_repo.find_all()


async def get_available_times(
    time_repo: ReservationTimeRepository,
    theme_repo: ThemeRepository,
    res_repo: ReservationRepository,
    *,
    reservation_date: date,
    theme_id: int,
) -> list[tuple[ReservationTime, bool]]:
    """Every time slot paired with whether it is already booked for the date and theme."""
    if await theme_repo.find_by_id(theme_id) is None:
        raise ThemeNotFoundError(f"theme {theme_id} does not exist")
    times = await time_repo.find_all()
    booked = await res_repo.find_all_by_date_and_theme_id(reservation_date, theme_id)
    flags = mark_booked((t.id for t in times), (r.time_id for r in booked))
    return [(t, flags[t.id]) for t in times]


async def add_time(time_repo: ReservationTimeRepository, *, start_at: time) -> ReservationTime:
    start_at = start_at.replace(second=0, microsecond=0)
    if await time_repo.exists_by_start_at(start_at):
        raise TimeDuplicatedError(f"time {start_at:%H:%M} already exists")
    return await time_repo.save(ReservationTime(start_at=start_at))


async def delete_time(
    time_repo: ReservationTimeRepository,
    res_repo: ReservationRepository,
    *,
    time_id: int,
) -> int:
    if await res_repo.exists_by_time_id(time_id):
        raise TimeInUseError(f"time {time_id} is referenced by reservations")
    deleted = await time_repo.delete(time_id)
    if deleted == 0:
        raise TimeNotFoundError(f"time {time_id} does not exist")
    return deleted
