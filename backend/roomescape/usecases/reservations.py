import logging
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError

from ..domain.errors import (
    ReservationDuplicatedError,
    ReservationNotFoundError,
    ThemeNotFoundError,
    TimeNotFoundError,
)
from ..domain.repositories import ReservationRepository, ReservationTimeRepository, ThemeRepository
from ..domain.services import SlotRequest, validate_reservation
from ..models import RESERVATION_SLOT_CONSTRAINT, Reservation
from ..utils.time import now_local

logger = logging.getLogger(__name__)


async def add_reservation(
    time_repo: ReservationTimeRepository,
    theme_repo: ThemeRepository,
    res_repo: ReservationRepository,
    *,
    name: str,
    reservation_date: date,
    time_id: int,
    theme_id: int,
    now: datetime | None = None,
) -> Reservation:
    if not name.strip():
        raise ValueError("name must not be blank")

    reservation_time = await time_repo.find_by_id(time_id)
    if reservation_time is None:
        raise TimeNotFoundError(f"time {time_id} does not exist")
    theme = await theme_repo.find_by_id(theme_id)
    if theme is None:
        raise ThemeNotFoundError(f"theme {theme_id} does not exist")

    booked = await res_repo.find_all_by_date_and_theme_id(reservation_date, theme_id)
    validate_reservation(
        SlotRequest(date=reservation_date, time_id=reservation_time.id, start_at=reservation_time.start_at),
        now=now or now_local(),
        booked_time_ids=[reservation.time_id for reservation in booked],
    )

    reservation = Reservation(
        name=name,
        date=reservation_date,
        time_id=reservation_time.id,
        theme_id=theme.id,
        time=reservation_time,
        theme=theme,
    )
    try:
        saved = await res_repo.save(reservation)
    except IntegrityError as exc:
        # A concurrent request booked the same slot between the check and the insert.
        if _violates_slot_constraint(exc):
            logger.info("slot %s/%s/%s taken concurrently", reservation_date, time_id, theme_id)
            raise ReservationDuplicatedError("reservation already exists for this date, time and theme") from exc
        raise
    return saved


async def get_reservations(res_repo: ReservationRepository) -> list[Reservation]:
    return await res_repo.find_all()


async def delete_reservation(res_repo: ReservationRepository, *, reservation_id: int) -> int:
    deleted = await res_repo.delete(reservation_id)
    if deleted == 0:
        raise ReservationNotFoundError(f"reservation {reservation_id} does not exist")
    return deleted


def _violates_slot_constraint(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    if RESERVATION_SLOT_CONSTRAINT in message:
        return True
    # SQLite reports the columns instead of the constraint name.
    return "UNIQUE constraint failed: reservations.date" in message
