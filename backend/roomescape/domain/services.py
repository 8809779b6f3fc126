from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable

from .errors import PreviousTimeError, ReservationDuplicatedError


@dataclass(frozen=True)
class SlotRequest:
    date: date
    time_id: int
    start_at: time

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.start_at)


def validate_reservation(request: SlotRequest, *, now: datetime, booked_time_ids: Iterable[int]) -> None:
    """
    Pure validation: the slot must lie strictly after `now` and must not already be booked.
    `booked_time_ids` are the time ids reserved for the same date and theme.
    """
    if request.starts_at <= now:
        raise PreviousTimeError(f"{request.date} {request.start_at:%H:%M} is not after the current time")
    if request.time_id in set(booked_time_ids):
        raise ReservationDuplicatedError("reservation already exists for this date, time and theme")


def mark_booked(time_ids: Iterable[int], booked_time_ids: Iterable[int]) -> dict[int, bool]:
    booked = set(booked_time_ids)
    return {time_id: time_id in booked for time_id in time_ids}
