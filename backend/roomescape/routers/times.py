from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, require_admin
from ..domain.errors import ThemeNotFoundError, TimeDuplicatedError, TimeInUseError, TimeNotFoundError
from ..infrastructure.repositories import (
    SqlAlchemyReservationRepository,
    SqlAlchemyReservationTimeRepository,
    SqlAlchemyThemeRepository,
)
from ..schemas import AvailableTimeRead, TimeCreate, TimeRead
from ..usecases import times as time_usecase

router = APIRouter(prefix="/times", tags=["times"])


@router.get("", response_model=List[TimeRead])
async def list_times(session: AsyncSession = Depends(get_session)) -> list[TimeRead]:
    time_repo = SqlAlchemyReservationTimeRepository(session)
    rows = await time_usecase.get_times(time_repo)
    return [TimeRead.from_db(reservation_time=row) for row in rows]


@router.get("/available", response_model=List[AvailableTimeRead])
async def list_available_times(
    reservation_date: date = Query(..., alias="date"),
    theme_id: int = Query(..., ge=1),
    session: AsyncSession = Depends(get_session),
) -> list[AvailableTimeRead]:
    try:
        rows = await time_usecase.get_available_times(
            SqlAlchemyReservationTimeRepository(session),
            SqlAlchemyThemeRepository(session),
            SqlAlchemyReservationRepository(session),
            reservation_date=reservation_date,
            theme_id=theme_id,
        )
    except ThemeNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="theme not found")
    return [
        AvailableTimeRead(id=row.id, start_at=row.start_at, already_booked=already_booked)
        for row, already_booked in rows
    ]


@router.post(
    "",
    response_model=TimeRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_time(
    payload: TimeCreate,
    session: AsyncSession = Depends(get_session),
) -> TimeRead:
    time_repo = SqlAlchemyReservationTimeRepository(session)
    try:
        async with session.begin():
            created = await time_usecase.add_time(time_repo, start_at=payload.start_at)
            result = TimeRead.from_db(reservation_time=created)
    except (TimeDuplicatedError, IntegrityError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="time already exists")
    return result


@router.delete(
    "/{time_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_time(
    time_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
) -> Response:
    async with session.begin():
        try:
            await time_usecase.delete_time(
                SqlAlchemyReservationTimeRepository(session),
                SqlAlchemyReservationRepository(session),
                time_id=time_id,
            )
        except TimeInUseError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="time is reserved")
        except TimeNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="time not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
