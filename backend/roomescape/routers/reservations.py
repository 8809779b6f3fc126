from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_auth_context, get_session
from ..domain.errors import (
    PreviousTimeError,
    ReservationDuplicatedError,
    ReservationNotFoundError,
    ThemeNotFoundError,
    TimeNotFoundError,
)
from ..infrastructure.repositories import (
    SqlAlchemyReservationRepository,
    SqlAlchemyReservationTimeRepository,
    SqlAlchemyThemeRepository,
)
from ..schemas import ReservationCreate, ReservationRead
from ..usecases import reservations as reservation_usecase
from ..utils.audit_log import emit_audit_log
from ..utils.auth import AuthContext

router = APIRouter(prefix="/reservations", tags=["reservations"])


def _audit(**kwargs: Any) -> None:
    try:
        emit_audit_log(**kwargs)
    except RuntimeError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed") from exc


@router.get("", response_model=List[ReservationRead])
async def list_reservations(session: AsyncSession = Depends(get_session)) -> list[ReservationRead]:
    res_repo = SqlAlchemyReservationRepository(session)
    rows = await reservation_usecase.get_reservations(res_repo)
    return [ReservationRead.from_db(reservation=reservation) for reservation in rows]


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    payload: ReservationCreate,
    session: AsyncSession = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> ReservationRead:
    time_repo = SqlAlchemyReservationTimeRepository(session)
    theme_repo = SqlAlchemyThemeRepository(session)
    res_repo = SqlAlchemyReservationRepository(session)
    async with session.begin():
        try:
            reservation = await reservation_usecase.add_reservation(
                time_repo,
                theme_repo,
                res_repo,
                name=payload.name,
                reservation_date=payload.date,
                time_id=payload.time_id,
                theme_id=payload.theme_id,
            )
        except TimeNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="time not found")
        except ThemeNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="theme not found")
        except PreviousTimeError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="cannot reserve a past time")
        except ReservationDuplicatedError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="reservation already exists")
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

        _audit(
            action="reservation.created",
            reservation_id=reservation.id,
            member_id=auth.member_id,
            time_id=reservation.time_id,
            theme_id=reservation.theme_id,
            reservation_date=reservation.date,
        )
        result = ReservationRead.from_db(reservation=reservation)

    return result


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reservation(
    reservation_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
    auth: AuthContext = Depends(get_auth_context),
) -> Response:
    res_repo = SqlAlchemyReservationRepository(session)
    async with session.begin():
        try:
            await reservation_usecase.delete_reservation(res_repo, reservation_id=reservation_id)
        except ReservationNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found")

        _audit(action="reservation.deleted", reservation_id=reservation_id, member_id=auth.member_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
